# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from backend.domain.restaurants.entities import MenuItem, RestaurantDetail
from backend.domain.restaurants.repositories import RestaurantRepository, ScrapRepository
from backend.infrastructure.db.models import Restaurant, Scrap
from backend.infrastructure.repositories.references import ensure_references
from backend.infrastructure.unit_of_work import unit_of_work_scope
from backend.shared.logging import logger


class SqlAlchemyRestaurantRepository(RestaurantRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def exists(self, restaurant_id: int) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            return bool(session.scalar(select(exists().where(Restaurant.id == restaurant_id))))

    def get_detail(self, restaurant_id: int, viewer_id: int | None) -> RestaurantDetail | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(
                Restaurant,
                restaurant_id,
                options=[selectinload(Restaurant.labels), selectinload(Restaurant.menus)],
            )
            if row is None:
                return None
            is_scrapped = False
            if viewer_id is not None:
                is_scrapped = bool(
                    session.scalar(
                        select(
                            exists().where(
                                Scrap.user_id == viewer_id, Scrap.restaurant_id == restaurant_id
                            )
                        )
                    )
                )
            return RestaurantDetail(
                id=row.id,
                name=row.name,
                address=row.address,
                opening_hours=row.opening_hours,
                phone=row.phone,
                labels=tuple(label.name for label in row.labels),
                menus=tuple(
                    MenuItem(name=menu.name, price=menu.price, photo_url=menu.photo_url)
                    for menu in row.menus
                ),
                is_scrapped=is_scrapped,
            )


class SqlAlchemyScrapRepository(ScrapRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def toggle(self, user_id: int, restaurant_id: int) -> bool:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                result = session.execute(
                    delete(Scrap).where(
                        Scrap.user_id == user_id, Scrap.restaurant_id == restaurant_id
                    )
                )
                if result.rowcount:
                    return False
                session.add(Scrap(user_id=user_id, restaurant_id=restaurant_id))
                session.flush()
                return True
        except IntegrityError:
            with unit_of_work_scope(self._session_factory) as session:
                if self._is_scrapped(session, user_id, restaurant_id):
                    # A concurrent toggle inserted the same scrap first.
                    logger.info(
                        f"scraps.toggle: concurrent insert user_id={user_id} "
                        f"restaurant_id={restaurant_id}"
                    )
                    return True
                ensure_references(session, user_id, restaurant_id)
            raise

    @staticmethod
    def _is_scrapped(session: Session, user_id: int, restaurant_id: int) -> bool:
        return bool(
            session.scalar(
                select(
                    exists().where(Scrap.user_id == user_id, Scrap.restaurant_id == restaurant_id)
                )
            )
        )
