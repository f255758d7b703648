# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence

from sqlalchemy import Select, delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.domain.reviews.entities import Review, ReviewSummary
from backend.domain.reviews.repositories import ReviewRepository
from backend.infrastructure.db.models import Label, Restaurant, User, restaurant_labels
from backend.infrastructure.db.models import Review as ReviewRow
from backend.infrastructure.repositories.references import ensure_references
from backend.infrastructure.unit_of_work import unit_of_work_scope


def _to_domain(row: ReviewRow) -> Review:
    return Review(
        id=row.id,
        user_id=row.user_id,
        restaurant_id=row.restaurant_id,
        content=row.content,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _first_label():
    """Name of the restaurant's lowest-id label, or NULL."""

    return (
        select(Label.name)
        .join(restaurant_labels, restaurant_labels.c.label_id == Label.id)
        .where(restaurant_labels.c.restaurant_id == ReviewRow.restaurant_id)
        .order_by(Label.id.asc())
        .limit(1)
        .correlate(ReviewRow)
        .scalar_subquery()
    )


def _page(stmt: Select, before_id: int | None, limit: int) -> Select:
    if before_id is not None:
        stmt = stmt.where(ReviewRow.id < before_id)
    return stmt.order_by(ReviewRow.id.desc()).limit(limit)


class SqlAlchemyReviewRepository(ReviewRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def list_for_owner(
        self, owner_id: int, *, before_id: int | None, limit: int
    ) -> Sequence[ReviewSummary]:
        stmt = (
            select(
                ReviewRow.id,
                ReviewRow.restaurant_id,
                Restaurant.name,
                ReviewRow.content,
                ReviewRow.created_at,
                _first_label().label("label"),
            )
            .join(Restaurant, Restaurant.id == ReviewRow.restaurant_id)
            .where(ReviewRow.user_id == owner_id)
        )
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.execute(_page(stmt, before_id, limit)).all()
        return [
            ReviewSummary(
                id=row.id,
                restaurant_id=row.restaurant_id,
                restaurant_name=row.name,
                content=row.content,
                created_at=row.created_at,
                label=row.label,
            )
            for row in rows
        ]

    def list_for_restaurant(
        self, restaurant_id: int, *, before_id: int | None, limit: int
    ) -> Sequence[ReviewSummary]:
        stmt = (
            select(
                ReviewRow.id,
                ReviewRow.restaurant_id,
                Restaurant.name,
                ReviewRow.content,
                ReviewRow.created_at,
                User.nickname,
                User.tag,
            )
            .join(Restaurant, Restaurant.id == ReviewRow.restaurant_id)
            .join(User, User.id == ReviewRow.user_id)
            .where(ReviewRow.restaurant_id == restaurant_id)
        )
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.execute(_page(stmt, before_id, limit)).all()
        return [
            ReviewSummary(
                id=row.id,
                restaurant_id=row.restaurant_id,
                restaurant_name=row.name,
                content=row.content,
                created_at=row.created_at,
                author_nickname=row.nickname,
                author_tag=row.tag,
            )
            for row in rows
        ]

    def get_owned(self, review_id: int, owner_id: int) -> Review | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(
                select(ReviewRow).where(ReviewRow.id == review_id, ReviewRow.user_id == owner_id)
            ).first()
            return _to_domain(row) if row else None

    def add(self, owner_id: int, restaurant_id: int, content: str) -> Review:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = ReviewRow(user_id=owner_id, restaurant_id=restaurant_id, content=content)
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError:
            # The author or restaurant disappeared after the caller checked.
            with unit_of_work_scope(self._session_factory) as session:
                ensure_references(session, owner_id, restaurant_id)
            raise

    def update_content(self, review_id: int, owner_id: int, content: str) -> Review | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(
                select(ReviewRow).where(ReviewRow.id == review_id, ReviewRow.user_id == owner_id)
            ).first()
            if row is None:
                return None
            row.content = content
            session.flush()
            return _to_domain(row)

    def delete(self, review_id: int, owner_id: int) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(
                delete(ReviewRow).where(ReviewRow.id == review_id, ReviewRow.user_id == owner_id)
            )
            return bool(result.rowcount)
