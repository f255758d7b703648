from __future__ import annotations

import pytest
from sqlalchemy import func, select

from backend.domain.restaurants.exceptions import RestaurantNotFoundError
from backend.domain.users.exceptions import AccountNotFoundError
from backend.infrastructure.db.models import Review, Scrap
from backend.infrastructure.repositories.restaurants import (
    SqlAlchemyRestaurantRepository,
    SqlAlchemyScrapRepository,
)
from backend.infrastructure.repositories.reviews import SqlAlchemyReviewRepository
from conftest import seed_restaurant, seed_user


def _count(session_factory, model) -> int:
    session = session_factory()
    try:
        return session.scalar(select(func.count()).select_from(model))
    finally:
        session.close()


def test_scrap_toggle_flips_state(session_factory) -> None:
    restaurant_id = seed_restaurant("Noodle Bar")
    user_id = seed_user("abc", 1)
    scraps = SqlAlchemyScrapRepository(session_factory)
    restaurants = SqlAlchemyRestaurantRepository(session_factory)

    assert scraps.toggle(user_id, restaurant_id) is True
    assert restaurants.get_detail(restaurant_id, user_id).is_scrapped is True
    assert scraps.toggle(user_id, restaurant_id) is False
    assert restaurants.get_detail(restaurant_id, user_id).is_scrapped is False


def test_scrap_toggle_for_missing_account(session_factory) -> None:
    restaurant_id = seed_restaurant("Noodle Bar")
    scraps = SqlAlchemyScrapRepository(session_factory)

    with pytest.raises(AccountNotFoundError):
        scraps.toggle(999, restaurant_id)
    assert _count(session_factory, Scrap) == 0


def test_scrap_toggle_for_missing_restaurant(session_factory) -> None:
    user_id = seed_user("abc", 1)
    scraps = SqlAlchemyScrapRepository(session_factory)

    with pytest.raises(RestaurantNotFoundError):
        scraps.toggle(user_id, 999)
    assert _count(session_factory, Scrap) == 0


def test_review_for_missing_account(session_factory) -> None:
    restaurant_id = seed_restaurant("Noodle Bar")
    reviews = SqlAlchemyReviewRepository(session_factory)

    with pytest.raises(AccountNotFoundError):
        reviews.add(999, restaurant_id, "tasty")
    assert _count(session_factory, Review) == 0
