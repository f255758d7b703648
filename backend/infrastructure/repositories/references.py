# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Turn foreign-key failures on user/restaurant references into domain errors."""

from __future__ import annotations

from sqlalchemy.orm import Session

from backend.domain.restaurants.exceptions import RestaurantNotFoundError
from backend.domain.users.exceptions import AccountNotFoundError
from backend.infrastructure.db.models import Restaurant, User


def ensure_references(session: Session, user_id: int, restaurant_id: int) -> None:
    """Raise the not-found error for whichever referenced row is missing.

    Returns normally when both rows exist, leaving the caller to re-raise
    the original error.
    """

    if session.get(User, user_id) is None:
        raise AccountNotFoundError()
    if session.get(Restaurant, restaurant_id) is None:
        raise RestaurantNotFoundError()
