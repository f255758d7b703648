# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Paged review listings, newest first."""

from __future__ import annotations

from backend.application.services.pagination import paginate
from backend.domain.restaurants.exceptions import RestaurantNotFoundError
from backend.domain.restaurants.repositories import RestaurantRepository
from backend.domain.reviews.entities import ReviewPage
from backend.domain.reviews.repositories import ReviewRepository
from backend.shared.logging import logger


class ListUserReviewsUseCase:
    """Reviews written by one account.

    The caller is expected to have resolved the account already; an account
    without reviews yields an empty page rather than an error.
    """

    def __init__(self, *, reviews: ReviewRepository, page_size: int) -> None:
        self._reviews = reviews
        self._page_size = page_size

    def execute(self, account_id: int, cursor: int | None = None) -> ReviewPage:
        page = paginate(
            lambda before_id, limit: self._reviews.list_for_owner(
                account_id, before_id=before_id, limit=limit
            ),
            cursor,
            self._page_size,
        )
        logger.debug(
            f"reviews.list_user: account_id={account_id} cursor={cursor} "
            f"items={len(page.items)} next={page.next_cursor}"
        )
        return page


class ListRestaurantReviewsUseCase:
    def __init__(
        self,
        *,
        reviews: ReviewRepository,
        restaurants: RestaurantRepository,
        page_size: int,
    ) -> None:
        self._reviews = reviews
        self._restaurants = restaurants
        self._page_size = page_size

    def execute(self, restaurant_id: int, cursor: int | None = None) -> ReviewPage:
        if not self._restaurants.exists(restaurant_id):
            raise RestaurantNotFoundError()
        return paginate(
            lambda before_id, limit: self._reviews.list_for_restaurant(
                restaurant_id, before_id=before_id, limit=limit
            ),
            cursor,
            self._page_size,
        )
