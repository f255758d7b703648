# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from backend.domain.restaurants.entities import RestaurantDetail
from backend.domain.restaurants.exceptions import RestaurantNotFoundError
from backend.domain.restaurants.repositories import RestaurantRepository, ScrapRepository
from backend.shared.logging import logger


class GetRestaurantDetailUseCase:
    def __init__(self, *, restaurants: RestaurantRepository) -> None:
        self._restaurants = restaurants

    def execute(self, restaurant_id: int, viewer_id: int | None = None) -> RestaurantDetail:
        detail = self._restaurants.get_detail(restaurant_id, viewer_id)
        if detail is None:
            raise RestaurantNotFoundError()
        return detail


class ToggleScrapUseCase:
    def __init__(
        self, *, restaurants: RestaurantRepository, scraps: ScrapRepository
    ) -> None:
        self._restaurants = restaurants
        self._scraps = scraps

    def execute(self, user_id: int, restaurant_id: int) -> bool:
        if not self._restaurants.exists(restaurant_id):
            raise RestaurantNotFoundError()
        scrapped = self._scraps.toggle(user_id, restaurant_id)
        logger.info(
            f"restaurants.scrap: user_id={user_id} restaurant_id={restaurant_id} scrapped={scrapped}"
        )
        return scrapped
