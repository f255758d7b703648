# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import RestaurantDetail


class RestaurantRepository(Protocol):
    def exists(self, restaurant_id: int) -> bool: ...
    def get_detail(self, restaurant_id: int, viewer_id: int | None) -> RestaurantDetail | None: ...


class ScrapRepository(Protocol):
    def toggle(self, user_id: int, restaurant_id: int) -> bool: ...
