# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Review, ReviewSummary


class ReviewRepository(Protocol):
    def list_for_owner(
        self, owner_id: int, *, before_id: int | None, limit: int
    ) -> Sequence[ReviewSummary]: ...
    def list_for_restaurant(
        self, restaurant_id: int, *, before_id: int | None, limit: int
    ) -> Sequence[ReviewSummary]: ...
    def get_owned(self, review_id: int, owner_id: int) -> Review | None: ...
    def add(self, owner_id: int, restaurant_id: int, content: str) -> Review: ...
    def update_content(self, review_id: int, owner_id: int, content: str) -> Review | None: ...
    def delete(self, review_id: int, owner_id: int) -> bool: ...
