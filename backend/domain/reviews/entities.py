# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Review:

    id: int
    user_id: int
    restaurant_id: int
    content: str
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True, frozen=True)
class ReviewSummary:
    """A review joined with the restaurant (or author) it is displayed with."""

    id: int
    restaurant_id: int
    restaurant_name: str
    content: str
    created_at: datetime
    label: str | None = None
    author_nickname: str | None = None
    author_tag: str | None = None


@dataclass(slots=True, frozen=True)
class ReviewPage:
    items: Sequence[ReviewSummary]
    next_cursor: int | None

    @property
    def is_last(self) -> bool:
        return self.next_cursor is None
