# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class MenuItem:
    name: str
    price: int | None
    photo_url: str | None


@dataclass(slots=True, frozen=True)
class RestaurantDetail:

    id: int
    name: str
    address: str | None
    opening_hours: str | None
    phone: str | None
    labels: Sequence[str] = field(default_factory=tuple)
    menus: Sequence[MenuItem] = field(default_factory=tuple)
    is_scrapped: bool = False
