# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from backend.shared.errors.base import NotFoundError


class RestaurantNotFoundError(NotFoundError):
    code = "restaurant_not_found"
    default_message = "Restaurant not found"
