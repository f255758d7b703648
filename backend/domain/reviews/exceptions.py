# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from backend.domain.users.exceptions import NoOpUpdateError
from backend.shared.errors.base import NotFoundError


class ReviewNotFoundError(NotFoundError):
    code = "review_not_found"
    default_message = "Review not found"


class UnchangedReviewError(NoOpUpdateError):
    code = "unchanged_review"
    default_message = "Review content is unchanged"
