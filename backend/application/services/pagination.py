"""Cursor pagination over id-ordered listings.

A cursor is the id of the last item of the previous page. Pages are ordered
by id descending, so the next page holds items with ``id < cursor``. ``0`` or
``None`` starts from the newest item.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from backend.domain.reviews.entities import ReviewPage, ReviewSummary
from backend.shared.errors.base import ValidationError

START_CURSOR = 0

PageFetcher = Callable[[int | None, int], Sequence[ReviewSummary]]


def parse_cursor(raw: str | None) -> int:
    if raw is None or raw.strip() == "":
        return START_CURSOR
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValidationError("cursor must be an integer", context={"cursor": raw}) from exc
    if value < 0:
        raise ValidationError("cursor must not be negative", context={"cursor": raw})
    return value


def paginate(fetch: PageFetcher, cursor: int | None, page_size: int) -> ReviewPage:
    before_id = cursor if cursor else None
    items = list(fetch(before_id, page_size))
    next_cursor = items[-1].id if len(items) == page_size else None
    return ReviewPage(items=items, next_cursor=next_cursor)


__all__ = ["START_CURSOR", "PageFetcher", "paginate", "parse_cursor"]
