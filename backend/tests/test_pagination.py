from __future__ import annotations

from datetime import UTC, datetime

import pytest

from backend.application.services.pagination import paginate, parse_cursor
from backend.application.use_cases.reviews.list_reviews import ListUserReviewsUseCase
from backend.domain.reviews.entities import ReviewSummary
from backend.infrastructure.repositories.reviews import SqlAlchemyReviewRepository
from backend.shared.errors.base import ValidationError
from conftest import seed_restaurant, seed_reviews, seed_user


def _summaries(ids):
    now = datetime(2025, 1, 1, tzinfo=UTC)
    return [
        ReviewSummary(id=i, restaurant_id=1, restaurant_name="r", content=f"c{i}", created_at=now)
        for i in ids
    ]


class ListFetcher:
    """Serves ids newest first, like the repository does."""

    def __init__(self, ids) -> None:
        self._ids = sorted(ids, reverse=True)
        self.calls = []

    def __call__(self, before_id, limit):
        self.calls.append((before_id, limit))
        ids = [i for i in self._ids if before_id is None or i < before_id]
        return _summaries(ids[:limit])


@pytest.mark.parametrize(("raw", "expected"), [(None, 0), ("", 0), ("  ", 0), ("0", 0), ("17", 17)])
def test_parse_cursor(raw, expected) -> None:
    assert parse_cursor(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "-1", "1.5"])
def test_parse_cursor_rejects_garbage(raw) -> None:
    with pytest.raises(ValidationError):
        parse_cursor(raw)


def test_paginate_walks_all_items() -> None:
    fetch = ListFetcher(range(1, 26))

    first = paginate(fetch, 0, 10)
    second = paginate(fetch, first.next_cursor, 10)
    third = paginate(fetch, second.next_cursor, 10)

    assert [len(p.items) for p in (first, second, third)] == [10, 10, 5]
    assert (first.next_cursor, second.next_cursor, third.next_cursor) == (16, 6, None)
    assert third.is_last
    assert fetch.calls[0] == (None, 10)

    past_end = paginate(fetch, third.items[-1].id, 10)
    assert past_end.items == [] and past_end.next_cursor is None

    walked = [item.id for page in (first, second, third) for item in page.items]
    assert walked == list(range(25, 0, -1))


def test_full_last_page_is_followed_by_empty_page() -> None:
    fetch = ListFetcher(range(1, 11))

    first = paginate(fetch, None, 10)
    after = paginate(fetch, first.next_cursor, 10)

    assert first.next_cursor == 1
    assert after.items == [] and after.next_cursor is None


def test_same_cursor_same_page() -> None:
    fetch = ListFetcher(range(1, 26))

    assert paginate(fetch, 16, 10) == paginate(fetch, 16, 10)


def test_repository_pages_only_owner_reviews(session_factory) -> None:
    with_label = seed_restaurant("Noodle Bar", labels=("korean", "noodles"))
    without_label = seed_restaurant("Plain Diner")
    owner = seed_user("owner", 1)
    other = seed_user("other", 2)
    seed_reviews(other, with_label, 3)
    seed_reviews(owner, with_label, 20)
    seed_reviews(other, without_label, 3)
    own_plain = seed_reviews(owner, without_label, 5)

    use_case = ListUserReviewsUseCase(reviews=SqlAlchemyReviewRepository(session_factory), page_size=10)

    pages = [use_case.execute(owner)]
    while pages[-1].next_cursor is not None:
        pages.append(use_case.execute(owner, pages[-1].next_cursor))

    items = [item for page in pages for item in page.items]
    ids = [item.id for item in items]
    assert [len(p.items) for p in pages] == [10, 10, 5]
    assert ids == sorted(ids, reverse=True)
    assert len(set(ids)) == 25
    assert ids[:5] == sorted(own_plain, reverse=True)
    assert all(item.label is None for item in items[:5])
    assert {item.label for item in items[5:]} == {"korean"}
    assert {item.restaurant_name for item in items[5:]} == {"Noodle Bar"}


def test_repository_empty_listing(session_factory) -> None:
    owner = seed_user("owner", 1)
    use_case = ListUserReviewsUseCase(reviews=SqlAlchemyReviewRepository(session_factory), page_size=10)

    page = use_case.execute(owner)

    assert page.items == [] and page.next_cursor is None
