from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy.exc import OperationalError

from backend.application.services.password_hashing import BcryptPasswordHasher
from backend.application.use_cases.users.register_user import RegisterUserUseCase
from backend.domain.exceptions import InvariantViolation
from backend.domain.users.entities import format_tag
from backend.domain.users.exceptions import AllocationExhaustedError, DuplicateUsernameError
from backend.infrastructure.repositories.users.sqlalchemy_account_repository import (
    SqlAlchemyAccountRepository,
)
from backend.infrastructure.repositories.users.tag_allocator import SqlAlchemyTagAllocator
from conftest import seed_user


@pytest.mark.parametrize(
    ("number", "expected"), [(1, "#01"), (9, "#09"), (42, "#42"), (100, "#100"), (1234, "#1234")]
)
def test_format_tag(number: int, expected: str) -> None:
    assert format_tag(number) == expected


def test_format_tag_rejects_non_positive() -> None:
    with pytest.raises(InvariantViolation):
        format_tag(0)


def test_allocations_are_sequential(session_factory) -> None:
    allocator = SqlAlchemyTagAllocator(session_factory)

    assert [allocator.allocate() for _ in range(3)] == [1, 2, 3]


def test_counter_is_seeded_past_existing_tags(session_factory) -> None:
    seed_user("legacy", tag_number=7)

    assert SqlAlchemyTagAllocator(session_factory).allocate() == 8


def test_concurrent_allocations_are_unique(session_factory) -> None:
    allocator = SqlAlchemyTagAllocator(session_factory, attempts=10)

    with ThreadPoolExecutor(max_workers=8) as pool:
        values = list(pool.map(lambda _: allocator.allocate(), range(20)))

    assert sorted(values) == list(range(1, 21))


def test_allocation_gives_up_after_attempts() -> None:
    calls = []

    def broken_factory():
        calls.append(1)
        raise OperationalError("UPDATE tag_sequences", {}, Exception("database is locked"))

    allocator = SqlAlchemyTagAllocator(broken_factory, attempts=3)

    with pytest.raises(AllocationExhaustedError) as exc_info:
        allocator.allocate()
    assert len(calls) == 3
    assert exc_info.value.status == 409


def _registration(session_factory) -> RegisterUserUseCase:
    return RegisterUserUseCase(
        accounts=SqlAlchemyAccountRepository(session_factory),
        tags=SqlAlchemyTagAllocator(session_factory, attempts=10),
        password_hasher=BcryptPasswordHasher(rounds=4),
    )


def test_concurrent_registrations_get_distinct_tags(session_factory) -> None:
    register = _registration(session_factory)

    with ThreadPoolExecutor(max_workers=8) as pool:
        accounts = list(
            pool.map(lambda i: register.execute(f"user{i}", "pw", f"Nick{i}"), range(12))
        )

    assert sorted(a.tag_number for a in accounts) == list(range(1, 13))
    assert len({a.tag for a in accounts}) == 12


def test_concurrent_duplicate_username_has_one_winner(session_factory) -> None:
    register = _registration(session_factory)

    def attempt(_: int) -> str:
        try:
            register.execute("same", "pw", "Nick")
        except DuplicateUsernameError:
            return "duplicate"
        return "created"

    with ThreadPoolExecutor(max_workers=6) as pool:
        outcomes = list(pool.map(attempt, range(6)))

    assert outcomes.count("created") == 1
    assert outcomes.count("duplicate") == 5
