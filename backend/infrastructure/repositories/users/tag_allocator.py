# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Account tag allocation backed by a database counter row.

Each reservation increments ``tag_sequences.value`` in its own short
transaction, so the row lock (or SQLite's write lock) serialises concurrent
registrations and a reserved value is never handed out twice, even when the
registration that reserved it later fails.
"""

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session
from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from backend.domain.users.exceptions import AllocationExhaustedError
from backend.domain.users.repositories import TagAllocator
from backend.infrastructure.db.models import TagSequence, User
from backend.infrastructure.unit_of_work import unit_of_work_scope
from backend.shared.logging import logger

ACCOUNT_TAG_SEQUENCE = "account_tag"


class SqlAlchemyTagAllocator(TagAllocator):
    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        attempts: int = 5,
        sequence: str = ACCOUNT_TAG_SEQUENCE,
    ) -> None:
        self._session_factory = session_factory
        self._attempts = attempts
        self._sequence = sequence

    def allocate(self) -> int:
        retrying = Retrying(
            stop=stop_after_attempt(self._attempts),
            wait=wait_random_exponential(multiplier=0.02, max=0.5),
            retry=retry_if_exception_type((IntegrityError, OperationalError)),
        )
        try:
            for attempt in retrying:
                with attempt:
                    value = self._reserve()
        except RetryError as exc:
            last = exc.last_attempt.exception()
            logger.error(
                f"tags.allocate: gave up after {self._attempts} attempts: {type(last).__name__}"
            )
            raise AllocationExhaustedError() from last
        logger.debug(f"tags.allocate: reserved {value}")
        return value

    def _reserve(self) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(
                update(TagSequence)
                .where(TagSequence.name == self._sequence)
                .values(value=TagSequence.value + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                # First allocation: seed past any tags that predate the counter.
                current = session.scalar(select(func.coalesce(func.max(User.tag_number), 0)))
                value = int(current) + 1
                session.add(TagSequence(name=self._sequence, value=value))
                session.flush()
                return value
            return int(
                session.scalar(select(TagSequence.value).where(TagSequence.name == self._sequence))
            )
