# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.domain.users.entities import Account, format_tag
from backend.domain.users.exceptions import (
    AccountNotFoundError,
    DuplicateUsernameError,
    NoOpUpdateError,
)
from backend.domain.users.repositories import AccountRepository
from backend.infrastructure.db.models import User
from backend.infrastructure.unit_of_work import unit_of_work_scope
from backend.shared.errors.base import DependencyError
from backend.shared.logging import logger


def _to_domain(row: User) -> Account:
    return Account(
        id=row.id,
        username=row.username,
        nickname=row.nickname,
        password_hash=row.password_hash,
        tag_number=row.tag_number,
        profile_icon=row.profile_icon,
        created_at=row.created_at,
    )


class SqlAlchemyAccountRepository(AccountRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> Account | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(select(User).where(User.username == username)).first()
            return _to_domain(row) if row else None

    def find_by_id(self, account_id: int) -> Account | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, account_id)
            return _to_domain(row) if row else None

    def create(
        self, username: str, password_hash: str, nickname: str, tag_number: int
    ) -> Account:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(
                    username=username,
                    password_hash=password_hash,
                    nickname=nickname,
                    tag_number=tag_number,
                    tag=format_tag(tag_number),
                )
                session.add(row)
                session.flush()
                account = _to_domain(row)
        except IntegrityError as exc:
            if self.find_by_username(username) is not None:
                logger.info(f"accounts.create: lost username race username={username!r}")
                raise DuplicateUsernameError() from exc
            logger.error(f"accounts.create: integrity failure tag_number={tag_number}: {exc.orig}")
            raise DependencyError("account_store") from exc
        return account

    def update_nickname(self, account_id: int, nickname: str) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(
                update(User)
                .where(User.id == account_id, User.nickname != nickname)
                .values(nickname=nickname)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount:
                return
            # Zero rows: either the account is gone or the value is unchanged.
            if session.get(User, account_id) is None:
                raise AccountNotFoundError()
            raise NoOpUpdateError("Nickname is identical to the current one")

    def update_icon(self, account_id: int, icon_url: str) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(
                update(User)
                .where(User.id == account_id)
                .values(profile_icon=icon_url)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise AccountNotFoundError()
