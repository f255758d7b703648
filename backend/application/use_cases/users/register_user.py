# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from backend.domain.users.entities import Account
from backend.domain.users.exceptions import DuplicateUsernameError
from backend.domain.users.repositories import AccountRepository, PasswordHasher, TagAllocator
from backend.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        accounts: AccountRepository,
        tags: TagAllocator,
        password_hasher: PasswordHasher,
    ) -> None:
        self._accounts = accounts
        self._tags = tags
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str, nickname: str) -> Account:
        # Fast path only; the unique constraint in ``create`` settles races.
        if self._accounts.find_by_username(username):
            raise DuplicateUsernameError()
        tag_number = self._tags.allocate()
        hashed = self._password_hasher.hash(password)
        account = self._accounts.create(username, hashed, nickname, tag_number)
        logger.info(f"users.register: ok account_id={account.id} tag={account.tag}")
        return account
