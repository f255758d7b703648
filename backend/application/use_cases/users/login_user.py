# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from backend.domain.users.exceptions import (
    AccountNotFoundError,
    CredentialIntegrityError,
    InvalidCredentialsError,
)
from backend.domain.users.repositories import AccountRepository, PasswordHasher, TokenService
from backend.shared.errors.base import DependencyError
from backend.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        accounts: AccountRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._accounts = accounts
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str) -> str:
        account = self._accounts.find_by_username(username)
        if account is None:
            raise AccountNotFoundError("User does not exist")

        try:
            password_valid = self._password_hasher.verify(password, account.password_hash)
        except CredentialIntegrityError as exc:
            logger.error(f"users.login: unreadable password digest account_id={account.id}")
            raise DependencyError("credential_store") from exc

        if not password_valid:
            logger.info(f"users.login: password mismatch account_id={account.id}")
            raise InvalidCredentialsError()

        return self._tokens.issue(account.id, account.username)
