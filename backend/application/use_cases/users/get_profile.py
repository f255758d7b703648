# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from backend.domain.users.entities import Account
from backend.domain.users.exceptions import AccountNotFoundError
from backend.domain.users.repositories import AccountRepository


class GetProfileUseCase:
    def __init__(self, *, accounts: AccountRepository) -> None:
        self._accounts = accounts

    def execute(self, account_id: int) -> Account:
        account = self._accounts.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError()
        return account
