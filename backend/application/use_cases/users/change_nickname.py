# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from backend.domain.users.repositories import AccountRepository
from backend.shared.logging import logger


class ChangeNicknameUseCase:
    def __init__(self, *, accounts: AccountRepository) -> None:
        self._accounts = accounts

    def execute(self, account_id: int, nickname: str) -> None:
        self._accounts.update_nickname(account_id, nickname)
        logger.info(f"users.nickname: changed account_id={account_id}")
