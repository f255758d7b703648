# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from backend.domain.users.exceptions import AccountNotFoundError
from backend.domain.users.repositories import AccountRepository, BlobStore
from backend.shared.errors.base import DependencyError
from backend.shared.logging import logger


class UpdateProfileIconUseCase:
    def __init__(self, *, accounts: AccountRepository, blobs: BlobStore) -> None:
        self._accounts = accounts
        self._blobs = blobs

    def execute(
        self, account_id: int, content: bytes, *, filename: str, content_type: str | None
    ) -> str:
        if self._accounts.find_by_id(account_id) is None:
            raise AccountNotFoundError()

        try:
            url = self._blobs.upload(content, filename=filename, content_type=content_type)
        except OSError as exc:
            logger.error(f"users.icon: blob store failure account_id={account_id}: {exc}")
            raise DependencyError("blob_store") from exc

        self._accounts.update_icon(account_id, url)
        logger.info(f"users.icon: updated account_id={account_id} size={len(content)}")
        return url
