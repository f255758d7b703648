# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Blob storage adapter for uploaded profile icons."""

from __future__ import annotations

import uuid
from pathlib import Path, PurePosixPath

from backend.domain.users.repositories import BlobStore
from backend.shared.logging import logger

_ALLOWED_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".webp"}


class LocalBlobStore(BlobStore):
    """Stores blobs on the local filesystem and serves them under a public base URL."""

    def __init__(self, root: Path, public_base_url: str, *, prefix: str = "icons") -> None:
        self._root = root
        self._public_base_url = public_base_url.rstrip("/")
        self._prefix = prefix
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, relative_path: str) -> Path:
        path = (self._root / relative_path).resolve()
        if not path.is_relative_to(self._root.resolve()):
            msg = "Attempted directory traversal outside storage root"
            raise ValueError(msg)
        return path

    def upload(self, content: bytes, *, filename: str, content_type: str | None) -> str:
        suffix = PurePosixPath(filename or "").suffix.lower()
        if suffix not in _ALLOWED_SUFFIXES:
            suffix = ""
        key = f"{self._prefix}/{uuid.uuid4().hex}{suffix}"
        file_path = self._resolve(key)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(content)
        logger.debug(
            f"storage: write key={key} size={len(content)} content_type={content_type}"
        )
        return f"{self._public_base_url}/{key}"


__all__ = ["LocalBlobStore"]
