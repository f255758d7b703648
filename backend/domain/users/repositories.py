# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Account, SessionClaims


class AccountRepository(Protocol):
    def find_by_username(self, username: str) -> Account | None: ...
    def find_by_id(self, account_id: int) -> Account | None: ...
    def create(
        self, username: str, password_hash: str, nickname: str, tag_number: int
    ) -> Account: ...
    def update_nickname(self, account_id: int, nickname: str) -> None: ...
    def update_icon(self, account_id: int, icon_url: str) -> None: ...


class TagAllocator(Protocol):
    def allocate(self) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenService(Protocol):
    def issue(self, account_id: int, username: str) -> str: ...
    def validate(self, token: str | None) -> SessionClaims: ...


class BlobStore(Protocol):
    def upload(self, content: bytes, *, filename: str, content_type: str | None) -> str: ...
