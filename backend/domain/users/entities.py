# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from backend.domain.exceptions import InvariantViolation


def format_tag(tag_number: int) -> str:
    """Render a tag number as ``#NN``; three or more digits are kept whole."""

    if tag_number < 1:
        raise InvariantViolation("tag number must be positive", field="tag_number")
    return f"#{tag_number:02d}"


@dataclass(slots=True, frozen=True)
class Account:

    id: int
    username: str
    nickname: str
    password_hash: str
    tag_number: int
    profile_icon: str | None = None
    created_at: datetime | None = None

    @property
    def tag(self) -> str:
        return format_tag(self.tag_number)


@dataclass(slots=True, frozen=True)
class SessionClaims:
    """Identity carried inside a bearer token."""

    account_id: int
    username: str
    issued_at: datetime
    expires_at: datetime
