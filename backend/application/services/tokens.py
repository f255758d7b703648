"""Stateless bearer tokens.

Tokens are HS256 JWTs carrying the account id and username. Nothing is stored
server side, so a token stays valid until it expires; there is no revocation.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from backend.domain.users.entities import SessionClaims
from backend.domain.users.exceptions import (
    TokenExpiredError,
    TokenInvalidError,
    TokenMissingError,
)
from backend.domain.users.repositories import TokenService

_REQUIRED_CLAIMS = ["sub", "username", "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenService):
    def __init__(
        self,
        secret: str,
        *,
        ttl: timedelta = timedelta(hours=1),
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, account_id: int, username: str) -> str:
        issued_at = self._clock().replace(microsecond=0)
        payload = {
            "sub": str(account_id),
            "username": username,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def validate(self, token: str | None) -> SessionClaims:
        if not token:
            raise TokenMissingError()
        try:
            # Expiry is checked against the injected clock below.
            data = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": _REQUIRED_CLAIMS},
            )
            account_id = int(data["sub"])
            issued_at = datetime.fromtimestamp(int(data["iat"]), UTC)
            expires_at = datetime.fromtimestamp(int(data["exp"]), UTC)
        except (jwt.PyJWTError, KeyError, TypeError, ValueError) as exc:
            raise TokenInvalidError() from exc

        if self._clock() >= expires_at:
            raise TokenExpiredError()

        return SessionClaims(
            account_id=account_id,
            username=str(data["username"]),
            issued_at=issued_at,
            expires_at=expires_at,
        )
