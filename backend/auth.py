# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bearer-token guards for Flask views.

Tokens are validated before the wrapped view runs; failures raise the token
errors from ``backend.domain.users.exceptions`` which the error handler turns
into 401 responses.
"""

from functools import wraps

from flask import Flask, current_app, g, request

from backend.domain.users.entities import SessionClaims
from backend.domain.users.exceptions import TokenMissingError
from backend.domain.users.repositories import TokenService
from backend.shared.logging import logger

_EXTENSION_KEY = "token_service"


def install_token_service(app: Flask, service: TokenService) -> None:
    app.extensions[_EXTENSION_KEY] = service


def _token_service() -> TokenService:
    return current_app.extensions[_EXTENSION_KEY]


def bearer_token() -> str | None:
    auth = request.headers.get("Authorization", "")
    scheme, _, token = auth.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def _authenticate(token: str | None) -> SessionClaims:
    claims = _token_service().validate(token)
    g.user_id = claims.account_id
    g.username = claims.username
    return claims


def current_user_id() -> int:
    return g.user_id


def optional_user_id() -> int | None:
    return getattr(g, "user_id", None)


def auth_required(f):
    @wraps(f)
    def inner(*a, **kw):
        token = bearer_token()
        if not token:
            logger.warning(
                f"No bearer token on {request.method} {request.path} "
                f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
            )
            raise TokenMissingError()
        try:
            claims = _authenticate(token)
        except Exception as exc:
            logger.warning(
                f"Auth failed ({type(exc).__name__}) on {request.method} {request.path}"
            )
            raise
        logger.debug(f"Auth OK: user={claims.account_id} {request.method} {request.path}")
        return f(*a, **kw)

    return inner


def auth_optional(f):
    """Authenticate when a bearer token is present; anonymous otherwise."""

    @wraps(f)
    def inner(*a, **kw):
        token = bearer_token()
        if token:
            _authenticate(token)
        return f(*a, **kw)

    return inner
