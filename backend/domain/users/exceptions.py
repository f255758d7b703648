# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from backend.shared.errors.base import AuthError, ConflictError, NotFoundError


class DuplicateUsernameError(ConflictError):
    code = "duplicate_username"
    default_message = "Username is already taken"


class NoOpUpdateError(ConflictError):
    code = "unchanged_value"
    default_message = "New value is identical to the current one"


class AllocationExhaustedError(ConflictError):
    code = "tag_allocation_exhausted"
    status = HTTPStatus.CONFLICT
    default_message = "Could not allocate an account tag, please retry"


class AccountNotFoundError(NotFoundError):
    code = "account_not_found"
    default_message = "Account not found"


class InvalidCredentialsError(AuthError):
    code = "invalid_credentials"
    default_message = "Password does not match"


class CredentialIntegrityError(Exception):
    """A stored password digest could not be parsed."""


class TokenMissingError(AuthError):
    code = "token_missing"
    default_message = "Authorization token is required"


class TokenInvalidError(AuthError):
    code = "token_invalid"
    default_message = "Authorization token is invalid"


class TokenExpiredError(AuthError):
    code = "token_expired"
    default_message = "Authorization token has expired"
