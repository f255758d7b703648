# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": False,
            "error": self.code,
            "message": self.message or self.code,
        }
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    """Base for errors raised by use cases.

    Subclasses declare ``code``, ``status`` and ``default_message`` as class
    attributes; callers may override any of them per instance.
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(self, "status", HTTPStatus.BAD_REQUEST)
        )
        resolved_message = message or getattr(self, "default_message", None)
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            context=context,
            message=resolved_message,
        )


class ValidationError(DomainError):
    code = "validation_error"
    status = HTTPStatus.BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(DomainError):
    code = "conflict"
    status = HTTPStatus.BAD_REQUEST
    default_message = "Request conflicts with the current state"


class AuthError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED
    default_message = "Authentication required"


class NotFoundError(DomainError):
    code = "not_found"
    status = HTTPStatus.NOT_FOUND
    default_message = "Resource not found"


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
        message: str | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, context=context, message=message)


class DependencyError(InfrastructureError):
    """A collaborator (storage, blob store) failed; details stay in the logs."""

    def __init__(self, dependency: str) -> None:
        super().__init__(
            code="internal_error",
            message="An internal error occurred",
        )
        self.dependency = dependency

    def to_dict(self) -> dict[str, Any]:
        return {"success": False, "error": self.code, "message": self.message}
