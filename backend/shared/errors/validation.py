# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError

_MISSING_TYPES = {"missing", "string_too_short"}


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    errors_list = []
    fields_set = set()

    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None)

        if field_path:
            fields_set.add(field_path)

        errors_list.append(
            {
                "field": field_path or "unknown",
                "type": error.get("type", "value_error"),
            }
        )

    return {
        "fields": sorted(fields_set),
        "errors": errors_list,
    }


def _first_message(context: dict[str, Any]) -> str:
    if not context["errors"]:
        return "Invalid request"
    first = context["errors"][0]
    if first["type"] in _MISSING_TYPES:
        return f"{first['field']} is required"
    return f"{first['field']} is invalid"


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    context = format_pydantic_errors(exc)
    raise ValidationError(_first_message(context), context=context) from exc


__all__ = [
    "format_pydantic_errors",
    "raise_validation_error",
]
