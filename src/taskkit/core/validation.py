"""Conversion of pydantic validation failures into per-field error reports."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError

_LOCATION_PREFIXES = {"body", "query", "path", "header"}

ModelT = TypeVar("ModelT", bound=BaseModel)


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc if not isinstance(part, int)]
    if len(parts) > 1 and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts) or "body"


def _message(field: str, error: Mapping[str, Any]) -> str:
    if error.get("type") == "missing":
        return f"The {field} field is required."
    message = str(error.get("msg", "Invalid value"))
    return message.removeprefix("Value error, ")


def format_errors(errors: Iterable[Mapping[str, Any]]) -> dict[str, list[str]]:
    """Collapse pydantic error details into a ``{field: [messages]}`` report."""
    report: dict[str, list[str]] = {}
    for error in errors:
        field = _field_name(error.get("loc", ()))
        message = _message(field, error)
        messages = report.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return report


def validate_payload(schema: type[ModelT], payload: Mapping[str, Any], *, context: Any = None) -> ModelT:
    """Validate a raw payload against a schema, raising ValidationError with a field report."""
    try:
        return schema.model_validate(payload, context=context)
    except PydanticValidationError as e:
        raise ValidationError(format_errors(e.errors())) from e
