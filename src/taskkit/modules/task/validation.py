"""Task payload rules and the entry point for validating raw task payloads."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from taskkit.core.clock import utc_today
from taskkit.core.validation import ModelT, validate_payload

MAX_TITLE_LENGTH = 255


def check_required_text(field: str, value: Any) -> Any:
    """Reject null and blank strings, returning strings stripped of surrounding whitespace."""
    if value is None:
        raise ValueError(f"The {field} field is required.")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError(f"The {field} field is required.")
    return value


def check_deadline(value: date, today: date) -> date:
    """Reject deadlines before today."""
    if value < today:
        raise ValueError("The deadline must be a date after or equal to today.")
    return value


def today_from_context(context: Any) -> date:
    """Return the reference date from a validation context, defaulting to the UTC date."""
    if isinstance(context, Mapping) and isinstance(context.get("today"), date):
        return context["today"]
    return utc_today()


def validate_task_payload(schema: type[ModelT], payload: Mapping[str, Any], *, today: date | None = None) -> ModelT:
    """Validate a create, update or status payload against ``today`` (UTC date by default)."""
    return validate_payload(schema, payload, context={"today": today} if today is not None else None)

