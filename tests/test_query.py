"""Tests for list query parsing."""

from __future__ import annotations

import pytest

from taskkit.core import ValidationError
from taskkit.modules.task import TaskQuery, TaskStatus, build_task_query


def test_defaults_when_no_parameters() -> None:
    """An empty query lists the first page of ten, newest first."""
    query = build_task_query({})
    assert query == TaskQuery()
    assert query.sort_by == "created_at"
    assert query.sort_order == "desc"
    assert query.page == 1
    assert query.per_page == 10
    assert query.offset == 0


def test_blank_and_missing_values_fall_back_to_defaults() -> None:
    """Blank strings behave like omitted parameters."""
    query = build_task_query(
        {"search": "", "status": " ", "sort_by": "", "sort_order": None, "page": "", "per_page": ""}
    )
    assert query == TaskQuery()


def test_string_parameters_are_coerced() -> None:
    """Query string values parse into typed options."""
    query = build_task_query(
        {
            "search": "report",
            "status": "in-progress",
            "sort_by": "tasklist",
            "sort_order": "asc",
            "page": "3",
            "per_page": "5",
        }
    )
    assert query.search == "report"
    assert query.status == TaskStatus.IN_PROGRESS
    assert query.sort_by == "tasklist"
    assert query.sort_order == "asc"
    assert query.offset == 10


def test_per_page_cap() -> None:
    """Page sizes above the cap are rejected rather than clamped."""
    assert build_task_query({"per_page": "100"}).per_page == 100
    with pytest.raises(ValidationError) as exc_info:
        build_task_query({"per_page": "101"})
    assert exc_info.value.errors == {"per_page": ["The per_page may not be greater than 100."]}


def test_custom_per_page_cap() -> None:
    """The cap is configurable."""
    with pytest.raises(ValidationError) as exc_info:
        build_task_query({"per_page": "26"}, max_per_page=25)
    assert exc_info.value.errors == {"per_page": ["The per_page may not be greater than 25."]}


@pytest.mark.parametrize(
    ("params", "field"),
    [
        ({"sort_by": "password_hash"}, "sort_by"),
        ({"sort_by": "owner_id; DROP TABLE tasks"}, "sort_by"),
        ({"sort_order": "sideways"}, "sort_order"),
        ({"status": "archived"}, "status"),
        ({"page": "0"}, "page"),
        ({"page": "abc"}, "page"),
        ({"per_page": "-1"}, "per_page"),
    ],
)
def test_invalid_parameters_are_rejected(params: dict[str, str], field: str) -> None:
    """Unknown sort fields, orders, statuses and bad page numbers fail validation."""
    with pytest.raises(ValidationError) as exc_info:
        build_task_query(params)
    assert field in exc_info.value.errors
