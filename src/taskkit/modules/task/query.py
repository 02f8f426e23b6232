"""Task query specification and the statement builder that applies it."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import InstrumentedAttribute
from ulid import ULID

from taskkit.core.exceptions import ValidationError
from taskkit.core.validation import validate_payload

from .models import Task, TaskStatus

DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100

# Wire names accepted by sort_by, mapped to model columns
SORTABLE_FIELDS: dict[str, InstrumentedAttribute[Any]] = {
    "id": Task.id,
    "tasklist": Task.title,
    "title": Task.title,
    "description": Task.description,
    "deadline": Task.deadline,
    "status": Task.status,
    "created_at": Task.created_at,
    "updated_at": Task.updated_at,
}

SortField = Literal["id", "tasklist", "title", "description", "deadline", "status", "created_at", "updated_at"]


class TaskQuery(BaseModel):
    """Filter, search, sort and pagination options for listing an owner's tasks."""

    model_config = ConfigDict(frozen=True)

    search: str | None = None
    status: TaskStatus | None = None
    sort_by: SortField = "created_at"
    sort_order: Literal["asc", "desc"] = "desc"
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=DEFAULT_PER_PAGE, ge=1)

    @field_validator("search", "status", "sort_by", "sort_order", "page", "per_page", mode="before")
    @classmethod
    def blank_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        # Empty query parameters fall back to the defaults
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.model_fields[info.field_name].default
        return value

    @property
    def offset(self) -> int:
        """Row offset of the first item on the requested page."""
        return (self.page - 1) * self.per_page


def build_task_query(params: Mapping[str, Any], *, max_per_page: int = MAX_PER_PAGE) -> TaskQuery:
    """Validate raw list parameters into a TaskQuery, enforcing the page size cap."""
    query = validate_payload(TaskQuery, {key: value for key, value in params.items() if value is not None})
    if query.per_page > max_per_page:
        raise ValidationError.for_field("per_page", f"The per_page may not be greater than {max_per_page}.")
    return query


def _scoped(statement: Select[Any], owner_id: ULID, query: TaskQuery) -> Select[Any]:
    statement = statement.where(Task.owner_id == owner_id)
    if query.search:
        statement = statement.where(
            or_(
                Task.title.contains(query.search, autoescape=True),
                Task.description.contains(query.search, autoescape=True),
            )
        )
    if query.status is not None:
        statement = statement.where(Task.status == query.status)
    return statement


def select_tasks(owner_id: ULID, query: TaskQuery) -> Select[tuple[Task]]:
    """Build the page-selecting statement for an owner's tasks."""
    column = SORTABLE_FIELDS[query.sort_by]
    ordering = column.asc() if query.sort_order == "asc" else column.desc()
    tiebreak = Task.id.asc() if query.sort_order == "asc" else Task.id.desc()
    statement = _scoped(select(Task), owner_id, query)
    return statement.order_by(ordering, tiebreak).offset(query.offset).limit(query.per_page)


def count_tasks(owner_id: ULID, query: TaskQuery) -> Select[tuple[int]]:
    """Build the statement counting all matches for an owner, ignoring pagination."""
    return _scoped(select(func.count()).select_from(Task), owner_id, query)
