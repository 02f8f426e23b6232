"""Task schemas for request payloads, serialized tasks and statistics."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from ulid import ULID

from taskkit.core.schemas import EntityOut
from taskkit.modules.user.schemas import UserOut

from .models import TaskStatus
from .validation import MAX_TITLE_LENGTH, check_deadline, check_required_text, today_from_context


class TaskIn(BaseModel):
    """Payload for creating a task."""

    tasklist: str = Field(max_length=MAX_TITLE_LENGTH, description="Task title")
    description: str = Field(description="Task details")
    deadline: date = Field(description="Due date, today or later")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Initial status")

    @field_validator("tasklist", "description", mode="before")
    @classmethod
    def require_text(cls, value: Any, info: ValidationInfo) -> Any:
        return check_required_text(info.field_name or "value", value)

    @field_validator("deadline")
    @classmethod
    def deadline_not_in_past(cls, value: date, info: ValidationInfo) -> date:
        return check_deadline(value, today_from_context(info.context))


class TaskUpdate(BaseModel):
    """Partial payload for updating a task; only supplied fields are applied."""

    tasklist: str | None = Field(default=None, max_length=MAX_TITLE_LENGTH, description="Task title")
    description: str | None = Field(default=None, description="Task details")
    deadline: date | None = Field(default=None, description="Due date, today or later")
    status: TaskStatus | None = Field(default=None, description="New status")

    @field_validator("tasklist", "description", "deadline", "status", mode="before")
    @classmethod
    def reject_explicit_null(cls, value: Any, info: ValidationInfo) -> Any:
        field = info.field_name or "value"
        if info.field_name in ("tasklist", "description"):
            return check_required_text(field, value)
        if value is None:
            raise ValueError(f"The {field} field is required.")
        return value

    @field_validator("deadline")
    @classmethod
    def deadline_not_in_past(cls, value: date | None, info: ValidationInfo) -> date | None:
        if value is None:
            return value
        return check_deadline(value, today_from_context(info.context))

    def changes(self) -> dict[str, Any]:
        """Return the supplied fields keyed by their storage attribute names."""
        supplied = self.model_dump(exclude_unset=True)
        if "tasklist" in supplied:
            supplied["title"] = supplied.pop("tasklist")
        return supplied


class TaskStatusUpdate(BaseModel):
    """Payload for changing only the status of a task."""

    status: TaskStatus = Field(description="New status")


class TaskOut(EntityOut):
    """Serialized task with the derived remaining-days label."""

    user_id: ULID
    tasklist: str
    description: str
    deadline: date
    status: TaskStatus
    remaining_days: str
    user: UserOut | None = None


class TaskStatistics(BaseModel):
    """Per-owner task counts."""

    total_tasks: int
    pending: int
    in_progress: int
    completed: int
    overdue: int
