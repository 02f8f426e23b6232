"""Task ORM model for personal to-do items scoped to one owner."""

from __future__ import annotations

from datetime import date
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import Date, Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import Text
from ulid import ULID

from taskkit.core.models import Entity
from taskkit.core.types import ULIDType

if TYPE_CHECKING:
    from taskkit.modules.user.models import User


class TaskStatus(StrEnum):
    """Lifecycle state of a task."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Task(Entity):
    """ORM model for a task owned by exactly one user."""

    __tablename__ = "tasks"

    owner_id: Mapped[ULID] = mapped_column(
        ULIDType,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    deadline: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[TaskStatus] = mapped_column(
        Enum(TaskStatus, name="task_status", values_callable=lambda e: [m.value for m in e], native_enum=False),
        default=TaskStatus.PENDING,
        nullable=False,
        index=True,
    )

    user: Mapped[User] = relationship(back_populates="tasks", lazy="raise")
