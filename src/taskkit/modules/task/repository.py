"""Task repository: owner-scoped persistence and querying."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from ulid import ULID

from taskkit.core.exceptions import NotFoundError
from taskkit.core.repository import BaseRepository

from .models import Task, TaskStatus
from .query import TaskQuery, count_tasks, select_tasks

TASK_NOT_FOUND = "Task not found"

_MUTABLE_FIELDS = frozenset({"title", "description", "deadline", "status"})


class TaskRepository(BaseRepository[Task, ULID]):
    """Repository for Task entities; every lookup is filtered by owner."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize task repository with database session."""
        super().__init__(session, Task)

    async def create(self, owner_id: ULID, fields: Mapping[str, Any]) -> Task:
        """Insert a task owned by the given user."""
        task = Task(owner_id=owner_id, **{k: v for k, v in fields.items() if k in _MUTABLE_FIELDS})
        return await self.save(task)

    async def find(self, owner_id: ULID, id: ULID, *, with_owner: bool = False) -> Task:
        """Find an owner's task, raising NotFoundError when absent or owned by someone else."""
        stmt = select(Task).where(Task.id == id, Task.owner_id == owner_id)
        if with_owner:
            stmt = stmt.options(selectinload(Task.user)).execution_options(populate_existing=True)
        task = await self.s.scalar(stmt)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)
        return task

    async def update(self, owner_id: ULID, id: ULID, fields: Mapping[str, Any]) -> Task:
        """Merge supplied fields into an owner's task and flush the change."""
        task = await self.find(owner_id, id)
        for name, value in fields.items():
            if name in _MUTABLE_FIELDS:
                setattr(task, name, value)
        await self.s.flush()
        return task

    async def delete(self, owner_id: ULID, id: ULID) -> None:
        """Hard-delete an owner's task."""
        task = await self.find(owner_id, id)
        await self.s.delete(task)
        await self.s.flush()

    async def query(self, owner_id: ULID, query: TaskQuery) -> tuple[list[Task], int]:
        """Return one page of an owner's matching tasks and the total match count."""
        total = await self.s.scalar(count_tasks(owner_id, query))
        result = await self.s.scalars(select_tasks(owner_id, query))
        return list(result.all()), int(total or 0)

    async def count_for_owner(
        self,
        owner_id: ULID,
        *,
        status: TaskStatus | None = None,
        overdue_on: date | None = None,
    ) -> int:
        """Count an owner's tasks, optionally by status or as overdue on a date.

        A deadline has no time of day, so it falls due at the start of that day:
        a task due on `overdue_on` already counts as overdue unless completed.
        """
        stmt = select(func.count()).select_from(Task).where(Task.owner_id == owner_id)
        if status is not None:
            stmt = stmt.where(Task.status == status)
        if overdue_on is not None:
            stmt = stmt.where(Task.deadline <= overdue_on, Task.status != TaskStatus.COMPLETED)
        result = await self.s.scalar(stmt)
        return int(result or 0)
