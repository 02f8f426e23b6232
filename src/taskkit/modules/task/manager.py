"""Task manager orchestrating validated payloads, owner-scoped storage and serialization."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from ulid import ULID

from taskkit.core.clock import utc_today
from taskkit.core.logging import get_logger
from taskkit.core.schemas import Page
from taskkit.modules.user.schemas import UserOut

from .models import Task, TaskStatus
from .query import TaskQuery
from .remaining import remaining_days
from .repository import TaskRepository
from .schemas import TaskIn, TaskOut, TaskStatistics, TaskStatusUpdate, TaskUpdate

logger = get_logger(__name__)


class TaskManager:
    """Manager for Task entities; every operation takes the caller's id explicitly."""

    def __init__(self, repo: TaskRepository, *, today: Callable[[], date] = utc_today) -> None:
        """Initialize task manager with repository and a source for the current date."""
        self.repo = repo
        self.today = today

    async def list_tasks(self, owner_id: ULID, query: TaskQuery) -> Page[TaskOut]:
        """Return the requested page of the owner's tasks."""
        tasks, total = await self.repo.query(owner_id, query)
        today = self.today()
        items = [self._to_output_schema(task, today) for task in tasks]
        return Page[TaskOut].build(items, page=query.page, per_page=query.per_page, total=total)

    async def create_task(self, owner_id: ULID, data: TaskIn) -> TaskOut:
        """Create a task for the owner and return it with the owner loaded."""
        task = await self.repo.create(
            owner_id,
            {
                "title": data.tasklist,
                "description": data.description,
                "deadline": data.deadline,
                "status": data.status,
            },
        )
        await self.repo.commit()
        logger.info("task.created", task_id=str(task.id), owner_id=str(owner_id))
        fresh = await self.repo.find(owner_id, task.id, with_owner=True)
        return self._to_output_schema(fresh, self.today(), include_owner=True)

    async def get_task(self, owner_id: ULID, task_id: ULID) -> TaskOut:
        """Return one of the owner's tasks with the owner loaded."""
        task = await self.repo.find(owner_id, task_id, with_owner=True)
        return self._to_output_schema(task, self.today(), include_owner=True)

    async def update_task(self, owner_id: ULID, task_id: ULID, data: TaskUpdate) -> TaskOut:
        """Apply the supplied fields to the owner's task."""
        changes = data.changes()
        await self.repo.update(owner_id, task_id, changes)
        await self.repo.commit()
        logger.info("task.updated", task_id=str(task_id), owner_id=str(owner_id), fields=sorted(changes))
        fresh = await self.repo.find(owner_id, task_id, with_owner=True)
        return self._to_output_schema(fresh, self.today(), include_owner=True)

    async def update_status(self, owner_id: ULID, task_id: ULID, data: TaskStatusUpdate) -> TaskOut:
        """Change only the status of the owner's task."""
        task = await self.repo.update(owner_id, task_id, {"status": data.status})
        await self.repo.commit()
        logger.info("task.status_changed", task_id=str(task_id), owner_id=str(owner_id), status=data.status.value)
        return self._to_output_schema(task, self.today())

    async def delete_task(self, owner_id: ULID, task_id: ULID) -> None:
        """Hard-delete the owner's task."""
        await self.repo.delete(owner_id, task_id)
        await self.repo.commit()
        logger.info("task.deleted", task_id=str(task_id), owner_id=str(owner_id))

    async def statistics(self, owner_id: ULID) -> TaskStatistics:
        """Count the owner's tasks by status and overdue state."""
        return TaskStatistics(
            total_tasks=await self.repo.count_for_owner(owner_id),
            pending=await self.repo.count_for_owner(owner_id, status=TaskStatus.PENDING),
            in_progress=await self.repo.count_for_owner(owner_id, status=TaskStatus.IN_PROGRESS),
            completed=await self.repo.count_for_owner(owner_id, status=TaskStatus.COMPLETED),
            overdue=await self.repo.count_for_owner(owner_id, overdue_on=self.today()),
        )

    def _to_output_schema(self, task: Task, today: date, *, include_owner: bool = False) -> TaskOut:
        """Project an ORM task into its serialized form, computing the derived label."""
        return TaskOut(
            id=task.id,
            user_id=task.owner_id,
            tasklist=task.title,
            description=task.description,
            deadline=task.deadline,
            status=task.status,
            remaining_days=remaining_days(task.deadline, today),
            created_at=task.created_at,
            updated_at=task.updated_at,
            user=UserOut.model_validate(task.user, from_attributes=True) if include_owner else None,
        )
