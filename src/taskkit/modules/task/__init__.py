"""Task feature - personal tasks scoped to their owner."""

from .manager import TaskManager
from .models import Task, TaskStatus
from .query import MAX_PER_PAGE, SORTABLE_FIELDS, TaskQuery, build_task_query
from .remaining import remaining_days
from .repository import TaskRepository
from .router import TaskRouter
from .schemas import TaskIn, TaskOut, TaskStatistics, TaskStatusUpdate, TaskUpdate
from .validation import validate_task_payload

__all__ = [
    "Task",
    "TaskStatus",
    "TaskIn",
    "TaskUpdate",
    "TaskStatusUpdate",
    "TaskOut",
    "TaskStatistics",
    "TaskQuery",
    "SORTABLE_FIELDS",
    "MAX_PER_PAGE",
    "build_task_query",
    "remaining_days",
    "validate_task_payload",
    "TaskRepository",
    "TaskManager",
    "TaskRouter",
]
