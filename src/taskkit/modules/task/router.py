"""Task router exposing owner-scoped CRUD, status updates and statistics."""

from collections.abc import Callable, Sequence
from typing import Annotated, Any

from fastapi import Depends, Query, status
from ulid import ULID

from taskkit.core.api.router import Router
from taskkit.core.exceptions import NotFoundError, translate_failures
from taskkit.core.schemas import Envelope, Page
from taskkit.core.types import parse_ulid

from .manager import TaskManager
from .query import MAX_PER_PAGE, TaskQuery, build_task_query
from .repository import TASK_NOT_FOUND
from .schemas import TaskIn, TaskOut, TaskStatistics, TaskStatusUpdate, TaskUpdate


def _task_id(raw: str) -> ULID:
    # A malformed id can never match a stored task
    task_id = parse_ulid(raw)
    if task_id is None:
        raise NotFoundError(TASK_NOT_FOUND)
    return task_id


class TaskRouter(Router):
    """Router for Task endpoints; every handler runs under the caller's owner scope."""

    def __init__(
        self,
        prefix: str,
        tags: Sequence[str],
        manager_factory: Callable[..., Any],
        identity: Callable[..., Any],
        max_per_page: int = MAX_PER_PAGE,
        **kwargs: Any,
    ) -> None:
        """Initialize task router with manager and caller-identity dependencies."""
        self.manager_factory = manager_factory
        self.identity = identity
        self.max_per_page = max_per_page
        super().__init__(prefix=prefix, tags=list(tags), **kwargs)

    def _register_routes(self) -> None:
        """Register task endpoints; fixed paths precede the id-parameterized ones."""
        OwnerId = Annotated[ULID, Depends(self.identity)]
        Manager = Annotated[TaskManager, Depends(self.manager_factory)]
        max_per_page = self.max_per_page

        def list_options(
            search: str | None = Query(None, description="Substring matched against title and description"),
            status: str | None = Query(None, description="pending, in-progress or completed"),
            sort_by: str | None = Query(None, description="Field to sort by (default created_at)"),
            sort_order: str | None = Query(None, description="asc or desc (default desc)"),
            page: str | None = Query(None, description="Page number, starting at 1"),
            per_page: str | None = Query(None, description=f"Page size (default 10, max {max_per_page})"),
        ) -> TaskQuery:
            return build_task_query(
                {
                    "search": search,
                    "status": status,
                    "sort_by": sort_by,
                    "sort_order": sort_order,
                    "page": page,
                    "per_page": per_page,
                },
                max_per_page=max_per_page,
            )

        @self.router.get(
            "",
            summary="List tasks",
            response_model=Envelope[Page[TaskOut]],
            response_model_exclude_none=True,
        )
        async def list_tasks(
            owner_id: OwnerId,
            query: Annotated[TaskQuery, Depends(list_options)],
            manager: Manager,
        ) -> Envelope[Page[TaskOut]]:
            with translate_failures("Failed to retrieve tasks"):
                page = await manager.list_tasks(owner_id, query)
            return Envelope[Page[TaskOut]](success=True, message="Tasks retrieved successfully", data=page)

        @self.router.post(
            "",
            summary="Create task",
            status_code=status.HTTP_201_CREATED,
            response_model=Envelope[TaskOut],
            response_model_exclude_none=True,
        )
        async def create_task(
            owner_id: OwnerId,
            payload: TaskIn,
            manager: Manager,
        ) -> Envelope[TaskOut]:
            with translate_failures("Failed to create task"):
                task = await manager.create_task(owner_id, payload)
            return Envelope[TaskOut](success=True, message="Task created successfully", data=task)

        @self.router.get(
            "/statistics",
            summary="Task statistics",
            response_model=Envelope[TaskStatistics],
            response_model_exclude_none=True,
        )
        async def task_statistics(
            owner_id: OwnerId,
            manager: Manager,
        ) -> Envelope[TaskStatistics]:
            with translate_failures("Failed to retrieve statistics"):
                stats = await manager.statistics(owner_id)
            return Envelope[TaskStatistics](success=True, message="Statistics retrieved successfully", data=stats)

        @self.router.get(
            "/{task_id}",
            summary="Get task",
            response_model=Envelope[TaskOut],
            response_model_exclude_none=True,
        )
        async def get_task(
            owner_id: OwnerId,
            task_id: str,
            manager: Manager,
        ) -> Envelope[TaskOut]:
            with translate_failures("Failed to retrieve task"):
                task = await manager.get_task(owner_id, _task_id(task_id))
            return Envelope[TaskOut](success=True, message="Task retrieved successfully", data=task)

        @self.router.api_route(
            "/{task_id}",
            methods=["PUT", "PATCH"],
            summary="Update task",
            response_model=Envelope[TaskOut],
            response_model_exclude_none=True,
        )
        async def update_task(
            owner_id: OwnerId,
            task_id: str,
            payload: TaskUpdate,
            manager: Manager,
        ) -> Envelope[TaskOut]:
            with translate_failures("Failed to update task"):
                task = await manager.update_task(owner_id, _task_id(task_id), payload)
            return Envelope[TaskOut](success=True, message="Task updated successfully", data=task)

        @self.router.patch(
            "/{task_id}/status",
            summary="Update task status",
            response_model=Envelope[TaskOut],
            response_model_exclude_none=True,
        )
        async def update_task_status(
            owner_id: OwnerId,
            task_id: str,
            payload: TaskStatusUpdate,
            manager: Manager,
        ) -> Envelope[TaskOut]:
            with translate_failures("Failed to update task status"):
                task = await manager.update_status(owner_id, _task_id(task_id), payload)
            return Envelope[TaskOut](success=True, message="Task status updated successfully", data=task)

        @self.router.delete(
            "/{task_id}",
            summary="Delete task",
            response_model=Envelope[None],
            response_model_exclude_none=True,
        )
        async def delete_task(
            owner_id: OwnerId,
            task_id: str,
            manager: Manager,
        ) -> Envelope[None]:
            with translate_failures("Failed to delete task"):
                await manager.delete_task(owner_id, _task_id(task_id))
            return Envelope[None](success=True, message="Task deleted successfully")
