"""Service builder with task module integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Self

from fastapi import FastAPI

from taskkit.core.api.service_builder import BaseServiceBuilder
from taskkit.modules.task import MAX_PER_PAGE, TaskRouter

from .dependencies import get_task_manager as default_get_task_manager
from .identity import DEFAULT_IDENTITY_HEADER, HeaderIdentity, get_current_user_id


@dataclass(slots=True)
class _TaskOptions:
    """Internal task options for ServiceBuilder."""

    prefix: str = "/api/v1/tasks"
    tags: List[str] = field(default_factory=lambda: ["Tasks"])
    max_per_page: int = MAX_PER_PAGE


class ServiceBuilder(BaseServiceBuilder):
    """Service builder with integrated task module and caller identity support."""

    def __init__(self, **kwargs: Any) -> None:
        """Initialize service builder with module-specific state."""
        super().__init__(**kwargs)
        self._task_options: _TaskOptions | None = None
        self._identity_header = DEFAULT_IDENTITY_HEADER

    # --------------------------------------------------------------------- Module-specific fluent methods

    def with_tasks(
        self,
        *,
        prefix: str = "/api/v1/tasks",
        tags: List[str] | None = None,
        max_per_page: int = MAX_PER_PAGE,
    ) -> Self:
        """Enable the owner-scoped task endpoints."""
        self._task_options = _TaskOptions(
            prefix=prefix,
            tags=list(tags) if tags else ["Tasks"],
            max_per_page=max_per_page,
        )
        return self

    def with_identity(self, *, header_name: str = DEFAULT_IDENTITY_HEADER) -> Self:
        """Read the caller's user id from the given header set by the identity provider."""
        self._identity_header = header_name
        return self

    # --------------------------------------------------------------------- Extension point implementations

    def _validate_module_configuration(self) -> None:
        """Validate module-specific configuration."""
        if self._task_options is not None and self._task_options.max_per_page < 1:
            raise ValueError("max_per_page must be at least 1")
        if not self._identity_header.strip():
            raise ValueError("Identity header name must not be empty")

    def _register_module_routers(self, app: FastAPI) -> None:
        """Register task routers and the identity dependency."""
        if self._identity_header != DEFAULT_IDENTITY_HEADER:
            app.dependency_overrides.setdefault(get_current_user_id, HeaderIdentity(self._identity_header))

        if self._task_options is not None:
            options = self._task_options
            task_router = TaskRouter.create(
                prefix=options.prefix,
                tags=options.tags,
                manager_factory=default_get_task_manager,
                identity=get_current_user_id,
                max_per_page=options.max_per_page,
            )
            app.include_router(task_router)

