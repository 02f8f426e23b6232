"""Taskkit - owner-scoped task management service built on FastAPI and async SQLAlchemy."""

# Core framework
from taskkit.core import (
    Base,
    BaseRepository,
    Database,
    Entity,
    EntityOut,
    Envelope,
    InternalError,
    NotFoundError,
    Page,
    SqliteDatabaseBuilder,
    TaskkitError,
    ULIDType,
    UnauthenticatedError,
    ValidationError,
)

# Task feature
from taskkit.modules.task import (
    Task,
    TaskIn,
    TaskManager,
    TaskOut,
    TaskQuery,
    TaskRepository,
    TaskStatistics,
    TaskStatus,
    TaskStatusUpdate,
    TaskUpdate,
)

# User feature
from taskkit.modules.user import User, UserOut, UserRepository

__version__ = "0.1.0"

__all__ = [
    # Core framework
    "Database",
    "SqliteDatabaseBuilder",
    "BaseRepository",
    "Base",
    "Entity",
    "ULIDType",
    "EntityOut",
    "Envelope",
    "Page",
    "TaskkitError",
    "ValidationError",
    "NotFoundError",
    "UnauthenticatedError",
    "InternalError",
    # Task feature
    "Task",
    "TaskStatus",
    "TaskIn",
    "TaskUpdate",
    "TaskStatusUpdate",
    "TaskOut",
    "TaskStatistics",
    "TaskQuery",
    "TaskRepository",
    "TaskManager",
    # User feature
    "User",
    "UserOut",
    "UserRepository",
    # Version
    "__version__",
]
