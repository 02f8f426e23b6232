"""Core framework - database, ORM base classes, repository, errors and logging."""

from .database import Database, SqliteDatabaseBuilder
from .exceptions import (
    InternalError,
    NotFoundError,
    TaskkitError,
    UnauthenticatedError,
    ValidationError,
    translate_failures,
)
from .models import Base, Entity
from .repository import BaseRepository
from .schemas import EntityOut, Envelope, Page
from .types import ULIDType

__all__ = [
    "Database",
    "SqliteDatabaseBuilder",
    "Base",
    "Entity",
    "ULIDType",
    "BaseRepository",
    "EntityOut",
    "Envelope",
    "Page",
    "TaskkitError",
    "ValidationError",
    "NotFoundError",
    "UnauthenticatedError",
    "InternalError",
    "translate_failures",
]
