"""Generic async repository over a single ORM model."""

from __future__ import annotations

from typing import Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Base

ModelT = TypeVar("ModelT", bound=Base)
IdT = TypeVar("IdT")


class BaseRepository(Generic[ModelT, IdT]):
    """Base repository providing session-bound persistence primitives."""

    def __init__(self, session: AsyncSession, model: type[ModelT]) -> None:
        """Initialize repository with a session and the model it manages."""
        self.s = session
        self.model = model

    async def save(self, entity: ModelT) -> ModelT:
        """Add an entity to the session and flush it."""
        self.s.add(entity)
        await self.s.flush()
        return entity

    async def find_by_id(self, id: IdT) -> ModelT | None:
        """Find an entity by primary key, without any scoping."""
        return await self.s.get(self.model, id)

    async def count(self) -> int:
        """Count all rows of the model."""
        result = await self.s.scalar(select(func.count()).select_from(self.model))
        return int(result or 0)

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self.s.commit()
