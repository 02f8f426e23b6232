"""User repository for identity lookups."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from taskkit.core.repository import BaseRepository

from .models import User


class UserRepository(BaseRepository[User, ULID]):
    """Repository for User entities."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user repository with database session."""
        super().__init__(session, User)

    async def find_by_email(self, email: str) -> User | None:
        """Find a user by unique email address."""
        result = await self.s.scalars(select(self.model).where(self.model.email == email))
        return result.one_or_none()

    async def exists_by_id(self, id: ULID) -> bool:
        """Return True when a user with this id exists."""
        result = await self.s.scalar(select(self.model.id).where(self.model.id == id))
        return result is not None
