"""Shared test helpers for seeding users and addressing requests."""

from __future__ import annotations

from datetime import date, timedelta

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from taskkit.core import Database
from taskkit.core.clock import utc_today
from taskkit.modules.user import User, UserRepository

ALICE_ID = ULID()
BOB_ID = ULID()


def days_from_today(days: int) -> date:
    """Return the UTC date shifted by the given number of days."""
    return utc_today() + timedelta(days=days)


def auth(user_id: ULID) -> dict[str, str]:
    """Headers identifying the caller."""
    return {"X-User-Id": str(user_id)}


async def add_user(session: AsyncSession, name: str, email: str, *, id: ULID | None = None) -> User:
    """Insert and commit a user."""
    repo = UserRepository(session)
    user = User(id=id or ULID(), name=name, email=email, password_hash="x")
    await repo.save(user)
    await repo.commit()
    return user


async def seed_users(app: FastAPI) -> None:
    """Provision the two accounts used by the HTTP tests."""
    database: Database = app.state.database
    async with database.session() as session:
        await add_user(session, "Alice", "alice@example.com", id=ALICE_ID)
        await add_user(session, "Bob", "bob@example.com", id=BOB_ID)
