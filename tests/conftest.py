"""Shared fixtures for taskkit tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from taskkit.api import ServiceBuilder, ServiceInfo
from taskkit.core import Database, SqliteDatabaseBuilder

from ._helpers import seed_users


@pytest.fixture
async def database() -> AsyncIterator[Database]:
    """Initialized private in-memory database."""
    db = SqliteDatabaseBuilder.in_memory().build()
    await db.init()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database: Database) -> AsyncIterator[AsyncSession]:
    """Session on the in-memory database."""
    async with database.session() as s:
        yield s


@pytest.fixture
def app() -> FastAPI:
    """Task service with two seeded users on a fresh in-memory database."""
    return (
        ServiceBuilder(info=ServiceInfo(display_name="Task Test Service"))
        .with_health()
        .with_tasks()
        .on_startup(seed_users)
        .build()
    )


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """TestClient running the app lifespan."""
    with TestClient(app) as test_client:
        yield test_client
