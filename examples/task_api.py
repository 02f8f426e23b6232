"""FastAPI service exposing owner-scoped task management with a seeded demo user."""

from __future__ import annotations

import os

from fastapi import FastAPI
from ulid import ULID

from taskkit.api import ServiceBuilder, ServiceInfo
from taskkit.core import Database
from taskkit.modules.user import User, UserRepository

DEMO_USER_ID = ULID.from_str("01JCSEED000000000000000001")
DEMO_USER_EMAIL = "demo@example.com"


async def seed_demo_user(app: FastAPI) -> None:
    """Provision a demo account so requests can be made with ``X-User-Id``."""
    database: Database | None = getattr(app.state, "database", None)
    if database is None:
        return

    async with database.session() as session:
        repo = UserRepository(session)
        if await repo.find_by_email(DEMO_USER_EMAIL) is not None:
            return
        await repo.save(User(id=DEMO_USER_ID, name="Demo User", email=DEMO_USER_EMAIL))
        await repo.commit()


info = ServiceInfo(
    display_name="Task Management API",
    version="1.0.0",
    summary="Personal task lists with filtering, pagination and statistics",
    description="""
    Each request is made on behalf of the user whose id the upstream identity
    provider forwards in the ``X-User-Id`` header. Users only ever see and
    modify their own tasks.

    Try it with the seeded demo account:

        curl -H "X-User-Id: 01JCSEED000000000000000001" http://127.0.0.1:8000/api/v1/tasks
    """,
)

app = (
    ServiceBuilder(info=info)
    .with_database(os.getenv("TASKKIT_DATABASE_URL"))
    .with_logging()
    .with_health()
    .with_tasks()
    .on_startup(seed_demo_user)
    .build()
)

if __name__ == "__main__":
    from taskkit.api import run_app

    run_app("task_api:app")
