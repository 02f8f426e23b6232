"""Task manager tests."""

from __future__ import annotations

from datetime import date, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from taskkit import (
    NotFoundError,
    TaskIn,
    TaskManager,
    TaskQuery,
    TaskRepository,
    TaskStatistics,
    TaskStatus,
    TaskStatusUpdate,
    TaskUpdate,
)

from ._helpers import add_user

# Fixed reference date well after the real one so created deadlines stay valid
TODAY = date(2031, 3, 10)


def make_manager(session: AsyncSession) -> TaskManager:
    return TaskManager(TaskRepository(session), today=lambda: TODAY)


def task_in(title: str, *, days: int = 5, status: TaskStatus = TaskStatus.PENDING) -> TaskIn:
    return TaskIn(
        tasklist=title,
        description=f"{title} details",
        deadline=TODAY + timedelta(days=days),
        status=status,
    )


async def test_create_task_returns_owner_and_label(session: AsyncSession) -> None:
    """A created task carries its owner, wire names and remaining-days label."""
    alice = await add_user(session, "Alice", "alice@example.com")
    manager = make_manager(session)

    created = await manager.create_task(alice.id, task_in("Write report", days=3))

    assert created.tasklist == "Write report"
    assert created.user_id == alice.id
    assert created.status == TaskStatus.PENDING
    assert created.remaining_days == "3 days remaining"
    assert created.user is not None
    assert created.user.email == "alice@example.com"
    assert "password_hash" not in created.user.model_dump()


async def test_get_task_of_other_owner_raises(session: AsyncSession) -> None:
    """Tasks are invisible to other users."""
    alice = await add_user(session, "Alice", "alice@example.com")
    bob = await add_user(session, "Bob", "bob@example.com")
    manager = make_manager(session)
    created = await manager.create_task(alice.id, task_in("Private"))

    with pytest.raises(NotFoundError):
        await manager.get_task(bob.id, created.id)

    fetched = await manager.get_task(alice.id, created.id)
    assert fetched.id == created.id
    assert fetched.user is not None


async def test_update_task_applies_only_supplied_fields(session: AsyncSession) -> None:
    """Partial updates keep the untouched fields."""
    alice = await add_user(session, "Alice", "alice@example.com")
    manager = make_manager(session)
    created = await manager.create_task(alice.id, task_in("Write report"))

    updated = await manager.update_task(alice.id, created.id, TaskUpdate(description="Now with charts"))

    assert updated.description == "Now with charts"
    assert updated.tasklist == "Write report"
    assert updated.deadline == created.deadline
    assert updated.status == TaskStatus.PENDING


async def test_update_status_leaves_other_fields_alone(session: AsyncSession) -> None:
    """The status-only update changes nothing else and omits the owner."""
    alice = await add_user(session, "Alice", "alice@example.com")
    manager = make_manager(session)
    created = await manager.create_task(alice.id, task_in("Write report"))

    updated = await manager.update_status(alice.id, created.id, TaskStatusUpdate(status=TaskStatus.IN_PROGRESS))

    assert updated.status == TaskStatus.IN_PROGRESS
    assert updated.tasklist == created.tasklist
    assert updated.description == created.description
    assert updated.deadline == created.deadline
    assert updated.user is None


async def test_delete_task_then_get_raises(session: AsyncSession) -> None:
    """Deleted tasks are gone for good."""
    alice = await add_user(session, "Alice", "alice@example.com")
    manager = make_manager(session)
    created = await manager.create_task(alice.id, task_in("Temporary"))

    await manager.delete_task(alice.id, created.id)

    with pytest.raises(NotFoundError):
        await manager.get_task(alice.id, created.id)
    with pytest.raises(NotFoundError):
        await manager.delete_task(alice.id, created.id)


async def test_list_tasks_builds_page(session: AsyncSession) -> None:
    """Listing returns pagination metadata alongside the items."""
    alice = await add_user(session, "Alice", "alice@example.com")
    manager = make_manager(session)
    for n in range(1, 8):
        await manager.create_task(alice.id, task_in(f"Task {n}"))

    page = await manager.list_tasks(alice.id, TaskQuery(sort_by="tasklist", sort_order="asc", page=2, per_page=3))

    assert page.current_page == 2
    assert page.per_page == 3
    assert page.total == 7
    assert page.last_page == 3
    assert [task.tasklist for task in page.data] == ["Task 4", "Task 5", "Task 6"]
    assert all(task.user is None for task in page.data)


async def test_list_tasks_empty_has_one_page(session: AsyncSession) -> None:
    """An owner without tasks still gets a single empty page."""
    alice = await add_user(session, "Alice", "alice@example.com")

    page = await make_manager(session).list_tasks(alice.id, TaskQuery())

    assert page.total == 0
    assert page.last_page == 1
    assert page.data == []


async def test_statistics_counts_by_status_and_overdue(session: AsyncSession) -> None:
    """Overdue excludes completed tasks; other owners are not counted."""
    alice = await add_user(session, "Alice", "alice@example.com")
    bob = await add_user(session, "Bob", "bob@example.com")
    manager = make_manager(session)

    await manager.create_task(alice.id, task_in("Pending"))
    await manager.create_task(alice.id, task_in("Started", status=TaskStatus.IN_PROGRESS))
    for n in range(2):
        await manager.create_task(alice.id, task_in(f"Done {n}", status=TaskStatus.COMPLETED))
    await manager.create_task(bob.id, task_in("Bob's task"))

    # Past deadlines cannot pass payload validation, so insert directly
    repo = TaskRepository(session)
    past = TODAY - timedelta(days=2)
    await repo.create(alice.id, {"title": "Late", "description": "Missed", "deadline": past})
    await repo.create(
        alice.id,
        {"title": "Late done", "description": "Finished", "deadline": past, "status": TaskStatus.COMPLETED},
    )
    await repo.commit()

    stats = await manager.statistics(alice.id)

    assert stats == TaskStatistics(total_tasks=6, pending=2, in_progress=1, completed=3, overdue=1)


async def test_statistics_for_unknown_owner_are_zero(session: AsyncSession) -> None:
    """Counts for an owner without tasks are all zero."""
    stats = await make_manager(session).statistics(ULID())
    assert stats == TaskStatistics(total_tasks=0, pending=0, in_progress=0, completed=0, overdue=0)


async def test_overdue_label_for_past_deadline(session: AsyncSession) -> None:
    """Tasks past their deadline report how overdue they are."""
    alice = await add_user(session, "Alice", "alice@example.com")
    repo = TaskRepository(session)
    task = await repo.create(alice.id, {"title": "Late", "description": "Missed", "deadline": TODAY - timedelta(days=1)})
    await repo.commit()

    fetched = await make_manager(session).get_task(alice.id, task.id)
    assert fetched.remaining_days == "overdue by 1 day"


async def test_statistics_count_task_due_today_as_overdue(session: AsyncSession) -> None:
    """A pending task whose deadline is today already counts as overdue."""
    alice = await add_user(session, "Alice", "alice@example.com")
    manager = make_manager(session)
    await manager.create_task(alice.id, task_in("Due today", days=0))
    await manager.create_task(alice.id, task_in("Finished today", days=0, status=TaskStatus.COMPLETED))
    await manager.create_task(alice.id, task_in("Due tomorrow", days=1))

    stats = await manager.statistics(alice.id)

    assert stats.overdue == 1
    assert stats.total_tasks == 3
