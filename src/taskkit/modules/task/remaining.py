"""Read-time "days remaining" label derived from a task deadline."""

from __future__ import annotations

from datetime import date


def _days(n: int) -> str:
    return f"{n} day" if n == 1 else f"{n} days"


def remaining_days(deadline: date, today: date) -> str:
    """Describe how far the deadline is from today at day granularity.

    Future deadlines read ``"N days remaining"``, a deadline of today reads
    ``"today"`` and past deadlines read ``"overdue by N days"``.
    """
    delta = (deadline - today).days
    if delta > 0:
        return f"{_days(delta)} remaining"
    if delta == 0:
        return "today"
    return f"overdue by {_days(-delta)}"
