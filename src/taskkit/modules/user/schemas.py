"""User schemas exposed alongside the tasks they own."""

from __future__ import annotations

from taskkit.core.schemas import EntityOut


class UserOut(EntityOut):
    """Public view of a task owner; the credential is never serialized."""

    name: str
    email: str
