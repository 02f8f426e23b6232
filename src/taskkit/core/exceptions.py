"""Exception hierarchy mapped onto the response envelope by the API error handlers."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager


class TaskkitError(Exception):
    """Base error carrying an HTTP status and an envelope message."""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None, *, error: str | None = None) -> None:
        self.message = message or self.default_message
        self.error = error
        super().__init__(self.message)


class ValidationError(TaskkitError):
    """Malformed or missing input; never reaches the store."""

    status_code = 422
    default_message = "Validation Error"

    def __init__(self, errors: Mapping[str, Sequence[str]], message: str | None = None) -> None:
        super().__init__(message)
        self.errors: dict[str, list[str]] = {field: list(messages) for field, messages in errors.items()}

    @classmethod
    def for_field(cls, field: str, message: str) -> ValidationError:
        """Build a validation error for a single field."""
        return cls({field: [message]})


class NotFoundError(TaskkitError):
    """Record absent or not owned by the caller; the two cases are indistinguishable."""

    status_code = 404
    default_message = "Not found"


class UnauthenticatedError(TaskkitError):
    """Caller identity missing or unknown."""

    status_code = 401
    default_message = "Unauthenticated."


class InternalError(TaskkitError):
    """Unexpected failure such as an unavailable store."""

    status_code = 500
    default_message = "Internal Server Error"


@contextmanager
def translate_failures(message: str) -> Iterator[None]:
    """Re-raise unexpected errors inside the block as InternalError with an operation message."""
    try:
        yield
    except TaskkitError:
        raise
    except Exception as e:
        raise InternalError(message, error=str(e)) from e
