"""User feature - task owners resolved from the identity provider."""

from .models import User
from .repository import UserRepository
from .schemas import UserOut

__all__ = [
    "User",
    "UserOut",
    "UserRepository",
]
