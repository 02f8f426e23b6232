"""Shared pydantic schemas: entity outputs, response envelope, pagination."""

from __future__ import annotations

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from ulid import ULID

DataT = TypeVar("DataT")


class EntityOut(BaseModel):
    """Base output schema for persisted entities."""

    model_config = ConfigDict(from_attributes=True)

    id: ULID
    created_at: datetime
    updated_at: datetime


class Envelope(BaseModel, Generic[DataT]):
    """Uniform response wrapper; absent members are omitted from the JSON body."""

    success: bool = Field(description="Whether the operation succeeded")
    message: str = Field(description="Human-readable outcome")
    data: DataT | None = Field(default=None, description="Operation payload")
    errors: dict[str, list[str]] | None = Field(default=None, description="Per-field validation messages")
    error: str | None = Field(default=None, description="Raw error detail for failed operations")


class Page(BaseModel, Generic[DataT]):
    """One page of results with pagination metadata."""

    current_page: int
    per_page: int
    total: int
    last_page: int
    data: list[DataT]

    @classmethod
    def build(cls, items: list[DataT], *, page: int, per_page: int, total: int) -> Page[DataT]:
        """Assemble a page, deriving the last page number from the total."""
        last_page = max(1, -(-total // per_page))
        return cls(current_page=page, per_page=per_page, total=total, last_page=last_page, data=items)
