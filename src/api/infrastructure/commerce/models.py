"""Response models for the commerce API envelope.

Every commerce API response is wrapped as
``{"success": bool, "data": ..., "meta": {"timestamp": ..., "pagination": ...}}``.
Paginated responses are flattened to ``Page(items, pagination)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class PaginationMeta(BaseModel):
    """Pagination block of a paginated response.

    The API is inconsistent about numbers vs. numeric strings, so values are
    coerced to integers.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    page: int = 1
    limit: int = 0
    total_items: int = Field(default=0, alias="totalItems")
    total_pages: int = Field(default=1, alias="totalPages")

    @field_validator("page", "limit", "total_items", "total_pages", mode="before")
    @classmethod
    def coerce_number(cls, value: Any) -> int:
        """Accept ints, floats and numeric strings."""
        if value is None or value == "":
            return 0
        return int(float(value))


class ResponseMeta(BaseModel):
    """Metadata block of the response envelope."""

    model_config = ConfigDict(extra="allow")

    timestamp: str | None = None
    pagination: PaginationMeta | None = None


class ResponseEnvelope(BaseModel):
    """Standard response envelope of the commerce API."""

    model_config = ConfigDict(extra="allow")

    success: bool = True
    data: Any = None
    meta: ResponseMeta = Field(default_factory=ResponseMeta)


@dataclass(frozen=True)
class Page(Generic[T]):
    """Application-level paginated result."""

    items: list[T]
    pagination: PaginationMeta

    @property
    def has_next(self) -> bool:
        """Whether another page follows this one."""
        return self.pagination.page < self.pagination.total_pages
