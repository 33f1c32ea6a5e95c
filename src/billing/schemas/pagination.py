"""Pagination schemas for page/limit pagination."""

import math
from typing import Generic, Self, TypeVar

from pydantic import Field

from src.billing.schemas.base import CamelModel

T = TypeVar("T")


class PaginatedResponse(CamelModel, Generic[T]):
    """Generic paginated response.

    ``page`` is 1-based. ``total_pages`` is 0 when there are no items.
    """

    items: list[T]
    page: int
    page_size: int
    total_items: int
    total_pages: int = Field(description="Number of pages for the current page size.")

    @classmethod
    def build(cls, items: list[T], page: int, page_size: int, total_items: int) -> Self:
        return cls(
            items=items,
            page=page,
            page_size=page_size,
            total_items=total_items,
            total_pages=math.ceil(total_items / page_size) if page_size else 0,
        )
