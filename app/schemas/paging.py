"""Pagination schemas shared by paged listings."""

import math
from typing import Any

from pydantic import BaseModel, Field


class PageInfo(BaseModel):
    """Page navigation metadata."""

    current: int
    prev: int
    has_prev: bool = Field(..., alias="hasPrev")
    next: int
    has_next: bool = Field(..., alias="hasNext")
    total: int

    model_config = {"populate_by_name": True}


class ItemInfo(BaseModel):
    """Item window metadata."""

    limit: int
    begin: int
    end: int
    total: int


class PagedResponse(BaseModel):
    """Paginated document response schema."""

    data: list[dict[str, Any]]
    pages: PageInfo
    items: ItemInfo

    @classmethod
    def build(
        cls,
        data: list[dict[str, Any]],
        total: int,
        limit: int,
        page: int,
    ) -> "PagedResponse":
        """Build a page from its documents and the total match count."""
        page_count = math.ceil(total / limit) if limit > 0 else 0
        prev_page = page - 1
        next_page = page + 1
        begin = min((page * limit) - limit + 1, total)
        end = min(page * limit, total)

        return cls(
            data=data,
            pages=PageInfo(
                current=page,
                prev=prev_page,
                has_prev=prev_page != 0,
                next=next_page,
                has_next=next_page <= page_count,
                total=page_count,
            ),
            items=ItemInfo(limit=limit, begin=begin, end=end, total=total),
        )
