from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, TypeVar

from job.domain.job import JobType

T = TypeVar("T")


class OrderField(str, Enum):
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    TITLE = "title"
    COMPANY = "company"


class OrderDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class JobFilters:
    location: Optional[str] = None
    job_type: Optional[JobType] = None
    user_id: Optional[str] = None
    search_term: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Pagination:
    page: int = 1
    limit: int = 20
    order_by: OrderField = OrderField.CREATED_AT
    order_direction: OrderDirection = OrderDirection.DESC

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True, slots=True)
class PaginatedResult(Generic[T]):
    data: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20
    total_pages: int = 0
    has_more: bool = False

    @classmethod
    def build(cls, *, data: list[T], total: int, page: int, limit: int) -> "PaginatedResult[T]":
        total_pages = math.ceil(total / limit) if limit else 0
        return cls(
            data=data,
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages,
            has_more=page < total_pages,
        )
