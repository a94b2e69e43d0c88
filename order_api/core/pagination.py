"""Pagination — offset math and the pagination block returned by list endpoints.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - offset = (page - 1) * limit
    - pages = ceil(total / limit); 0 when total is 0
"""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

T = TypeVar("T")


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


def offset_for(page: int, limit: int) -> int:
    return (page - 1) * limit


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit)


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    return Pagination(
        page=page, limit=limit, total=total, pages=page_count(total, limit),
    )


@dataclass
class Listing(Generic[T]):
    """One page of ORM rows plus its pagination block."""
    items: list[T]
    pagination: Pagination
