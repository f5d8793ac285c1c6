"""Paginated list envelope shared by the ledger endpoints."""

from __future__ import annotations

import math
from typing import Generic, TypeVar

from .base import WireModel

T = TypeVar("T")


class PaginatedResponse(WireModel, Generic[T]):
    """One page of rows plus the total across all pages."""

    items: list[T] = []
    total: int = 0
    page: int = 1
    page_size: int = 10


def page_count(total: int, page_size: int) -> int:
    """Number of pages for ``total`` rows; never less than one."""

    if page_size <= 0:
        return 1
    return max(1, math.ceil(total / page_size))
