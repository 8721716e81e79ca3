"""Page/limit slicing for list endpoints."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

from lodging.domain.models import Page, Pagination

T = TypeVar("T")

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def paginate(items: Sequence[T], page: int, limit: int) -> Page[T]:
    """Return the ``page``-th slice of ``items`` (1-based) with its envelope."""
    total = len(items)
    offset = (page - 1) * limit
    total_pages = math.ceil(total / limit)
    return Page(
        data=list(items[offset : offset + limit]),
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        ),
    )
