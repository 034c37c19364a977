"""Pagination and sort normalization for listing queries."""

import math
from typing import Any, Optional

from utils.validators import coerce_int

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

SORT_FIELDS = ("name", "email", "created_at", "order_count")
DEFAULT_SORT = "created_at"
DEFAULT_ORDER = "desc"


def normalize_page(value: Any) -> int:
    """Coerce to int and floor at 1; unparseable input falls back to 1."""
    page = coerce_int(value)
    if page is None:
        return DEFAULT_PAGE
    return max(1, page)


def normalize_limit(value: Any) -> int:
    """Coerce to int and clamp to [1, MAX_LIMIT]."""
    limit = coerce_int(value)
    if limit is None:
        return DEFAULT_LIMIT
    return min(MAX_LIMIT, max(1, limit))


def resolve_sort(value: Optional[str]) -> str:
    if value in SORT_FIELDS:
        return value
    return DEFAULT_SORT


def resolve_order(value: Optional[str]) -> str:
    if value in ("asc", "desc"):
        return value
    return DEFAULT_ORDER


def page_offset(page: int, limit: int) -> int:
    """Offset of the first row on a page; never negative."""
    return max(0, (page - 1) * limit)


def total_pages(total: int, limit: int) -> int:
    if total <= 0:
        return 0
    return math.ceil(total / limit)
