"""Pagination and sort normalization tests."""

import pytest

from utils.pagination import (
    normalize_limit,
    normalize_page,
    page_offset,
    resolve_order,
    resolve_sort,
    total_pages,
)


@pytest.mark.parametrize("raw, expected", [
    (None, 1), ("", 1), ("abc", 1), ("0", 1), ("-3", 1), (0, 1), ("3", 3), (7, 7), (" 2 ", 2),
    ("²", 1), ("٣", 1), ("+", 1),
])
def test_normalize_page(raw, expected):
    assert normalize_page(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    (None, 10), ("x", 10), ("0", 1), ("-1", 1), ("25", 25), ("500", 100), (100, 100),
    ("³", 10), ("１０", 10),
])
def test_normalize_limit(raw, expected):
    assert normalize_limit(raw) == expected


def test_total_pages():
    assert total_pages(23, 10) == 3
    assert total_pages(20, 10) == 2
    assert total_pages(1, 100) == 1
    assert total_pages(0, 10) == 0


def test_offset():
    assert page_offset(3, 10) == 20
    assert page_offset(1, 10) == 0


def test_sort_and_order_fallbacks():
    assert resolve_sort("name") == "name"
    assert resolve_sort("order_count") == "order_count"
    assert resolve_sort("password") == "created_at"
    assert resolve_sort(None) == "created_at"
    assert resolve_order("asc") == "asc"
    assert resolve_order("ASC") == "desc"
    assert resolve_order(None) == "desc"
