"""Tests for list pagination."""

from lodging.pagination import paginate


def test_first_page():
    page = paginate(list(range(25)), page=1, limit=10)
    assert page.data == list(range(10))
    assert page.pagination.total_pages == 3
    assert page.pagination.has_next is True
    assert page.pagination.has_prev is False


def test_page_past_end_is_empty():
    page = paginate([1, 2, 3], page=5, limit=10)
    assert page.data == []
    assert page.pagination.total == 3
    assert page.pagination.has_next is False


def test_empty_collection():
    page = paginate([], page=1, limit=10)
    assert page.pagination.total_pages == 0
    assert page.pagination.has_next is False
