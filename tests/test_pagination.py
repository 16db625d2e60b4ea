"""
Tests for paging query parameter parsing.
"""

import pytest
from starlette.datastructures import QueryParams

from store_crud.pagination import Direction, PageRequest, page_request_from_query, parse_per_page


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 10), ("5", 5), ("abc", 10), ("0", 10), ("-3", 10)],
)
def test_parse_per_page(raw, expected):
    """Junk and non-positive sizes fall back to the default."""
    assert parse_per_page(raw, default=10) == expected


def test_first_page():
    """Without a cursor the listing starts from the first key."""
    page = page_request_from_query(QueryParams("_perPage=3"), default_page_size=10)
    assert page == PageRequest(per_page=3)
    assert page.fetch_count == 4


def test_after_key():
    """afterKey pages forward."""
    page = page_request_from_query(QueryParams("afterKey=k1"), default_page_size=10)
    assert page.direction is Direction.AFTER
    assert page.cursor == "k1"
    assert page.per_page == 10


def test_before_key():
    """beforeKey pages backward."""
    page = page_request_from_query(QueryParams("beforeKey=k9&_perPage=2"))
    assert page.direction is Direction.BEFORE
    assert page.cursor == "k9"
    assert page.per_page == 2


def test_after_key_wins():
    """afterKey takes precedence when both cursors are given."""
    page = page_request_from_query(QueryParams("beforeKey=z&afterKey=a"))
    assert page.direction is Direction.AFTER
    assert page.cursor == "a"
