"""Tests for book id parsing."""

import pytest

from book_catalog.ops.identifiers import parse_book_id


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("7", 7),
        (" 42 ", 42),
        (7, 7),
        ("007", 7),
    ],
)
def test_valid(raw, expected):
    assert parse_book_id(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "abc", "7a", "-1", "0", 0, -3, True, 7.0, "1e3"])
def test_invalid(raw):
    assert parse_book_id(raw) is None
