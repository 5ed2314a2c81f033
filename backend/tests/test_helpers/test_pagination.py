"""Tests for pagination helpers."""

import pytest

from helpers.pagination import total_pages


@pytest.mark.parametrize(
    "total,limit,expected",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (21, 10, 3), (5, 0, 0)],
)
def test_total_pages(total, limit, expected):
    assert total_pages(total, limit) == expected
