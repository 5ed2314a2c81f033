"""
Standardized pagination parameters for consistent API pagination.

Admin listings use a 1-based page number and a page size.
"""

import math
from typing import Annotated

from fastapi import Query

PageNumber = Annotated[int, Query(ge=1, description="1-based page number")]
PageSize = Annotated[
    int, Query(ge=1, le=100, description="Maximum number of records per page")
]

# Optional cap for public listings (no paging)
ListLimit = Annotated[
    int | None, Query(ge=1, le=100, description="Maximum number of records to return")
]


def total_pages(total: int, limit: int) -> int:
    """
    Number of pages needed for `total` rows at `limit` per page.

    Examples:
        >>> total_pages(0, 10)
        0
        >>> total_pages(21, 10)
        3
    """
    if limit <= 0:
        return 0
    return math.ceil(total / limit)
