# ngsi2/core/pagination.py
"""
Total-count contract shared by every listing operation.

When the ``options`` parameter mentions ``count``, the page is returned
together with an ``X-Total-Count`` header holding the total number of
matches ignoring ``limit``/``offset``.
"""
from __future__ import annotations

from typing import TypeVar

from ngsi2.contracts.results import PageResponse, Paginated

T = TypeVar("T")

COUNT_OPTION = "count"
TOTAL_COUNT_HEADER = "X-Total-Count"


def wants_count(options: str | None) -> bool:
    # substring match on the raw value, not a token match
    return options is not None and COUNT_OPTION in options


def total_count_headers(page: Paginated[T], count: bool) -> dict[str, str]:
    if not count:
        return {}
    return {TOTAL_COUNT_HEADER: str(page.total)}


def to_page_response(page: Paginated[T], count: bool) -> PageResponse[T]:
    return PageResponse(items=list(page.items), headers=total_count_headers(page, count))
