# ngsi2/contracts/results.py
"""
Result shapes exchanged between the request contract, the context store and
the HTTP layer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Paginated(Generic[T]):
    """A page of results returned by the context store.

    Attributes:
        items: The page actually returned.
        total: Number of matching items ignoring pagination.
    """

    items: list[T]
    total: int


@dataclass(frozen=True)
class PageResponse(Generic[T]):
    """A page ready for the wire: items plus response headers."""

    items: list[T]
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Created:
    """Outcome of a create operation."""

    resource_id: str | None
    location: str | None = None

    @property
    def headers(self) -> dict[str, str]:
        return {"Location": self.location} if self.location else {}
