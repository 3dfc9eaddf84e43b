"""Paginated collections.

Two flavors:
- `Paginated`: a single page of a listing (highscores, bazaar). Only the page
  that was requested is held.
- `PaginatedCollection`: a collection that can be completed incrementally by
  walking the remaining pages (auction items, mounts, outfits).

State of a `PaginatedCollection`:
- Unfetched: `current_page == 0`, no entries.
- PartiallyFetched: `0 < current_page < total_pages`.
- FullyFetched: `is_fully_fetched`, every page merged in page order.
"""

from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

from pydantic import Field, model_validator

from tibiakit.core.domain.base import TibiaModel

E = TypeVar("E")


class CollectionState(str, Enum):
    UNFETCHED = "unfetched"
    PARTIALLY_FETCHED = "partially_fetched"
    FULLY_FETCHED = "fully_fetched"


class Paginated(TibiaModel):
    """Pagination counters of a single listing page."""

    current_page: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    results_count: int = Field(..., ge=0)


class PaginatedCollection(TibiaModel, Generic[E]):
    """An ordered, possibly partially fetched collection."""

    current_page: int = Field(default=0, ge=0)
    total_pages: int = Field(default=0, ge=0)
    results_count: int = Field(default=0, ge=0)
    entries: tuple[E, ...] = ()
    is_fully_fetched: bool = False

    @model_validator(mode="after")
    def _check_counters(self) -> "PaginatedCollection[E]":
        if self.current_page > self.total_pages:
            raise ValueError(
                f"current_page ({self.current_page}) is greater than total_pages ({self.total_pages})"
            )
        if len(self.entries) > self.results_count:
            raise ValueError(
                f"{len(self.entries)} entries exceed results_count ({self.results_count})"
            )
        return self

    @property
    def state(self) -> CollectionState:
        if self.is_fully_fetched or self.current_page >= self.total_pages:
            return CollectionState.FULLY_FETCHED
        if self.current_page == 0:
            return CollectionState.UNFETCHED
        return CollectionState.PARTIALLY_FETCHED

    @property
    def remaining_pages(self) -> range:
        """Pages that still need to be fetched, in order."""

        if self.is_fully_fetched:
            return range(0)
        return range(self.current_page + 1, self.total_pages + 1)
