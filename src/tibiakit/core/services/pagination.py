"""Incremental pagination walker.

Completes a `PaginatedCollection` by fetching its remaining pages strictly in
increasing page order and appending each page's entries after the ones already
known. Total pages are only authoritative from the first page, so pages are
never fetched out of order or in parallel within one collection.

Timing is a pure reduction: each walk returns its own `Timing`, and callers sum
them (`Timing.__add__`).
"""

from __future__ import annotations

import dataclasses
import logging
import time
from typing import Awaitable, Callable, Generic, Sequence, TypeVar

from pydantic import ValidationError

from tibiakit.core.domain.pagination import PaginatedCollection
from tibiakit.core.domain.results import ExtractionResult, Found, Malformed
from tibiakit.core.errors import MalformedInputError, PaginationError, TibiaKitError, TransportError
from tibiakit.core.interfaces.fetcher import RawResponse

logger = logging.getLogger(__name__)

E = TypeVar("E")
C = TypeVar("C", bound=PaginatedCollection)


@dataclasses.dataclass(frozen=True)
class Timing:
    """Seconds spent fetching and parsing."""

    fetching: float = 0.0
    parsing: float = 0.0

    def __add__(self, other: "Timing") -> "Timing":
        return Timing(self.fetching + other.fetching, self.parsing + other.parsing)


@dataclasses.dataclass(frozen=True)
class PaginationResult(Generic[C]):
    collection: C
    timing: Timing
    pages_fetched: int = 0


PageFetch = Callable[[int], Awaitable[RawResponse]]
PageExtractor = Callable[[str], ExtractionResult[Sequence[E]]]


def _merge(collection: C, *, page: int, entries: list, fully_fetched: bool) -> C:
    # Rebuilt through the model (not model_copy) so counter invariants are re-checked.
    try:
        return type(collection)(
            current_page=page,
            total_pages=collection.total_pages,
            results_count=collection.results_count,
            entries=tuple(entries),
            is_fully_fetched=fully_fetched,
        )
    except ValidationError as exc:
        raise MalformedInputError(f"page {page} is inconsistent with the collection: {exc}") from exc


async def fetch_remaining_pages(
    collection: C,
    *,
    fetch_page: PageFetch,
    extract_page: PageExtractor,
    label: str = "collection",
) -> PaginationResult[C]:
    """Fetch and merge every page after `collection.current_page`.

    Returns the collection unchanged (and zero timing) when it is already
    fully fetched. A page that cannot be extracted raises `PaginationError`
    carrying the partially merged collection, with the original error as its
    `__cause__`. A `TransportError` from `fetch_page` propagates as is, with
    the same `partial`, `timing` and `page` attached.
    """

    if collection.is_fully_fetched or collection.current_page >= collection.total_pages:
        return PaginationResult(collection=collection, timing=Timing())

    entries = list(collection.entries)
    current = collection
    timing = Timing()
    pages_fetched = 0

    for page in collection.remaining_pages:
        try:
            response = await fetch_page(page)
        except TransportError as exc:
            _log_abort(label, page, collection.total_pages, exc)
            exc.partial, exc.timing, exc.page = current, timing, page
            exc.add_note(f"while fetching {label} page {page} of {collection.total_pages}")
            raise

        try:
            start = time.perf_counter()
            result = extract_page(response.body)
            parsing_time = time.perf_counter() - start
            timing = timing + Timing(response.fetching_time, parsing_time)
            pages_fetched += 1
            logger.info("%s | PARSE | %dms", response.url, int(parsing_time * 1000))
            if isinstance(result, Malformed):
                raise MalformedInputError(f"{label} page {page}: {result.reason}")
            if not isinstance(result, Found):
                raise MalformedInputError(f"{label} page {page}: page has no entries")
            entries.extend(result.value)
            current = _merge(
                collection,
                page=page,
                entries=entries,
                fully_fetched=page >= collection.total_pages,
            )
        except TibiaKitError as exc:
            _log_abort(label, page, collection.total_pages, exc)
            raise PaginationError(
                f"could not extract {label} page {page} of {collection.total_pages}: {exc}",
                partial=current,
                timing=timing,
                page=page,
            ) from exc

    return PaginationResult(collection=current, timing=timing, pages_fetched=pages_fetched)


def _log_abort(label: str, page: int, total_pages: int, exc: Exception) -> None:
    logger.warning("Pagination of %s aborted at page %d of %d: %s", label, page, total_pages, exc)
