"""Exception hierarchy.

Why a single module:
- Every layer (adapters, builders, services, CLI) raises and catches the same
  types, so the CLI can map them to exit codes in one place.

`NotFound` is deliberately absent: an absent entity is a valid extraction
outcome (`core.domain.results.NotFound`), not an error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tibiakit.core.services.pagination import Timing


class TibiaKitError(Exception):
    """Base class for every error raised by tibiakit."""


class TransportError(TibiaKitError):
    """The injected fetch capability failed (network error or HTTP status >= 400).

    When the failure interrupts a pagination walk the same error is re-raised
    with `partial` (the collection merged so far), `timing` and `page` set; they
    stay `None` otherwise.
    """

    def __init__(self, url: str, message: str, *, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        self.partial: Any = None
        self.timing: Timing | None = None
        self.page: int | None = None
        super().__init__(f"{url}: {message}")


class MalformedInputError(TibiaKitError):
    """The page does not match any recognized shape.

    Usually means the site changed its layout. Always surfaced.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class RecordValidationError(TibiaKitError):
    """A builder was finalized without every required field, or with invalid values."""

    def __init__(
        self,
        record_type: str,
        *,
        missing_fields: tuple[str, ...] = (),
        errors: tuple[str, ...] = (),
    ) -> None:
        self.record_type = record_type
        self.missing_fields = missing_fields
        self.errors = errors
        parts: list[str] = []
        if missing_fields:
            parts.append(f"missing required fields: {', '.join(missing_fields)}")
        if errors:
            parts.append(f"invalid values: {'; '.join(errors)}")
        super().__init__(f"cannot build {record_type}: {' | '.join(parts) or 'unknown error'}")


class PaginationError(TibiaKitError):
    """A pagination walk was aborted because a page could not be extracted.

    `partial` holds the collection with every entry merged before the failure
    (still not fully fetched) and `timing` the time spent so far. The original
    error is chained as `__cause__`.
    """

    def __init__(self, message: str, *, partial: Any, timing: Timing, page: int) -> None:
        self.partial = partial
        self.timing = timing
        self.page = page
        super().__init__(message)
