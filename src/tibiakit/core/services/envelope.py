"""Response envelope assembly.

Pure functions: they only derive metadata from an already retrieved exchange
and never perform I/O.
"""

from __future__ import annotations

from typing import Mapping, TypeVar

from tibiakit.core.domain.response import TibiaResponse
from tibiakit.core.interfaces.fetcher import RawResponse

T = TypeVar("T")

CACHE_STATUS_HEADER = "cf-cache-status"
CACHE_AGE_HEADER = "age"


def _header(headers: Mapping[str, str], name: str) -> str | None:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def is_cached(headers: Mapping[str, str]) -> bool:
    """Whether the CDN served the response from its cache."""

    value = _header(headers, CACHE_STATUS_HEADER)
    return value is not None and value.strip().upper() == "HIT"


def cache_age(headers: Mapping[str, str]) -> int:
    """Age in seconds of the cached response; 0 when absent or unreadable."""

    value = _header(headers, CACHE_AGE_HEADER)
    if value is None:
        return 0
    try:
        return max(0, int(value.strip()))
    except ValueError:
        return 0


def assemble_response(raw: RawResponse, parsing_time: float, data: T | None) -> TibiaResponse[T]:
    """Wrap an extraction result with the exchange's timestamp, cache data and timing."""

    return TibiaResponse(
        timestamp=raw.timestamp,
        is_cached=is_cached(raw.headers),
        cache_age=cache_age(raw.headers),
        fetching_time=raw.fetching_time,
        parsing_time=parsing_time,
        data=data,
    )
