"""Fetch capability contract.

Why Protocol:
- The core never opens connections itself; it only needs "fetch(url) -> raw
  text". The httpx adapter implements it, tests inject in-memory fakes.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Literal, Mapping, Protocol, Sequence, runtime_checkable

HttpMethod = Literal["GET", "POST"]


@dataclasses.dataclass(frozen=True)
class RawResponse:
    """One completed network exchange.

    `headers` keys are lower-cased. `fetching_time` is in seconds.
    """

    url: str
    status_code: int
    body: str
    headers: Mapping[str, str]
    timestamp: datetime
    fetching_time: float


@runtime_checkable
class PageFetcher(Protocol):
    """Minimal contract for the injected HTTP capability.

    Rules:
    - `fetch` is async: every call is a suspension point.
    - Failures raise `TransportError`; no retry is expected at this layer.
    """

    async def fetch(
        self,
        url: str,
        *,
        method: HttpMethod = "GET",
        form: Sequence[tuple[str, str]] | None = None,
        headers: Sequence[tuple[str, str]] | None = None,
    ) -> RawResponse:
        """Fetch `url` and return the raw exchange."""

        ...
