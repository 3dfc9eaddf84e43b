"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, headers and logging for every request.
- Implements the `PageFetcher` contract, so the core never imports httpx and
  tests can swap in an in-memory fetcher (or mock httpx with respx).
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Sequence

import httpx

from tibiakit.core.config import AppSettings
from tibiakit.core.errors import TransportError
from tibiakit.core.interfaces.fetcher import HttpMethod, RawResponse

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with safe defaults.

    Why a builder:
    - Centralizes timeouts/headers so every page is requested the same way.
    - Keeps room for future policies (proxies) in one place.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
    )


def _group_pairs(pairs: Sequence[tuple[str, str]]) -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = {}
    for key, value in pairs:
        grouped.setdefault(key, []).append(value)
    return grouped


class HttpxPageFetcher:
    """`PageFetcher` backed by `httpx.AsyncClient`.

    Use as an async context manager, or call `aclose()` when done. A client
    passed in by the caller is not closed by this fetcher.
    """

    def __init__(self, settings: AppSettings | None = None, *, client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        self._client = client or build_async_client(self._settings)

    async def __aenter__(self) -> "HttpxPageFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch(
        self,
        url: str,
        *,
        method: HttpMethod = "GET",
        form: Sequence[tuple[str, str]] | None = None,
        headers: Sequence[tuple[str, str]] | None = None,
    ) -> RawResponse:
        request_headers = dict(headers or ())
        start = time.perf_counter()
        try:
            if method == "GET":
                response = await self._client.get(url, headers=request_headers)
            elif method == "POST":
                response = await self._client.post(url, data=_group_pairs(form or ()), headers=request_headers)
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")
            fetching_time = time.perf_counter() - start
            logger.info(
                "%s | %s | %s %s | %dms",
                url,
                method,
                response.status_code,
                response.reason_phrase,
                int(fetching_time * 1000),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                url,
                f"HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s | %s | %s", url, method, exc.__class__.__name__)
            raise TransportError(url, f"{exc.__class__.__name__}: {exc}") from exc

        return RawResponse(
            url=url,
            status_code=response.status_code,
            body=response.text,
            headers={key.lower(): value for key, value in response.headers.items()},
            timestamp=datetime.now(timezone.utc),
            fetching_time=fetching_time,
        )
