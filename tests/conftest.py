"""Shared fixtures: page resources and an in-memory fetcher."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Mapping, Sequence

import pytest

from tibiakit.core.config import DEFAULT_BASE_URL, AppSettings
from tibiakit.core.errors import TransportError
from tibiakit.core.interfaces.fetcher import HttpMethod, RawResponse

RESOURCES = Path(__file__).parent / "resources"

FIXED_TIMESTAMP = datetime(2023, 7, 10, 8, 0, tzinfo=timezone.utc)


def load_resource(name: str) -> str:
    return (RESOURCES / name).read_text(encoding="utf-8")


class FakeFetcher:
    """`PageFetcher` serving canned bodies by URL and recording every call.

    Unknown URLs fail like a 404 would.
    """

    def __init__(
        self,
        pages: Mapping[str, str] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        fetching_times: Mapping[str, float] | None = None,
        default_fetching_time: float = 0.25,
        failures: Mapping[str, Exception] | None = None,
    ) -> None:
        self.pages = dict(pages or {})
        self.headers = dict(headers or {})
        self.fetching_times = dict(fetching_times or {})
        self.default_fetching_time = default_fetching_time
        self.failures = dict(failures or {})
        self.calls: list[tuple[str, str, tuple[tuple[str, str], ...]]] = []

    async def fetch(
        self,
        url: str,
        *,
        method: HttpMethod = "GET",
        form: Sequence[tuple[str, str]] | None = None,
        headers: Sequence[tuple[str, str]] | None = None,
    ) -> RawResponse:
        self.calls.append((url, method, tuple(headers or ())))
        if url in self.failures:
            raise self.failures[url]
        if url not in self.pages:
            raise TransportError(url, "HTTP 404", status_code=404)
        return RawResponse(
            url=url,
            status_code=200,
            body=self.pages[url],
            headers=self.headers,
            timestamp=FIXED_TIMESTAMP,
            fetching_time=self.fetching_times.get(url, self.default_fetching_time),
        )

    @property
    def urls(self) -> list[str]:
        return [url for url, _, _ in self.calls]


@pytest.fixture
def resource() -> Callable[[str], str]:
    return load_resource


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        base_url=DEFAULT_BASE_URL,
        http_timeout_seconds=5.0,
        user_agent="tibiakit-tests",
        log_level="WARNING",
        concurrent_subcollections=False,
    )


@pytest.fixture
def make_fetcher() -> Callable[..., FakeFetcher]:
    return FakeFetcher
