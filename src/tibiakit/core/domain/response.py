"""Response envelope wrapping exactly one extraction result."""

from __future__ import annotations

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import Field

from tibiakit.core.domain.base import TibiaModel

T = TypeVar("T")


class TibiaResponse(TibiaModel, Generic[T]):
    """Timestamped, timed and cache-annotated result of one external call.

    `data` is `None` when the requested entity does not exist.
    """

    timestamp: datetime = Field(..., description="When the response was received (UTC).")
    is_cached: bool = Field(default=False, description="Served from the site's CDN cache.")
    cache_age: int = Field(default=0, ge=0, description="Age of the cached response, in seconds.")
    fetching_time: float = Field(default=0.0, ge=0, description="Seconds spent on the network.")
    parsing_time: float = Field(default=0.0, ge=0, description="Seconds spent extracting data.")
    data: T | None = None
