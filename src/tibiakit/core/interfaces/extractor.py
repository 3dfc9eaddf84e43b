"""Extraction contract.

An extractor is a pure, deterministic function of the raw page content. It
returns `Found`, `NotFound` or `Malformed` and never touches the network.
"""

from __future__ import annotations

from typing import Protocol, TypeVar

from tibiakit.core.domain.results import ExtractionResult

T_co = TypeVar("T_co", covariant=True)


class Extractor(Protocol[T_co]):
    def __call__(self, content: str, /) -> ExtractionResult[T_co]: ...
