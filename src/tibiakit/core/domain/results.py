"""Result types for extraction and building.

Why sum types instead of exceptions:
- "Entity does not exist" is a normal outcome of reading a page, not a failure.
- Builders report every missing slot at once without raising.
"""

from __future__ import annotations

import dataclasses
import functools
from typing import Callable, Generic, ParamSpec, TypeVar, Union

from pydantic import ValidationError

from tibiakit.core.errors import MalformedInputError

T = TypeVar("T")
P = ParamSpec("P")


@dataclasses.dataclass(frozen=True, slots=True)
class Found(Generic[T]):
    """The page contained the requested entity."""

    value: T


@dataclasses.dataclass(frozen=True, slots=True)
class NotFound:
    """The page is valid but the requested entity does not exist."""


@dataclasses.dataclass(frozen=True, slots=True)
class Malformed:
    """The page does not match any recognized shape."""

    reason: str


NOT_FOUND = NotFound()

ExtractionResult = Union[Found[T], NotFound, Malformed]


@dataclasses.dataclass(frozen=True, slots=True)
class Built(Generic[T]):
    """A builder produced a complete record."""

    record: T


@dataclasses.dataclass(frozen=True, slots=True)
class BuildFailure:
    """A builder could not produce a record. No partial object is exposed."""

    record_type: str
    missing_fields: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()


BuildOutcome = Union[Built[T], BuildFailure]


def validation_messages(exc: ValidationError, model_name: str) -> tuple[str, ...]:
    """One `location: message` string per pydantic error."""

    return tuple(
        f"{'.'.join(str(part) for part in error['loc']) or model_name}: {error['msg']}"
        for error in exc.errors()
    )


def extractor(func: Callable[P, T | None]) -> Callable[P, ExtractionResult[T]]:
    """Turn a parser into an extractor honoring the extraction contract.

    The wrapped parser returns the record, `None` when the entity does not
    exist, or raises `MalformedInputError`. A pydantic `ValidationError` raised
    while the parser builds a value object from page values also means the page
    is not what the parser expects, so it becomes `Malformed` too.
    `RecordValidationError` is not caught: it is a parser defect, not a property
    of the page.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> ExtractionResult[T]:
        try:
            value = func(*args, **kwargs)
        except MalformedInputError as exc:
            return Malformed(reason=exc.reason)
        except ValidationError as exc:
            return Malformed(reason=f"invalid {exc.title}: {'; '.join(validation_messages(exc, exc.title))}")
        if value is None:
            return NOT_FOUND
        return Found(value)

    return wrapper
