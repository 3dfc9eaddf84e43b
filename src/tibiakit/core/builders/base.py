"""Staged builder base.

Why builders:
- Parsers scan a page top to bottom, row by row; the record's fields show up
  in page order, not constructor order.
- The record itself stays frozen and is only ever created complete: `finalize`
  is the single path to a record and never exposes a partial one.
"""

from __future__ import annotations

from typing import Any, ClassVar, Generic, Self, TypeVar

from pydantic import BaseModel, ValidationError

from tibiakit.core.domain.results import Built, BuildFailure, BuildOutcome, validation_messages
from tibiakit.core.errors import RecordValidationError

T = TypeVar("T", bound=BaseModel)
M = TypeVar("M", bound=BaseModel)


class StagedBuilder(Generic[T]):
    """Mutable accumulator for one record of type `record_type`.

    Subclasses declare one setter per field (returning `self`) plus any
    incremental operation needed by their parser. Setters may be called in any
    order and any number of times; the last value wins.
    """

    record_type: ClassVar[type[BaseModel]]

    def __init__(self) -> None:
        self._slots: dict[str, Any] = {}

    def _set(self, field: str, value: Any) -> Self:
        self._slots[field] = value
        return self

    def _append(self, field: str, value: Any) -> Self:
        self._slots.setdefault(field, []).append(value)
        return self

    def _entry(self, model_type: type[M], **values: Any) -> M:
        """Build one row of a record; an invalid row fails like `build` does."""

        try:
            return model_type(**values)
        except ValidationError as exc:
            raise RecordValidationError(
                self.record_type.__name__,
                errors=validation_messages(exc, model_type.__name__),
            ) from exc

    def get(self, field: str, default: Any = None) -> Any:
        """Current value of a slot, mainly for parsers that read back what they set."""

        return self._slots.get(field, default)

    @property
    def missing_fields(self) -> tuple[str, ...]:
        """Required fields of the record that were never set, in declaration order."""

        return tuple(
            name
            for name, info in self.record_type.model_fields.items()
            if info.is_required() and self._slots.get(name) is None
        )

    def _values(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for name, value in self._slots.items():
            values[name] = tuple(value) if isinstance(value, list) else value
        return values

    def finalize(self) -> BuildOutcome[T]:
        """Produce the record, or report why it cannot be produced."""

        record_name = self.record_type.__name__
        missing = self.missing_fields
        if missing:
            return BuildFailure(record_type=record_name, missing_fields=missing)
        try:
            record = self.record_type(**self._values())
        except ValidationError as exc:
            return BuildFailure(record_type=record_name, errors=validation_messages(exc, record_name))
        return Built(record)  # type: ignore[arg-type]

    def build(self) -> T:
        """Like `finalize`, but raises `RecordValidationError` on failure."""

        outcome = self.finalize()
        if isinstance(outcome, BuildFailure):
            raise RecordValidationError(
                outcome.record_type,
                missing_fields=outcome.missing_fields,
                errors=outcome.errors,
            )
        return outcome.record
