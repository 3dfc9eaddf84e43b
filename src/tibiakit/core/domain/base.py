"""Base model for every domain record.

Why one base:
- Records are immutable once built (`frozen=True`).
- Serialized with the camelCase keys the JSON output uses, while Python code
  keeps snake_case names (`populate_by_name=True`).
"""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


class TibiaModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict:
        """JSON-compatible dict using the public camelCase keys."""

        return self.model_dump(mode="json", by_alias=True)
