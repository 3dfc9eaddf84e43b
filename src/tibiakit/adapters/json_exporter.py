"""JSON export of response envelopes.

Why JSON:
- Interoperability with other tools and pipelines.
- Keeps a snapshot of what was read (with its timing and cache data) without
  depending on the terminal rendering.
"""

from __future__ import annotations

import json
from pathlib import Path

from tibiakit.core.domain.response import TibiaResponse


def dump_response_json(response: TibiaResponse) -> str:
    """The camelCase envelope as stable, sorted, indented JSON."""

    payload = response.model_dump(mode="json", by_alias=True)
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def export_response_json(response: TibiaResponse, output_path: Path) -> Path:
    """Export a `TibiaResponse` to a UTF-8 JSON file."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_response_json(response) + "\n", encoding="utf-8")
    return output_path
