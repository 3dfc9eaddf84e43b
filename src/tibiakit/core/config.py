"""Core configuration.

Why here:
- Every `TIBIAKIT_*` variable is read in one place (pydantic-settings), so the
  CLI, the HTTP adapter and the services agree on the same values.
- `doctor configure` persists user choices next to where they are read.
"""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path
from typing import Mapping

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://www.tibia.com"

_ENV_ASSIGNMENT = re.compile(r"^\s*(?:export\s+)?(?P<key>[A-Za-z_][A-Za-z0-9_]*)\s*=\s*(?P<value>.*?)\s*$")
_ENV_HEADER = "# tibiakit user config (.env)"


def get_user_config_dir() -> Path:
    """`tibiakit` folder under the platform's per-user config location."""

    home = Path.home()
    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA") or home) / "tibiakit"
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / "tibiakit"
    return Path(os.environ.get("XDG_CONFIG_HOME") or home / ".config") / "tibiakit"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def read_env_file(env_path: Path) -> dict[str, str]:
    """`KEY=value` assignments of a .env file; comments and blank lines are skipped."""

    if not env_path.exists():
        return {}
    values: dict[str, str] = {}
    for line in env_path.read_text(encoding="utf-8").splitlines():
        match = _ENV_ASSIGNMENT.match(line)
        if match is None or line.lstrip().startswith("#"):
            continue
        values[match.group("key")] = match.group("value").strip("\"'")
    return values


def write_user_env_vars(values: Mapping[str, str | None], *, env_path: Path | None = None) -> Path:
    """Set variables in the user's .env.

    Keys already present are rewritten in place, so comments and the order of
    the file survive; new keys are appended in sorted order. `None` values are
    ignored.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)
    pending = {key: value for key, value in values.items() if value is not None}

    lines = env_path.read_text(encoding="utf-8").splitlines() if env_path.exists() else [_ENV_HEADER]
    for index, line in enumerate(lines):
        match = _ENV_ASSIGNMENT.match(line)
        if match is not None and not line.lstrip().startswith("#") and match.group("key") in pending:
            key = match.group("key")
            lines[index] = f"{key}={pending.pop(key)}"
    lines.extend(f"{key}={pending[key]}" for key in sorted(pending))

    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed and validated at the edge (env vars) without polluting the core.
    - A single configuration contract for the CLI, adapters and services.
    """

    model_config = SettingsConfigDict(
        env_prefix="TIBIAKIT_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first (development), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="Base URL of the site (override for mirrors or local fixtures).",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="tibiakit/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level for the CLI (DEBUG, INFO, WARNING, ERROR).",
    )
    concurrent_subcollections: bool = Field(
        default=False,
        description=(
            "Walk an auction's sub-collections concurrently. Pages within each "
            "sub-collection are still fetched in order."
        ),
    )
