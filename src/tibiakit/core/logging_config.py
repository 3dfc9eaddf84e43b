"""Logging setup for the CLI.

Library modules only create `logging.getLogger(__name__)` loggers; handlers are
installed once, by the entry point, through `configure_logging`.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "tibiakit"


def configure_logging(level: str | int = "WARNING", *, console: Console | None = None) -> logging.Logger:
    """Install a single Rich handler on the root logger.

    Calling it again replaces the previous tibiakit handler instead of stacking
    a new one.
    """

    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved

    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request at INFO; our adapter already does.
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
    return root
