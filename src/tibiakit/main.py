"""Console entry point.

Why it exists:
- Lets the CLI run with `python -m tibiakit.main` during development.
- Keeps a simple entry point besides the `tibiakit` console script.
"""

from __future__ import annotations

import sys

# Workaround for UnicodeEncodeError on Windows terminals/CI (cp1252 vs utf-8).
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from tibiakit.cli.main import run  # noqa: E402


def main() -> None:
    run()


if __name__ == "__main__":
    main()
