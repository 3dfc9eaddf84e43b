"""Development entry point (without an editable install).

Runs the CLI with:
- `python main.py ...`

Why:
- The code lives in `src/` (src layout), so without `pip install -e .` Python
  cannot find the `tibiakit` package.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    project_root = Path(__file__).resolve().parent
    src = project_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from tibiakit.main import main as tibiakit_main  # noqa: PLC0415

    tibiakit_main()


if __name__ == "__main__":
    main()
