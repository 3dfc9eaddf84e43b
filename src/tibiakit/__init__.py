"""tibiakit: typed, immutable records scraped from Tibia.com.

The package follows a ports-and-adapters layout:
- `core`: domain models, builders, contracts and the fetch orchestration.
- `adapters`: HTTP access, HTML/JSON extractors and exporters.
- `cli`: the Typer command line.
"""

__version__ = "0.1.0"
