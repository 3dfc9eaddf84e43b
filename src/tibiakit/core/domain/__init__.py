"""Domain models and enums.

Why:
- Pure, frozen data structures (Pydantic v2).
- The domain knows nothing about HTTP, HTML or the CLI.
"""
