"""Adapters: HTTP, parsers and exporters."""
