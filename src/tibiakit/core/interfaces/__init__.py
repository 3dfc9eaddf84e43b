"""Contracts (Protocol) implemented by adapters.

Lets the core depend on abstractions: the fetch capability and the extractors
are injected, never imported concretely by the domain.
"""
