"""Core: domain, builders, contracts and services.

Nothing in here performs I/O except `core.services`, which only talks to the
network through the injected `PageFetcher`.
"""
