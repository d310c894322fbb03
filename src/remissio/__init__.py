"""Remissio - local-first health self-tracking."""

__version__ = "0.1.0"
