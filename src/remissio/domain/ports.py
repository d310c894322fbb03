"""
domain.ports - Abstract interfaces (Protocols) for system boundaries.

LocalDatabase and the services depend on these, not on a backend. Any
class with matching methods qualifies; no inheritance needed.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Flat string-to-string store, the local stand-in for browser storage."""

    def get_item(self, key: str) -> Optional[str]: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...
    def keys(self) -> list[str]: ...
    def clear(self) -> None: ...


@runtime_checkable
class Clock(Protocol):
    """Source of the current time; must return a timezone-aware datetime."""

    def __call__(self) -> datetime: ...
