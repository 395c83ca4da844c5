"""Protocol definition for Cache."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Cache(Protocol):
    """Capacity-bounded cache shared between tables."""

    def insert(self, key: bytes, value: Any, charge: int) -> None:
        """Insert value, charging it against the capacity."""
        ...

    def lookup(self, key: bytes) -> Any | None:
        """Return the cached value or None."""
        ...

    def erase(self, key: bytes) -> None:
        """Drop key if present."""
        ...

    def get_capacity(self) -> int:
        ...

    def get_usage(self) -> int:
        ...
