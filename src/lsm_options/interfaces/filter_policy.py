"""Protocol definition for FilterPolicy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable


@runtime_checkable
class FilterPolicy(Protocol):
    """Builds per-table filters used to skip tables that cannot hold a key."""

    def name(self) -> str:
        ...

    def create_filter(self, keys: Iterable[bytes]) -> bytes:
        """Build a filter covering all keys."""
        ...

    def key_may_match(self, key: bytes, filter_data: bytes) -> bool:
        """Return True if key may be present; False if definitely absent."""
        ...
