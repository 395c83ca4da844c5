"""Protocol definition for SliceTransform (prefix extractor)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SliceTransform(Protocol):
    """Maps a key to the prefix used by prefix filters and seeks."""

    def name(self) -> str:
        ...

    def transform(self, key: bytes) -> bytes:
        """Return the prefix of key. Only valid when in_domain(key)."""
        ...

    def in_domain(self, key: bytes) -> bool:
        ...
