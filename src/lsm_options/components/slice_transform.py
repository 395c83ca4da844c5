"""Fixed-length prefix extractor."""

from __future__ import annotations


class FixedPrefixTransform:
    """Uses the first ``prefix_length`` bytes of a key as its prefix."""

    def __init__(self, prefix_length: int):
        self.prefix_length = prefix_length

    def name(self) -> str:
        return f"rocksdb.FixedPrefix.{self.prefix_length}"

    def transform(self, key: bytes) -> bytes:
        return key[: self.prefix_length]

    def in_domain(self, key: bytes) -> bool:
        return len(key) >= self.prefix_length

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedPrefixTransform):
            return NotImplemented
        return self.prefix_length == other.prefix_length

    def __hash__(self) -> int:
        return hash(self.prefix_length)

    def __repr__(self) -> str:
        return f"FixedPrefixTransform({self.prefix_length})"
