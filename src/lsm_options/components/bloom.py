"""Bloom filter policy.

Builds bit-array bloom filters sized by a bits-per-key budget.
"""

from __future__ import annotations

import hashlib
import math
import struct
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class BloomFilterPolicy:
    """Filter policy producing one bloom filter per table.

    Args:
        bits_per_key: Bits of filter per key; ~10 gives a 1% false positive rate
        use_block_based_builder: Build one filter per block instead of per table

    Invariants:
        - False positives are possible
        - False negatives are not possible
        - The probe count is stored in the last byte of each filter
    """

    def __init__(self, bits_per_key: int, use_block_based_builder: bool = True):
        self.bits_per_key = bits_per_key
        self.use_block_based_builder = use_block_based_builder

        # k = bits_per_key * ln(2), rounded down, kept within [1, 30]
        self.num_probes = int(bits_per_key * math.log(2))
        self.num_probes = min(30, max(1, self.num_probes))

    def name(self) -> str:
        return "rocksdb.BuiltinBloomFilter"

    def _hash(self, key: bytes, seed: int, num_bits: int) -> int:
        """Generate hash for key with seed."""
        h = hashlib.sha256()
        h.update(struct.pack("<I", seed))
        h.update(key)
        digest = h.digest()
        return int.from_bytes(digest[:4], "little") % num_bits

    def create_filter(self, keys: Iterable[bytes]) -> bytes:
        """Build a filter over keys: [bit array][num_probes(1B)]."""
        keys = list(keys)
        # small filters have a high false positive rate, so enforce a minimum
        num_bits = max(64, len(keys) * max(self.bits_per_key, 0))
        num_bytes = (num_bits + 7) // 8
        num_bits = num_bytes * 8

        bits = bytearray(num_bytes)
        for key in keys:
            for i in range(self.num_probes):
                bit_pos = self._hash(key, i, num_bits)
                bits[bit_pos // 8] |= 1 << (bit_pos % 8)
        return bytes(bits) + struct.pack("<B", self.num_probes)

    def key_may_match(self, key: bytes, filter_data: bytes) -> bool:
        if len(filter_data) < 2:
            return False
        num_probes = filter_data[-1]
        bits = filter_data[:-1]
        num_bits = len(bits) * 8
        for i in range(num_probes):
            bit_pos = self._hash(key, i, num_bits)
            if not (bits[bit_pos // 8] & (1 << (bit_pos % 8))):
                return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BloomFilterPolicy):
            return NotImplemented
        return (self.bits_per_key, self.use_block_based_builder) == (
            other.bits_per_key,
            other.use_block_based_builder,
        )

    def __hash__(self) -> int:
        return hash((self.bits_per_key, self.use_block_based_builder))

    def __repr__(self) -> str:
        return (
            f"BloomFilterPolicy(bits_per_key={self.bits_per_key}, "
            f"use_block_based_builder={self.use_block_based_builder})"
        )
