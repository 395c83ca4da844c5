"""Common type definitions for LSM options.

Closed enumerations used by option records, each with one canonical
symbolic-name registry.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TypeVar

# Raw key -> raw value, as produced by the tokenizer
OptionsMap = dict[str, str]

E = TypeVar("E", bound=IntEnum)


class CompressionType(IntEnum):
    NO_COMPRESSION = 0x0
    SNAPPY = 0x1
    ZLIB = 0x2
    BZIP2 = 0x3
    LZ4 = 0x4
    LZ4HC = 0x5


class ChecksumType(IntEnum):
    NO_CHECKSUM = 0x0
    CRC32C = 0x1
    XXHASH = 0x2


class IndexType(IntEnum):
    BINARY_SEARCH = 0
    HASH_SEARCH = 1


class CompactionStyle(IntEnum):
    LEVEL = 0x0
    UNIVERSAL = 0x1
    FIFO = 0x2


COMPRESSION_TYPE_NAMES: dict[str, CompressionType] = {
    "kNoCompression": CompressionType.NO_COMPRESSION,
    "kSnappyCompression": CompressionType.SNAPPY,
    "kZlibCompression": CompressionType.ZLIB,
    "kBZip2Compression": CompressionType.BZIP2,
    "kLZ4Compression": CompressionType.LZ4,
    "kLZ4HCCompression": CompressionType.LZ4HC,
}

CHECKSUM_TYPE_NAMES: dict[str, ChecksumType] = {
    "kNoChecksum": ChecksumType.NO_CHECKSUM,
    "kCRC32c": ChecksumType.CRC32C,
    "kxxHash": ChecksumType.XXHASH,
}

INDEX_TYPE_NAMES: dict[str, IndexType] = {
    "kBinarySearch": IndexType.BINARY_SEARCH,
    "kHashSearch": IndexType.HASH_SEARCH,
}

COMPACTION_STYLE_NAMES: dict[str, CompactionStyle] = {
    "kCompactionStyleLevel": CompactionStyle.LEVEL,
    "kCompactionStyleUniversal": CompactionStyle.UNIVERSAL,
    "kCompactionStyleFIFO": CompactionStyle.FIFO,
}


def symbol_for(names: dict[str, E], member: E) -> str:
    """Return the symbolic name registered for an enum member."""
    for symbol, value in names.items():
        if value is member:
            return symbol
    raise KeyError(member)
