"""Scalar and enum converters.

Each converter turns one raw string into a typed value and reports
failure through a ``Result`` instead of raising.

Integer parsing follows C ``strtoull``/``strtol`` rules: leading
whitespace and a sign are accepted, the literal is base 10, and parsing
stops at the first non-digit. A single unit suffix right after the digits
(``k``, ``m``, ``g`` and, for 64-bit values, ``t``) shifts the number left;
anything after that first character is ignored. Shifts wrap at the target
width instead of being clamped.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from typing import Any, TypeVar

from .status import Result
from .types import (
    CHECKSUM_TYPE_NAMES,
    COMPACTION_STYLE_NAMES,
    COMPRESSION_TYPE_NAMES,
    INDEX_TYPE_NAMES,
    ChecksumType,
    CompactionStyle,
    CompressionType,
    IndexType,
)

T = TypeVar("T")
Converter = Callable[[str], Result[Any]]

UINT64_MASK = (1 << 64) - 1
UINT32_MAX = (1 << 32) - 1
INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1

# ASCII only: digits and whitespace follow the C locale
_INT_RE = re.compile(r"\s*([+-]?)([0-9]+)", re.ASCII)
_FLOAT_RE = re.compile(
    r"\s*([+-]?)(?:(inf(?:inity)?|nan)"
    r"|0x([0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?"
    r"|([0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.ASCII | re.IGNORECASE,
)

# more significant digits than this cannot fit in 64 bits
_MAX_DIGITS = 20

_SHIFTS_64 = {"k": 10, "m": 20, "g": 30, "t": 40}
_SHIFTS_32 = {"k": 10, "m": 20, "g": 30}


def _leading_int(value: str) -> tuple[int, int] | None:
    """Return (number, end_index) for the leading integer literal, if any.

    Literals too long to fit in 64 bits come back as +/-2**64 so that every
    caller's range check rejects them.
    """
    match = _INT_RE.match(value)
    if match is None:
        return None
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        num = 1 << 64
    else:
        num = int(digits)
    return (-num if sign == "-" else num), match.end()


def _suffix_shift(value: str, end: int, shifts: dict[str, int]) -> int:
    if end < len(value):
        return shifts.get(value[end].lower(), 0)
    return 0


def _to_int32(num: int) -> int:
    """Wrap to a signed 32-bit value."""
    num &= 0xFFFFFFFF
    return num - (1 << 32) if num > INT32_MAX else num


def parse_bool(name: str, value: str) -> Result[bool]:
    """Parse ``true``/``1`` or ``false``/``0``; ``name`` labels the error."""
    if value in ("true", "1"):
        return Result.success(True)
    if value in ("false", "0"):
        return Result.success(False)
    return Result.invalid(f"invalid boolean for {name}: {value!r}")


def parse_uint64(value: str) -> Result[int]:
    parsed = _leading_int(value)
    if parsed is None:
        return Result.invalid(f"invalid integer: {value!r}")
    num, end = parsed
    if abs(num) > UINT64_MASK:
        return Result.invalid(f"out of range: {value}")
    # negative literals wrap like strtoull
    num &= UINT64_MASK
    num = (num << _suffix_shift(value, end, _SHIFTS_64)) & UINT64_MASK
    return Result.success(num)


def parse_size_t(value: str) -> Result[int]:
    return parse_uint64(value)


def parse_uint32(value: str) -> Result[int]:
    result = parse_uint64(value)
    if result.ok and result.value >> 32 != 0:
        return Result.invalid(f"out of range: {value}")
    return result


def parse_int(value: str) -> Result[int]:
    """Parse a signed 32-bit integer (``k``/``m``/``g`` suffixes only)."""
    parsed = _leading_int(value)
    if parsed is None:
        return Result.invalid(f"invalid integer: {value!r}")
    num, end = parsed
    if not INT32_MIN <= num <= INT32_MAX:
        return Result.invalid(f"out of range: {value}")
    return Result.success(_to_int32(num << _suffix_shift(value, end, _SHIFTS_32)))


def parse_double(value: str) -> Result[float]:
    """Parse the leading decimal, hex, ``inf`` or ``nan`` literal.

    Overflow to infinity and underflow of a non-zero literal to zero are
    range errors, as with ``strtod``.
    """
    match = _FLOAT_RE.match(value)
    if match is None:
        return Result.invalid(f"invalid number: {value!r}")
    literal = match.group(0).strip()
    special, hex_mantissa, dec_mantissa = match.group(2, 3, 4)
    if special is not None:
        return Result.success(float(literal))

    if hex_mantissa is not None:
        try:
            num = float.fromhex(literal)
        except OverflowError:
            return Result.invalid(f"out of range: {value}")
        nonzero = any(c not in "0." for c in hex_mantissa)
    else:
        num = float(literal)
        nonzero = any(c not in "0." for c in dec_mantissa)
    if math.isinf(num) or (num == 0.0 and nonzero):
        return Result.invalid(f"out of range: {value}")
    return Result.success(num)


def _parse_enum(kind: str, names: dict[str, T], value: str) -> Result[T]:
    member = names.get(value)
    if member is None:
        return Result.invalid(f"unknown {kind}: {value}")
    return Result.success(member)


def parse_compression_type(value: str) -> Result[CompressionType]:
    return _parse_enum("compression type", COMPRESSION_TYPE_NAMES, value)


def parse_checksum_type(value: str) -> Result[ChecksumType]:
    return _parse_enum("checksum type", CHECKSUM_TYPE_NAMES, value)


def parse_index_type(value: str) -> Result[IndexType]:
    return _parse_enum("index type", INDEX_TYPE_NAMES, value)


def parse_compaction_style(value: str) -> Result[CompactionStyle]:
    return _parse_enum("compaction style", COMPACTION_STYLE_NAMES, value)


def parse_list(value: str, converter: Converter, sep: str = ":") -> Result[list[Any]]:
    """Convert each ``sep``-delimited token in order; stop at the first failure."""
    items = []
    for token in value.split(sep):
        result = converter(token)
        if not result.ok:
            return Result.failure(result.status)
        items.append(result.value)
    return Result.success(items)
