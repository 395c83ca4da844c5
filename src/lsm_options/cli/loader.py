"""
Load option strings from a TOML file.

Expected layout (every entry optional):

    db = "create_if_missing=true;max_open_files=100"
    cf = "write_buffer_size=64M;block_based_table_factory={block_size=16k}"
    mutable = "disable_auto_compactions=true"
    table = "filter_policy=bloomfilter:10:false"
"""

from __future__ import annotations

from pathlib import Path

import tomllib  # Python 3.11+

from ..core.errors import InvalidArgumentError

SECTIONS = ("db", "cf", "mutable", "table")


def load_toml(path: Path) -> dict[str, str]:
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    raw = path.read_text(encoding="utf-8")
    data = tomllib.loads(raw)

    entries: dict[str, str] = {}
    for kind, value in data.items():
        if kind not in SECTIONS:
            raise InvalidArgumentError(f"Unknown options kind {kind!r} in {path}")
        if not isinstance(value, str):
            raise InvalidArgumentError(f"Options for {kind!r} must be a string")
        entries[kind] = value
    return entries
