# Command line front end: validate option strings and list recognised keys.
from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Any, Callable, NamedTuple

from ..core.appliers import (
    COLUMN_FAMILY_OPTIONS,
    DB_OPTIONS,
    MUTABLE_CF_OPTIONS,
    TABLE_OPTIONS,
    column_family_options_from_string,
    db_options_from_string,
    mutable_cf_options_from_string,
    table_options_from_string,
)
from ..core.catalog import OptionTable
from ..core.config import BlockBasedTableOptions, ColumnFamilyOptions, DBOptions, MutableCFOptions
from ..core.errors import OptionsError
from ..core.status import Result
from ..core.types import (
    CHECKSUM_TYPE_NAMES,
    COMPACTION_STYLE_NAMES,
    COMPRESSION_TYPE_NAMES,
    INDEX_TYPE_NAMES,
    ChecksumType,
    CompactionStyle,
    CompressionType,
    IndexType,
    symbol_for,
)
from .loader import load_toml

logger = logging.getLogger(__name__)


class Kind(NamedTuple):
    record: type
    from_string: Callable[[Any, str], Result[Any]]
    table: OptionTable


KINDS: dict[str, Kind] = {
    "db": Kind(DBOptions, db_options_from_string, DB_OPTIONS),
    "cf": Kind(ColumnFamilyOptions, column_family_options_from_string, COLUMN_FAMILY_OPTIONS),
    "mutable": Kind(MutableCFOptions, mutable_cf_options_from_string, MUTABLE_CF_OPTIONS),
    "table": Kind(BlockBasedTableOptions, table_options_from_string, TABLE_OPTIONS),
}

_ENUM_NAMES: dict[type, dict[str, Any]] = {
    CompressionType: COMPRESSION_TYPE_NAMES,
    ChecksumType: CHECKSUM_TYPE_NAMES,
    IndexType: INDEX_TYPE_NAMES,
    CompactionStyle: COMPACTION_STYLE_NAMES,
}


def format_value(value: Any) -> str:
    """Readable form of a field value for reports."""
    names = _ENUM_NAMES.get(type(value))
    if names is not None:
        return symbol_for(names, value)
    if isinstance(value, list):
        return "[" + ", ".join(format_value(v) for v in value) + "]"
    return repr(value)


def changed_fields(record: Any, defaults: Any) -> list[tuple[str, Any]]:
    """Return (name, value) for every field that differs from defaults."""
    changes = []
    for f in dataclasses.fields(record):
        value = getattr(record, f.name)
        if value != getattr(defaults, f.name):
            changes.append((f.name, value))
    return changes


def check(kind_name: str, opts_str: str) -> bool:
    kind = KINDS[kind_name]
    defaults = kind.record()
    result = kind.from_string(defaults, opts_str)
    if not result.ok:
        print(f"[{kind_name}] {result.status}")
        return False

    print(f"[{kind_name}] OK")
    for name, value in changed_fields(result.value, defaults):
        print(f"  {name} = {format_value(value)}")
    return True


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lsm-options", description="Validate LSM storage engine option strings"
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    c = sub.add_parser("check", help="Parse option strings and report the result")
    c.add_argument("options", nargs="?", help="Options string, e.g. 'a=1;b={c=2}'")
    c.add_argument(
        "--kind", choices=sorted(KINDS), default="cf", help="Option record family (default: cf)"
    )
    c.add_argument("--file", type=Path, help="TOML file with db/cf/mutable/table strings")

    ls = sub.add_parser("list", help="List recognised option keys")
    ls.add_argument("--kind", choices=sorted(KINDS), default="cf")
    ls.add_argument("--prefix", default="", help="Only keys starting with this prefix")
    return p


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command == "list":
        for key in KINDS[args.kind].table.keys_with_prefix(args.prefix):
            print(key)
        return 0

    if args.file is not None:
        try:
            entries = load_toml(args.file)
        except (OSError, ValueError, OptionsError) as e:
            print(f"Error loading TOML: {e}")
            return 2
    elif args.options is not None:
        entries = {args.kind: args.options}
    else:
        parser.error("check needs an options string or --file")

    ok = True
    for kind_name, opts_str in entries.items():
        logger.debug(f"Checking {kind_name} options: {opts_str!r}")
        ok = check(kind_name, opts_str) and ok
    return 0 if ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
