"""Option appliers for each record family.

DB options, column family options, mutable column family options and
block-based table options each have a table of recognised keys. Column
family and mutable options share the memtable, compaction and misc stages,
which are tried before the family's own stage.
"""

from __future__ import annotations

from typing import Any

from ..components.factory import (
    BloomFilterSpec,
    FixedPrefixSpec,
    LRUCacheSpec,
    new_block_based_table_factory,
    new_bloom_filter_policy,
    new_fixed_prefix_transform,
    new_lru_cache,
)
from .catalog import OptionEntry, OptionStage, OptionTable, not_supported, set_field
from .config import (
    BlockBasedTableOptions,
    ColumnFamilyOptions,
    CompactionOptionsFIFO,
    CompressionOptions,
    DBOptions,
    MutableCFOptions,
)
from .converters import (
    Converter,
    parse_bool,
    parse_checksum_type,
    parse_compaction_style,
    parse_compression_type,
    parse_double,
    parse_index_type,
    parse_int,
    parse_list,
    parse_size_t,
    parse_uint32,
    parse_uint64,
)
from .status import Result
from .tokenizer import tokenize, trim
from .types import OptionsMap

FILTER_POLICY_PREFIX = "bloomfilter:"
PREFIX_EXTRACTOR_PREFIX = "fixed:"


def _bool(key: str) -> Converter:
    return lambda value: parse_bool(key, value)


def _fields(parsers: dict[str, Converter]) -> dict[str, OptionEntry]:
    """Entries whose record attribute has the same name as the key."""
    return {key: set_field(key, parse) for key, parse in parsers.items()}


# ------------------------------
# Micro-grammars
# ------------------------------

def parse_compression_opts(value: str) -> Result[CompressionOptions]:
    """Parse ``<window_bits>:<level>:<strategy>``."""
    parts = value.split(":", 2)
    if len(parts) < 3 or not parts[2]:
        return Result.invalid("invalid config value for: compression_opts")
    window_bits, level, strategy = (parse_int(part) for part in parts)
    for result in (window_bits, level, strategy):
        if not result.ok:
            return Result.invalid(f"error parsing compression_opts:{result.status.message}")
    return Result.success(
        CompressionOptions(
            window_bits=window_bits.value,
            level=level.value,
            strategy=strategy.value,
        )
    )


def parse_filter_policy(value: str) -> Result[BloomFilterSpec]:
    """Parse ``bloomfilter:<bits_per_key>:<use_block_based_builder>``."""
    if not value.startswith(FILTER_POLICY_PREFIX):
        return Result.invalid(f"Invalid filter policy name: {value}")
    pos = value.find(":", len(FILTER_POLICY_PREFIX))
    if pos == -1:
        return Result.invalid("Invalid filter policy config, missing bits_per_key")
    bits_per_key = parse_int(trim(value[len(FILTER_POLICY_PREFIX):pos]))
    if not bits_per_key.ok:
        return Result.failure(bits_per_key.status)
    use_block_based = parse_bool("use_block_based_builder", trim(value[pos + 1:]))
    if not use_block_based.ok:
        return Result.failure(use_block_based.status)
    return Result.success(BloomFilterSpec(bits_per_key.value, use_block_based.value))


def parse_prefix_extractor(value: str) -> Result[FixedPrefixSpec]:
    """Parse ``fixed:<prefix_length>``."""
    if not value.startswith(PREFIX_EXTRACTOR_PREFIX):
        return Result.invalid(f"Invalid Prefix Extractor type: {value}")
    return parse_int(trim(value[len(PREFIX_EXTRACTOR_PREFIX):])).map(FixedPrefixSpec)


def parse_cache_spec(value: str) -> Result[LRUCacheSpec]:
    return parse_size_t(value).map(LRUCacheSpec)


def parse_nested_table_options(value: str) -> Result[BlockBasedTableOptions]:
    """Nested blocks always start from default table options."""
    return table_options_from_string(BlockBasedTableOptions(), value)


def _set_compression_opts(record: ColumnFamilyOptions, value: CompressionOptions) -> None:
    record.compression_opts = value


def _set_fifo_size(record: ColumnFamilyOptions, value: int) -> None:
    record.compaction_options_fifo = CompactionOptionsFIFO(max_table_files_size=value)


def _set_prefix_extractor(record: ColumnFamilyOptions, spec: FixedPrefixSpec) -> None:
    record.prefix_extractor = new_fixed_prefix_transform(spec)


def _set_table_factory(record: ColumnFamilyOptions, table_options: BlockBasedTableOptions) -> None:
    record.table_factory = new_block_based_table_factory(table_options)


def _cache_setter(name: str):
    def assign(record: BlockBasedTableOptions, spec: LRUCacheSpec) -> None:
        setattr(record, name, new_lru_cache(spec))

    return assign


def _set_filter_policy(record: BlockBasedTableOptions, spec: BloomFilterSpec) -> None:
    record.filter_policy = new_bloom_filter_policy(spec)


# ------------------------------
# Shared stages
# ------------------------------

MEMTABLE_STAGE = OptionStage(
    "memtable",
    _fields({
        "write_buffer_size": parse_size_t,
        "arena_block_size": parse_size_t,
        "memtable_prefix_bloom_bits": parse_uint32,
        "memtable_prefix_bloom_probes": parse_uint32,
        "memtable_prefix_bloom_huge_page_tlb_size": parse_size_t,
        "max_successive_merges": parse_size_t,
        "filter_deletes": _bool("filter_deletes"),
        "max_write_buffer_number": parse_int,
        "inplace_update_num_locks": parse_size_t,
    }),
)

COMPACTION_STAGE = OptionStage(
    "compaction",
    _fields({
        "disable_auto_compactions": _bool("disable_auto_compactions"),
        "soft_rate_limit": parse_double,
        "hard_rate_limit": parse_double,
        "level0_file_num_compaction_trigger": parse_int,
        "level0_slowdown_writes_trigger": parse_int,
        "level0_stop_writes_trigger": parse_int,
        "max_grandparent_overlap_factor": parse_int,
        "expanded_compaction_factor": parse_int,
        "source_compaction_factor": parse_int,
        "target_file_size_base": parse_int,
        "target_file_size_multiplier": parse_int,
        "max_bytes_for_level_base": parse_uint64,
        "max_bytes_for_level_multiplier": parse_int,
        "max_bytes_for_level_multiplier_additional": lambda v: parse_list(v, parse_int),
        "max_mem_compaction_level": parse_int,
        "verify_checksums_in_compaction": _bool("verify_checksums_in_compaction"),
    }),
)

MISC_STAGE = OptionStage(
    "misc",
    _fields({
        "max_sequential_skip_in_iterations": parse_uint64,
    }),
)

# ------------------------------
# Family stages
# ------------------------------

TABLE_STAGE = OptionStage(
    "block_based_table",
    {
        **_fields({
            "cache_index_and_filter_blocks": _bool("cache_index_and_filter_blocks"),
            "index_type": parse_index_type,
            "hash_index_allow_collision": _bool("hash_index_allow_collision"),
            "checksum": parse_checksum_type,
            "no_block_cache": _bool("no_block_cache"),
            "block_size": parse_size_t,
            "block_size_deviation": parse_int,
            "block_restart_interval": parse_int,
            "whole_key_filtering": _bool("whole_key_filtering"),
        }),
        "block_cache": OptionEntry(parse_cache_spec, _cache_setter("block_cache")),
        "block_cache_compressed": OptionEntry(
            parse_cache_spec, _cache_setter("block_cache_compressed")
        ),
        "filter_policy": OptionEntry(parse_filter_policy, _set_filter_policy),
    },
)

COLUMN_FAMILY_STAGE = OptionStage(
    "column_family",
    {
        "block_based_table_factory": OptionEntry(
            parse_nested_table_options, _set_table_factory, wrap_errors=False
        ),
        **_fields({
            "min_write_buffer_number_to_merge": parse_int,
            "compression": parse_compression_type,
            "compression_per_level": lambda v: parse_list(v, parse_compression_type),
            "num_levels": parse_int,
            "purge_redundant_kvs_while_flush": _bool("purge_redundant_kvs_while_flush"),
            "compaction_style": parse_compaction_style,
            "bloom_locality": parse_uint32,
            "min_partial_merge_operands": parse_uint32,
            "inplace_update_support": _bool("inplace_update_support"),
        }),
        # arity errors are reported bare, field errors wrap themselves
        "compression_opts": OptionEntry(
            parse_compression_opts, _set_compression_opts, wrap_errors=False
        ),
        "compaction_options_universal": not_supported("compaction_options_universal"),
        "compaction_options_fifo": OptionEntry(parse_uint64, _set_fifo_size),
        "prefix_extractor": OptionEntry(parse_prefix_extractor, _set_prefix_extractor),
    },
)


def _raw(value: str) -> Result[str]:
    return Result.success(value)


DB_STAGE = OptionStage(
    "db",
    {
        **_fields({
            "create_if_missing": _bool("create_if_missing"),
            "create_missing_column_families": _bool("create_missing_column_families"),
            "error_if_exists": _bool("error_if_exists"),
            "paranoid_checks": _bool("paranoid_checks"),
            "max_open_files": parse_int,
            "max_total_wal_size": parse_uint64,
            "disable_data_sync": _bool("disable_data_sync"),
            "use_fsync": _bool("use_fsync"),
            "db_log_dir": _raw,
            "wal_dir": _raw,
            "delete_obsolete_files_period_micros": parse_uint64,
            "max_background_compactions": parse_int,
            "max_background_flushes": parse_int,
            "max_log_file_size": parse_size_t,
            "log_file_time_to_roll": parse_size_t,
            "keep_log_file_num": parse_size_t,
            "max_manifest_file_size": parse_uint64,
            "table_cache_numshardbits": parse_int,
            "table_cache_remove_scan_count_limit": parse_int,
            "manifest_preallocation_size": parse_size_t,
            "allow_os_buffer": _bool("allow_os_buffer"),
            "allow_mmap_reads": _bool("allow_mmap_reads"),
            "allow_mmap_writes": _bool("allow_mmap_writes"),
            "is_fd_close_on_exec": _bool("is_fd_close_on_exec"),
            "skip_log_error_on_recovery": _bool("skip_log_error_on_recovery"),
            "stats_dump_period_sec": parse_uint32,
            "advise_random_on_open": _bool("advise_random_on_open"),
            "db_write_buffer_size": parse_uint64,
            "use_adaptive_mutex": _bool("use_adaptive_mutex"),
            "bytes_per_sync": parse_uint64,
        }),
        "db_paths": not_supported("db_paths"),
        "WAL_ttl_seconds": set_field("wal_ttl_seconds", parse_uint64),
        "WAL_size_limit_MB": set_field("wal_size_limit_mb", parse_uint64),
    },
)

# ------------------------------
# Tables
# ------------------------------

TABLE_OPTIONS = OptionTable("table", [TABLE_STAGE])
COLUMN_FAMILY_OPTIONS = OptionTable(
    "column_family", [MEMTABLE_STAGE, COMPACTION_STAGE, MISC_STAGE, COLUMN_FAMILY_STAGE]
)
MUTABLE_CF_OPTIONS = OptionTable(
    "mutable_cf",
    [MEMTABLE_STAGE, COMPACTION_STAGE, MISC_STAGE],
    unknown_message="unsupported dynamic option: {key}",
)
DB_OPTIONS = OptionTable("db", [DB_STAGE])


# ------------------------------
# Map appliers
# ------------------------------

def apply_table_options(
    base: BlockBasedTableOptions, opts_map: OptionsMap
) -> Result[BlockBasedTableOptions]:
    return TABLE_OPTIONS.apply(base, opts_map)


def apply_column_family_options(
    base: ColumnFamilyOptions, opts_map: OptionsMap
) -> Result[ColumnFamilyOptions]:
    return COLUMN_FAMILY_OPTIONS.apply(base, opts_map)


def apply_mutable_cf_options(
    base: MutableCFOptions, opts_map: OptionsMap
) -> Result[MutableCFOptions]:
    return MUTABLE_CF_OPTIONS.apply(base, opts_map)


def apply_db_options(base: DBOptions, opts_map: OptionsMap) -> Result[DBOptions]:
    return DB_OPTIONS.apply(base, opts_map)


# ------------------------------
# String entry points
# ------------------------------

def _from_string(table: OptionTable, base: Any, opts_str: str) -> Result[Any]:
    tokens = tokenize(opts_str)
    if not tokens.ok:
        return Result.failure(tokens.status)
    return table.apply(base, tokens.value)


def table_options_from_string(
    base: BlockBasedTableOptions, opts_str: str
) -> Result[BlockBasedTableOptions]:
    return _from_string(TABLE_OPTIONS, base, opts_str)


def column_family_options_from_string(
    base: ColumnFamilyOptions, opts_str: str
) -> Result[ColumnFamilyOptions]:
    return _from_string(COLUMN_FAMILY_OPTIONS, base, opts_str)


def mutable_cf_options_from_string(
    base: MutableCFOptions, opts_str: str
) -> Result[MutableCFOptions]:
    return _from_string(MUTABLE_CF_OPTIONS, base, opts_str)


def db_options_from_string(base: DBOptions, opts_str: str) -> Result[DBOptions]:
    return _from_string(DB_OPTIONS, base, opts_str)
