"""Unit tests for the option appliers."""

import dataclasses

import pytest

from lsm_options import (
    BlockBasedTableOptions,
    ChecksumType,
    ColumnFamilyOptions,
    CompactionStyle,
    CompressionOptions,
    CompressionType,
    DBOptions,
    IndexType,
    MutableCFOptions,
    StatusCode,
    apply_column_family_options,
    apply_db_options,
    apply_mutable_cf_options,
    apply_table_options,
)
from lsm_options.components import (
    BlockBasedTableFactory,
    BloomFilterPolicy,
    FixedPrefixTransform,
    LRUCache,
)


@pytest.fixture
def cf_base():
    """Column family options with a few non-default values."""
    return ColumnFamilyOptions(write_buffer_size=123, num_levels=5, compression=CompressionType.ZLIB)


@pytest.mark.parametrize(
    "apply,record",
    [
        (apply_column_family_options, ColumnFamilyOptions),
        (apply_db_options, DBOptions),
        (apply_mutable_cf_options, MutableCFOptions),
        (apply_table_options, BlockBasedTableOptions),
    ],
)
def test_empty_map_is_identity(apply, record):
    """Test applying an empty map returns a record equal to the base."""
    base = record()
    result = apply(base, {})

    assert result.ok
    assert result.value == base
    assert result.value is not base


def test_empty_map_keeps_non_default_base(cf_base):
    """Test every field of a customised base survives an empty map."""
    result = apply_column_family_options(cf_base, {})

    for f in dataclasses.fields(cf_base):
        assert getattr(result.value, f.name) == getattr(cf_base, f.name)


def test_only_named_fields_change(cf_base):
    """Test unnamed fields keep the base values."""
    result = apply_column_family_options(cf_base, {"max_write_buffer_number": "4"})

    assert result.ok
    assert result.value.max_write_buffer_number == 4
    assert result.value.write_buffer_size == 123
    assert result.value.num_levels == 5
    assert result.value.compression is CompressionType.ZLIB


def test_base_is_not_mutated(cf_base):
    """Test the base record is left untouched."""
    before = dataclasses.replace(cf_base)
    apply_column_family_options(
        cf_base,
        {
            "write_buffer_size": "1M",
            "max_bytes_for_level_multiplier_additional": "2:3",
            "compression_opts": "1:2:3",
        },
    )

    assert cf_base == before
    assert cf_base.max_bytes_for_level_multiplier_additional == [1] * 7


def test_shared_stages_apply_to_column_family():
    """Test memtable, compaction and misc keys on column family options."""
    result = apply_column_family_options(
        ColumnFamilyOptions(),
        {
            "write_buffer_size": "64M",
            "memtable_prefix_bloom_bits": "1k",
            "filter_deletes": "1",
            "soft_rate_limit": "1.5",
            "max_bytes_for_level_base": "1g",
            "max_bytes_for_level_multiplier_additional": "1:2:3",
            "verify_checksums_in_compaction": "false",
            "max_sequential_skip_in_iterations": "16",
        },
    )

    assert result.ok
    opts = result.value
    assert opts.write_buffer_size == 64 << 20
    assert opts.memtable_prefix_bloom_bits == 1024
    assert opts.filter_deletes is True
    assert opts.soft_rate_limit == 1.5
    assert opts.max_bytes_for_level_base == 1 << 30
    assert opts.max_bytes_for_level_multiplier_additional == [1, 2, 3]
    assert opts.verify_checksums_in_compaction is False
    assert opts.max_sequential_skip_in_iterations == 16


def test_unknown_compression_leaves_field_unchanged(cf_base):
    """Test an unknown enum literal fails and keeps the prior value."""
    result = apply_column_family_options(cf_base, {"compression": "kFooCompression"})

    assert not result.ok
    assert result.status.code is StatusCode.INVALID_ARGUMENT
    assert "compression" in result.status.message
    assert "kFooCompression" in result.status.message
    assert result.value.compression is CompressionType.ZLIB


def test_compression_per_level_is_ordered():
    """Test the per-level compression list keeps input order."""
    result = apply_column_family_options(
        ColumnFamilyOptions(), {"compression_per_level": "kNoCompression:kSnappyCompression"}
    )

    assert result.ok
    assert result.value.compression_per_level == [
        CompressionType.NO_COMPRESSION,
        CompressionType.SNAPPY,
    ]


def test_compression_opts_tuple():
    """Test the window:level:strategy tuple."""
    result = apply_column_family_options(ColumnFamilyOptions(), {"compression_opts": "5:6:0"})

    assert result.ok
    assert result.value.compression_opts == CompressionOptions(window_bits=5, level=6, strategy=0)


@pytest.mark.parametrize("raw", ["5:6", "5", "5:6:", ""])
def test_compression_opts_arity(raw):
    """Test missing tuple fields are rejected."""
    result = apply_column_family_options(ColumnFamilyOptions(), {"compression_opts": raw})

    assert not result.ok
    assert result.status.code is StatusCode.INVALID_ARGUMENT
    assert result.status.message == "invalid config value for: compression_opts"


def test_compression_opts_bad_field():
    """Test a non-numeric tuple field is rejected."""
    result = apply_column_family_options(ColumnFamilyOptions(), {"compression_opts": "5:x:0"})

    assert not result.ok
    assert result.status.message == "error parsing compression_opts:invalid integer: 'x'"


def test_overlong_integer_literal_is_range_error():
    """Test a literal with thousands of digits fails cleanly instead of raising."""
    huge = "1" * 5000

    result = apply_column_family_options(ColumnFamilyOptions(), {"write_buffer_size": huge})
    assert not result.ok
    assert result.status.code is StatusCode.INVALID_ARGUMENT
    assert result.status.message.startswith("error parsing write_buffer_size:out of range")

    result = apply_db_options(DBOptions(), {"max_open_files": huge})
    assert not result.ok
    assert result.status.code is StatusCode.INVALID_ARGUMENT


def test_column_family_specific_keys():
    """Test keys only column family options accept."""
    result = apply_column_family_options(
        ColumnFamilyOptions(),
        {
            "min_write_buffer_number_to_merge": "3",
            "num_levels": "4",
            "purge_redundant_kvs_while_flush": "false",
            "compaction_style": "kCompactionStyleUniversal",
            "compaction_options_fifo": "2g",
            "bloom_locality": "1",
            "min_partial_merge_operands": "7",
            "inplace_update_support": "true",
        },
    )

    assert result.ok
    opts = result.value
    assert opts.min_write_buffer_number_to_merge == 3
    assert opts.num_levels == 4
    assert opts.purge_redundant_kvs_while_flush is False
    assert opts.compaction_style is CompactionStyle.UNIVERSAL
    assert opts.compaction_options_fifo.max_table_files_size == 2 << 30
    assert opts.bloom_locality == 1
    assert opts.min_partial_merge_operands == 7
    assert opts.inplace_update_support is True


def test_prefix_extractor():
    """Test the fixed:<length> prefix extractor descriptor."""
    result = apply_column_family_options(ColumnFamilyOptions(), {"prefix_extractor": "fixed: 8"})

    assert result.ok
    assert isinstance(result.value.prefix_extractor, FixedPrefixTransform)
    assert result.value.prefix_extractor.prefix_length == 8


def test_prefix_extractor_bad_type():
    """Test an unknown extractor type names the key."""
    result = apply_column_family_options(ColumnFamilyOptions(), {"prefix_extractor": "capped:8"})

    assert not result.ok
    assert "prefix_extractor" in result.status.message
    assert "Invalid Prefix Extractor type" in result.status.message


def test_nested_table_factory():
    """Test block_based_table_factory builds a factory from fresh defaults."""
    result = apply_column_family_options(
        ColumnFamilyOptions(),
        {"block_based_table_factory": "block_size=16k;checksum=kxxHash"},
    )

    assert result.ok
    factory = result.value.table_factory
    assert isinstance(factory, BlockBasedTableFactory)
    assert factory.table_options() == BlockBasedTableOptions(
        block_size=16 * 1024, checksum=ChecksumType.XXHASH
    )


def test_nested_table_factory_error_is_returned_verbatim():
    """Test a failing nested block reports the nested key."""
    result = apply_column_family_options(
        ColumnFamilyOptions(), {"block_based_table_factory": "block_size=4k;bogus=1"}
    )

    assert not result.ok
    assert result.status.message == "Unrecognized option: bogus"


def test_nested_table_factory_bad_syntax():
    """Test tokenizer errors inside the nested block propagate."""
    result = apply_column_family_options(
        ColumnFamilyOptions(), {"block_based_table_factory": "block_size"}
    )

    assert not result.ok
    assert "'=' expected" in result.status.message


def test_not_supported_keys():
    """Test recognised but unimplemented keys."""
    cf = apply_column_family_options(ColumnFamilyOptions(), {"compaction_options_universal": "1"})
    db = apply_db_options(DBOptions(), {"db_paths": "/tmp:100"})

    assert cf.status.code is StatusCode.NOT_SUPPORTED
    assert cf.status.message == "Not supported: compaction_options_universal"
    assert db.status.code is StatusCode.NOT_SUPPORTED


def test_unrecognized_key_names_key():
    """Test an unknown key fails with its exact name."""
    result = apply_db_options(DBOptions(), {"totally_bogus_option": "1"})

    assert not result.ok
    assert result.status.code is StatusCode.INVALID_ARGUMENT
    assert result.status.message == "Unrecognized option: totally_bogus_option"


def test_bad_value_message_names_key():
    """Test conversion failures are wrapped with the key name."""
    result = apply_db_options(DBOptions(), {"max_open_files": "many"})

    assert not result.ok
    assert result.status.message.startswith("error parsing max_open_files:")


def test_failure_keeps_earlier_keys():
    """Test keys applied before a failure stay applied on the returned copy."""
    base = DBOptions()
    result = apply_db_options(base, {"create_if_missing": "true", "use_fsync": "maybe", "max_open_files": "7"})

    assert not result.ok
    assert result.value.create_if_missing is True
    assert result.value.max_open_files == base.max_open_files
    assert base.create_if_missing is False


def test_db_options():
    """Test engine-wide keys, including renamed fields and raw strings."""
    result = apply_db_options(
        DBOptions(),
        {
            "create_if_missing": "true",
            "paranoid_checks": "0",
            "max_open_files": "-1",
            "max_total_wal_size": "1g",
            "disable_data_sync": "true",
            "db_log_dir": "/var/log/db",
            "wal_dir": " ",
            "WAL_ttl_seconds": "60",
            "WAL_size_limit_MB": "2k",
            "stats_dump_period_sec": "600",
            "keep_log_file_num": "10",
            "bytes_per_sync": "1m",
        },
    )

    assert result.ok
    opts = result.value
    assert opts.create_if_missing is True
    assert opts.paranoid_checks is False
    assert opts.max_open_files == -1
    assert opts.max_total_wal_size == 1 << 30
    assert opts.disable_data_sync is True
    assert opts.db_log_dir == "/var/log/db"
    assert opts.wal_dir == " "
    assert opts.wal_ttl_seconds == 60
    assert opts.wal_size_limit_mb == 2048
    assert opts.stats_dump_period_sec == 600
    assert opts.keep_log_file_num == 10
    assert opts.bytes_per_sync == 1 << 20


def test_db_rejects_column_family_keys():
    """Test DB options do not consult column family stages."""
    result = apply_db_options(DBOptions(), {"write_buffer_size": "1k"})

    assert not result.ok
    assert result.status.message == "Unrecognized option: write_buffer_size"


def test_mutable_options():
    """Test mutable options accept the shared stages only."""
    result = apply_mutable_cf_options(
        MutableCFOptions(),
        {"write_buffer_size": "8M", "disable_auto_compactions": "true", "level0_stop_writes_trigger": "40"},
    )

    assert result.ok
    assert result.value.write_buffer_size == 8 << 20
    assert result.value.disable_auto_compactions is True
    assert result.value.level0_stop_writes_trigger == 40


def test_mutable_rejects_static_key():
    """Test column family only keys are not dynamic."""
    result = apply_mutable_cf_options(MutableCFOptions(), {"num_levels": "3"})

    assert not result.ok
    assert result.status.message == "unsupported dynamic option: num_levels"


def test_mutable_from_column_family_options():
    """Test building mutable options from full column family options."""
    cf = ColumnFamilyOptions(write_buffer_size=99, level0_slowdown_writes_trigger=3)
    mutable = MutableCFOptions.from_column_family_options(cf)

    assert mutable.write_buffer_size == 99
    assert mutable.level0_slowdown_writes_trigger == 3
    assert mutable.max_bytes_for_level_multiplier_additional == cf.max_bytes_for_level_multiplier_additional
    assert mutable.max_bytes_for_level_multiplier_additional is not cf.max_bytes_for_level_multiplier_additional


def test_table_options():
    """Test block-based table keys and resource construction."""
    result = apply_table_options(
        BlockBasedTableOptions(),
        {
            "cache_index_and_filter_blocks": "1",
            "index_type": "kHashSearch",
            "hash_index_allow_collision": "false",
            "checksum": "kNoChecksum",
            "no_block_cache": "true",
            "block_cache": "1M",
            "block_cache_compressed": "1k",
            "block_size": "8k",
            "block_size_deviation": "5",
            "block_restart_interval": "4",
            "filter_policy": "bloomfilter:10:false",
            "whole_key_filtering": "0",
        },
    )

    assert result.ok
    opts = result.value
    assert opts.cache_index_and_filter_blocks is True
    assert opts.index_type is IndexType.HASH_SEARCH
    assert opts.hash_index_allow_collision is False
    assert opts.checksum is ChecksumType.NO_CHECKSUM
    assert opts.no_block_cache is True
    assert isinstance(opts.block_cache, LRUCache)
    assert opts.block_cache.get_capacity() == 1 << 20
    assert opts.block_cache_compressed.get_capacity() == 1024
    assert opts.block_size == 8192
    assert opts.block_size_deviation == 5
    assert opts.block_restart_interval == 4
    assert opts.filter_policy == BloomFilterPolicy(10, False)
    assert opts.whole_key_filtering is False


@pytest.mark.parametrize(
    "raw,message",
    [
        ("bloom:10:false", "Invalid filter policy name"),
        ("bloomfilter:10", "missing bits_per_key"),
        ("bloomfilter:x:false", "error parsing filter_policy:"),
        ("bloomfilter:10:maybe", "use_block_based_builder"),
    ],
)
def test_filter_policy_errors(raw, message):
    """Test the filter policy micro-grammar."""
    result = apply_table_options(BlockBasedTableOptions(), {"filter_policy": raw})

    assert not result.ok
    assert result.status.code is StatusCode.INVALID_ARGUMENT
    assert "filter_policy" in result.status.message
    assert message in result.status.message
    assert result.value.filter_policy is None
