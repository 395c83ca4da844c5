"""Option records for the LSM storage engine.

Each record is a plain dataclass of independently defaulted fields. The
engine consumes them; this package only fills them in from strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING

from .types import ChecksumType, CompactionStyle, CompressionType, IndexType

if TYPE_CHECKING:
    from ..interfaces.cache import Cache
    from ..interfaces.filter_policy import FilterPolicy
    from ..interfaces.slice_transform import SliceTransform
    from ..interfaces.table_factory import TableFactory


@dataclass
class CompressionOptions:
    """Parameters passed to the compression library.

    Attributes:
        window_bits: zlib window size (negative means raw deflate)
        level: Compression level, -1 for the library default
        strategy: Library-specific compression strategy
    """

    window_bits: int = -14
    level: int = -1
    strategy: int = 0


@dataclass
class CompactionOptionsFIFO:
    """FIFO compaction settings.

    Attributes:
        max_table_files_size: Oldest table files are dropped once the total
            size of table files exceeds this
    """

    max_table_files_size: int = 1 * 1024 * 1024 * 1024  # 1 GB


@dataclass
class BlockBasedTableOptions:
    """Configuration for the block-based table format.

    Attributes:
        cache_index_and_filter_blocks: Put index and filter blocks in the block cache
        index_type: Index layout used for lookups inside a table
        hash_index_allow_collision: Allow hash collisions in the hash index
        checksum: Checksum written for each block
        no_block_cache: Disable the block cache entirely
        block_cache: Cache for uncompressed blocks (None means a default is used)
        block_cache_compressed: Cache for compressed blocks
        block_size: Approximate uncompressed size of a data block
        block_size_deviation: Percentage under block_size at which a block is closed
        block_restart_interval: Keys between restart points for delta encoding
        filter_policy: Filter used to skip tables that cannot hold a key
        whole_key_filtering: Add whole keys (not only prefixes) to the filter
    """

    cache_index_and_filter_blocks: bool = False
    index_type: IndexType = IndexType.BINARY_SEARCH
    hash_index_allow_collision: bool = True
    checksum: ChecksumType = ChecksumType.CRC32C
    no_block_cache: bool = False
    block_cache: Cache | None = None
    block_cache_compressed: Cache | None = None
    block_size: int = 4 * 1024  # 4 KB
    block_size_deviation: int = 10
    block_restart_interval: int = 16
    filter_policy: FilterPolicy | None = None
    whole_key_filtering: bool = True


def _default_level_multipliers() -> list[int]:
    return [1] * 7


@dataclass
class ColumnFamilyOptions:
    """Per-column-family configuration.

    Memtable, compaction and iteration fields are shared with
    MutableCFOptions; the rest can only be set when the column family is
    opened.
    """

    # Memtable
    write_buffer_size: int = 4 << 20  # 4 MB
    max_write_buffer_number: int = 2
    arena_block_size: int = 0
    memtable_prefix_bloom_bits: int = 0
    memtable_prefix_bloom_probes: int = 6
    memtable_prefix_bloom_huge_page_tlb_size: int = 0
    max_successive_merges: int = 0
    filter_deletes: bool = False
    inplace_update_num_locks: int = 10000

    # Compaction
    disable_auto_compactions: bool = False
    soft_rate_limit: float = 0.0
    hard_rate_limit: float = 0.0
    level0_file_num_compaction_trigger: int = 4
    level0_slowdown_writes_trigger: int = 20
    level0_stop_writes_trigger: int = 24
    max_grandparent_overlap_factor: int = 10
    expanded_compaction_factor: int = 25
    source_compaction_factor: int = 1
    target_file_size_base: int = 2 * 1048576  # 2 MB
    target_file_size_multiplier: int = 1
    max_bytes_for_level_base: int = 10 * 1048576  # 10 MB
    max_bytes_for_level_multiplier: int = 10
    max_bytes_for_level_multiplier_additional: list[int] = field(
        default_factory=_default_level_multipliers
    )
    max_mem_compaction_level: int = 2
    verify_checksums_in_compaction: bool = True

    # Iteration
    max_sequential_skip_in_iterations: int = 8

    # Column family only
    min_write_buffer_number_to_merge: int = 1
    compression: CompressionType = CompressionType.SNAPPY
    compression_per_level: list[CompressionType] = field(default_factory=list)
    compression_opts: CompressionOptions = field(default_factory=CompressionOptions)
    num_levels: int = 7
    purge_redundant_kvs_while_flush: bool = True
    compaction_style: CompactionStyle = CompactionStyle.LEVEL
    compaction_options_fifo: CompactionOptionsFIFO = field(default_factory=CompactionOptionsFIFO)
    bloom_locality: int = 0
    min_partial_merge_operands: int = 2
    inplace_update_support: bool = False
    prefix_extractor: SliceTransform | None = None
    table_factory: TableFactory | None = None


@dataclass
class MutableCFOptions:
    """Column family options that may be changed while the engine runs."""

    write_buffer_size: int = 4 << 20  # 4 MB
    max_write_buffer_number: int = 2
    arena_block_size: int = 0
    memtable_prefix_bloom_bits: int = 0
    memtable_prefix_bloom_probes: int = 6
    memtable_prefix_bloom_huge_page_tlb_size: int = 0
    max_successive_merges: int = 0
    filter_deletes: bool = False
    inplace_update_num_locks: int = 10000

    disable_auto_compactions: bool = False
    soft_rate_limit: float = 0.0
    hard_rate_limit: float = 0.0
    level0_file_num_compaction_trigger: int = 4
    level0_slowdown_writes_trigger: int = 20
    level0_stop_writes_trigger: int = 24
    max_grandparent_overlap_factor: int = 10
    expanded_compaction_factor: int = 25
    source_compaction_factor: int = 1
    target_file_size_base: int = 2 * 1048576  # 2 MB
    target_file_size_multiplier: int = 1
    max_bytes_for_level_base: int = 10 * 1048576  # 10 MB
    max_bytes_for_level_multiplier: int = 10
    max_bytes_for_level_multiplier_additional: list[int] = field(
        default_factory=_default_level_multipliers
    )
    max_mem_compaction_level: int = 2
    verify_checksums_in_compaction: bool = True

    max_sequential_skip_in_iterations: int = 8

    @classmethod
    def from_column_family_options(cls, options: ColumnFamilyOptions) -> MutableCFOptions:
        """Copy the runtime-tunable subset out of full column family options."""
        values = {}
        for f in fields(cls):
            value = getattr(options, f.name)
            values[f.name] = list(value) if isinstance(value, list) else value
        return cls(**values)


@dataclass
class DBOptions:
    """Engine-wide configuration.

    Field names follow the option keys, lower-cased (``WAL_ttl_seconds`` is
    stored as ``wal_ttl_seconds``).
    """

    create_if_missing: bool = False
    create_missing_column_families: bool = False
    error_if_exists: bool = False
    paranoid_checks: bool = True
    max_open_files: int = 5000
    max_total_wal_size: int = 0
    disable_data_sync: bool = False
    use_fsync: bool = False
    db_paths: list[tuple[str, int]] = field(default_factory=list)
    db_log_dir: str = ""
    wal_dir: str = ""
    delete_obsolete_files_period_micros: int = 6 * 60 * 60 * 1000000  # 6 hours
    max_background_compactions: int = 1
    max_background_flushes: int = 1
    max_log_file_size: int = 0
    log_file_time_to_roll: int = 0
    keep_log_file_num: int = 1000
    max_manifest_file_size: int = (1 << 64) - 1
    table_cache_numshardbits: int = 4
    table_cache_remove_scan_count_limit: int = 16
    wal_ttl_seconds: int = 0
    wal_size_limit_mb: int = 0
    manifest_preallocation_size: int = 4 * 1024 * 1024  # 4 MB
    allow_os_buffer: bool = True
    allow_mmap_reads: bool = False
    allow_mmap_writes: bool = False
    is_fd_close_on_exec: bool = True
    skip_log_error_on_recovery: bool = False
    stats_dump_period_sec: int = 3600
    advise_random_on_open: bool = True
    db_write_buffer_size: int = 0
    use_adaptive_mutex: bool = False
    bytes_per_sync: int = 0
