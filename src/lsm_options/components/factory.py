"""Resource descriptors and the functions that build them.

Parsing an option value produces a descriptor holding only parameters;
building the shared handle is a separate, named step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .bloom import BloomFilterPolicy
from .cache import LRUCache
from .slice_transform import FixedPrefixTransform
from .table_factory import BlockBasedTableFactory

if TYPE_CHECKING:
    from ..core.config import BlockBasedTableOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LRUCacheSpec:
    capacity: int


@dataclass(frozen=True)
class BloomFilterSpec:
    bits_per_key: int
    use_block_based_builder: bool


@dataclass(frozen=True)
class FixedPrefixSpec:
    prefix_length: int


def new_lru_cache(spec: LRUCacheSpec) -> LRUCache:
    logger.info(f"Creating LRU cache with capacity {spec.capacity}")
    return LRUCache(spec.capacity)


def new_bloom_filter_policy(spec: BloomFilterSpec) -> BloomFilterPolicy:
    logger.info(
        f"Creating bloom filter policy: bits_per_key={spec.bits_per_key}, "
        f"block_based={spec.use_block_based_builder}"
    )
    return BloomFilterPolicy(spec.bits_per_key, spec.use_block_based_builder)


def new_fixed_prefix_transform(spec: FixedPrefixSpec) -> FixedPrefixTransform:
    logger.info(f"Creating fixed prefix extractor of length {spec.prefix_length}")
    return FixedPrefixTransform(spec.prefix_length)


def new_block_based_table_factory(table_options: BlockBasedTableOptions) -> BlockBasedTableFactory:
    logger.info("Creating block-based table factory")
    return BlockBasedTableFactory(table_options)
