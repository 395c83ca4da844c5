"""Shared resources referenced from option records."""

from .bloom import BloomFilterPolicy
from .cache import LRUCache
from .factory import (
    BloomFilterSpec,
    FixedPrefixSpec,
    LRUCacheSpec,
    new_block_based_table_factory,
    new_bloom_filter_policy,
    new_fixed_prefix_transform,
    new_lru_cache,
)
from .slice_transform import FixedPrefixTransform
from .table_factory import BlockBasedTableFactory

__all__ = [
    "BloomFilterPolicy",
    "LRUCache",
    "FixedPrefixTransform",
    "BlockBasedTableFactory",
    "LRUCacheSpec",
    "BloomFilterSpec",
    "FixedPrefixSpec",
    "new_lru_cache",
    "new_bloom_filter_policy",
    "new_fixed_prefix_transform",
    "new_block_based_table_factory",
]
