"""Protocols for the shared resources attached to option records."""

from .cache import Cache
from .filter_policy import FilterPolicy
from .slice_transform import SliceTransform
from .table_factory import TableFactory

__all__ = ["Cache", "FilterPolicy", "SliceTransform", "TableFactory"]
