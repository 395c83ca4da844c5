"""Block-based table factory."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.config import BlockBasedTableOptions


class BlockBasedTableFactory:
    """Table factory for the block-based format.

    Holds its own copy of the table options; resource handles inside them
    (caches, filter policy) stay shared.
    """

    def __init__(self, table_options: BlockBasedTableOptions):
        self._table_options = dataclasses.replace(table_options)

    def name(self) -> str:
        return "BlockBasedTable"

    def table_options(self) -> BlockBasedTableOptions:
        return self._table_options

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BlockBasedTableFactory):
            return NotImplemented
        return self._table_options == other._table_options

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BlockBasedTableFactory({self._table_options!r})"
