"""Protocol definition for TableFactory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..core.config import BlockBasedTableOptions


@runtime_checkable
class TableFactory(Protocol):
    """Creates table builders and readers for one table format."""

    def name(self) -> str:
        ...

    def table_options(self) -> BlockBasedTableOptions:
        """Return the options the factory was created with."""
        ...
