"""LSM Options - string-configurable option records for an LSM storage engine."""

from .core.appliers import (
    apply_column_family_options,
    apply_db_options,
    apply_mutable_cf_options,
    apply_table_options,
    column_family_options_from_string,
    db_options_from_string,
    mutable_cf_options_from_string,
    table_options_from_string,
)
from .core.config import (
    BlockBasedTableOptions,
    ColumnFamilyOptions,
    CompactionOptionsFIFO,
    CompressionOptions,
    DBOptions,
    MutableCFOptions,
)
from .core.errors import InvalidArgumentError, NotSupportedError, OptionsError
from .core.status import Result, Status, StatusCode
from .core.tokenizer import tokenize
from .core.types import ChecksumType, CompactionStyle, CompressionType, IndexType, OptionsMap

__all__ = [
    "tokenize",
    "apply_db_options",
    "apply_column_family_options",
    "apply_mutable_cf_options",
    "apply_table_options",
    "db_options_from_string",
    "column_family_options_from_string",
    "mutable_cf_options_from_string",
    "table_options_from_string",
    "DBOptions",
    "ColumnFamilyOptions",
    "MutableCFOptions",
    "BlockBasedTableOptions",
    "CompressionOptions",
    "CompactionOptionsFIFO",
    "CompressionType",
    "ChecksumType",
    "IndexType",
    "CompactionStyle",
    "OptionsMap",
    "Result",
    "Status",
    "StatusCode",
    "OptionsError",
    "InvalidArgumentError",
    "NotSupportedError",
]
