"""LSM options core package."""

from .appliers import (
    apply_column_family_options,
    apply_db_options,
    apply_mutable_cf_options,
    apply_table_options,
    column_family_options_from_string,
    db_options_from_string,
    mutable_cf_options_from_string,
    table_options_from_string,
)
from .status import Result, Status, StatusCode
from .tokenizer import tokenize

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
    "Result",
    "Status",
    "StatusCode",
]
