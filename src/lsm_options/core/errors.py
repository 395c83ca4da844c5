"""Exception hierarchy for LSM options parsing.

Parsing itself reports failures through ``Result`` values; these exceptions
are raised only when a caller asks for one via ``Result.unwrap()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .status import Status


class OptionsError(Exception):
    """Base exception for all options errors."""

    def __init__(self, message: str, status: Status | None = None):
        super().__init__(message)
        self.status = status


class InvalidArgumentError(OptionsError):
    """Raised for malformed strings, unknown keys and bad values."""
    pass


class NotSupportedError(OptionsError):
    """Raised for keys that are recognised but not implemented."""
    pass
