"""Declarative option tables.

An ``OptionTable`` is an ordered list of stages, each mapping option keys to
a converter plus a field setter. Keys are looked up stage by stage and the
first match wins, so a key may appear in only one stage of a table.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sortedcontainers import SortedList

from .status import Result, Status

logger = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass(frozen=True)
class OptionEntry:
    """How one key is converted and stored.

    Attributes:
        parse: Converter from the raw string to the stored value
        assign: Stores the converted value on the record
        wrap_errors: Prefix invalid-argument failures with ``error parsing <key>:``
    """

    parse: Callable[[str], Result[Any]]
    assign: Callable[[Any, Any], None]
    wrap_errors: bool = True

    def apply(self, key: str, value: str, record: Any) -> Status:
        result = self.parse(value)
        if not result.ok:
            status = result.status
            if self.wrap_errors and status.is_invalid_argument():
                status = Status.invalid_argument(f"error parsing {key}:{status.message}")
            return status
        self.assign(record, result.value)
        return Status.ok()


def set_field(name: str, parse: Callable[[str], Result[Any]]) -> OptionEntry:
    """Entry storing the converted value on attribute ``name``."""

    def assign(record: Any, value: Any) -> None:
        setattr(record, name, value)

    return OptionEntry(parse, assign)


def not_supported(key: str) -> OptionEntry:
    """Entry for a key that is recognised but cannot be set from a string."""

    def parse(_value: str) -> Result[Any]:
        return Result.failure(Status.not_supported(f"Not supported: {key}"))

    return OptionEntry(parse, lambda record, value: None)


@dataclass(frozen=True)
class OptionStage:
    """A named group of keys shared between record families."""

    name: str
    entries: Mapping[str, OptionEntry]


def copy_record(record: R) -> R:
    """Shallow copy of an option record with its list fields copied.

    Shared resource handles (caches, filter policies, ...) stay shared.
    """
    new_record = dataclasses.replace(record)
    for f in dataclasses.fields(new_record):
        value = getattr(new_record, f.name)
        if isinstance(value, list):
            setattr(new_record, f.name, list(value))
    return new_record


class OptionTable(Generic[R]):
    """Priority-ordered stages for one option record family.

    Args:
        family: Record family name used in log messages
        stages: Stages in lookup order
        unknown_message: Message for keys no stage recognises
    """

    def __init__(
        self,
        family: str,
        stages: Iterable[OptionStage],
        unknown_message: str = "Unrecognized option: {key}",
    ):
        self.family = family
        self.stages = list(stages)
        self.unknown_message = unknown_message
        self._keys: SortedList = SortedList()
        for stage in self.stages:
            for key in stage.entries:
                if key in self._keys:
                    raise ValueError(f"Duplicate option {key!r} in {family} table")
                self._keys.add(key)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def keys(self) -> list[str]:
        """Return all recognised keys in sorted order."""
        return list(self._keys)

    def keys_with_prefix(self, prefix: str) -> list[str]:
        """Return recognised keys starting with prefix, sorted."""
        matches = []
        for key in self._keys.irange(minimum=prefix):
            if not key.startswith(prefix):
                break
            matches.append(key)
        return matches

    def lookup(self, key: str) -> tuple[OptionStage, OptionEntry] | None:
        for stage in self.stages:
            entry = stage.entries.get(key)
            if entry is not None:
                return stage, entry
        return None

    def apply(self, base: R, opts_map: Mapping[str, str]) -> Result[R]:
        """Apply opts_map onto a copy of base.

        Stops at the first failing key. The failed result still carries the
        copy, with every key applied before the failure left in place.
        """
        new_options = copy_record(base)
        for key, value in opts_map.items():
            found = self.lookup(key)
            if found is None:
                logger.debug(f"Unrecognized {self.family} option: {key}")
                message = self.unknown_message.format(key=key)
                return Result.failure(Status.invalid_argument(message), new_options)

            stage, entry = found
            status = entry.apply(key, value, new_options)
            if not status.is_ok:
                logger.debug(f"Failed to apply {self.family} option {key}: {status}")
                return Result.failure(status, new_options)
            logger.debug(f"Applied {self.family} option {key} ({stage.name})")

        return Result.success(new_options)
