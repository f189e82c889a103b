"""
Data model for log-transform.

Key types:
- PartType: declared semantic type of a format part (metadata only; the
  parser decides what it actually stores).
- LogEntry: an immutable (format, values) pair produced by the parser and
  by transform functions, consumed by the formatter.

The typed accessors on ``LogEntry`` check the *declared* part type before
looking at the stored value, so "you asked for a datetime from a TEXT
part" and "the TEXT part holds something odd" are distinct failures
(``PartTypeMismatchError`` vs ``BadCastError``).
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, TypeVar

from log_transform.exceptions import (
    BadCastError,
    InvalidArgumentError,
    MissingFieldError,
    PartTypeMismatchError,
)

if TYPE_CHECKING:
    from log_transform.formats.base import LogFormat

T = TypeVar("T")


class PartType(Enum):
    """Declared type of a single format part."""

    DATETIME = "datetime"
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    OTHER = "other"


class LogEntry:
    """A structured log record: a format plus one value per part name.

    Both the format and the values are fixed at construction. The values
    are copied, so later changes to the caller's dict are not visible.
    """

    __slots__ = ("_format", "_values")

    def __init__(self, format: LogFormat, values: Mapping[str, Any]) -> None:
        if format is None:
            raise InvalidArgumentError("LogEntry requires a format.")
        if values is None:
            raise InvalidArgumentError("LogEntry requires a values mapping.")
        if len(format.part_names) != len(values):
            raise InvalidArgumentError(
                f"The count of format parts ({len(format.part_names)}) does not "
                f"match the count of values ({len(values)})."
            )
        unknown = sorted(set(values) - set(format.part_names))
        if unknown:
            raise InvalidArgumentError(
                f"Values contain names that are not parts of the format: {unknown}"
            )
        object.__setattr__(self, "_format", format)
        object.__setattr__(self, "_values", MappingProxyType(dict(values)))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("LogEntry is immutable")

    @property
    def format(self) -> LogFormat:
        return self._format

    @property
    def values(self) -> Mapping[str, Any]:
        """Read-only view of the field values."""
        return self._values

    # -- Generic accessors --------------------------------------------------

    def get_value(self, name: str, expected_type: type[T] = object) -> T:  # type: ignore[assignment]
        """Return the value for *name*, checked against *expected_type*.

        Raises:
            MissingFieldError: If the entry has no value for *name*.
            BadCastError: If the value is not an instance of *expected_type*.
        """
        value = self.get_raw_value(name)
        if expected_type is object:
            return value
        if not isinstance(value, expected_type):
            raise BadCastError(
                f"Value of part '{name}' is {type(value).__name__}, "
                f"cannot be read as {expected_type.__name__}."
            )
        return value

    def get_raw_value(self, name: str) -> Any:
        try:
            return self._values[name]
        except KeyError:
            raise MissingFieldError(
                f"Log entry does not contain a value for part '{name}'."
            ) from None

    # -- Typed accessors ----------------------------------------------------

    def get_string(self, name: str) -> str:
        self._ensure_part_type(name, PartType.TEXT)
        value = self.get_value(name)
        return "" if value is None else str(value)

    def get_integer(self, name: str) -> int:
        self._ensure_part_type(name, PartType.INTEGER)
        value = self.get_value(name, int)
        if isinstance(value, bool):
            raise BadCastError(f"Value of part '{name}' is bool, cannot be read as int.")
        return value

    def get_float(self, name: str) -> float:
        self._ensure_part_type(name, PartType.FLOAT)
        value = self.get_raw_value(name)
        if isinstance(value, int) and not isinstance(value, bool):
            return float(value)
        return self.get_value(name, float)

    # Python has a single binary float type; kept for callers that think
    # in single/double precision terms.
    get_double = get_float

    def get_datetime(self, name: str) -> datetime:
        self._ensure_part_type(name, PartType.DATETIME)
        return self.get_value(name, datetime)

    def _ensure_part_type(self, name: str, expected: PartType) -> None:
        if name not in self._format.part_names:
            raise MissingFieldError(f"Log format does not contain a part named '{name}'.")
        actual = self._format[name].type
        if actual is not expected:
            raise PartTypeMismatchError(
                f"Part '{name}' is of type {actual.name}, but {expected.name} was expected."
            )

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LogEntry):
            return NotImplemented
        return self._format == other._format and dict(self._values) == dict(other._values)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"LogEntry(format={self._format!r}, values={dict(self._values)!r})"
