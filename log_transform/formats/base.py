"""
Base class for log line formats.

All format strategies must implement this interface. The contract is:
1. A format has a one-character ``separator``, used both to split source
   lines and to join rendered output.
2. ``part_names`` is the ordered list of fields; ``fmt[name]`` returns the
   ``LogFormatPart`` describing one of them.
3. ``try_parse(line)`` returns ``(True, values)`` with one value per part
   name, or ``(False, None)``. It never raises for bad input.

Equality and hashing are structural (see ``log_transform.equality``), so
formats can be used as dictionary keys.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Iterator, Mapping

from log_transform.equality import equality_key
from log_transform.exceptions import InvalidArgumentError, MissingFieldError
from log_transform.formats.part import LogFormatPart
from log_transform.formats.part_set import LogFormatPartSet


class LogFormat(ABC):
    """Abstract base class for log line formats.

    Subclasses implement ``try_parse()`` and
    ``_extra_equality_components()``. Instances are immutable once built.
    """

    def __init__(self, separator: str, part_set: LogFormatPartSet) -> None:
        if not isinstance(separator, str) or len(separator) != 1:
            raise InvalidArgumentError(
                f"Separator must be a single character, got {separator!r}."
            )
        if part_set is None:
            raise InvalidArgumentError("A format requires a part set.")
        self._separator = separator
        self._part_set = part_set

    @classmethod
    def from_parts(
        cls,
        separator: str,
        part_names: Iterable[str],
        parts: Mapping[str, LogFormatPart],
        **kwargs: Any,
    ) -> LogFormat:
        """Alternate constructor taking names and parts instead of a part set."""
        return cls(separator, part_set=LogFormatPartSet(part_names, parts), **kwargs)

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def part_names(self) -> tuple[str, ...]:
        return self._part_set.part_names

    @property
    def part_set(self) -> LogFormatPartSet:
        return self._part_set

    def __getitem__(self, name: str) -> LogFormatPart:
        try:
            return self._part_set.parts[name]
        except KeyError:
            raise MissingFieldError(f"Log format does not contain a part named '{name}'.") from None

    def __contains__(self, name: object) -> bool:
        return name in self._part_set.parts

    def __iter__(self) -> Iterator[str]:
        return iter(self.part_names)

    def __len__(self) -> int:
        return len(self.part_names)

    @abstractmethod
    def try_parse(self, line: str | None) -> tuple[bool, dict[str, Any] | None]:
        """Split and convert *line* into a ``{part_name: value}`` dict.

        Returns:
            ``(True, values)`` on success, ``(False, None)`` otherwise.
        """

    @abstractmethod
    def _extra_equality_components(self) -> Iterable[Any]:
        """Variant-specific state that takes part in equality and hashing."""

    def _parse_field(self, name: str, raw: str | None) -> tuple[bool, Any]:
        return self[name].parser.try_invoke(raw)

    # -- Structural equality ------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LogFormat):
            return NotImplemented
        if self is other:
            return True
        return equality_key(self) == equality_key(other)

    def __hash__(self) -> int:
        return hash(equality_key(self))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(separator={self._separator!r}, "
            f"parts={list(self.part_names)!r})"
        )
