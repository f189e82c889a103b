"""
Ordered, name-unique collections of format parts.

``LogFormatPartSet`` is the frozen result; ``LogFormatPartSetBuilder``
collects parts one at a time and defers the emptiness check to
``build()``::

    part_set = (
        LogFormatPartSetBuilder()
        .add_part("date", PartType.DATETIME, parse_date)
        .add_part("message", PartType.TEXT, str.strip)
        .build()
    )

The order in which parts are added is the field order of the source line
and the column order of rendered output.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from log_transform.exceptions import (
    DuplicateRegistrationError,
    FormatDefinitionError,
    InvalidArgumentError,
)
from log_transform.formats.part import LogFormatPart
from log_transform.models import PartType


class LogFormatPartSet:
    """Immutable pairing of ordered part names and a name -> part mapping."""

    __slots__ = ("_part_names", "_parts")

    def __init__(self, part_names: Iterable[str], parts: Mapping[str, LogFormatPart]) -> None:
        if part_names is None:
            raise InvalidArgumentError("part_names must not be None.")
        if parts is None:
            raise InvalidArgumentError("parts must not be None.")
        names = tuple(part_names)
        if not names:
            raise FormatDefinitionError("A part set must contain at least one part.")
        if len(set(names)) != len(names):
            raise FormatDefinitionError(f"Part names must be unique: {list(names)}")
        if len(names) != len(parts):
            raise FormatDefinitionError(
                f"The number of part names ({len(names)}) does not match "
                f"the number of parts ({len(parts)})."
            )
        for name in names:
            if not isinstance(name, str) or not name:
                raise FormatDefinitionError(f"Part name must be a non-empty string, got {name!r}.")
            if name not in parts:
                raise FormatDefinitionError(
                    f"Part name '{name}' is listed in part_names but is not present in parts."
                )
        self._part_names = names
        self._parts = MappingProxyType({name: parts[name] for name in names})

    @property
    def part_names(self) -> tuple[str, ...]:
        return self._part_names

    @property
    def parts(self) -> Mapping[str, LogFormatPart]:
        return self._parts

    def __len__(self) -> int:
        return len(self._part_names)

    def __repr__(self) -> str:
        return f"LogFormatPartSet({list(self._part_names)!r})"


class LogFormatPartSetBuilder:
    """Accumulates named parts in order, then freezes them with ``build()``."""

    def __init__(self) -> None:
        self._names: list[str] = []
        self._parts: dict[str, LogFormatPart] = {}

    def add_part(
        self,
        name: str,
        part_or_type: LogFormatPart | PartType,
        parser: Callable[[str | None], Any] | None = None,
        formatter: Callable[[Any], str] | None = None,
    ) -> LogFormatPartSetBuilder:
        """Add a part under *name*.

        Accepts either a ready ``LogFormatPart`` or a ``PartType`` plus a
        parser (and optional formatter), in which case the part is built
        with ``LogFormatPart.create``.

        Raises:
            InvalidArgumentError: If *name* is empty or the part is missing.
            DuplicateRegistrationError: If *name* was already added.
        """
        if not name:
            raise InvalidArgumentError("Part name must be a non-empty string.")
        if part_or_type is None:
            raise InvalidArgumentError(f"Part '{name}' is missing.")
        if name in self._parts:
            raise DuplicateRegistrationError(f"A log part with name '{name}' is already defined.")

        if isinstance(part_or_type, LogFormatPart):
            part = part_or_type
        else:
            part = LogFormatPart.create(part_or_type, parser, formatter)

        self._parts[name] = part
        self._names.append(name)
        return self

    def build(self) -> LogFormatPartSet:
        if not self._parts:
            raise FormatDefinitionError("At least one log part must be added.")
        return LogFormatPartSet(self._names, self._parts)
