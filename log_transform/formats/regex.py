"""
Regex-based log format.

Fields are extracted by named capture groups. The set of group names must
be exactly the part names: a pattern with an extra or a missing group is
rejected when the format is built, not when a line is parsed.

The pattern is compiled once in the constructor and must match the whole
line. A group that did not take part in the match (an optional group)
passes ``None`` to its part parser rather than being skipped, so a parser
that rejects ``None`` fails the parse.

The separator is not used for parsing; it is the join character when an
entry in this format is rendered.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Mapping

from log_transform.exceptions import FormatDefinitionError, InvalidArgumentError
from log_transform.formats.base import LogFormat
from log_transform.formats.part import LogFormatPart
from log_transform.formats.part_set import LogFormatPartSet

logger = logging.getLogger(__name__)


class RegexLogFormat(LogFormat):
    """Format whose fields come from named groups of a regular expression."""

    def __init__(
        self,
        separator: str,
        pattern: str,
        part_set: LogFormatPartSet,
        flags: int = 0,
    ) -> None:
        super().__init__(separator, part_set)
        if pattern is None:
            raise InvalidArgumentError("A regex format requires a pattern.")
        try:
            self._regex = re.compile(pattern, flags)
        except re.error as exc:
            raise FormatDefinitionError(f"Invalid regex pattern {pattern!r}: {exc}") from exc

        group_names = set(self._regex.groupindex)
        if len(group_names) != len(self.part_names):
            raise FormatDefinitionError(
                f"The number of regex pattern groups ({len(group_names)}) does not "
                f"match the number of parts ({len(self.part_names)})."
            )
        for name in self.part_names:
            if name not in group_names:
                raise FormatDefinitionError(f"Regex pattern does not contain named group '{name}'.")

    @classmethod
    def from_parts(  # type: ignore[override]
        cls,
        separator: str,
        part_names: Iterable[str],
        parts: Mapping[str, LogFormatPart],
        pattern: str,
        flags: int = 0,
    ) -> RegexLogFormat:
        return cls(separator, pattern, LogFormatPartSet(part_names, parts), flags)

    @property
    def pattern(self) -> str:
        return self._regex.pattern

    @property
    def flags(self) -> int:
        return self._regex.flags

    def try_parse(self, line: str | None) -> tuple[bool, dict[str, Any] | None]:
        if not line:
            return False, None

        match = self._regex.fullmatch(line)
        if match is None:
            return False, None

        values: dict[str, Any] = {}
        for name in self.part_names:
            # group() is None when an optional group did not participate
            raw = match.group(name)
            ok, value = self._parse_field(name, raw)
            if not ok:
                logger.debug("Part '%s' rejected %r", name, raw)
                return False, None
            values[name] = value
        return True, values

    def _extra_equality_components(self) -> Iterable[Any]:
        yield self._regex.pattern

    def __repr__(self) -> str:
        return (
            f"RegexLogFormat(separator={self.separator!r}, "
            f"parts={list(self.part_names)!r}, pattern={self._regex.pattern!r})"
        )
