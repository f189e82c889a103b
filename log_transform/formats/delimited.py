"""
Delimiter-based log format.

Handles lines whose fields are separated by a fixed character, such as
``10.03.2025 15:14:49.523 INFORMATION Program started`` (space) or
``2025-03-10 15:14:51.5882| INFO|11|Main| Ready`` (pipe).

Two splitting modes:

- **Plain** (``quoted=False``): the line is split into at most N fields,
  N being the number of parts. Separators past the (N-1)th stay inside
  the last field, so free-text messages can contain the separator.
- **Quoted** (``quoted=True``): a two-state tokenizer where ``"`` toggles
  between unquoted and quoted; a separator inside quotes is literal.
  Quote characters are dropped from the field text and there is no
  escape for an embedded quote. Unbalanced quotes are tolerated and
  usually show up as a field-count mismatch.

In both modes the field count must equal the part count exactly.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from log_transform.formats.base import LogFormat
from log_transform.formats.part_set import LogFormatPartSet

logger = logging.getLogger(__name__)

_QUOTE = '"'


def split_quoted(line: str, separator: str) -> list[str]:
    """Split *line* on *separator*, ignoring separators inside double quotes.

    >>> split_quoted('"a,b",c', ",")
    ['a,b', 'c']
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    for ch in line:
        if ch == _QUOTE:
            in_quotes = not in_quotes
        elif ch == separator and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
    fields.append("".join(current))
    return fields


class DelimitedLogFormat(LogFormat):
    """Format whose fields are separated by a single character."""

    def __init__(self, separator: str, part_set: LogFormatPartSet, quoted: bool = False) -> None:
        super().__init__(separator, part_set)
        self._quoted = bool(quoted)

    @property
    def quoted(self) -> bool:
        return self._quoted

    def split(self, line: str) -> list[str]:
        """Split *line* into raw field strings according to the quoting mode."""
        if self._quoted:
            return split_quoted(line, self.separator)
        return line.split(self.separator, len(self.part_names) - 1)

    def try_parse(self, line: str | None) -> tuple[bool, dict[str, Any] | None]:
        if not line:
            return False, None

        fields = self.split(line)
        if len(fields) != len(self.part_names):
            logger.debug(
                "Field count mismatch: expected %d, got %d", len(self.part_names), len(fields)
            )
            return False, None

        values: dict[str, Any] = {}
        for name, raw in zip(self.part_names, fields):
            ok, value = self._parse_field(name, raw)
            if not ok:
                logger.debug("Part '%s' rejected %r", name, raw)
                return False, None
            values[name] = value
        return True, values

    def _extra_equality_components(self) -> Iterable[Any]:
        yield self._quoted

    def __repr__(self) -> str:
        return (
            f"DelimitedLogFormat(separator={self.separator!r}, "
            f"parts={list(self.part_names)!r}, quoted={self._quoted})"
        )
