"""
Log line parser.

Tries a fixed list of candidate formats in registration order and wraps
the first successful result in a ``LogEntry``. There is no "best match":
if two formats would both accept a line, the one registered first wins.

Two call styles:
- ``parse(line)`` raises ``LogParseError`` when nothing matches. The
  message carries the line truncated to 100 characters.
- ``try_parse(line)`` returns ``(ok, entry)`` and never raises.
"""

from __future__ import annotations

import logging
from typing import Sequence

from log_transform.exceptions import InvalidArgumentError, LogParseError
from log_transform.formats.base import LogFormat
from log_transform.models import LogEntry

logger = logging.getLogger(__name__)

# Longest line snippet embedded in a LogParseError message
MAX_SNIPPET_LENGTH = 100
ELLIPSIS = "..."


def truncate(value: str, max_length: int = MAX_SNIPPET_LENGTH, marker: str = ELLIPSIS) -> str:
    """Cut *value* to at most *max_length* characters, marker included.

    >>> truncate("abcdef", 5)
    'ab...'
    """
    if len(value) <= max_length:
        return value
    return value[: max(max_length - len(marker), 0)] + marker


class LogParser:
    """Parses raw lines against an ordered list of candidate formats."""

    def __init__(self, formats: Sequence[LogFormat]) -> None:
        if formats is None:
            raise InvalidArgumentError("formats must not be None.")
        formats = tuple(formats)
        if not formats:
            raise InvalidArgumentError("At least one log format must be provided.")
        self._formats = formats

    @property
    def formats(self) -> tuple[LogFormat, ...]:
        return self._formats

    def parse(self, line: str) -> LogEntry:
        """Parse *line* with the first format that accepts it.

        Raises:
            InvalidArgumentError: If *line* is None or empty.
            LogParseError: If no registered format accepts the line.
        """
        if not line:
            raise InvalidArgumentError("Log line must be a non-empty string.")
        ok, entry = self.try_parse(line)
        if ok:
            return entry  # type: ignore[return-value]
        snippet = truncate(line)
        raise LogParseError(
            f'Failed to parse log line: "{snippet}". No registered format matches the input.',
            snippet=snippet,
        )

    def try_parse(self, line: str | None) -> tuple[bool, LogEntry | None]:
        if not line:
            return False, None
        for index, fmt in enumerate(self._formats):
            ok, values = fmt.try_parse(line)
            if not ok:
                continue
            try:
                entry = LogEntry(fmt, values)  # type: ignore[arg-type]
            except InvalidArgumentError as exc:
                logger.debug("Format #%d %r returned unusable values: %s", index, fmt, exc)
                continue
            logger.debug("Line matched format #%d %r", index, fmt)
            return True, entry
        logger.debug("No format matched line: %s", truncate(line))
        return False, None
