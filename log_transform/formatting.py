"""
Renders a ``LogEntry`` back to text.

Each part's value goes through that part's safe-invoked formatter, in the
format's declared part order, and the results are joined with the
format's separator. If any formatter fails, nothing is produced: there is
no partial output.
"""

from __future__ import annotations

import logging

from log_transform.exceptions import FormatFailedError, InvalidArgumentError
from log_transform.models import LogEntry

logger = logging.getLogger(__name__)


class LogFormatter:
    """Stateless entry-to-text renderer."""

    def try_format(self, entry: LogEntry) -> tuple[bool, str | None]:
        """Render *entry*.

        Returns:
            ``(True, text)`` when every part formats, else ``(False, None)``
            (also for a None *entry*).
        """
        if entry is None:
            return False, None

        fmt = entry.format
        rendered: list[str] = []
        for name in fmt.part_names:
            value = entry.values.get(name)
            ok, text = fmt[name].formatter.try_invoke(value)
            if not ok:
                logger.debug("Formatter for part '%s' rejected %r", name, value)
                return False, None
            rendered.append(text)
        return True, fmt.separator.join(rendered)

    def format(self, entry: LogEntry) -> str:
        """Render *entry*.

        Raises:
            InvalidArgumentError: If *entry* is None.
            FormatFailedError: If any part formatter fails.
        """
        if entry is None:
            raise InvalidArgumentError("entry must not be None.")
        ok, text = self.try_format(entry)
        if not ok:
            raise FormatFailedError(
                "Failed to format log entry. One or more formatters raised an exception."
            )
        return text  # type: ignore[return-value]
