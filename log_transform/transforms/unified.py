"""
Built-in transforms into the unified tab-separated layout.

The unified output has five parts: ``date``, ``time``, ``level``,
``callingMethod`` and ``message``. Each supported input layout gets a
factory that binds its transform function to the concrete input and
output formats built from the layout files::

    transformer = TRANSFORM_FUNCTIONS["space_delimited"](input_format, output_format)

Layouts without a calling method leave it as ``None``; the output layout
renders that as ``DEFAULT``.
"""

from __future__ import annotations

from typing import Callable

from log_transform.formats.base import LogFormat
from log_transform.levels import LogLevel
from log_transform.models import LogEntry
from log_transform.transforms.bound import FormatBoundLogTransformer

TransformerFactory = Callable[[LogFormat, LogFormat], FormatBoundLogTransformer]


def to_unified_from_space_delimited(entry: LogEntry, output_format: LogFormat) -> LogEntry:
    """``date time level message`` -> unified entry with no calling method."""
    return LogEntry(
        output_format,
        {
            "date": entry.get_datetime("date"),
            "time": entry.get_datetime("time"),
            "level": entry.get_value("level", LogLevel),
            "callingMethod": None,
            "message": entry.get_string("message"),
        },
    )


def to_unified_from_pipe_delimited(entry: LogEntry, output_format: LogFormat) -> LogEntry:
    """``datetime|level|threadId|callingMethod|message`` -> unified entry.

    The single datetime feeds both the date and the time column; the
    thread id is dropped.
    """
    timestamp = entry.get_datetime("datetime")
    return LogEntry(
        output_format,
        {
            "date": timestamp,
            "time": timestamp,
            "level": entry.get_value("level", LogLevel),
            "callingMethod": entry.get_string("callingMethod"),
            "message": entry.get_string("message"),
        },
    )


def _bind(func: Callable[[LogEntry, LogFormat], LogEntry]) -> TransformerFactory:
    def factory(input_format: LogFormat, output_format: LogFormat) -> FormatBoundLogTransformer:
        return FormatBoundLogTransformer.create(
            input_format, lambda entry: func(entry, output_format)
        )

    factory.__name__ = f"bind_{func.__name__}"
    return factory


# Layout name -> factory building its bound transformer
TRANSFORM_FUNCTIONS: dict[str, TransformerFactory] = {
    "space_delimited": _bind(to_unified_from_space_delimited),
    "pipe_delimited": _bind(to_unified_from_pipe_delimited),
}
