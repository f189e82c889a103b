"""
Log level vocabulary shared by the built-in layouts.

Source logs spell levels in a short or long form (``INFO`` /
``INFORMATION``, ``WARN`` / ``WARNING``), in any case and with stray
whitespace. They are normalized to ``LogLevel`` on parse and rendered in
the short form by the unified output layout.
"""

from __future__ import annotations

from enum import Enum


class LogLevel(Enum):
    INFO = "INFO"
    DEBUG = "DEBUG"
    WARN = "WARN"
    ERROR = "ERROR"


_ALIASES: dict[str, LogLevel] = {
    "INFO": LogLevel.INFO,
    "INFORMATION": LogLevel.INFO,
    "DEBUG": LogLevel.DEBUG,
    "WARN": LogLevel.WARN,
    "WARNING": LogLevel.WARN,
    "ERROR": LogLevel.ERROR,
}

_LONG_NAMES = {
    LogLevel.INFO: "INFORMATION",
    LogLevel.WARN: "WARNING",
}


def level_from_string(text: str) -> LogLevel:
    """Parse a level name, case-insensitively, in short or long form.

    Raises:
        ValueError: If *text* is empty or not a known level.
    """
    if not text or not text.strip():
        raise ValueError("Log level must be a non-empty string")
    key = text.strip().upper()
    try:
        return _ALIASES[key]
    except KeyError:
        raise ValueError(f'Invalid log level: "{key}"') from None


def level_to_string(level: LogLevel, long_variant: bool = False) -> str:
    if not isinstance(level, LogLevel):
        raise ValueError(f'Unsupported level: "{level}"')
    if long_variant:
        return _LONG_NAMES.get(level, level.value)
    return level.value
