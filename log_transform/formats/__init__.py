"""
Formats sub-package for log-transform.

Contains the line format strategies that turn a raw log line into a
``{part_name: value}`` dict and describe how to render it back.

Design: Strategy Pattern
- base.py defines the LogFormat ABC (separator, ordered parts, try_parse).
- part.py / part_set.py describe individual fields and their ordering.
- delimited.py implements DelimitedLogFormat (split on a character,
  optionally quote-aware).
- regex.py implements RegexLogFormat (named capture groups).

Formats compare and hash structurally, so two formats built from the same
description are interchangeable as dictionary keys.
"""

from log_transform.formats.base import LogFormat
from log_transform.formats.delimited import DelimitedLogFormat, split_quoted
from log_transform.formats.part import LogFormatPart
from log_transform.formats.part_set import LogFormatPartSet, LogFormatPartSetBuilder
from log_transform.formats.regex import RegexLogFormat

__all__ = [
    "DelimitedLogFormat",
    "LogFormat",
    "LogFormatPart",
    "LogFormatPartSet",
    "LogFormatPartSetBuilder",
    "RegexLogFormat",
    "split_quoted",
]
