"""
A transform function bound to the one input format it understands.

``FormatBoundLogTransformer.transform(entry)`` refuses entries whose
format is not structurally equal to the expected input format, so a
transform function never sees fields it was not written for.
"""

from __future__ import annotations

from typing import Callable

from log_transform.equality import describe_format
from log_transform.exceptions import (
    FormatMismatchError,
    InvalidArgumentError,
    TransformFailedError,
)
from log_transform.formats.base import LogFormat
from log_transform.models import LogEntry

TransformFunc = Callable[[LogEntry], LogEntry]


class FormatBoundLogTransformer:
    """Pure ``LogEntry -> LogEntry`` function tied to an expected input format.

    Build instances with ``create()``.
    """

    __slots__ = ("_expected_input_format", "_func")

    def __init__(self, expected_input_format: LogFormat, func: TransformFunc) -> None:
        self._expected_input_format = expected_input_format
        self._func = func

    @classmethod
    def create(cls, expected_input_format: LogFormat, func: TransformFunc) -> FormatBoundLogTransformer:
        if expected_input_format is None:
            raise InvalidArgumentError("expected_input_format must not be None.")
        if func is None or not callable(func):
            raise InvalidArgumentError("A transformer requires a callable transform function.")
        return cls(expected_input_format, func)

    @property
    def expected_input_format(self) -> LogFormat:
        return self._expected_input_format

    def transform(self, entry: LogEntry) -> LogEntry:
        """Apply the bound function to *entry*.

        Raises:
            FormatMismatchError: If the entry's format is not the expected one.
            TransformFailedError: If the function returns ``None``.
            Exception: Anything the bound function itself raises.
        """
        if entry.format != self._expected_input_format:
            raise FormatMismatchError(
                f"Input LogEntry has format {describe_format(entry.format)}, "
                f"but expected {describe_format(self._expected_input_format)}.",
                expected=self._expected_input_format,
                actual=entry.format,
            )
        result = self._func(entry)
        if result is None:
            raise TransformFailedError("Transform function returned no entry.")
        return result

    def __repr__(self) -> str:
        name = getattr(self._func, "__qualname__", repr(self._func))
        return f"FormatBoundLogTransformer({name} for {self._expected_input_format!r})"
