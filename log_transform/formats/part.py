"""
Format parts: one named field of a line format.

A part knows its declared ``PartType``, how to turn the raw field text
into a value (``parser``) and how to render a value back to text
(``formatter``). Both conversions are hosted in ``TryFunc`` so a faulty
conversion only ever yields ``False``.

Parts carry no name; the name lives in the ``LogFormatPartSet`` so the
same part object can be reused under different names and in different
formats.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from log_transform.exceptions import InvalidArgumentError
from log_transform.models import PartType
from log_transform.utils.try_func import TryFunc


def _default_format(value: Any) -> str:
    return "" if value is None else str(value)


_DEFAULT_FORMATTER: TryFunc[Any, str] = TryFunc(_default_format)


@dataclass(frozen=True)
class LogFormatPart:
    """Declared type plus safe-invoked parser and formatter."""

    type: PartType
    parser: TryFunc[str | None, Any]
    formatter: TryFunc[Any, str] = _DEFAULT_FORMATTER

    def __post_init__(self) -> None:
        if not isinstance(self.type, PartType):
            raise InvalidArgumentError(f"Part type must be a PartType, got {self.type!r}.")
        if not isinstance(self.parser, TryFunc):
            raise InvalidArgumentError("Part parser must be wrapped in a TryFunc.")
        if not isinstance(self.formatter, TryFunc):
            raise InvalidArgumentError("Part formatter must be wrapped in a TryFunc.")

    @classmethod
    def create(
        cls,
        type: PartType,
        parser: Callable[[str | None], Any],
        formatter: Callable[[Any], str] | None = None,
    ) -> LogFormatPart:
        """Build a part from plain callables.

        When *formatter* is omitted, ``None`` renders as an empty string
        and everything else through ``str()``.
        """
        if parser is None:
            raise InvalidArgumentError("A part requires a parser.")
        return cls(
            type=type,
            parser=TryFunc(parser),
            formatter=_DEFAULT_FORMATTER if formatter is None else TryFunc(formatter),
        )
