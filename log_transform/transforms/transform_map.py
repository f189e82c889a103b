"""
Registry of per-input-format transformers sharing one output format.

Lookups are keyed by structural format equality: a format object built
separately from the one used at registration still finds its
transformer, as long as it describes the same structure.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from log_transform.equality import describe_format
from log_transform.exceptions import (
    DuplicateRegistrationError,
    FormatDefinitionError,
    FormatMismatchError,
    FormatNotRegisteredError,
    InvalidArgumentError,
)
from log_transform.formats.base import LogFormat
from log_transform.transforms.bound import FormatBoundLogTransformer

logger = logging.getLogger(__name__)


class LogTransformMap:
    """Immutable input format -> transformer registry.

    Usually built with ``LogTransformMapBuilder``.
    """

    __slots__ = ("_output_format", "_transformers")

    def __init__(
        self,
        output_format: LogFormat,
        transformers: Mapping[LogFormat, FormatBoundLogTransformer],
    ) -> None:
        if output_format is None:
            raise InvalidArgumentError("output_format must not be None.")
        if transformers is None:
            raise InvalidArgumentError("transformers must not be None.")
        if not transformers:
            raise FormatDefinitionError("At least one transformation must be registered.")
        self._output_format = output_format
        self._transformers = MappingProxyType(dict(transformers))

    @property
    def output_format(self) -> LogFormat:
        return self._output_format

    @property
    def input_formats(self) -> tuple[LogFormat, ...]:
        """Registered input formats in registration order."""
        return tuple(self._transformers)

    def try_get_transformer(
        self, input_format: LogFormat | None
    ) -> tuple[bool, FormatBoundLogTransformer | None]:
        if input_format is None:
            return False, None
        transformer = self._transformers.get(input_format)
        return transformer is not None, transformer

    def get_transformer(self, input_format: LogFormat) -> FormatBoundLogTransformer:
        ok, transformer = self.try_get_transformer(input_format)
        if not ok:
            raise FormatNotRegisteredError(
                f"No transformation registered for input format {describe_format(input_format)}."
            )
        return transformer  # type: ignore[return-value]

    def __contains__(self, input_format: object) -> bool:
        return input_format is not None and input_format in self._transformers

    def __len__(self) -> int:
        return len(self._transformers)

    def __repr__(self) -> str:
        return (
            f"LogTransformMap(output={self._output_format!r}, "
            f"inputs={len(self._transformers)})"
        )


class LogTransformMapBuilder:
    """Collects input format registrations for a shared output format."""

    def __init__(self, output_format: LogFormat) -> None:
        if output_format is None:
            raise InvalidArgumentError("output_format must not be None.")
        self._output_format = output_format
        self._transformers: dict[LogFormat, FormatBoundLogTransformer] = {}

    def add(
        self,
        input_format: LogFormat,
        transformer: FormatBoundLogTransformer,
    ) -> LogTransformMapBuilder:
        """Register *transformer* for *input_format*.

        Raises:
            InvalidArgumentError: If either argument is None.
            DuplicateRegistrationError: If an equal format is already registered.
            FormatMismatchError: If *transformer* is bound to another format.
        """
        if input_format is None:
            raise InvalidArgumentError("input_format must not be None.")
        if transformer is None:
            raise InvalidArgumentError("transformer must not be None.")
        if input_format in self._transformers:
            raise DuplicateRegistrationError(
                f"A transformation for input format {describe_format(input_format)} "
                "is already registered."
            )
        if transformer.expected_input_format != input_format:
            raise FormatMismatchError(
                f"Transformer is bound to {describe_format(transformer.expected_input_format)}, "
                f"cannot register it for {describe_format(input_format)}.",
                expected=input_format,
                actual=transformer.expected_input_format,
            )
        self._transformers[input_format] = transformer
        return self

    def build(self) -> LogTransformMap:
        if not self._transformers:
            raise FormatDefinitionError(
                "At least one transformation must be added before building the map."
            )
        logger.debug("Built transform map with %d input format(s)", len(self._transformers))
        return LogTransformMap(self._output_format, self._transformers)
