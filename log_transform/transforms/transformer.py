"""
Entry point of the transformation layer.

``LogTransformer`` looks up the transformer registered for an entry's
format and runs it. Faults raised by user transform functions are turned
into a generic ``TransformFailedError`` (``transform``) or a plain
``False`` (``try_transform``); their details are only logged at debug
level.
"""

from __future__ import annotations

import logging

from log_transform.equality import describe_format
from log_transform.exceptions import (
    FormatNotRegisteredError,
    InvalidArgumentError,
    TransformFailedError,
)
from log_transform.models import LogEntry
from log_transform.transforms.transform_map import LogTransformMap

logger = logging.getLogger(__name__)


class LogTransformer:
    """Converts entries of any registered input format into the map's output format."""

    def __init__(self, transform_map: LogTransformMap) -> None:
        if transform_map is None:
            raise InvalidArgumentError("transform_map must not be None.")
        self._transform_map = transform_map

    @property
    def transform_map(self) -> LogTransformMap:
        return self._transform_map

    def transform(self, entry: LogEntry) -> LogEntry:
        """Transform *entry*, raising on any failure.

        Raises:
            InvalidArgumentError: If *entry* is None.
            FormatNotRegisteredError: If the entry's format is not in the map.
            TransformFailedError: If the registered transform function fails.
        """
        if entry is None:
            raise InvalidArgumentError("entry must not be None.")
        if entry.format not in self._transform_map:
            raise FormatNotRegisteredError(
                f"Log entry format {describe_format(entry.format)} is not present "
                "in the transformation map."
            )
        ok, result = self.try_transform(entry)
        if not ok:
            raise TransformFailedError("Transformation failed unexpectedly.")
        return result  # type: ignore[return-value]

    def try_transform(self, entry: LogEntry | None) -> tuple[bool, LogEntry | None]:
        if entry is None:
            return False, None
        ok, transformer = self._transform_map.try_get_transformer(entry.format)
        if not ok:
            return False, None
        try:
            return True, transformer.transform(entry)  # type: ignore[union-attr]
        except Exception:
            logger.debug("Transform raised for %r", entry, exc_info=True)
            return False, None
