"""
log-transform: structured log-line transformation pipeline.

Parses raw log lines against pluggable line formats, converts the
resulting entries into one unified format and renders them back to text.

Public API surface:

- ``build_pipeline(config_path=None)`` -- **recommended entry point**.
  Returns a ``TransformPipeline`` for the built-in layouts, or for the
  layouts named in a ``logtransform.yaml`` config.

- ``transform_line(line)`` -- one-off convenience using the default
  pipeline.

- The building blocks (``DelimitedLogFormat``, ``RegexLogFormat``,
  ``LogFormatPartSetBuilder``, ``LogParser``, ``LogTransformMapBuilder``,
  ``LogTransformer``, ``LogFormatter``) for custom pipelines.

Examples::

    import log_transform

    pipeline = log_transform.build_pipeline()
    pipeline.transform_line("10.03.2025 15:14:49.523 INFORMATION Started")
    # '10-03-2025\\t15:14:49.523\\tINFO\\tDEFAULT\\tStarted'
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from log_transform.config import PipelineConfig, load_config
from log_transform.formats import (
    DelimitedLogFormat,
    LogFormat,
    LogFormatPart,
    LogFormatPartSet,
    LogFormatPartSetBuilder,
    RegexLogFormat,
)
from log_transform.formatting import LogFormatter
from log_transform.models import LogEntry, PartType
from log_transform.parsing import LogParser
from log_transform.pipeline import TransformPipeline, build_default_pipeline
from log_transform.transforms import (
    FormatBoundLogTransformer,
    LogTransformer,
    LogTransformMap,
    LogTransformMapBuilder,
)
from log_transform.utils import TryFunc

__all__ = [
    "build_pipeline",
    "transform_line",
    "DelimitedLogFormat",
    "FormatBoundLogTransformer",
    "LogEntry",
    "LogFormat",
    "LogFormatPart",
    "LogFormatPartSet",
    "LogFormatPartSetBuilder",
    "LogFormatter",
    "LogParser",
    "LogTransformMap",
    "LogTransformMapBuilder",
    "LogTransformer",
    "PartType",
    "PipelineConfig",
    "RegexLogFormat",
    "TransformPipeline",
    "TryFunc",
]

logger = logging.getLogger(__name__)


def build_pipeline(config_path: str | Path | None = None) -> TransformPipeline:
    """Build a transformation pipeline.

    Args:
        config_path: Path to a pipeline config YAML. If ``None``, the
            built-in layouts are used (space- and pipe-delimited input,
            tab-separated output).

    Raises:
        FileNotFoundError: If *config_path* does not exist.
        ConfigValidationError: If the config or a referenced layout is invalid.
    """
    if config_path is None:
        return build_default_pipeline()
    logger.info("build_pipeline() -- config_path=%s", config_path)
    return TransformPipeline.from_config(load_config(config_path))


@lru_cache(maxsize=1)
def _default_pipeline() -> TransformPipeline:
    return build_default_pipeline()


def transform_line(line: str) -> str:
    """Transform one line with the default pipeline.

    Raises:
        LogTransformError: Subclasses from the parse, transform or format stage.
    """
    return _default_pipeline().transform_line(line)
