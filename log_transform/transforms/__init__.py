"""
Transforms sub-package for log-transform.

Maps a structured entry from its source format into one shared output
format.

Design: Registry Pattern
- bound.py: FormatBoundLogTransformer, a pure Entry -> Entry function
  tied to the single input format it accepts.
- transform_map.py: LogTransformMap (immutable registry keyed by
  structural format equality) and its builder.
- transformer.py: LogTransformer, which looks up and runs the right
  bound transformer and normalizes failures.
- unified.py: the built-in transforms into the unified tab layout.

Why a registry keyed by format:
- Adding an input layout means registering one more function; existing
  transforms are untouched.
- Each transform function only ever sees entries of its own format.
"""

from log_transform.transforms.bound import FormatBoundLogTransformer
from log_transform.transforms.transform_map import LogTransformMap, LogTransformMapBuilder
from log_transform.transforms.transformer import LogTransformer
from log_transform.transforms.unified import TRANSFORM_FUNCTIONS

__all__ = [
    "FormatBoundLogTransformer",
    "LogTransformMap",
    "LogTransformMapBuilder",
    "LogTransformer",
    "TRANSFORM_FUNCTIONS",
]
