"""Small helpers shared by the formats and transforms sub-packages."""

from log_transform.utils.try_func import TryFunc

__all__ = ["TryFunc"]
