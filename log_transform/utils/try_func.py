"""
Exception-suppressing call wrapper.

Every user-supplied parser and formatter is hosted in a ``TryFunc`` so
that the rest of the library can treat arbitrary conversion code as a
plain ``(ok, value)`` contract instead of sprinkling ``try/except`` at
every call site.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from log_transform.exceptions import InvalidArgumentError

T = TypeVar("T")
R = TypeVar("R")


class TryFunc(Generic[T, R]):
    """Wraps a one-argument callable and reports failure as ``False``.

    Instances are stateless and can be shared across formats and threads.
    """

    __slots__ = ("_func",)

    def __init__(self, func: Callable[[T], R]) -> None:
        if func is None or not callable(func):
            raise InvalidArgumentError("TryFunc requires a callable.")
        self._func = func

    @property
    def func(self) -> Callable[[T], R]:
        return self._func

    def try_invoke(self, value: T) -> tuple[bool, R | None]:
        """Call the wrapped function.

        Returns:
            ``(True, result)`` when the call returns normally, otherwise
            ``(False, None)``. Exceptions never escape.
        """
        try:
            return True, self._func(value)
        except Exception:
            return False, None

    def __call__(self, value: T) -> R:
        return self._func(value)

    def __repr__(self) -> str:
        name = getattr(self._func, "__qualname__", repr(self._func))
        return f"TryFunc({name})"
