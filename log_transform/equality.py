"""
Structural (value-based) equality for log formats.

Formats are used as dictionary keys in the transform map, and two
format objects built independently from the same description must find
the same entry. Equality and hashing are therefore computed over an
ordered component sequence rather than object identity:

1. the concrete format class,
2. the separator,
3. every part name, in order,
4. every part's declared type, in part order,
5. variant-specific extras (quoting flag, regex pattern text).

``LogFormat.__eq__`` / ``__hash__`` delegate here. The module-level
helpers also accept ``None`` so they can be used on optional values.
"""

from __future__ import annotations

from typing import Any, Iterator


def equality_components(fmt: Any) -> Iterator[Any]:
    """Yield the ordered components that define a format's identity."""
    yield type(fmt)
    yield fmt.separator
    names = tuple(fmt.part_names)
    yield from names
    for name in names:
        yield fmt[name].type
    extras = getattr(fmt, "_extra_equality_components", None)
    if extras is not None:
        yield from extras()


def equality_key(fmt: Any) -> tuple[Any, ...]:
    return tuple(equality_components(fmt))


def formats_equal(left: Any, right: Any) -> bool:
    if left is None or right is None:
        return left is right
    if left is right:
        return True
    return equality_key(left) == equality_key(right)


def format_hash(fmt: Any) -> int:
    if fmt is None:
        return 0
    return hash(equality_key(fmt))


def describe_format(fmt: Any) -> str:
    """Description for error messages: the format's ``repr``, or ``<none>``.

    >>> describe_format(None)
    '<none>'
    """
    if fmt is None:
        return "<none>"
    return repr(fmt)
