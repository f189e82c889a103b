"""
Named converters for layout YAML files.

Layout files describe each part's parser and formatter with a short spec
string instead of Python code. A spec is ``name`` or ``name:argument``;
everything after the first colon is the argument, so strftime formats
with colons work unchanged (``datetime:%H:%M:%S.%f``).

Parsers (raw field text -> value):
  raw                 identity
  strip / lstrip      whitespace trimming
  int / float         numeric conversion after trimming
  level               LogLevel, short or long form, any case
  datetime:<format>   datetime.strptime on the trimmed text, after a strict
                      width check: %d %m %H %M %S need two digits, %Y
                      four, and %<n>f exactly n fraction digits (plain
                      %f takes one to six)

Formatters (value -> text):
  str                 None -> "", else str(value)
  default:<token>     None -> token, else str(value)
  date:<format>       datetime.strftime
  time:<n>            HH:MM:SS plus up to n fractional digits, trailing
                      zeros dropped (".5230" -> ".523", ".0000" -> "")
  level_short         LogLevel -> INFO / WARN / ...
  level_long          LogLevel -> INFORMATION / WARNING / ...

Unknown names raise ``ConfigValidationError``.
"""

from __future__ import annotations

import re
from datetime import datetime
from functools import partial
from typing import Any, Callable

from log_transform.exceptions import ConfigValidationError
from log_transform.levels import LogLevel, level_from_string, level_to_string

Parser = Callable[[Any], Any]
Formatter = Callable[[Any], str]


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

def _raw(value: str) -> str:
    if value is None:
        raise ValueError("value is missing")
    return value


def _strip(value: str) -> str:
    return _raw(value).strip()


def _lstrip(value: str) -> str:
    return _raw(value).lstrip()


def _int(value: str) -> int:
    return int(_strip(value))


def _float(value: str) -> float:
    return float(_strip(value))


def _level(value: str) -> LogLevel:
    return level_from_string(_raw(value))


# Numeric directives and the exact digit count they must have in the input
_FIXED_WIDTH = {"d": 2, "m": 2, "y": 2, "Y": 4, "H": 2, "I": 2, "M": 2, "S": 2, "j": 3}
_DIRECTIVE = re.compile(r"%(\d?)(.)")


def compile_datetime_format(fmt: str) -> tuple[re.Pattern[str], str]:
    """Translate a datetime spec into a strict shape regex and a strptime format.

    ``strptime`` alone is lenient: ``%d`` accepts ``1`` and ``%f`` takes
    one to six digits. The returned regex pins numeric directives to their
    full width, and ``%<n>f`` requires exactly *n* fraction digits.

    >>> shape, strptime_format = compile_datetime_format("%H:%M:%S.%3f")
    >>> strptime_format
    '%H:%M:%S.%f'
    >>> bool(shape.fullmatch("15:14:49.52"))
    False

    Raises:
        ConfigValidationError: On a width on anything but ``%f`` or a
            fraction width outside 1-6.
    """
    regex: list[str] = []
    out: list[str] = []
    pos = 0
    for match in _DIRECTIVE.finditer(fmt):
        literal = fmt[pos:match.start()]
        regex.append(re.escape(literal))
        out.append(literal)
        width, code = match.groups()
        if code == "f":
            if width and not 1 <= int(width) <= 6:
                raise ConfigValidationError(f"Fraction width must be 1-6, got %{width}f")
            regex.append(rf"[0-9]{{{width}}}" if width else r"[0-9]{1,6}")
            out.append("%f")
        elif width:
            raise ConfigValidationError(f"Only %f takes a digit count, got %{width}{code}")
        elif code in _FIXED_WIDTH:
            regex.append(rf"[0-9]{{{_FIXED_WIDTH[code]}}}")
            out.append(match.group(0))
        elif code == "%":
            regex.append("%")
            out.append("%%")
        else:
            regex.append(".+?")
            out.append(match.group(0))
        pos = match.end()
    regex.append(re.escape(fmt[pos:]))
    out.append(fmt[pos:])
    return re.compile("".join(regex)), "".join(out)


def _datetime(shape: re.Pattern[str], fmt: str, value: str) -> datetime:
    text = _strip(value)
    if not shape.fullmatch(text):
        raise ValueError(f"{text!r} does not have the expected shape")
    return datetime.strptime(text, fmt)


def _datetime_factory(arg: str) -> Parser:
    shape, fmt = compile_datetime_format(arg)
    return partial(_datetime, shape, fmt)


_PARSERS: dict[str, Parser] = {
    "raw": _raw,
    "strip": _strip,
    "lstrip": _lstrip,
    "int": _int,
    "float": _float,
    "level": _level,
}

_PARAM_PARSERS: dict[str, Callable[[str], Parser]] = {
    "datetime": _datetime_factory,
}


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _default(token: str, value: Any) -> str:
    return token if value is None else str(value)


def _date(fmt: str, value: datetime) -> str:
    if not isinstance(value, datetime):
        raise TypeError(f"expected datetime, got {type(value).__name__}")
    return value.strftime(fmt)


def format_time(value: datetime, digits: int = 4) -> str:
    """Render ``HH:MM:SS`` with at most *digits* significant fraction digits.

    >>> format_time(datetime(2025, 3, 10, 15, 14, 49, 523000))
    '15:14:49.523'
    """
    if not isinstance(value, datetime):
        raise TypeError(f"expected datetime, got {type(value).__name__}")
    fraction = f"{value.microsecond:06d}"[:digits].rstrip("0")
    text = value.strftime("%H:%M:%S")
    return f"{text}.{fraction}" if fraction else text


def _level_short(value: LogLevel) -> str:
    return level_to_string(value)


def _level_long(value: LogLevel) -> str:
    return level_to_string(value, long_variant=True)


_FORMATTERS: dict[str, Formatter] = {
    "str": _str,
    "level_short": _level_short,
    "level_long": _level_long,
}


def _time_factory(arg: str) -> Formatter:
    try:
        digits = int(arg)
    except ValueError:
        raise ConfigValidationError(f"time formatter needs an integer digit count, got {arg!r}") from None
    if not 0 <= digits <= 6:
        raise ConfigValidationError(f"time formatter digit count must be 0-6, got {digits}")
    return partial(format_time, digits=digits)


_PARAM_FORMATTERS: dict[str, Callable[[str], Formatter]] = {
    "default": lambda arg: partial(_default, arg),
    "date": lambda arg: partial(_date, arg),
    "time": _time_factory,
}


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def _split_spec(spec: str) -> tuple[str, str | None]:
    if not spec or not spec.strip():
        raise ConfigValidationError("Converter spec must be a non-empty string")
    name, sep, arg = spec.partition(":")
    return name.strip(), (arg if sep else None)


def _resolve(
    spec: str,
    kind: str,
    plain: dict[str, Callable[..., Any]],
    param: dict[str, Callable[[str], Callable[..., Any]]],
) -> Callable[..., Any]:
    name, arg = _split_spec(spec)
    if arg is None and name in plain:
        return plain[name]
    if arg is not None and name in param:
        return param[name](arg)
    if name in param:
        raise ConfigValidationError(f"{kind} '{name}' requires an argument (e.g. '{name}:...')")
    known = sorted(set(plain) | {f"{n}:<arg>" for n in param})
    raise ConfigValidationError(f"Unknown {kind} '{spec}'. Known: {known}")


def resolve_parser(spec: str) -> Parser:
    return _resolve(spec, "parser", _PARSERS, _PARAM_PARSERS)


def resolve_formatter(spec: str | None) -> Formatter:
    if spec is None:
        return _str
    return _resolve(spec, "formatter", _FORMATTERS, _PARAM_FORMATTERS)
