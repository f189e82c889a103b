"""
Custom exception hierarchy for log-transform.

Callers can catch a specific failure (e.g., ``LogParseError`` vs
``FormatMismatchError``) or the whole family via ``LogTransformError``.
Where a failure has an obvious builtin analogue (a missing field is a
``KeyError``, a bad argument is a ``ValueError``) the class derives from
it as well, so generic ``except KeyError`` handlers keep working.

Field-level conversion failures (a part's parser or formatter raising)
never surface here: they are absorbed by ``TryFunc`` and only show up as
the aggregate failure of the enclosing parse or format call.
"""


class LogTransformError(Exception):
    """Base exception for all log-transform errors."""


class InvalidArgumentError(LogTransformError, ValueError):
    """Raised when a required input is missing or empty.

    For example, ``LogParser.parse("")`` or constructing a ``LogEntry``
    whose values do not line up with its format.
    """


class LogParseError(LogTransformError):
    """Raised when no candidate format accepts a log line.

    The message embeds a truncated snippet of the offending line, never
    the full line. The snippet is also available as ``snippet``.
    """

    def __init__(self, message: str, snippet: str = "") -> None:
        super().__init__(message)
        self.snippet = snippet


class FormatDefinitionError(LogTransformError, ValueError):
    """Raised when a format, part set or transform map is built incorrectly.

    This can happen if:
    - Part names and the parts mapping disagree.
    - A regex pattern's named groups differ from the part names.
    - A builder is asked to build with nothing registered.
    """


class MissingFieldError(LogTransformError, KeyError):
    """Raised when a part or entry value is looked up by an unknown name."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class PartTypeMismatchError(LogTransformError, TypeError):
    """Raised when a typed accessor is used on a part of another declared type."""


class BadCastError(LogTransformError, TypeError):
    """Raised when a stored value is not an instance of the requested type."""


class FormatMismatchError(LogTransformError, ValueError):
    """Raised when an entry's format differs from the one a transformer expects.

    Both formats are kept on the exception as ``expected`` and ``actual``.
    """

    def __init__(self, message: str, expected: object = None, actual: object = None) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class FormatNotRegisteredError(LogTransformError, KeyError):
    """Raised when an entry's format has no transformer in the transform map."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class DuplicateRegistrationError(LogTransformError, ValueError):
    """Raised when a builder receives the same part name or input format twice."""


class TransformFailedError(LogTransformError):
    """Raised when a registered transform function fails.

    The message is generic; the underlying fault is not
    attached.
    """


class FormatFailedError(LogTransformError):
    """Raised when one or more part formatters fail while rendering an entry."""


class ConfigValidationError(LogTransformError):
    """Raised when a pipeline config or a layout YAML file fails validation.

    This can happen if:
    - Required fields are missing or have wrong types.
    - A layout references an unknown converter.
    - The config names a layout that does not exist.
    """


class ExportError(LogTransformError):
    """Raised when the summary exporter fails to write its output file."""
