"""
Shared test fixtures and sample lines for log-transform tests.

Sample log lines are defined here as module-level constants for easy
discovery; format factories are exposed as fixtures so tests can build
small synthetic formats inline.
"""

from __future__ import annotations

from typing import Any, Callable

import pytest

from log_transform.formats import (
    DelimitedLogFormat,
    LogFormatPart,
    LogFormatPartSet,
    RegexLogFormat,
)
from log_transform.models import PartType

# ---------------------------------------------------------------------------
# Sample lines -- one per supported input layout, plus expected output
# ---------------------------------------------------------------------------
FORMAT_1_LINE = "10.03.2025 15:14:49.523 INFORMATION Program version: '3.4.0.48729'"
FORMAT_1_OUTPUT = "10-03-2025\t15:14:49.523\tINFO\tDEFAULT\tProgram version: '3.4.0.48729'"

FORMAT_2_LINE = (
    "2025-03-10 15:14:51.5882| INFO|11|MobileComputer.GetDeviceId| "
    "Device id: '@MINDEO-M40-D-410244015546'"
)
FORMAT_2_OUTPUT = (
    "10-03-2025\t15:14:51.5882\tINFO\tMobileComputer.GetDeviceId\t"
    "Device id: '@MINDEO-M40-D-410244015546'"
)


def identity(value: Any) -> Any:
    return value


def fail(value: Any) -> Any:
    raise RuntimeError("conversion failed")


@pytest.fixture()
def make_part_set() -> Callable[..., LogFormatPartSet]:
    """Factory: ``make_part_set(["a", "b"], parser=..., types={...})``."""

    def _make(
        names: list[str],
        parser: Callable[[Any], Any] = identity,
        formatter: Callable[[Any], str] | None = None,
        types: dict[str, PartType] | None = None,
        overrides: dict[str, LogFormatPart] | None = None,
    ) -> LogFormatPartSet:
        types = types or {}
        overrides = overrides or {}
        parts = {
            name: overrides.get(name)
            or LogFormatPart.create(types.get(name, PartType.TEXT), parser, formatter)
            for name in names
        }
        return LogFormatPartSet(names, parts)

    return _make


@pytest.fixture()
def make_delimited(make_part_set) -> Callable[..., DelimitedLogFormat]:
    """Factory: ``make_delimited(",", ["a", "b"], quoted=False, ...)``."""

    def _make(separator: str, names: list[str], quoted: bool = False, **kwargs: Any) -> DelimitedLogFormat:
        return DelimitedLogFormat(separator, make_part_set(names, **kwargs), quoted=quoted)

    return _make


@pytest.fixture()
def make_regex(make_part_set) -> Callable[..., RegexLogFormat]:
    """Factory: ``make_regex(r"(?P<a>\\w+)", ["a"], ...)``."""

    def _make(pattern: str, names: list[str], separator: str = " ", **kwargs: Any) -> RegexLogFormat:
        return RegexLogFormat(separator, pattern, make_part_set(names, **kwargs))

    return _make


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (runs the full pipeline or the CLI)",
    )
