"""
Unit tests for format parts and part sets (log_transform.formats.part,
log_transform.formats.part_set).
"""

import pytest

from log_transform.exceptions import (
    DuplicateRegistrationError,
    FormatDefinitionError,
    InvalidArgumentError,
)
from log_transform.formats import LogFormatPart, LogFormatPartSet, LogFormatPartSetBuilder
from log_transform.models import PartType
from log_transform.utils import TryFunc


def _text_part() -> LogFormatPart:
    return LogFormatPart.create(PartType.TEXT, str.strip)


# ---------------------------------------------------------------------------
# LogFormatPart
# ---------------------------------------------------------------------------

class TestLogFormatPart:
    """Tests for LogFormatPart.create() and the default formatter."""

    def test_create_wraps_callables(self):
        part = LogFormatPart.create(PartType.INTEGER, int, lambda v: f"#{v}")
        assert isinstance(part.parser, TryFunc)
        assert part.parser.try_invoke("7") == (True, 7)
        assert part.formatter.try_invoke(7) == (True, "#7")

    def test_default_formatter_renders_none_as_empty(self):
        part = _text_part()
        assert part.formatter.try_invoke(None) == (True, "")
        assert part.formatter.try_invoke(12) == (True, "12")

    def test_create_requires_parser(self):
        with pytest.raises(InvalidArgumentError):
            LogFormatPart.create(PartType.TEXT, None)

    def test_type_must_be_part_type(self):
        with pytest.raises(InvalidArgumentError):
            LogFormatPart("text", TryFunc(str))

    def test_parser_must_be_try_func(self):
        with pytest.raises(InvalidArgumentError):
            LogFormatPart(PartType.TEXT, str)

    def test_parts_are_frozen(self):
        part = _text_part()
        with pytest.raises(AttributeError):
            part.type = PartType.INTEGER


# ---------------------------------------------------------------------------
# LogFormatPartSet
# ---------------------------------------------------------------------------

class TestLogFormatPartSet:
    """Tests for LogFormatPartSet validation."""

    def test_keeps_name_order(self):
        part = _text_part()
        part_set = LogFormatPartSet(["b", "a"], {"a": part, "b": part})
        assert part_set.part_names == ("b", "a")
        assert list(part_set.parts) == ["b", "a"]
        assert len(part_set) == 2

    def test_empty_is_rejected(self):
        with pytest.raises(FormatDefinitionError):
            LogFormatPartSet([], {})

    def test_count_mismatch_is_rejected(self):
        part = _text_part()
        with pytest.raises(FormatDefinitionError, match="does not match"):
            LogFormatPartSet(["a"], {"a": part, "b": part})

    def test_name_missing_from_parts_is_rejected(self):
        with pytest.raises(FormatDefinitionError, match="'c'"):
            LogFormatPartSet(["a", "c"], {"a": _text_part(), "b": _text_part()})

    def test_duplicate_names_are_rejected(self):
        with pytest.raises(FormatDefinitionError, match="unique"):
            LogFormatPartSet(["a", "a"], {"a": _text_part()})

    def test_none_arguments_are_rejected(self):
        with pytest.raises(InvalidArgumentError):
            LogFormatPartSet(None, {})
        with pytest.raises(InvalidArgumentError):
            LogFormatPartSet(["a"], None)

    def test_parts_view_is_read_only(self):
        part_set = LogFormatPartSet(["a"], {"a": _text_part()})
        with pytest.raises(TypeError):
            part_set.parts["b"] = _text_part()

    def test_source_mapping_changes_are_not_visible(self):
        parts = {"a": _text_part()}
        part_set = LogFormatPartSet(["a"], parts)
        parts["a"] = LogFormatPart.create(PartType.INTEGER, int)
        assert part_set.parts["a"].type is PartType.TEXT


# ---------------------------------------------------------------------------
# LogFormatPartSetBuilder
# ---------------------------------------------------------------------------

class TestLogFormatPartSetBuilder:
    """Tests for the fluent part set builder."""

    def test_builds_in_insertion_order(self):
        part_set = (
            LogFormatPartSetBuilder()
            .add_part("date", PartType.DATETIME, str)
            .add_part("level", _text_part())
            .add_part("message", PartType.TEXT, str.strip)
            .build()
        )
        assert part_set.part_names == ("date", "level", "message")
        assert part_set.parts["date"].type is PartType.DATETIME

    def test_duplicate_name_is_rejected(self):
        builder = LogFormatPartSetBuilder().add_part("a", PartType.TEXT, str)
        with pytest.raises(
            DuplicateRegistrationError, match="A log part with name 'a' is already defined."
        ):
            builder.add_part("a", PartType.TEXT, str)

    def test_empty_name_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            LogFormatPartSetBuilder().add_part("", PartType.TEXT, str)

    def test_missing_part_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            LogFormatPartSetBuilder().add_part("a", None)

    def test_type_without_parser_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            LogFormatPartSetBuilder().add_part("a", PartType.TEXT)

    def test_build_without_parts_is_rejected(self):
        with pytest.raises(FormatDefinitionError):
            LogFormatPartSetBuilder().build()
