"""
Unit tests for layout YAML loading (log_transform.layout_registry).

Uses the built-in layouts/ directory plus small synthetic layout files
written to tmp_path.
"""

import logging

import pytest
import yaml
from pydantic import ValidationError

from log_transform.exceptions import ConfigValidationError
from log_transform.formats import DelimitedLogFormat, RegexLogFormat
from log_transform.layout_registry import (
    Layout,
    LayoutPart,
    build_format,
    get_layout,
    load_all_layouts,
    load_layout,
)
from log_transform.models import PartType


def _write_layout(path, **overrides):
    data = {
        "name": "tiny",
        "kind": "delimited",
        "separator": ",",
        "parts": [{"name": "a"}, {"name": "b", "type": "INTEGER", "parser": "int"}],
    }
    data.update(overrides)
    path.write_text(yaml.dump(data), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class TestLayoutModels:
    """Tests for LayoutPart / Layout validation."""

    def test_part_defaults(self):
        part = LayoutPart(name="message")
        assert part.type is PartType.TEXT
        assert part.parser == "raw"
        assert part.formatter is None

    def test_type_is_case_insensitive(self):
        assert LayoutPart(name="d", type="DATETIME").type is PartType.DATETIME

    def test_unknown_type(self):
        with pytest.raises(ValidationError):
            LayoutPart(name="d", type="timestamp")

    def test_separator_must_be_one_char(self):
        with pytest.raises(ValidationError):
            Layout(name="x", separator="||", parts=[LayoutPart(name="a")])

    def test_parts_required(self):
        with pytest.raises(ValidationError):
            Layout(name="x", separator="|", parts=[])

    def test_duplicate_part_names(self):
        with pytest.raises(ValidationError, match="duplicate part names"):
            Layout(name="x", separator="|", parts=[LayoutPart(name="a"), LayoutPart(name="a")])

    def test_regex_requires_pattern(self):
        with pytest.raises(ValidationError, match="requires a pattern"):
            Layout(name="x", kind="regex", separator=" ", parts=[LayoutPart(name="a")])

    def test_delimited_rejects_pattern(self):
        with pytest.raises(ValidationError, match="must not define a pattern"):
            Layout(name="x", separator=" ", pattern="(?P<a>.*)", parts=[LayoutPart(name="a")])


# ---------------------------------------------------------------------------
# build_format
# ---------------------------------------------------------------------------

class TestBuildFormat:
    """Tests for turning a Layout into a format object."""

    def test_delimited(self):
        layout = Layout(
            name="x", separator=",", quoted=True,
            parts=[LayoutPart(name="a"), LayoutPart(name="n", type="integer", parser="int")],
        )
        fmt = build_format(layout)
        assert isinstance(fmt, DelimitedLogFormat)
        assert fmt.quoted is True
        assert fmt.try_parse('"1,2", 3') == (True, {"a": "1,2", "n": 3})

    def test_regex(self):
        layout = Layout(
            name="x", kind="regex", separator=" ",
            pattern=r"(?P<level>\w+): (?P<message>.*)",
            parts=[LayoutPart(name="level", parser="level"), LayoutPart(name="message")],
        )
        fmt = build_format(layout)
        assert isinstance(fmt, RegexLogFormat)
        ok, values = fmt.try_parse("warning: low disk")
        assert ok
        assert values["message"] == "low disk"

    def test_regex_group_mismatch(self):
        layout = Layout(
            name="x", kind="regex", separator=" ",
            pattern=r"(?P<level>\w+)", parts=[LayoutPart(name="message")],
        )
        with pytest.raises(ConfigValidationError, match="Layout 'x' is invalid"):
            build_format(layout)

    def test_unknown_converter(self):
        layout = Layout(name="x", separator=",", parts=[LayoutPart(name="a", parser="nope")])
        with pytest.raises(ConfigValidationError, match="Unknown parser"):
            build_format(layout)

    def test_same_layout_builds_equal_formats(self):
        layout = Layout(name="x", separator=",", parts=[LayoutPart(name="a")])
        assert build_format(layout) == build_format(layout)


# ---------------------------------------------------------------------------
# File loading
# ---------------------------------------------------------------------------

class TestLoadLayouts:
    """Tests for load_layout / load_all_layouts / get_layout."""

    def test_builtin_layouts(self):
        layouts = load_all_layouts()
        assert {"space_delimited", "pipe_delimited", "unified_tab"} <= set(layouts)
        assert layouts["unified_tab"].separator == "\t"
        assert [p.name for p in layouts["pipe_delimited"].parts] == [
            "datetime", "level", "threadId", "callingMethod", "message",
        ]

    def test_builtin_layouts_build(self):
        for layout in load_all_layouts().values():
            build_format(layout)

    def test_load_layout(self, tmp_path):
        layout = load_layout(_write_layout(tmp_path / "tiny.yaml"))
        assert layout.name == "tiny"
        assert layout.parts[1].type is PartType.INTEGER

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigValidationError, match="empty"):
            load_layout(path)

    def test_invalid_file(self, tmp_path):
        path = _write_layout(tmp_path / "bad.yaml", separator="")
        with pytest.raises(ConfigValidationError, match="Invalid layout file"):
            load_layout(path)

    def test_bad_files_are_skipped(self, tmp_path, caplog):
        _write_layout(tmp_path / "a_good.yaml")
        _write_layout(tmp_path / "b_bad.yaml", name="other", parts=[])
        with caplog.at_level(logging.WARNING, logger="log_transform.layout_registry"):
            layouts = load_all_layouts(tmp_path)
        assert list(layouts) == ["tiny"]
        assert "b_bad.yaml" in caplog.text

    def test_duplicate_names_keep_first(self, tmp_path):
        _write_layout(tmp_path / "a.yaml", separator=",")
        _write_layout(tmp_path / "b.yaml", separator=";")
        layouts = load_all_layouts(tmp_path)
        assert layouts["tiny"].separator == ","

    def test_get_layout_unknown(self):
        with pytest.raises(ConfigValidationError, match="Unknown layout 'nope'"):
            get_layout("nope", load_all_layouts())
