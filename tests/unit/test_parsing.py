"""
Unit tests for the multi-format line parser (log_transform.parsing).
"""

import pytest

from log_transform.exceptions import InvalidArgumentError, LogParseError
from log_transform.formats import LogFormat
from log_transform.parsing import LogParser, truncate


class TestTruncate:
    """Tests for the error-message snippet helper."""

    def test_short_value_unchanged(self):
        assert truncate("abc") == "abc"

    def test_exact_limit_unchanged(self):
        value = "x" * 100
        assert truncate(value) == value

    def test_long_value_is_cut(self):
        value = "y" * 150
        result = truncate(value)
        assert len(result) == 100
        assert result == "y" * 97 + "..."

    def test_custom_limit(self):
        assert truncate("abcdef", 5) == "ab..."


class TestLogParser:
    """Tests for LogParser.parse() and try_parse()."""

    def test_requires_formats(self):
        with pytest.raises(InvalidArgumentError):
            LogParser(None)
        with pytest.raises(InvalidArgumentError):
            LogParser([])

    def test_formats_are_kept_in_order(self, make_delimited):
        first = make_delimited("|", ["a"])
        second = make_delimited(",", ["a"])
        assert LogParser([first, second]).formats == (first, second)

    def test_first_matching_format_wins(self, make_delimited):
        """Both formats accept the line; the first registered one is used."""
        first = make_delimited(",", ["whole"])
        second = make_delimited(",", ["a", "b"])
        entry = LogParser([first, second]).parse("1,2")
        assert entry.format is first
        assert entry.values == {"whole": "1,2"}

    def test_falls_through_to_later_format(self, make_delimited):
        first = make_delimited("|", ["a", "b"], parser=int)
        second = make_delimited("|", ["x", "y"])
        entry = LogParser([first, second]).parse("one|two")
        assert entry.format is second
        assert entry.get_string("x") == "one"

    def test_no_match_raises(self, make_delimited):
        parser = LogParser([make_delimited("|", ["a", "b"])])
        with pytest.raises(LogParseError, match="No registered format matches the input"):
            parser.parse("no separator")

    def test_error_message_truncates_line(self, make_delimited):
        parser = LogParser([make_delimited("|", ["a", "b"])])
        line = "z" * 150
        with pytest.raises(LogParseError) as exc_info:
            parser.parse(line)
        assert exc_info.value.snippet == "z" * 97 + "..."
        assert line not in str(exc_info.value)
        assert f'"{"z" * 97}..."' in str(exc_info.value)

    @pytest.mark.parametrize("line", ["", None])
    def test_empty_line_is_invalid(self, make_delimited, line):
        parser = LogParser([make_delimited("|", ["a"])])
        with pytest.raises(InvalidArgumentError):
            parser.parse(line)

    def test_try_parse(self, make_delimited):
        parser = LogParser([make_delimited("|", ["a", "b"])])
        ok, entry = parser.try_parse("1|2")
        assert ok
        assert entry.values == {"a": "1", "b": "2"}
        assert parser.try_parse("12") == (False, None)
        assert parser.try_parse("") == (False, None)

    def test_format_with_wrong_keys_is_skipped(self, make_part_set, make_delimited):
        """A custom format returning names outside its parts counts as no match."""

        class WrongKeyFormat(LogFormat):
            def try_parse(self, line):
                return True, {"unexpected": line}

            def _extra_equality_components(self):
                return ()

        broken = WrongKeyFormat("|", make_part_set(["a"]))
        fallback = make_delimited("|", ["a", "b"])
        parser = LogParser([broken, fallback])

        entry = parser.parse("1|2")
        assert entry.format is fallback
        assert LogParser([broken]).try_parse("1|2") == (False, None)
        with pytest.raises(LogParseError):
            LogParser([broken]).parse("1|2")
