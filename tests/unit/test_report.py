"""
Unit tests for the run summary (log_transform.report).
"""

import pandas as pd
import pytest

from log_transform.exceptions import ExportError
from log_transform.pipeline import UNMATCHED, LineResult, RunStats
from log_transform.report import SUMMARY_COLUMNS, export_summary, summarize


def _results():
    return [
        LineResult("a", "A", "space_delimited"),
        LineResult("b", "B", "space_delimited"),
        LineResult("c", "C", "pipe_delimited"),
        LineResult("d", None, "pipe_delimited"),
        LineResult("e", None),
    ]


class TestRunStats:
    """Tests for LineResult / RunStats counters."""

    def test_counts(self):
        stats = RunStats()
        for result in _results():
            stats.add(result)
        assert stats.transformed == 3
        assert stats.problems == 2
        assert stats.total == 5

    def test_line_result_defaults(self):
        result = LineResult("x", None)
        assert result.source_format == UNMATCHED
        assert not result.ok


class TestSummarize:
    """Tests for summarize()."""

    def test_groups_by_format_and_status(self):
        df = summarize(_results())
        assert list(df.columns) == SUMMARY_COLUMNS
        rows = {(r.source_format, r.status): r.lines for r in df.itertuples()}
        assert rows == {
            ("space_delimited", "transformed"): 2,
            ("pipe_delimited", "transformed"): 1,
            ("pipe_delimited", "problem"): 1,
            (UNMATCHED, "problem"): 1,
        }

    def test_empty_input(self):
        df = summarize([])
        assert list(df.columns) == SUMMARY_COLUMNS
        assert df.empty


class TestExportSummary:
    """Tests for export_summary()."""

    def test_csv(self, tmp_path):
        path = tmp_path / "out" / "summary.csv"
        written = export_summary(summarize(_results()), path)
        assert written == str(path)
        df = pd.read_csv(path, encoding="utf-8-sig")
        assert list(df.columns) == SUMMARY_COLUMNS
        assert df["lines"].sum() == 5

    def test_parquet(self, tmp_path):
        path = tmp_path / "summary.parquet"
        export_summary(summarize(_results()), path, "parquet")
        df = pd.read_parquet(path)
        assert df["lines"].sum() == 5

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(ExportError, match="Unsupported output format"):
            export_summary(summarize(_results()), tmp_path / "s.xlsx", "xlsx")
