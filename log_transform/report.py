"""
Run summary for log-transform.

Aggregates ``LineResult`` objects into a small table with one row per
(source layout, status) pair::

    source_format    status       lines
    pipe_delimited   transformed      2
    space_delimited  transformed      5
    <unmatched>      problem          1

and writes it as CSV or Parquet.

CSV is written with ``utf-8-sig`` encoding (BOM) so that Excel opens it
with the right encoding; Parquet goes through pyarrow.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Literal

import pandas as pd

from log_transform.exceptions import ExportError
from log_transform.pipeline import LineResult

logger = logging.getLogger(__name__)

_SUPPORTED_FORMATS = {"csv", "parquet"}
SUMMARY_COLUMNS = ["source_format", "status", "lines"]


def summarize(results: Iterable[LineResult]) -> pd.DataFrame:
    """Count lines per source layout and status.

    Returns:
        DataFrame with columns ``source_format``, ``status``
        (``transformed`` | ``problem``) and ``lines``, sorted by source
        layout then status. Empty input yields an empty frame with the
        same columns.
    """
    records = [
        {"source_format": r.source_format, "status": "transformed" if r.ok else "problem"}
        for r in results
    ]
    if not records:
        return pd.DataFrame({
            "source_format": pd.Series([], dtype=object),
            "status": pd.Series([], dtype=object),
            "lines": pd.Series([], dtype="int64"),
        })

    df = pd.DataFrame.from_records(records)
    summary = (
        df.groupby(["source_format", "status"], sort=True)
        .size()
        .reset_index(name="lines")
    )
    return summary[SUMMARY_COLUMNS]


def export_summary(
    df: pd.DataFrame,
    path: str | Path,
    output_format: Literal["csv", "parquet"] = "csv",
) -> str:
    """Write the summary table to *path*.

    The parent directory is created if needed.

    Returns:
        The written path as a string.

    Raises:
        ExportError: If *output_format* is unsupported or writing fails.
    """
    if output_format not in _SUPPORTED_FORMATS:
        raise ExportError(
            f"Unsupported output format: '{output_format}'. "
            f"Supported formats: {sorted(_SUPPORTED_FORMATS)}"
        )

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        if output_format == "csv":
            df.to_csv(path, index=False, encoding="utf-8-sig")
        else:  # parquet
            df.to_parquet(path, index=False, engine="pyarrow")
    except Exception as exc:
        raise ExportError(f"Failed to write {path.name} as {output_format}: {exc}") from exc

    logger.info("Exported summary -> %s (%d rows)", path.name, len(df))
    return str(path)
