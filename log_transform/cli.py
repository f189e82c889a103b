"""
Command-line entry point for log-transform.

Usage:
    log-transform INPUT OUTPUT PROBLEMS [--config logtransform.yaml]
                  [--summary summary.csv] [--summary-format csv|parquet]
                  [--log-level INFO]
    log-transform help

Every input line is transformed on its own. Lines that transform are
written to OUTPUT; lines that do not are copied unchanged to PROBLEMS and
processing continues. A missing input file or any other I/O error stops
the run with exit code 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from log_transform.config import load_config
from log_transform.exceptions import ConfigValidationError, ExportError
from log_transform.pipeline import LineResult, RunStats, TransformPipeline, build_default_pipeline
from log_transform.report import export_summary, summarize

logger = logging.getLogger(__name__)

INPUT_FORMAT_1_EXAMPLE = "10.03.2025 15:14:49.523 INFORMATION Program version: '3.4.0.48729'"
INPUT_FORMAT_2_EXAMPLE = (
    "2025-03-10 15:14:51.5882| INFO|11|MobileComputer.GetDeviceId| "
    "Device id: '@MINDEO-M40-D-410244015546'"
)
OUTPUT_FORMAT_1_EXAMPLE = "10-03-2025\t15:14:49.523\tINFO\tDEFAULT\tProgram version: '3.4.0.48729'"
OUTPUT_FORMAT_2_EXAMPLE = (
    "10-03-2025\t15:14:51.5882\tINFO\tMobileComputer.GetDeviceId\t"
    "Device id: '@MINDEO-M40-D-410244015546'"
)

_EPILOG = f"""\
supported input formats:
  format 1:  {INPUT_FORMAT_1_EXAMPLE}
  format 2:  {INPUT_FORMAT_2_EXAMPLE}

output format (tab-separated):
  for format 1:  {OUTPUT_FORMAT_1_EXAMPLE.expandtabs(2)}
  for format 2:  {OUTPUT_FORMAT_2_EXAMPLE.expandtabs(2)}

notes:
  * output and problem files are overwritten if they exist
  * invalid log lines are written to the problem file unchanged
  * processing stops on fatal errors (e.g., missing input file)

example:
  log-transform app.log transformed.log errors.log
"""


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="log-transform",
        description="Converts structured log files between formats.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", help="Path to the input log file to process")
    parser.add_argument("output", help="Path for successfully transformed lines")
    parser.add_argument("problems", help="Path for lines that failed to transform")
    parser.add_argument("--config", help="Pipeline config YAML (defaults to the built-in layouts)")
    parser.add_argument("--summary", help="Write a per-format line count summary to this path")
    parser.add_argument(
        "--summary-format", choices=["csv", "parquet"], default="csv",
        help="File format of --summary (default: csv)",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default=None,
        help="Logging level (default: from config, else WARNING)",
    )
    return parser


def perform_log_transformation(
    input_path: str | Path,
    output_path: str | Path,
    problems_path: str | Path,
    pipeline: TransformPipeline | None = None,
    summary_path: str | Path | None = None,
    summary_format: str = "csv",
) -> int:
    """Transform *input_path* line by line into the output and problem files.

    Returns:
        Process exit code: 0 on success, 1 on a fatal error.
    """
    input_path = Path(input_path)
    if not input_path.is_file():
        print(f"Input file not found: {input_path}", file=sys.stderr)
        return 1

    pipeline = pipeline or build_default_pipeline()
    stats = RunStats()
    results: list[LineResult] = []

    try:
        with open(input_path, "r", encoding="utf-8") as src, \
                open(output_path, "w", encoding="utf-8") as out, \
                open(problems_path, "w", encoding="utf-8") as problems:
            for result in pipeline.process(src):
                if result.ok:
                    out.write(result.output + "\n")  # type: ignore[operator]
                else:
                    problems.write(result.line + "\n")
                stats.add(result)
                if summary_path is not None:
                    results.append(result)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Failed to process logs: {exc}", file=sys.stderr)
        return 1

    logger.info(
        "Processed %d lines: %d transformed, %d problems",
        stats.total, stats.transformed, stats.problems,
    )

    if stats.transformed > 0:
        print(f'Processed {stats.transformed} log entries -> saved to "{output_path}"')
    else:
        print(f'No valid log entries found. Output file "{output_path}" may be empty.')
    if stats.problems > 0:
        print(f'Skipped {stats.problems} invalid log entries -> saved to "{problems_path}"')

    if summary_path is not None:
        try:
            export_summary(summarize(results), summary_path, summary_format)  # type: ignore[arg-type]
        except ExportError as exc:
            print(f"Failed to write summary: {exc}", file=sys.stderr)
            return 1

    return 0


def main(argv: Sequence[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = _build_arg_parser()

    if not argv or argv == ["help"]:
        parser.print_help()
        return 0

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else None
    except (FileNotFoundError, ConfigValidationError) as exc:
        print(f"Failed to load config: {exc}", file=sys.stderr)
        return 1

    level = args.log_level or (config.log_level if config else "WARNING")
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        pipeline = TransformPipeline.from_config(config) if config else build_default_pipeline()
    except ConfigValidationError as exc:
        print(f"Failed to build pipeline: {exc}", file=sys.stderr)
        return 1

    return perform_log_transformation(
        args.input,
        args.output,
        args.problems,
        pipeline=pipeline,
        summary_path=args.summary,
        summary_format=args.summary_format,
    )


if __name__ == "__main__":
    sys.exit(main())
