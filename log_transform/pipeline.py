"""
Line transformation pipeline for log-transform.

Wires the three stages together for one line at a time:

1. **LogParser**: raw text -> ``LogEntry`` in a source format.
2. **LogTransformer**: source entry -> entry in the unified output format.
3. **LogFormatter**: output entry -> text.

The pipeline is **stateless**: it holds only the immutable parser,
transformer and formatter, so one instance can serve any number of
lines (and threads). ``process()`` is fail-soft: a line that fails at any
stage is reported as a problem and processing continues with the next.

Build one with ``build_default_pipeline()``, ``from_config()`` or
``from_layouts()``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from log_transform.config import PipelineConfig, default_config
from log_transform.exceptions import ConfigValidationError, LogTransformError
from log_transform.formatting import LogFormatter
from log_transform.layout_registry import build_format, get_layout, load_all_layouts
from log_transform.parsing import LogParser
from log_transform.transforms.transform_map import LogTransformMapBuilder
from log_transform.transforms.transformer import LogTransformer
from log_transform.transforms.unified import TRANSFORM_FUNCTIONS, TransformerFactory

logger = logging.getLogger(__name__)

UNMATCHED = "<unmatched>"


@dataclass(frozen=True)
class LineResult:
    """Outcome of one line.

    Attributes:
        line: The input line without its trailing newline.
        output: Rendered output, or ``None`` when the line failed.
        source_format: Name of the input layout that parsed the line,
            or ``UNMATCHED`` when no layout accepted it.
    """

    line: str
    output: str | None
    source_format: str = UNMATCHED

    @property
    def ok(self) -> bool:
        return self.output is not None


@dataclass
class RunStats:
    """Counters for a processed batch of lines."""

    transformed: int = 0
    problems: int = 0

    def add(self, result: LineResult) -> None:
        if result.ok:
            self.transformed += 1
        else:
            self.problems += 1

    @property
    def total(self) -> int:
        return self.transformed + self.problems


class TransformPipeline:
    """Parse -> transform -> format, one line at a time."""

    def __init__(
        self,
        parser: LogParser,
        transformer: LogTransformer,
        formatter: LogFormatter | None = None,
        format_names: Sequence[str] | None = None,
    ) -> None:
        self.parser = parser
        self.transformer = transformer
        self.formatter = formatter or LogFormatter()
        # Parallel to parser.formats; used only for reporting
        names = list(format_names) if format_names else [
            f"format_{i + 1}" for i in range(len(parser.formats))
        ]
        self._format_names = names

    # -- Construction ---------------------------------------------------------

    @classmethod
    def from_layouts(
        cls,
        input_layouts: Sequence[str],
        output_layout: str,
        layouts_dir: str | Path | None = None,
        transform_functions: dict[str, TransformerFactory] | None = None,
    ) -> TransformPipeline:
        """Build a pipeline from layout names.

        Args:
            input_layouts: Input layout names, in parser order.
            output_layout: Layout name of the rendered output.
            layouts_dir: Directory of layout YAML files (built-in if None).
            transform_functions: Layout name -> transformer factory.
                Defaults to the built-in ``TRANSFORM_FUNCTIONS``.

        Raises:
            ConfigValidationError: If a layout is unknown or has no
                registered transform function.
        """
        functions = TRANSFORM_FUNCTIONS if transform_functions is None else transform_functions
        layouts = load_all_layouts(Path(layouts_dir) if layouts_dir else None)

        output_format = build_format(get_layout(output_layout, layouts))
        builder = LogTransformMapBuilder(output_format)
        input_formats = []
        for name in input_layouts:
            fmt = build_format(get_layout(name, layouts))
            factory = functions.get(name)
            if factory is None:
                raise ConfigValidationError(
                    f"No transform function registered for layout '{name}'. "
                    f"Registered: {sorted(functions)}"
                )
            try:
                builder.add(fmt, factory(fmt, output_format))
            except LogTransformError as exc:
                raise ConfigValidationError(f"Cannot register layout '{name}': {exc}") from exc
            input_formats.append(fmt)

        logger.info(
            "Built pipeline: %s -> %s", ", ".join(input_layouts), output_layout
        )
        return cls(
            parser=LogParser(input_formats),
            transformer=LogTransformer(builder.build()),
            format_names=list(input_layouts),
        )

    @classmethod
    def from_config(cls, config: PipelineConfig) -> TransformPipeline:
        return cls.from_layouts(
            config.input_layouts,
            config.output_layout,
            layouts_dir=config.layouts_dir,
        )

    # -- Per-line operations ----------------------------------------------------

    def transform_line(self, line: str) -> str:
        """Transform one line, raising the first stage error encountered.

        Raises:
            InvalidArgumentError: If *line* is empty.
            LogParseError: If no input format accepts the line.
            FormatNotRegisteredError / TransformFailedError: From the
                transform stage.
            FormatFailedError: If the output entry cannot be rendered.
        """
        entry = self.parser.parse(line)
        transformed = self.transformer.transform(entry)
        return self.formatter.format(transformed)

    def try_transform_line(self, line: str) -> tuple[bool, str | None]:
        try:
            return True, self.transform_line(line)
        except LogTransformError as exc:
            logger.debug("Line rejected: %s", exc)
            return False, None

    def process(self, lines: Iterable[str]) -> Iterator[LineResult]:
        """Transform each line, yielding a ``LineResult`` per input line.

        Trailing ``\\r``/``\\n`` are stripped first; a failing line never
        stops the iteration.
        """
        for raw in lines:
            line = raw.rstrip("\r\n")
            ok, entry = self.parser.try_parse(line)
            if not ok:
                yield LineResult(line, None)
                continue
            source = self._name_of(entry.format)  # type: ignore[union-attr]
            ok, transformed = self.transformer.try_transform(entry)
            if not ok:
                yield LineResult(line, None, source)
                continue
            ok, output = self.formatter.try_format(transformed)  # type: ignore[arg-type]
            yield LineResult(line, output if ok else None, source)

    def _name_of(self, fmt: object) -> str:
        for name, candidate in zip(self._format_names, self.parser.formats):
            if candidate == fmt:
                return name
        return UNMATCHED


def build_default_pipeline() -> TransformPipeline:
    """Pipeline for the built-in layouts: space and pipe input, tab output."""
    return TransformPipeline.from_config(default_config())
