"""
Layout loader for log-transform.

Loads layout YAML files from log_transform/layouts/ and turns them into
format objects. Each layout defines:
- name: unique identifier (e.g., "space_delimited")
- kind: parsing strategy (delimited | regex)
- separator: field separator / output join character
- quoted: quote-aware splitting (delimited only)
- pattern: regular expression with one named group per part (regex only)
- parts: ordered list of {name, type, parser, formatter}

Parser and formatter specs are resolved by ``log_transform.converters``.

Why YAML instead of hardcoded:
- New line formats can be added by dropping a YAML file, no code changes.
- Field order, separators and date formats are easy to edit when a log
  source changes its layout.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from log_transform.converters import resolve_formatter, resolve_parser
from log_transform.exceptions import ConfigValidationError, LogTransformError
from log_transform.formats.base import LogFormat
from log_transform.formats.delimited import DelimitedLogFormat
from log_transform.formats.part_set import LogFormatPartSetBuilder
from log_transform.formats.regex import RegexLogFormat
from log_transform.models import PartType

logger = logging.getLogger(__name__)

# Directory containing layout YAML files (sibling package)
_LAYOUTS_DIR = Path(__file__).parent / "layouts"


class LayoutPart(BaseModel):
    """One field of a layout."""
    name: str = Field(..., min_length=1)
    type: PartType = PartType.TEXT
    parser: str = "raw"
    formatter: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: object) -> object:
        # YAML authors write DATETIME or datetime; PartType values are lower-case
        if isinstance(value, str):
            return value.strip().lower()
        return value


class Layout(BaseModel):
    """A complete layout definition loaded from YAML."""
    name: str = Field(..., min_length=1)
    description: str = ""
    kind: Literal["delimited", "regex"] = "delimited"
    separator: str = Field(..., min_length=1, max_length=1)
    quoted: bool = False
    pattern: str | None = None
    parts: list[LayoutPart] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_kind_settings(self) -> Layout:
        names = [p.name for p in self.parts]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Layout '{self.name}' has duplicate part names: {duplicates}")
        if self.kind == "regex" and not self.pattern:
            raise ValueError(f"Regex layout '{self.name}' requires a pattern.")
        if self.kind == "delimited" and self.pattern:
            raise ValueError(f"Delimited layout '{self.name}' must not define a pattern.")
        return self


def build_format(layout: Layout) -> LogFormat:
    """Create the format object described by *layout*.

    Raises:
        ConfigValidationError: If a converter spec is unknown or the
            format itself rejects the definition (e.g., regex groups do
            not match the part names).
    """
    builder = LogFormatPartSetBuilder()
    for part in layout.parts:
        builder.add_part(
            part.name,
            part.type,
            resolve_parser(part.parser),
            resolve_formatter(part.formatter),
        )
    try:
        part_set = builder.build()
        if layout.kind == "regex":
            return RegexLogFormat(layout.separator, layout.pattern, part_set)  # type: ignore[arg-type]
        return DelimitedLogFormat(layout.separator, part_set, quoted=layout.quoted)
    except LogTransformError as exc:
        raise ConfigValidationError(f"Layout '{layout.name}' is invalid: {exc}") from exc


def load_layout(path: Path) -> Layout:
    """Load and validate a single layout YAML file.

    Raises:
        ConfigValidationError: If the file is empty or fails validation.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Layout file is empty: {path}")
    try:
        return Layout.model_validate(raw)
    except ValidationError as exc:
        raise ConfigValidationError(f"Invalid layout file {path}: {exc}") from exc


def load_all_layouts(layouts_dir: Path | None = None) -> dict[str, Layout]:
    """Load all layout YAML files, keyed by layout name.

    Files that fail to load are logged and skipped. When two files declare
    the same name, the first one (in sorted file order) wins.

    Args:
        layouts_dir: Directory to scan for .yaml files. Defaults to
            the built-in layouts/ directory.
    """
    layouts_dir = Path(layouts_dir) if layouts_dir else _LAYOUTS_DIR
    layouts: dict[str, Layout] = {}
    for yaml_path in sorted(layouts_dir.glob("*.yaml")):
        try:
            layout = load_layout(yaml_path)
        except (ConfigValidationError, OSError, yaml.YAMLError) as e:
            logger.warning("Failed to load layout from %s: %s", yaml_path, e)
            continue
        if layout.name in layouts:
            logger.warning("Duplicate layout name '%s' in %s, ignored", layout.name, yaml_path)
            continue
        layouts[layout.name] = layout
        logger.debug("Loaded layout: %s from %s", layout.name, yaml_path)
    logger.info("Loaded %d layouts", len(layouts))
    return layouts


def get_layout(name: str, layouts: dict[str, Layout]) -> Layout:
    try:
        return layouts[name]
    except KeyError:
        raise ConfigValidationError(
            f"Unknown layout '{name}'. Available layouts: {sorted(layouts)}"
        ) from None
