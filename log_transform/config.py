"""
Configuration model and YAML I/O for log-transform.

``PipelineConfig`` maps 1:1 to a ``logtransform.yaml`` file::

    input_layouts:        # tried in this order for every line
      - space_delimited
      - pipe_delimited
    output_layout: unified_tab
    layouts_dir: null     # null -> built-in layouts
    log_level: INFO

Key functions:
- load_config(path) -> PipelineConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.
- default_config() -> PipelineConfig: The built-in two-input setup.

Why Pydantic + YAML:
- Pydantic gives strict validation and clear error messages.
- YAML is human-editable (users reorder or add input layouts).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from log_transform.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

DEFAULT_INPUT_LAYOUTS = ["space_delimited", "pipe_delimited"]
DEFAULT_OUTPUT_LAYOUT = "unified_tab"


class PipelineConfig(BaseModel):
    """Which layouts the pipeline parses and which one it renders."""

    input_layouts: list[str] = Field(
        default_factory=lambda: list(DEFAULT_INPUT_LAYOUTS),
        min_length=1,
        description="Input layout names, in the order the parser tries them",
    )
    output_layout: str = Field(
        DEFAULT_OUTPUT_LAYOUT, min_length=1, description="Layout name of the rendered output"
    )
    layouts_dir: str | None = Field(
        None, description="Directory of layout YAML files; None uses the built-in layouts"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @model_validator(mode="after")
    def check_unique_inputs(self) -> PipelineConfig:
        duplicates = sorted({n for n in self.input_layouts if self.input_layouts.count(n) > 1})
        if duplicates:
            raise ValueError(f"input_layouts lists a layout more than once: {duplicates}")
        return self


def default_config() -> PipelineConfig:
    return PipelineConfig()


def load_config(path: str | Path) -> PipelineConfig:
    """Load and validate a pipeline config YAML file.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty or fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    try:
        config = PipelineConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigValidationError(f"Invalid config file {path}: {exc}") from exc
    logger.info("Loaded config from %s", path)
    return config


def save_config(config: PipelineConfig, path: str | Path) -> None:
    """Serialize a PipelineConfig to YAML with a short header comment."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# log-transform configuration\n")
        f.write("# input_layouts are tried in order; the first match wins.\n\n")
        yaml.dump(data, f, allow_unicode=True, default_flow_style=False, sort_keys=False)
    logger.info("Saved config to %s", path)
