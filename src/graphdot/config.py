"""Configuration management for graphdot using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".graphdot.json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class DefaultsConfig(BaseModel):
    """Default attribute statements applied by ``create_graph``."""
    graph_attrs: list[str] = Field(alias="graphAttrs", default_factory=lambda: [
        "layout = neato",
        "outputorder = edgesfirst"
    ])
    node_attrs: list[str] = Field(alias="nodeAttrs", default_factory=lambda: [
        "fontname = Helvetica",
        "fontsize = 10",
        "shape = circle",
        "fixedsize = true",
        "width = 0.5",
        "style = filled",
        "fillcolor = aliceblue",
        "color = gray70",
        "fontcolor = gray50"
    ])
    edge_attrs: list[str] = Field(alias="edgeAttrs", default_factory=lambda: [
        "len = 1.5",
        "color = gray40",
        "arrowsize = 0.5"
    ])

    model_config = ConfigDict(populate_by_name=True)


class RenderConfig(BaseModel):
    """DOT rendering configuration section."""
    directed: bool = True
    indent: str = "  "

    @field_validator("indent")
    @classmethod
    def validate_indent(cls, v):
        if v.strip():
            raise ValueError(f"indent must contain only whitespace, got: {v!r}")
        return v


class AdapterConfig(BaseModel):
    """Numeric attributes carried across the external graph adapter."""
    node_attrs: list[str] = Field(alias="nodeAttrs", default_factory=list)
    edge_attrs: list[str] = Field(alias="edgeAttrs", default_factory=lambda: ["weight"])

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    model_config = ConfigDict(use_enum_values=True)


class GraphdotConfig(BaseModel):
    """Complete graphdot configuration model."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    adapter: AdapterConfig = Field(default_factory=AdapterConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> GraphdotConfig:
    """Load configuration, falling back to defaults when no file exists.

    Args:
        config_path: Path to a JSON configuration file. When None,
                    ``.graphdot.json`` is searched upward from the working directory

    Raises:
        ValueError: If the file is not JSON or does not describe a valid configuration
    """
    path = Path(config_path) if config_path is not None else find_config_file()
    if path is None or not path.is_file():
        logger.debug("No configuration file found, using default attribute statements")
        return GraphdotConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {path}: {e}") from e

    try:
        config = GraphdotConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid graphdot configuration in {path}: {e}") from e

    logger.info(f"Loaded configuration from {path}")
    return config


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the nearest .graphdot.json in ``start_dir`` or its parents."""
    start = Path(start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


def configure_logging(config: GraphdotConfig) -> None:
    """Apply the configured level to the package logger."""
    logging.getLogger("graphdot").setLevel(_LEVELS[LogLevel(config.logging.level)])
