# backend/src/dbtdoc/config.py
"""Configuration system for dbtdoc.

This module handles loading settings from environment variables and an
optional ``dbtdoc.ini`` at the dbt project root, providing defaults and
computing derived paths inside the project.
"""

from configparser import ConfigParser, Error as ConfigParserError
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional
import os

from dbtdoc.constants import (
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    MAX_TOKENS,
    REQUEST_TIMEOUT_SECONDS,
)


CONFIG_FILE_NAME = "dbtdoc.ini"


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# Schema: section -> key -> (type, default, min, max, description)
CONFIG_SCHEMA: dict[str, dict[str, tuple[type, Any, Any, Any, str]]] = {
    "llm": {
        "model": (str, DEFAULT_MODEL, None, None, "Model used with an API key"),
        "temperature": (float, DEFAULT_TEMPERATURE, 0.0, 2.0, "Sampling temperature"),
        "max_tokens": (int, MAX_TOKENS, 16, 32768, "Max response tokens"),
        "request_timeout": (
            float,
            REQUEST_TIMEOUT_SECONDS,
            1.0,
            3600.0,
            "Seconds before a call times out",
        ),
    },
    "paths": {
        "manifest": (str, "target/manifest.json", None, None, "Compiled dbt manifest"),
        "project_file": (str, "dbt_project.yml", None, None, "dbt project config"),
        "logs_dir": (str, ".dbtdoc-logs", None, None, "Query log directory name"),
    },
}


@dataclass(frozen=True)
class LLMConfig:
    """LLM request configuration."""

    model: str
    temperature: float
    max_tokens: int
    request_timeout: float


@dataclass(frozen=True)
class PathsConfig:
    """Paths relative to the dbt project root."""

    manifest: str
    project_file: str
    logs_dir: str


def _load_section(
    parser: ConfigParser, section: str, schema: dict[str, tuple[type, Any, Any, Any, str]]
) -> dict[str, Any]:
    """Load and validate a configuration section.

    Args:
        parser: ConfigParser instance with loaded config
        section: Section name to load
        schema: Schema definition for the section

    Returns:
        Dictionary of validated configuration values

    Raises:
        ConfigError: If validation fails
    """
    result = {}

    for key, (typ, default, min_val, max_val, _) in schema.items():
        if parser.has_option(section, key):
            raw_value = parser.get(section, key)
            value: int | float | str
            try:
                if typ is int:
                    value = int(raw_value)
                elif typ is float:
                    value = float(raw_value)
                else:
                    value = raw_value.strip()
            except ValueError as e:
                raise ConfigError(
                    f"Invalid value for [{section}].{key}: {raw_value!r} (expected {typ.__name__})"
                ) from e
        else:
            value = default

        if typ in (int, float):
            if min_val is not None and value < min_val:
                raise ConfigError(
                    f"Value for [{section}].{key} is {value}, but minimum is {min_val}"
                )
            if max_val is not None and value > max_val:
                raise ConfigError(
                    f"Value for [{section}].{key} is {value}, but maximum is {max_val}"
                )
        elif typ is str and not value:
            raise ConfigError(f"Value for [{section}].{key} must not be empty")

        result[key] = value

    return result


def _defaults(section: str) -> dict[str, Any]:
    return {key: default for key, (_, default, _, _, _) in CONFIG_SCHEMA[section].items()}


@dataclass(frozen=True)
class Config:
    """Complete run configuration for one dbt project."""

    project_root: Path
    llm: LLMConfig = None  # type: ignore[assignment]
    paths: PathsConfig = None  # type: ignore[assignment]

    def __post_init__(self):
        """Fill section configs with schema defaults if not provided."""
        if self.llm is None:
            object.__setattr__(self, "llm", LLMConfig(**_defaults("llm")))
        if self.paths is None:
            object.__setattr__(self, "paths", PathsConfig(**_defaults("paths")))

    @property
    def manifest_path(self) -> Path:
        """Path to the compiled manifest.json."""
        return self.project_root / self.paths.manifest

    @property
    def project_file_path(self) -> Path:
        """Path to dbt_project.yml."""
        return self.project_root / self.paths.project_file

    @property
    def llm_log_path(self) -> Path:
        """Path to the JSONL log of generation calls."""
        return self.project_root / self.paths.logs_dir / "llm-queries.jsonl"


def load_config(project_root: Path, config_path: Optional[Path] = None) -> Config:
    """Load configuration for a project from its INI file and environment.

    Args:
        project_root: dbt project root directory.
        config_path: Explicit INI path. Defaults to ``<project_root>/dbtdoc.ini``.

    Returns:
        Validated Config. A missing INI file means schema defaults.

    Raises:
        ConfigError: If a value has the wrong type or is out of range.
    """
    parser = ConfigParser()
    config_path = config_path or project_root / CONFIG_FILE_NAME

    if config_path.exists():
        try:
            parser.read(config_path)
        except ConfigParserError as e:
            raise ConfigError(f"Cannot parse {config_path}: {e}") from e

    llm_values = _load_section(parser, "llm", CONFIG_SCHEMA["llm"])
    paths_values = _load_section(parser, "paths", CONFIG_SCHEMA["paths"])

    model_override = os.getenv("DBTDOC_MODEL")
    if model_override:
        llm_values["model"] = model_override

    return Config(
        project_root=project_root,
        llm=LLMConfig(**llm_values),
        paths=PathsConfig(**paths_values),
    )

