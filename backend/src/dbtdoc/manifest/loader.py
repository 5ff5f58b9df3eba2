"""Readers for the compiled manifest and dbt_project.yml."""

import json
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from dbtdoc.manifest.models import Manifest

logger = logging.getLogger(__name__)


class LoadError(Exception):
    """Raised when the manifest or project config cannot be read or parsed."""

    pass


def load_manifest(path: Path) -> Manifest:
    """Read and validate ``target/manifest.json``.

    Args:
        path: Path to the manifest file.

    Returns:
        Parsed Manifest.

    Raises:
        LoadError: If the file is missing, is not JSON, or does not match the schema.
    """
    try:
        contents = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LoadError(
            f"Reading {path} failed. Please re-run from a dbt project with generated docs"
        ) from e

    try:
        manifest = Manifest.model_validate(json.loads(contents))
    except (json.JSONDecodeError, ValidationError) as e:
        raise LoadError(f"{path.name} deserialization failed: {e}") from e

    logger.debug(f"Loaded {len(manifest.nodes)} nodes from {path}")
    return manifest


def read_project_name(path: Path) -> str:
    """Return the ``name`` field of dbt_project.yml.

    Raises:
        LoadError: If the file is unreadable, malformed, or has no string name.
    """
    try:
        with open(path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except OSError as e:
        raise LoadError(
            f"Reading {path.name} failed. Please re-run from a dbt project root."
        ) from e
    except yaml.YAMLError as e:
        raise LoadError(f"{path.name} is not valid YAML: {e}") from e

    name = config.get("name") if isinstance(config, dict) else None
    if not isinstance(name, str) or not name:
        raise LoadError(f"{path.name} has no project name")
    return name
