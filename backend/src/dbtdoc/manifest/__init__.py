"""Compiled manifest and project config readers."""

from dbtdoc.manifest.loader import LoadError, load_manifest, read_project_name
from dbtdoc.manifest.models import (
    ColumnMetadata,
    Depends,
    Manifest,
    NodeMetadata,
    is_model,
)

__all__ = [
    "ColumnMetadata",
    "Depends",
    "LoadError",
    "Manifest",
    "NodeMetadata",
    "is_model",
    "load_manifest",
    "read_project_name",
]
