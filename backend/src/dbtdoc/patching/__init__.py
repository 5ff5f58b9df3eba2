"""Schema-file patching and docs artifacts."""

from dbtdoc.patching.artifacts import (
    DocArtifact,
    build_artifact,
    doc_identifier,
    doc_reference,
    render_docs_block,
)
from dbtdoc.patching.document import DocumentError, SchemaDocument
from dbtdoc.patching.engine import (
    PatchEngine,
    PatchTargetMissing,
    group_by_document,
    resolve_patch_path,
)

__all__ = [
    # Artifacts
    "DocArtifact",
    "build_artifact",
    "doc_identifier",
    "doc_reference",
    "render_docs_block",
    # Document tree
    "DocumentError",
    "SchemaDocument",
    # Engine
    "PatchEngine",
    "PatchTargetMissing",
    "group_by_document",
    "resolve_patch_path",
]
