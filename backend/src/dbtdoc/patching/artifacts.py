"""Stable identifiers and side-car docs files for generated content."""

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from dbtdoc.constants import (
    DOC_FILE_SUFFIX,
    DOC_ID_PREFIX,
    DOC_ID_SEPARATOR,
    DOC_REFERENCE,
    DOCS_CLOSE_MARKER,
    DOCS_OPEN_MARKER,
)


def doc_identifier(model_name: str, column_name: str | None = None) -> str:
    """Docs block name for a model, or for one of its columns.

    >>> doc_identifier("fct_orders")
    'generated-doc:fct_orders'
    >>> doc_identifier("fct_orders", "amount")
    'generated-doc:fct_orders:amount'
    """
    identifier = DOC_ID_PREFIX + model_name
    if column_name is not None:
        identifier += DOC_ID_SEPARATOR + column_name
    return identifier


def doc_reference(identifier: str) -> str:
    """Jinja expression that pulls a docs block into a description."""
    return DOC_REFERENCE.format(identifier=identifier)


def render_docs_block(identifier: str, body: str) -> str:
    return "\n".join([DOCS_OPEN_MARKER.format(identifier=identifier), body, DOCS_CLOSE_MARKER])


@dataclass(frozen=True)
class DocArtifact:
    """A generated docs block and where it lives on disk."""

    identifier: str
    body: str
    path: Path

    @property
    def content(self) -> str:
        return render_docs_block(self.identifier, self.body)

    @property
    def reference(self) -> str:
        return doc_reference(self.identifier)


def build_artifact(
    project_root: Path, original_file_path: str, identifier: str, body: str
) -> DocArtifact:
    """Place an artifact beside the model's SQL file.

    Args:
        project_root: dbt project root.
        original_file_path: Model path relative to the root (manifest value).
        identifier: Stable docs block name; also the file stem.
        body: Generated markdown.
    """
    directory = PurePosixPath(original_file_path).parent
    path = project_root / directory / f"{identifier}{DOC_FILE_SUFFIX}"
    return DocArtifact(identifier=identifier, body=body, path=path)
