"""Write-back of generated artifacts and patched schema files.

Everything the run produces goes through an OutputSink: FileSink persists,
ConsoleSink renders the exact same text to stdout for dry runs.
"""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, TextIO

if TYPE_CHECKING:
    from dbtdoc.patching.artifacts import DocArtifact

logger = logging.getLogger(__name__)


class WriteError(Exception):
    """Raised when an artifact or schema file cannot be written."""

    pass


class OutputSink(Protocol):
    """Destination for rendered files."""

    def write(self, path: Path, content: str) -> None: ...


class FileSink:
    """Persists content at its path."""

    def write(self, path: Path, content: str) -> None:
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise WriteError(f"Could not write {path}: {e}") from e


class ConsoleSink:
    """Dry-run sink: prints content instead of writing it."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def write(self, path: Path, content: str) -> None:
        stream = self.stream or sys.stdout
        stream.write(content)
        if not content.endswith("\n"):
            stream.write("\n")
        stream.flush()


@dataclass
class PatchedDocument:
    """A schema file after patching, not yet written.

    Attributes:
        path: Resolved schema file path.
        content: Serialized YAML.
        models_patched: Model entries whose description now references a docs block.
        artifacts: Docs files produced while patching this document.
    """

    path: Path
    content: str
    models_patched: int = 0
    artifacts: list["DocArtifact"] = field(default_factory=list)


class WriteBackController:
    """Routes artifacts and documents to a sink with progress logging."""

    def __init__(self, sink: OutputSink, progress_logger: logging.Logger | None = None):
        self.sink = sink
        self.logger = progress_logger or logger

    def write_artifact(self, artifact: "DocArtifact") -> None:
        self.logger.info(f"Writing new docs to: {artifact.path}")
        self.sink.write(artifact.path, artifact.content)

    def write_document(self, document: PatchedDocument) -> None:
        self.logger.info(
            f"Adding description to {document.models_patched} models in {document.path}"
        )
        self.sink.write(document.path, document.content)

    def write_documents(self, documents: list[PatchedDocument]) -> None:
        for document in documents:
            self.write_document(document)
