"""Patch engine: point schema-file descriptions at generated docs blocks."""

import logging
from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

from dbtdoc.constants import (
    COLUMNS_KEY,
    DESCRIPTION_KEY,
    MODELS_KEY,
    NAME_KEY,
    PATCH_PATH_SCHEME,
)
from dbtdoc.generation.orchestrator import GenerationResult
from dbtdoc.manifest.loader import LoadError
from dbtdoc.patching.artifacts import DocArtifact, build_artifact, doc_identifier
from dbtdoc.patching.document import (
    SchemaDocument,
    mapping_get,
    mapping_items,
    mapping_scalar,
    set_scalar,
)
from dbtdoc.writeback import PatchedDocument, WriteBackController

logger = logging.getLogger(__name__)


class PatchTargetMissing(Exception):
    """A result has no schema file in this project to patch. Always skipped."""

    pass


def resolve_patch_path(project_root: Path, project_name: str, patch_path: str | None) -> Path:
    """Turn a manifest ``patch_path`` into a file path under the project root.

    ``jaffle_shop://models/schema.yml`` resolves to
    ``<project_root>/models/schema.yml`` for project ``jaffle_shop``.

    Raises:
        PatchTargetMissing: If there is no patch path, or it belongs to another
            package.
    """
    if not patch_path:
        raise PatchTargetMissing("Node has no patch document")

    prefix = project_name + PATCH_PATH_SCHEME
    if patch_path.startswith(prefix):
        relative = patch_path[len(prefix) :]
    elif PATCH_PATH_SCHEME in patch_path:
        raise PatchTargetMissing(f"{patch_path} belongs to another package")
    else:
        relative = patch_path
    return project_root / relative


def group_by_document(
    results: Iterable[GenerationResult], project_root: Path, project_name: str
) -> list[tuple[Path, list[GenerationResult]]]:
    """Group results by resolved schema file, in sorted path order.

    Results without a patchable schema file are dropped.
    """
    groups: dict[Path, list[GenerationResult]] = defaultdict(list)
    for result in results:
        try:
            path = resolve_patch_path(project_root, project_name, result.patch_path)
        except PatchTargetMissing as e:
            logger.debug(f"Skipping {result.name}: {e}")
            continue
        groups[path].append(result)
    return sorted(groups.items(), key=lambda item: str(item[0]))


class PatchEngine:
    """Writes docs artifacts and rewrites descriptions in one schema file at a time."""

    def __init__(self, project_root: Path, writer: WriteBackController):
        """Initialize the engine.

        Args:
            project_root: dbt project root; artifacts are placed relative to it.
            writer: Write-back controller; artifacts are written through it
                before the document is mutated.
        """
        self.project_root = project_root
        self.writer = writer

    def patch(self, path: Path, results: Iterable[GenerationResult]) -> PatchedDocument:
        """Patch every model entry in ``path`` that has a generation result.

        Entries without a result, and columns without generated text, are left
        exactly as they were.

        Args:
            path: Resolved schema file.
            results: Generation results belonging to this file.

        Returns:
            The serialized document plus the artifacts written for it.

        Raises:
            LoadError: If the schema file cannot be read or parsed.
            WriteError: If an artifact cannot be written.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise LoadError(f"Could not read schema file {path}: {e}") from e

        document = SchemaDocument.parse(text)
        by_name = {result.name: result for result in results}
        artifacts: list[DocArtifact] = []
        patched = 0

        for entry in document.entries(MODELS_KEY):
            result = by_name.get(mapping_scalar(entry, NAME_KEY) or "")
            if result is None:
                continue
            entry = document.detach_entry(MODELS_KEY, entry)

            model_artifact = build_artifact(
                self.project_root,
                result.original_file_path,
                doc_identifier(result.name),
                result.summary,
            )
            self.writer.write_artifact(model_artifact)
            artifacts.append(model_artifact)

            for column in mapping_items(mapping_get(entry, COLUMNS_KEY)):
                column_name = mapping_scalar(column, NAME_KEY)
                if column_name is None or column_name not in result.column_summaries:
                    continue
                column_artifact = build_artifact(
                    self.project_root,
                    result.original_file_path,
                    doc_identifier(result.name, column_name),
                    result.column_summaries[column_name],
                )
                self.writer.write_artifact(column_artifact)
                artifacts.append(column_artifact)
                set_scalar(column, DESCRIPTION_KEY, column_artifact.reference)

            set_scalar(entry, DESCRIPTION_KEY, model_artifact.reference)
            patched += 1

        return PatchedDocument(
            path=path,
            content=document.dump(),
            models_patched=patched,
            artifacts=artifacts,
        )
