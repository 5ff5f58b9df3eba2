"""End-to-end documentation run.

``prepare_run`` does everything that can fail before a single generation call
(manifest, project config, index, selection, prompts). ``execute_run`` generates,
groups results by schema file, patches, and writes back. Nothing is written
until every generation call has succeeded.
"""

import logging
from dataclasses import dataclass, field

from dbtdoc.config import Config
from dbtdoc.generation.orchestrator import GenerationJob, GenerationOrchestrator, build_jobs
from dbtdoc.graph.index import ReverseDependencyIndex, build_reverse_index
from dbtdoc.graph.selection import GenerationMode, select_nodes
from dbtdoc.llm.client import TextGenerator
from dbtdoc.manifest.loader import load_manifest, read_project_name
from dbtdoc.patching.engine import PatchEngine, group_by_document
from dbtdoc.writeback import OutputSink, PatchedDocument, WriteBackController

logger = logging.getLogger(__name__)


@dataclass
class RunPlan:
    """Loaded inputs and rendered jobs for one run."""

    config: Config
    project_name: str
    reverse_index: ReverseDependencyIndex
    jobs: list[GenerationJob] = field(default_factory=list)


@dataclass
class RunSummary:
    """What a run generated and patched."""

    models_generated: int = 0
    documents: list[PatchedDocument] = field(default_factory=list)

    @property
    def artifacts_written(self) -> int:
        return sum(len(document.artifacts) for document in self.documents)


def prepare_run(config: Config, mode: GenerationMode) -> RunPlan:
    """Load the project and build generation jobs.

    Raises:
        LoadError: If the manifest or project config is unreadable or malformed.
    """
    manifest = load_manifest(config.manifest_path)
    project_name = read_project_name(config.project_file_path)

    reverse_index = build_reverse_index(manifest.nodes)
    nodes = select_nodes(manifest.nodes, mode)
    logger.debug(
        f"Selected {len(nodes)} of {len(manifest.nodes)} nodes for project {project_name}"
    )

    return RunPlan(
        config=config,
        project_name=project_name,
        reverse_index=reverse_index,
        jobs=build_jobs(nodes, reverse_index),
    )


async def execute_run(
    plan: RunPlan,
    generator: TextGenerator,
    sink: OutputSink,
    progress_logger: logging.Logger | None = None,
) -> RunSummary:
    """Generate, patch and write back.

    Raises:
        GenerationError: If any generation call fails; nothing has been written.
        LoadError: If a schema file cannot be read or parsed.
        WriteError: If a write fails; earlier writes of this run stay on disk.
    """
    if not plan.jobs:
        logger.info("No models need documentation")
        return RunSummary()

    orchestrator = GenerationOrchestrator(generator, progress_logger=progress_logger)
    results = await orchestrator.run(plan.jobs)

    writer = WriteBackController(sink, progress_logger=progress_logger)
    engine = PatchEngine(plan.config.project_root, writer)

    documents = [
        engine.patch(path, group)
        for path, group in group_by_document(
            results, plan.config.project_root, plan.project_name
        )
    ]
    writer.write_documents(documents)

    return RunSummary(models_generated=len(results), documents=documents)
