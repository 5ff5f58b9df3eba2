# backend/src/dbtdoc/generation/orchestrator.py
"""Generation orchestrator.

Fans model jobs out over a fixed-size worker pool and gathers every result
before anything downstream runs:

1. Each selected model becomes a GenerationJob holding its rendered prompts.
2. At most PARALLEL_LIMIT jobs run at once. A job generates the model
   summary, then all of its undocumented columns concurrently.
3. The first GenerationError cancels the batch and propagates.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from dbtdoc.constants import COLUMN_PREFIX, PARALLEL_LIMIT, SUMMARY_DISCLAIMER
from dbtdoc.generation.pool import WorkerPool
from dbtdoc.generation.prompts import get_column_prompt, get_model_prompt
from dbtdoc.graph.index import ReverseDependencyIndex
from dbtdoc.llm.client import TextGenerator
from dbtdoc.manifest.models import NodeMetadata

logger = logging.getLogger(__name__)


@dataclass
class GenerationJob:
    """A model plus every prompt needed to document it.

    Attributes:
        node: Model being documented.
        prompt: Model-level prompt.
        column_prompts: Column key -> prompt, only for undocumented columns.
    """

    node: NodeMetadata
    prompt: str
    column_prompts: dict[str, str] = field(default_factory=dict)


@dataclass
class GenerationResult:
    """Generated text for one model, ready for patching.

    Attributes:
        name: Model name, matched against schema entries.
        unique_id: Manifest unique id.
        patch_path: Schema file reference owning the description, if any.
        original_file_path: Model SQL path relative to the project root.
        summary: Model documentation including the disclaimer line.
        column_summaries: Column key -> generated column documentation.
    """

    name: str
    unique_id: str
    patch_path: str | None
    original_file_path: str
    summary: str
    column_summaries: dict[str, str] = field(default_factory=dict)


def build_job(node: NodeMetadata, reverse_index: ReverseDependencyIndex) -> GenerationJob:
    """Render the model prompt and one prompt per undocumented column."""
    return GenerationJob(
        node=node,
        prompt=get_model_prompt(node, reverse_index),
        column_prompts={
            key: get_column_prompt(node, column)
            for key, column in node.undocumented_columns().items()
        },
    )


def build_jobs(
    nodes: Iterable[NodeMetadata], reverse_index: ReverseDependencyIndex
) -> list[GenerationJob]:
    return [build_job(node, reverse_index) for node in nodes]


class GenerationOrchestrator:
    """Runs generation jobs under a bounded worker pool."""

    def __init__(
        self,
        generator: TextGenerator,
        parallel_limit: int = PARALLEL_LIMIT,
        progress_logger: logging.Logger | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            generator: Generation capability shared by every job.
            parallel_limit: Maximum model jobs in flight.
            progress_logger: Logger for progress lines; defaults to this module's.
        """
        self.generator = generator
        self.pool = WorkerPool(parallel_limit)
        self._column_pool = WorkerPool(None)
        self.logger = progress_logger or logger

    async def run(self, jobs: Iterable[GenerationJob]) -> list[GenerationResult]:
        """Run every job and return results in job order.

        Raises:
            GenerationError: From the first failed call; remaining jobs are cancelled.
        """
        return await self.pool.map(self._run_job, list(jobs))

    async def _run_job(self, job: GenerationJob) -> GenerationResult:
        node = job.node
        self.logger.info(f"Generating docs for: {node.name}")

        summary = await self.generator.generate(job.prompt)
        column_summaries = await self._run_columns(job)

        return GenerationResult(
            name=node.name,
            unique_id=node.unique_id,
            patch_path=node.patch_path,
            original_file_path=node.original_file_path,
            summary=SUMMARY_DISCLAIMER + summary,
            column_summaries=column_summaries,
        )

    async def _run_columns(self, job: GenerationJob) -> dict[str, str]:
        async def generate_column(item: tuple[str, str]) -> tuple[str, str]:
            key, prompt = item
            text = await self.generator.generate(prompt)
            return key, COLUMN_PREFIX + text

        pairs = await self._column_pool.map(generate_column, job.column_prompts.items())
        return dict(pairs)
