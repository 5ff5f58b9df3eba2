"""Prompt rendering and bounded-concurrency generation."""

from dbtdoc.generation.orchestrator import (
    GenerationJob,
    GenerationOrchestrator,
    GenerationResult,
    build_job,
    build_jobs,
)
from dbtdoc.generation.pool import WorkerPool
from dbtdoc.generation.prompts import get_column_prompt, get_model_prompt

__all__ = [
    "GenerationJob",
    "GenerationOrchestrator",
    "GenerationResult",
    "WorkerPool",
    "build_job",
    "build_jobs",
    "get_column_prompt",
    "get_model_prompt",
]
