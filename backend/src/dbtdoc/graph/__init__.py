"""Manifest graph indexing and work selection."""

from dbtdoc.graph.index import ReverseDependencyIndex, build_reverse_index
from dbtdoc.graph.selection import (
    GenerationMode,
    Specific,
    Undocumented,
    select_nodes,
    should_document,
)

__all__ = [
    # Index
    "ReverseDependencyIndex",
    "build_reverse_index",
    # Selection
    "GenerationMode",
    "Specific",
    "Undocumented",
    "select_nodes",
    "should_document",
]
