"""Reverse-dependency index over the manifest graph."""

from collections.abc import Iterable, Mapping

import networkx as nx

from dbtdoc.constants import NOT_USED_SENTINEL
from dbtdoc.manifest.models import NodeMetadata, is_model


class ReverseDependencyIndex:
    """Answers "which models depend on this node?".

    Backed by a directed graph with an edge ``dependency -> dependent`` for
    every ``depends_on.nodes`` entry declared by a model. Non-model nodes
    never contribute edges. Cycles are stored as-is. A dependency declared
    more than once by the same model is recorded once.
    """

    def __init__(self, graph: nx.DiGraph | None = None):
        self.graph = graph if graph is not None else nx.DiGraph()

    def add(self, dependency_id: str, dependent_id: str) -> None:
        self.graph.add_edge(dependency_id, dependent_id)

    def dependents(self, unique_id: str) -> list[str]:
        """Dependents of a node in insertion order; empty if none recorded."""
        if not self.graph.has_node(unique_id):
            return []
        return list(self.graph.successors(unique_id))

    def __contains__(self, unique_id: object) -> bool:
        return bool(self.dependents(unique_id)) if isinstance(unique_id, str) else False

    def __len__(self) -> int:
        return sum(1 for node in self.graph if self.graph.out_degree(node) > 0)

    def describe_dependents(self, unique_id: str) -> str:
        """Comma-joined dependents, or the "not used" sentinel."""
        dependents = self.dependents(unique_id)
        if not dependents:
            return NOT_USED_SENTINEL
        return ",".join(dependents)


def build_reverse_index(
    nodes: Mapping[str, NodeMetadata] | Iterable[NodeMetadata],
) -> ReverseDependencyIndex:
    """Build the reverse-dependency index for a set of manifest nodes.

    Args:
        nodes: Manifest nodes, either the ``unique_id -> node`` mapping or any
            iterable of nodes.

    Returns:
        Index holding one edge per declared dependency of each model node.
    """
    index = ReverseDependencyIndex()
    values = nodes.values() if isinstance(nodes, Mapping) else nodes

    for node in values:
        if not is_model(node.unique_id):
            continue
        for dependency_id in node.depends_on.nodes:
            index.add(dependency_id, node.unique_id)

    return index
