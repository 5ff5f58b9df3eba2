"""Choose which manifest nodes get documentation generated."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from dbtdoc.manifest.models import NodeMetadata, is_model


@dataclass(frozen=True)
class Undocumented:
    """Generate for every model whose description is empty."""


@dataclass(frozen=True)
class Specific:
    """Generate for the named models, overwriting existing descriptions."""

    names: frozenset[str]

    @classmethod
    def of(cls, names: Iterable[str]) -> "Specific":
        return cls(frozenset(name.strip() for name in names if name.strip()))


GenerationMode = Undocumented | Specific


def should_document(unique_id: str, node: NodeMetadata, mode: GenerationMode) -> bool:
    if not is_model(unique_id):
        return False
    if isinstance(mode, Specific):
        return node.name in mode.names
    return node.description == ""


def select_nodes(nodes: Mapping[str, NodeMetadata], mode: GenerationMode) -> list[NodeMetadata]:
    """Filter manifest nodes down to the generation work set.

    Explicitly named models are always regenerated; the default mode never
    touches a model that already has a description.
    """
    return [node for unique_id, node in nodes.items() if should_document(unique_id, node, mode)]
