"""Typed YAML document tree for schema files.

Schema files are kept as PyYAML's representation graph (ScalarNode,
MappingNode, SequenceNode) instead of plain dicts. Key order, scalar styles
and untouched values therefore survive a load/serialize cycle; comments do not.
"""

import copy
from typing import TypeVar

import yaml
from yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

from dbtdoc.manifest.loader import LoadError

NodeT = TypeVar("NodeT", bound=Node)

STR_TAG = "tag:yaml.org,2002:str"

# Keeps long scalars on one line instead of re-wrapping them at 80 columns
SERIALIZE_WIDTH = 4096


class DocumentError(LoadError):
    """Raised when a schema file is not valid YAML."""

    pass


def mapping_get(node: Node | None, key: str) -> Node | None:
    """Value node stored under a plain-string key, or None."""
    if not isinstance(node, MappingNode):
        return None
    for key_node, value_node in node.value:
        if isinstance(key_node, ScalarNode) and key_node.value == key:
            return value_node
    return None


def scalar_value(node: Node | None) -> str | None:
    return node.value if isinstance(node, ScalarNode) else None


def mapping_scalar(node: Node | None, key: str) -> str | None:
    """Scalar string under ``key``; None when absent or not a scalar."""
    return scalar_value(mapping_get(node, key))


def sequence_items(node: Node | None) -> list[Node]:
    """Items of a sequence node; empty for anything else."""
    if not isinstance(node, SequenceNode):
        return []
    return list(node.value)


def mapping_items(node: Node | None) -> list[MappingNode]:
    """Mapping entries of a sequence node, skipping scalars and nested lists."""
    return [item for item in sequence_items(node) if isinstance(item, MappingNode)]


def set_scalar(mapping: MappingNode, key: str, value: str) -> None:
    """Set ``key`` to a string scalar.

    An existing key keeps its position; a missing key is appended.
    """
    new_value = ScalarNode(tag=STR_TAG, value=value)
    for i, (key_node, _) in enumerate(mapping.value):
        if isinstance(key_node, ScalarNode) and key_node.value == key:
            mapping.value[i] = (key_node, new_value)
            return
    mapping.value.append((ScalarNode(tag=STR_TAG, value=key), new_value))


def detach(parent: Node, child: NodeT) -> NodeT:
    """Replace ``child`` inside ``parent`` with a deep copy and return the copy.

    Composing shares one node object per anchor, so every alias of ``child``
    would see a mutation. The copy is private to ``parent``; the original stays
    wherever else it is referenced.
    """
    replacement = copy.deepcopy(child)
    if isinstance(parent, SequenceNode):
        parent.value = [replacement if item is child else item for item in parent.value]
    elif isinstance(parent, MappingNode):
        parent.value = [
            (key, replacement if value is child else value) for key, value in parent.value
        ]
    return replacement


class SchemaDocument:
    """A parsed schema file."""

    def __init__(self, root: Node | None, source: str = ""):
        self.root = root
        self.source = source

    @classmethod
    def parse(cls, text: str) -> "SchemaDocument":
        """Compose YAML text into a node tree.

        Raises:
            DocumentError: If the text is not valid YAML.
        """
        try:
            root = yaml.compose(text, Loader=yaml.SafeLoader)
        except yaml.YAMLError as e:
            raise DocumentError(f"Invalid YAML: {e}") from e
        return cls(root, text)

    def entries(self, key: str) -> list[MappingNode]:
        """Mapping items of the top-level sequence under ``key``."""
        return mapping_items(mapping_get(self.root, key))

    def detach_entry(self, key: str, entry: MappingNode) -> MappingNode:
        """Give ``entry`` of the sequence under ``key`` its own copy before mutation."""
        sequence = mapping_get(self.root, key)
        if sequence is None:
            return entry
        return detach(sequence, entry)

    def dump(self) -> str:
        """Serialize back to YAML text. An empty document is returned unchanged."""
        if self.root is None:
            return self.source
        return yaml.serialize(
            self.root,
            Dumper=yaml.SafeDumper,
            allow_unicode=True,
            width=SERIALIZE_WIDTH,
        )
