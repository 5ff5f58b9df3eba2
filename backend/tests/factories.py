"""Test data builders shared across test modules."""

import asyncio
import re

from dbtdoc.llm.client import GenerationError
from dbtdoc.manifest.models import NodeMetadata

PROJECT_NAME = "jaffle_shop"

SCHEMA_YML = """\
version: 2

models:
  - name: stg_orders
    description: Staged orders, one row per order.
    columns:
      - name: order_id
        description: Order key
  - name: fct_orders
    description: ""
    config:
      materialized: table
    columns:
      - name: order_id
        description: The primary key
        tests:
          - not_null
      - name: amount
"""


def make_node(
    name: str,
    resource_type: str = "model",
    description: str = "",
    depends_on: list[str] | None = None,
    columns: dict[str, str] | None = None,
    fqn: list[str] | None = None,
    patch_path: str | None = f"{PROJECT_NAME}://models/schema.yml",
    original_file_path: str | None = None,
    raw_code: str = "select 1",
) -> NodeMetadata:
    """Build a manifest node the way dbt would serialize it."""
    return NodeMetadata.model_validate(
        {
            "unique_id": f"{resource_type}.{PROJECT_NAME}.{name}",
            "name": name,
            "original_file_path": original_file_path or f"models/{name}.sql",
            "patch_path": patch_path,
            "raw_code": raw_code,
            "compiled_code": raw_code,
            "description": description,
            "fqn": fqn or [PROJECT_NAME, name],
            "refs": [],
            "columns": {
                key: {"name": key, "description": text} for key, text in (columns or {}).items()
            },
            "depends_on": {"nodes": depends_on or [], "macros": []},
        }
    )


def manifest_nodes(*nodes: NodeMetadata) -> dict[str, NodeMetadata]:
    return {node.unique_id: node for node in nodes}


class FakeGenerator:
    """Deterministic stand-in for the generation capability.

    Answers depend only on the prompt, so concurrent completion order does not
    change results. Tracks how many calls are in flight at once.
    """

    MODEL_RE = re.compile(r"^Model name: (.+)$", re.MULTILINE)
    COLUMN_RE = re.compile(r"^Column Name: (.+)$", re.MULTILINE)
    PARENT_RE = re.compile(r"^Parent Model name: (.+)$", re.MULTILINE)

    def __init__(self, delay: float = 0.0, fail_on: str | None = None):
        self.delay = delay
        self.fail_on = fail_on
        self.prompts: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if self.fail_on is not None and self.fail_on in prompt:
                raise GenerationError(f"Simulated failure for {self.fail_on}")
            column = self.COLUMN_RE.search(prompt)
            if column:
                parent = self.PARENT_RE.search(prompt)
                return f"Column {column.group(1)} of {parent.group(1) if parent else '?'}"
            model = self.MODEL_RE.search(prompt)
            return f"Docs for {model.group(1) if model else '?'}"
        finally:
            self.in_flight -= 1


