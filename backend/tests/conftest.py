"""Shared fixtures: a fake generator and a compiled dbt project tree."""

import json
from pathlib import Path

import pytest

from factories import PROJECT_NAME, SCHEMA_YML, FakeGenerator, make_node, manifest_nodes
from dbtdoc.manifest.models import NodeMetadata


@pytest.fixture
def fake_generator():
    return FakeGenerator()


@pytest.fixture
def jaffle_nodes() -> dict[str, NodeMetadata]:
    """stg_orders (documented staging model), fct_orders (undocumented), a seed and a test."""
    return manifest_nodes(
        make_node(
            "stg_orders",
            description="Staged orders, one row per order.",
            depends_on=[f"seed.{PROJECT_NAME}.raw_orders"],
            columns={"order_id": "Order key"},
            fqn=[PROJECT_NAME, "staging", "stg_orders"],
            original_file_path="models/staging/stg_orders.sql",
        ),
        make_node(
            "fct_orders",
            depends_on=[f"model.{PROJECT_NAME}.stg_orders"],
            columns={"order_id": "The primary key", "amount": ""},
            raw_code="select order_id, sum(amount) as amount from {{ ref('stg_orders') }}",
        ),
        make_node("raw_orders", resource_type="seed", patch_path=None),
        make_node(
            "not_null_fct_orders_order_id",
            resource_type="test",
            depends_on=[f"model.{PROJECT_NAME}.fct_orders"],
            patch_path=None,
        ),
    )


@pytest.fixture
def dbt_project(tmp_path: Path, jaffle_nodes) -> Path:
    """A minimal compiled dbt project on disk."""
    project = tmp_path / PROJECT_NAME
    (project / "models" / "staging").mkdir(parents=True)
    (project / "target").mkdir()

    (project / "dbt_project.yml").write_text(f"name: {PROJECT_NAME}\nversion: '1.0.0'\n")
    (project / "models" / "schema.yml").write_text(SCHEMA_YML)
    fct_orders = jaffle_nodes[f"model.{PROJECT_NAME}.fct_orders"]
    (project / "models" / "fct_orders.sql").write_text(fct_orders.raw_code)

    manifest = {
        "metadata": {"dbt_version": "1.7.0"},
        "nodes": {
            unique_id: node.model_dump(mode="json") for unique_id, node in jaffle_nodes.items()
        },
        "sources": {},
    }
    (project / "target" / "manifest.json").write_text(json.dumps(manifest, indent=2))
    return project
