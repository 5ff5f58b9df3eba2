"""Tests for work selection."""

from hypothesis import given
from hypothesis import strategies as st

from factories import make_node, manifest_nodes
from dbtdoc.graph.selection import Specific, Undocumented, select_nodes, should_document


def names_of(nodes):
    return sorted(node.name for node in nodes)


def test_undocumented_mode_picks_models_with_empty_description():
    nodes = manifest_nodes(
        make_node("fct_orders"),
        make_node("dim_customers", description="Customers"),
        make_node("raw_orders", resource_type="seed"),
    )

    assert names_of(select_nodes(nodes, Undocumented())) == ["fct_orders"]


def test_specific_mode_overrides_existing_description():
    """Explicitly named models are regenerated even when documented."""
    nodes = manifest_nodes(
        make_node("fct_orders"),
        make_node("dim_customers", description="Customers"),
    )

    selected = select_nodes(nodes, Specific.of(["dim_customers"]))

    assert names_of(selected) == ["dim_customers"]


def test_specific_mode_never_selects_non_models():
    nodes = manifest_nodes(make_node("raw_orders", resource_type="seed"))

    assert select_nodes(nodes, Specific.of(["raw_orders"])) == []


def test_specific_of_strips_and_drops_blanks():
    mode = Specific.of([" fct_orders", "", "dim_customers ", "  "])

    assert mode.names == frozenset({"fct_orders", "dim_customers"})


def test_classification_uses_unique_id_not_node_fields():
    node = make_node("orders", resource_type="seed")

    assert not should_document("seed.jaffle_shop.orders", node, Undocumented())
    assert should_document("model.jaffle_shop.orders", node, Undocumented())


@given(
    description=st.text(min_size=1, max_size=20),
    requested=st.sets(st.sampled_from(["fct_orders", "dim_customers", "stg_orders"])),
)
def test_documented_models_follow_mode(description, requested):
    """Property: documented models are skipped by default, selected iff named otherwise."""
    node = make_node("fct_orders", description=description)
    nodes = manifest_nodes(node)

    assert select_nodes(nodes, Undocumented()) == []
    assert (select_nodes(nodes, Specific.of(requested)) == [node]) == ("fct_orders" in requested)
