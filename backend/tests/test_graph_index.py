"""Tests for the reverse-dependency index."""

from hypothesis import given, settings
from hypothesis import strategies as st

from factories import PROJECT_NAME, make_node, manifest_nodes
from dbtdoc.constants import NOT_USED_SENTINEL
from dbtdoc.graph.index import ReverseDependencyIndex, build_reverse_index


def model_id(name: str) -> str:
    return f"model.{PROJECT_NAME}.{name}"


def test_records_model_dependents():
    """A model's declared dependency gets the model as a dependent."""
    nodes = manifest_nodes(
        make_node("stg_orders"),
        make_node("fct_orders", depends_on=[model_id("stg_orders")]),
        make_node("dim_customers", depends_on=[model_id("stg_orders")]),
    )

    index = build_reverse_index(nodes)

    assert index.dependents(model_id("stg_orders")) == [
        model_id("fct_orders"),
        model_id("dim_customers"),
    ]
    assert index.describe_dependents(model_id("stg_orders")) == (
        f"{model_id('fct_orders')},{model_id('dim_customers')}"
    )


def test_non_model_dependents_are_ignored():
    """Tests and seeds depending on a model never become reverse edges."""
    nodes = manifest_nodes(
        make_node("fct_orders"),
        make_node(
            "not_null_fct_orders_id", resource_type="test", depends_on=[model_id("fct_orders")]
        ),
        make_node("snap_orders", resource_type="snapshot", depends_on=[model_id("fct_orders")]),
    )

    index = build_reverse_index(nodes)

    assert model_id("fct_orders") not in index
    assert index.dependents(model_id("fct_orders")) == []
    assert len(index) == 0


def test_unused_node_reports_sentinel():
    """A node nobody depends on is described with the sentinel, not an empty string."""
    index = build_reverse_index(manifest_nodes(make_node("fct_orders")))

    assert index.describe_dependents(model_id("fct_orders")) == NOT_USED_SENTINEL
    assert index.describe_dependents("model.elsewhere.unknown") == NOT_USED_SENTINEL


def test_dependencies_on_seeds_are_indexed():
    """The dependency itself may be any node type; only the dependent must be a model."""
    seed_id = f"seed.{PROJECT_NAME}.raw_orders"
    index = build_reverse_index(
        manifest_nodes(make_node("stg_orders", depends_on=[seed_id]))
    )

    assert index.dependents(seed_id) == [model_id("stg_orders")]


def test_cycles_are_tolerated():
    """Cyclic declarations are stored as given."""
    nodes = manifest_nodes(
        make_node("a", depends_on=[model_id("b")]),
        make_node("b", depends_on=[model_id("a")]),
        make_node("c", depends_on=[model_id("c")]),
    )

    index = build_reverse_index(nodes)

    assert index.dependents(model_id("a")) == [model_id("b")]
    assert index.dependents(model_id("b")) == [model_id("a")]
    assert index.dependents(model_id("c")) == [model_id("c")]


def test_accepts_iterable_of_nodes():
    nodes = [make_node("b", depends_on=[model_id("a")])]

    index = build_reverse_index(nodes)

    assert model_id("a") in index


def test_empty_index():
    index = ReverseDependencyIndex()

    assert len(index) == 0
    assert "anything" not in index


names = st.sampled_from(["a", "b", "c", "d", "e"])
resource_types = st.sampled_from(["model", "seed", "test", "snapshot"])
node_specs = st.lists(
    st.tuples(names, resource_types, st.lists(names, max_size=4)),
    max_size=8,
    unique_by=lambda spec: (spec[0], spec[1]),
)


@settings(max_examples=200)
@given(node_specs)
def test_entry_exists_exactly_when_a_model_declares_it(specs):
    """Property: D has dependents iff some model-class node declares D."""
    nodes = manifest_nodes(
        *(
            make_node(name, resource_type=rtype, depends_on=[model_id(dep) for dep in deps])
            for name, rtype, deps in specs
        )
    )

    index = build_reverse_index(nodes)

    declared_by_models = {
        model_id(dep) for _, rtype, deps in specs if rtype == "model" for dep in deps
    }
    for dep in ["a", "b", "c", "d", "e"]:
        assert (model_id(dep) in index) == (model_id(dep) in declared_by_models)
        if model_id(dep) not in declared_by_models:
            assert index.describe_dependents(model_id(dep)) == NOT_USED_SENTINEL


def test_repeated_dependency_is_recorded_once():
    nodes = manifest_nodes(
        make_node("stg_orders"),
        make_node("fct_orders", depends_on=[model_id("stg_orders"), model_id("stg_orders")]),
    )

    index = build_reverse_index(nodes)

    assert index.dependents(model_id("stg_orders")) == [model_id("fct_orders")]
    assert index.describe_dependents(model_id("stg_orders")) == model_id("fct_orders")
