"""Tests for the external graph adapter and delegated algorithms."""

from collections import Counter

import networkx as nx
import pytest

from graphdot.adapters import (
    ExternalGraph,
    from_external,
    from_networkx,
    merge_attributes,
    to_external,
    to_networkx,
)
from graphdot.algorithms import get_min_spanning_tree
from graphdot.errors import SchemaError
from graphdot.graph.models import GraphDocument


@pytest.fixture
def weighted():
    """Directed multigraph with a repeated edge and mixed attributes."""
    return (GraphDocument.create_empty()
            .with_default_attrs("node", ["shape = box"])
            .with_nodes(["a", "b", "c", "d"], {"label": ["A", "B", "C", "D"], "value": [1, 2.5, None, 4]})
            .with_edges([("a", "b"), ("a", "b"), ("b", "c"), ("c", "a")],
                        {"weight": [1, 2, 3, ""], "color": ["red", "blue", "green", "gray"]}))


class TestToExternal:
    """Test forward conversion."""

    def test_ids_and_edges(self, weighted):
        external = to_external(weighted)
        assert external.nodes == ["a", "b", "c", "d"]
        assert external.edges == [("a", "b"), ("a", "b"), ("b", "c"), ("c", "a")]
        assert external.directed is True

    def test_only_declared_attributes(self, weighted):
        external = to_external(weighted, node_attrs=["value"])
        assert external.edge_values == {"weight": [1.0, 2.0, 3.0, None]}
        assert external.node_values == {"value": [1.0, 2.5, None, 4.0]}

    def test_undeclared_missing_columns_skipped(self, weighted):
        external = to_external(weighted, node_attrs=["size"], edge_attrs=["capacity"])
        assert external.node_values == {}
        assert external.edge_values == {}

    def test_non_numeric_rejected(self, weighted):
        with pytest.raises(SchemaError):
            to_external(weighted, edge_attrs=["color"])


class TestRoundTrip:
    """Test that ids and edge multisets survive conversion."""

    def test_round_trip_preserves_structure(self, weighted):
        result = from_external(to_external(weighted))
        assert set(result.node_ids) == set(weighted.node_ids)
        assert Counter(edge.pair for edge in result.edges) == Counter(edge.pair for edge in weighted.edges)

    def test_round_trip_drops_other_attributes(self, weighted):
        result = from_external(to_external(weighted))
        assert result.node_columns == ()
        assert result.edge_columns == ("weight",)
        assert result.edge_attr_values("weight") == [1, 2, 3, None]
        assert result.node_attrs == ()

    def test_round_trip_through_networkx(self, weighted):
        result = from_external(from_networkx(to_networkx(to_external(weighted))))
        assert set(result.node_ids) == set(weighted.node_ids)
        assert Counter(edge.pair for edge in result.edges) == Counter(edge.pair for edge in weighted.edges)

    def test_undirected_round_trip(self):
        doc = GraphDocument.create_empty(directed=False).with_nodes(["a", "b"]).with_edges([("a", "b")])
        result = from_external(to_external(doc))
        assert result.directed is False
        assert [edge.pair for edge in result.edges] == [("a", "b")]

    def test_misaligned_columns(self):
        external = ExternalGraph(nodes=["a", "b"], edges=[("a", "b")], edge_values={"weight": [1, 2]})
        with pytest.raises(SchemaError):
            from_external(external)


class TestNetworkx:
    """Test networkx bridging."""

    def test_to_networkx_multigraph(self, weighted):
        nx_graph = to_networkx(to_external(weighted))
        assert isinstance(nx_graph, nx.MultiDiGraph)
        assert nx_graph.number_of_edges("a", "b") == 2
        assert "weight" not in nx_graph.edges["c", "a", 0]

    def test_from_networkx_undirected(self):
        nx_graph = nx.MultiGraph()
        nx_graph.add_edge("x", "y", weight=2)
        external = from_networkx(nx_graph)
        assert external.directed is False
        assert external.edge_values == {"weight": [2.0]}


class TestMergeAttributes:
    """Test re-joining original attributes onto a result."""

    def test_merge_after_round_trip(self, weighted):
        result = merge_attributes(from_external(to_external(weighted)), weighted)
        assert result.node_columns == weighted.node_columns
        assert result.node_attr_values("label") == ["A", "B", "C", "D"]
        assert result.edge_attr_values("color") == ["red", "blue", "green", "gray"]
        assert result.node_attrs == ("shape = box",)

    def test_merge_repeated_pairs_by_occurrence(self, weighted):
        subset = GraphDocument.create_empty().with_nodes(["a", "b"]).with_edges([("a", "b"), ("a", "b")])
        result = merge_attributes(subset, weighted)
        assert result.edge_attr_values("color") == ["red", "blue"]

    def test_merge_spanning_tree_of_directed_graph(self):
        doc = (GraphDocument.create_empty()
               .with_nodes(["a", "b", "c"])
               .with_edges([("c", "a"), ("b", "a")], {"color": ["red", "blue"], "weight": [1, 2]}))
        merged = merge_attributes(get_min_spanning_tree(doc), doc)

        colors = sorted((tuple(sorted(edge.pair)), edge.get("color")) for edge in merged.edges)
        assert colors == [(("a", "b"), "blue"), (("a", "c"), "red")]

    def test_merge_parallel_edges_by_value(self):
        doc = (GraphDocument.create_empty()
               .with_nodes(["a", "b"])
               .with_edges([("a", "b"), ("a", "b")], {"color": ["red", "blue"], "weight": [5, 1]}))
        merged = merge_attributes(get_min_spanning_tree(doc), doc)

        assert merged.edge_attr_values("color") == ["blue"]
        assert merged.edge_attr_values("weight") == [1]


class TestAlgorithms:
    """Test algorithms delegated to networkx."""

    def test_min_spanning_tree(self):
        doc = (GraphDocument.create_empty()
               .with_nodes(["a", "b", "c"], {"label": ["A", "B", "C"]})
               .with_edges([("a", "b"), ("b", "c"), ("a", "c")], {"weight": [1, 2, 5]}))
        tree = get_min_spanning_tree(doc)

        assert tree.directed is False
        assert set(tree.node_ids) == {"a", "b", "c"}
        assert tree.edge_count == 2
        assert sorted(tree.edge_attr_values("weight")) == [1, 2]
        assert tree.node_columns == ()
