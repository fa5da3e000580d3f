"""Tests for cluster collapsing and rank grouping."""

import pytest

from graphdot.graph.framework import EdgeLine, NodeLine
from graphdot.graph.grouping import ClusterGrouper, RankGrouper
from graphdot.graph.models import GraphDocument


def lines_for(doc):
    node_lines = [NodeLine(node_id) for node_id in doc.node_ids]
    edge_lines = [EdgeLine(edge.source, edge.target) for edge in doc.edges]
    return node_lines, edge_lines


@pytest.fixture
def clustered():
    """Nodes a and b in cluster "1", c in cluster "2", d unclustered."""
    return (GraphDocument.create_empty()
            .with_nodes(["a", "b", "c", "d"], {"cluster": ["1", "1", "2", ""]})
            .with_edges([("a", "b"), ("b", "c"), ("d", "a"), ("c", "d"), ("d", "d")]))


class TestClusterGrouper:
    """Test cluster placeholder substitution."""

    def test_placeholders(self, clustered):
        assert ClusterGrouper().placeholders(clustered) == {
            "a": "cluster_1", "b": "cluster_1", "c": "cluster_2"
        }

    def test_node_lines_replaced(self, clustered):
        node_lines, _ = ClusterGrouper().apply(clustered, *lines_for(clustered))
        assert [line.node_id for line in node_lines] == ["cluster_1", "cluster_2", "d"]
        assert node_lines[0].attrs == (
            "label = '2N\\n1', shape = 'circle', fixedsize = 'true', "
            "fontsize = '8pt', peripheries = '2'"
        )
        assert node_lines[1].attrs.startswith("label = '1N\\n2'")

    def test_edges_rewritten_and_internal_dropped(self, clustered):
        _, edge_lines = ClusterGrouper().apply(clustered, *lines_for(clustered))
        assert [(line.source, line.target) for line in edge_lines] == [
            ("cluster_1", "cluster_2"),
            ("d", "cluster_1"),
            ("cluster_2", "d"),
            ("d", "d"),
        ]

    def test_edge_attrs_preserved(self, clustered):
        node_lines, _ = lines_for(clustered)
        edge_lines = [EdgeLine("d", "a", "color = 'red'")]
        _, rewritten = ClusterGrouper().apply(clustered, node_lines, edge_lines)
        assert rewritten == [EdgeLine("d", "cluster_1", "color = 'red'")]

    def test_placeholder_avoids_existing_node_id(self):
        doc = (GraphDocument.create_empty()
               .with_nodes(["cluster_1", "a", "b"], {"cluster": ["", "x", "x"]})
               .with_edges([("cluster_1", "a")]))
        node_lines, edge_lines = ClusterGrouper().apply(doc, *lines_for(doc))

        assert [line.node_id for line in node_lines] == ["cluster_1_1", "cluster_1"]
        assert edge_lines == [EdgeLine("cluster_1", "cluster_1_1")]

    def test_no_cluster_column(self):
        doc = GraphDocument.create_empty().with_nodes(["a", "b"]).with_edges([("a", "b")])
        node_lines, edge_lines = lines_for(doc)
        assert ClusterGrouper().apply(doc, node_lines, edge_lines) == (node_lines, edge_lines)


class TestRankGrouper:
    """Test same-rank grouping."""

    def test_multi_member_ranks_grouped(self):
        doc = GraphDocument.create_empty().with_nodes(
            ["a", "b", "c", "d", "e"], {"rank": ["2", "1", "2", "3", ""]}
        )
        node_lines = [NodeLine(node_id, f"label = '{node_id}'") for node_id in doc.node_ids]
        standalone, groups = RankGrouper().apply(doc, node_lines)

        assert [line.node_id for line in standalone] == ["b", "d", "e"]
        assert len(groups) == 1
        assert groups[0].rank == "2"
        assert groups[0].lines == (NodeLine("a", "label = 'a'"), NodeLine("c", "label = 'c'"))

    def test_single_member_ranks_left_alone(self):
        doc = GraphDocument.create_empty().with_nodes(["a", "b"], {"rank": ["1", "2"]})
        node_lines, _ = lines_for(doc)
        assert RankGrouper().apply(doc, node_lines) == (node_lines, [])

    def test_collapsed_nodes_do_not_count(self):
        doc = GraphDocument.create_empty().with_nodes(
            ["a", "b", "c"], {"rank": ["1", "1", "1"], "cluster": ["x", "x", ""]}
        )
        node_lines, edge_lines = lines_for(doc)
        node_lines, _ = ClusterGrouper().apply(doc, node_lines, edge_lines)
        standalone, groups = RankGrouper().apply(doc, node_lines)
        assert [line.node_id for line in standalone] == ["cluster_1", "c"]
        assert groups == []
