"""Tests for attribute resolution."""

import itertools

import pytest

from graphdot.graph.attributes import (
    EDGE_RESOLVER,
    NODE_RESOLVER,
    AttributeResolver,
    derive_positions,
    to_text,
)
from graphdot.graph.models import GraphDocument


class TestToText:
    """Test cell value coercion."""

    @pytest.mark.parametrize("value, expected", [
        (None, ""),
        ("", ""),
        ("box", "box"),
        (3, "3"),
        (2.0, "2"),
        (3.5, "3.5"),
        (True, "true"),
        (False, "false"),
    ])
    def test_to_text(self, value, expected):
        assert to_text(value) == expected


class TestAttributeResolver:
    """Test fragment generation."""

    def test_recognized_columns_only(self):
        attrs = {"type": "a", "shape": "circle", "value": 3}
        assert NODE_RESOLVER.resolve(attrs, ["type", "shape", "value"]) == "shape = 'circle'"

    def test_label_and_other_values_quoted_alike(self):
        attrs = {"label": "Node A", "width": 0.5}
        assert NODE_RESOLVER.fragments(attrs, ["label", "width"]) == (
            "label = 'Node A'",
            "width = '0.5'",
        )

    def test_empty_cells_skipped(self):
        attrs = {"label": "", "tooltip": None, "color": "red"}
        assert NODE_RESOLVER.resolve(attrs, ["label", "tooltip", "color", "shape"]) == "color = 'red'"

    def test_no_fragments(self):
        assert NODE_RESOLVER.resolve({}, ["label"]) == ""

    def test_order_follows_columns_for_every_permutation(self):
        attrs = {"color": "red", "shape": "box", "label": "A"}
        for columns in itertools.permutations(["color", "shape", "label"]):
            fragments = NODE_RESOLVER.fragments(attrs, columns)
            assert [fragment.split(" = ")[0] for fragment in fragments] == list(columns)

    def test_edge_vocabulary(self):
        attrs = {"rel": "to", "arrowhead": "dot", "weight": 2, "headtooltip": "h"}
        assert EDGE_RESOLVER.resolve(attrs, ["rel", "arrowhead", "weight", "headtooltip"]) == (
            "arrowhead = 'dot', weight = '2', headtooltip = 'h'"
        )

    def test_quotes_are_not_escaped(self):
        assert NODE_RESOLVER.resolve({"label": "it's"}, ["label"]) == "label = 'it's'"

    def test_custom_vocabulary(self):
        resolver = AttributeResolver(["custom"])
        assert resolver.resolve({"custom": 1, "label": "x"}, ["custom", "label"]) == "custom = '1'"


class TestDerivePositions:
    """Test pos derivation from x and y columns."""

    def test_pos_appended(self):
        doc = GraphDocument.create_empty().with_nodes(["a", "b"], {"x": [1, 2.5], "y": [0, 3]})
        derived = derive_positions(doc)
        assert derived.node_columns == ("x", "y", "pos")
        assert derived.node_attr_values("pos") == ["1,0!", "2.5,3!"]

    def test_pos_replaced_in_place(self):
        doc = GraphDocument.create_empty().with_nodes(
            ["a", "b"], {"pos": "9,9!", "x": [1, None], "y": [2, 2]}
        )
        derived = derive_positions(doc)
        assert derived.node_columns == ("pos", "x", "y")
        assert derived.node_attr_values("pos") == ["1,2!", "9,9!"]

    def test_no_coordinates(self):
        doc = GraphDocument.create_empty().with_nodes(["a"], {"x": 1})
        assert derive_positions(doc) is doc
