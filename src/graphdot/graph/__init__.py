"""Graph document model and DOT generation for graphdot.

Builds attributed multigraphs as node and edge tables and renders them as
Graphviz DOT text, with alpha colors, cluster collapsing and rank groups.
"""

from .attributes import AttributeResolver, derive_positions
from .colors import ColorAlphaTransform, colorize_node_attrs
from .dot import DotRenderer, render_dot
from .framework import GraphGenerator, GraphRenderer
from .grouping import ClusterGrouper, RankGrouper
from .models import Edge, GraphDocument, Node, create_graph

__all__ = [
    "GraphDocument",
    "Node",
    "Edge",
    "create_graph",
    "AttributeResolver",
    "derive_positions",
    "ColorAlphaTransform",
    "colorize_node_attrs",
    "ClusterGrouper",
    "RankGrouper",
    "GraphGenerator",
    "GraphRenderer",
    "DotRenderer",
    "render_dot",
]
