"""Graph algorithms delegated to networkx through the external adapter."""

import logging

import networkx as nx

from .adapters.external import from_external, from_networkx, to_external, to_networkx
from .config import GraphdotConfig
from .graph.models import GraphDocument

logger = logging.getLogger(__name__)


def get_min_spanning_tree(doc: GraphDocument, weight: str = "weight",
                          config: GraphdotConfig | None = None) -> GraphDocument:
    """Return the minimum spanning tree (forest) of a graph.

    Edge direction is ignored for the computation and the result is
    undirected. Only the adapter's declared numeric attributes survive;
    use ``merge_attributes`` to bring the other columns back.

    Args:
        doc: Source document
        weight: Edge column used as edge weight; missing weights count as 1
        config: Configuration naming the numeric attributes to carry

    Returns:
        GraphDocument holding the spanning tree
    """
    config = config or GraphdotConfig()
    node_attrs = config.adapter.node_attrs
    edge_attrs = list(dict.fromkeys([*config.adapter.edge_attrs, weight]))

    nx_graph = to_networkx(to_external(doc, node_attrs, edge_attrs))
    tree = nx.minimum_spanning_tree(nx_graph.to_undirected(), weight=weight)

    logger.info(f"Computed spanning tree with {tree.number_of_edges()} of {doc.edge_count} edges")
    return from_external(from_networkx(tree, node_attrs, edge_attrs))
