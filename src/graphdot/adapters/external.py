"""Conversion between graph documents and the external algorithms library.

The external representation keeps only node ids, edge endpoint pairs and a
declared subset of numeric attributes. Anything else is dropped on the way
out and is not restored on the way back; ``merge_attributes`` re-joins the
original tables onto an algorithm result by node id and edge identity.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

import networkx as nx

from ..errors import SchemaError
from ..graph.attributes import to_text
from ..graph.models import Edge, GraphDocument, Node

logger = logging.getLogger(__name__)

NumericColumn = list[float | None]


@dataclass
class ExternalGraph:
    """Minimal labeled multigraph handed to graph algorithms.

    ``node_values`` and ``edge_values`` hold named numeric columns aligned
    by position with ``nodes`` and ``edges``; None marks an empty cell.
    """
    nodes: list[str] = field(default_factory=list)
    edges: list[tuple[str, str]] = field(default_factory=list)
    directed: bool = True
    node_values: dict[str, NumericColumn] = field(default_factory=dict)
    edge_values: dict[str, NumericColumn] = field(default_factory=dict)


def _numeric(value, column: str) -> float | None:
    text = to_text(value)
    if text == "":
        return None
    try:
        return float(text)
    except ValueError:
        raise SchemaError(f"Attribute '{column}' must be numeric, got: {value!r}",
                          {"column": column, "value": text})


def _restore(value: float | None):
    if value is not None and value.is_integer():
        return int(value)
    return value


def to_external(doc: GraphDocument, node_attrs: Iterable[str] = (),
                edge_attrs: Iterable[str] = ("weight",)) -> ExternalGraph:
    """Convert a document, keeping only the declared numeric attributes."""
    node_values = {
        name: [_numeric(node.get(name), name) for node in doc.nodes.values()]
        for name in node_attrs if name in doc.node_columns
    }
    edge_values = {
        name: [_numeric(edge.get(name), name) for edge in doc.edges]
        for name in edge_attrs if name in doc.edge_columns
    }

    logger.info(f"Converted graph with {doc.node_count} nodes and {doc.edge_count} edges to external form")
    return ExternalGraph(
        nodes=list(doc.node_ids),
        edges=[edge.pair for edge in doc.edges],
        directed=doc.directed,
        node_values=node_values,
        edge_values=edge_values,
    )


def from_external(graph: ExternalGraph) -> GraphDocument:
    """Rebuild a document from an external graph.

    Only ids, endpoints and the carried numeric columns come back; default
    statements and all other attributes are gone.
    """
    for name, column in graph.node_values.items():
        if len(column) != len(graph.nodes):
            raise SchemaError(f"Numeric column '{name}' has {len(column)} values for {len(graph.nodes)} nodes")
    for name, column in graph.edge_values.items():
        if len(column) != len(graph.edges):
            raise SchemaError(f"Numeric column '{name}' has {len(column)} values for {len(graph.edges)} edges")

    doc = GraphDocument.create_empty(directed=graph.directed)
    doc = doc.with_nodes(graph.nodes, {
        name: [_restore(value) for value in column] for name, column in graph.node_values.items()
    })
    doc = doc.with_edges(graph.edges, {
        name: [_restore(value) for value in column] for name, column in graph.edge_values.items()
    })

    logger.info(f"Rebuilt graph with {doc.node_count} nodes and {doc.edge_count} edges from external form")
    return doc


def to_networkx(graph: ExternalGraph) -> nx.MultiGraph:
    """Build a networkx multigraph (MultiDiGraph when directed)."""
    nx_graph = nx.MultiDiGraph() if graph.directed else nx.MultiGraph()

    for index, node_id in enumerate(graph.nodes):
        values = {name: column[index] for name, column in graph.node_values.items()
                  if column[index] is not None}
        nx_graph.add_node(node_id, **values)

    for index, (source, target) in enumerate(graph.edges):
        values = {name: column[index] for name, column in graph.edge_values.items()
                  if column[index] is not None}
        nx_graph.add_edge(source, target, **values)

    return nx_graph


def from_networkx(nx_graph: nx.Graph, node_attrs: Iterable[str] = (),
                  edge_attrs: Iterable[str] = ("weight",)) -> ExternalGraph:
    """Read ids, edges and the declared numeric attributes back from networkx."""
    node_attrs = list(node_attrs)
    edge_attrs = list(edge_attrs)

    nodes = [str(node_id) for node_id in nx_graph.nodes]
    node_data = list(nx_graph.nodes(data=True))
    edge_data = list(nx_graph.edges(data=True))

    node_values = {
        name: [_numeric(data.get(name), name) for _, data in node_data]
        for name in node_attrs if any(name in data for _, data in node_data)
    }
    edge_values = {
        name: [_numeric(data.get(name), name) for _, _, data in edge_data]
        for name in edge_attrs if any(name in data for _, _, data in edge_data)
    }

    return ExternalGraph(
        nodes=nodes,
        edges=[(str(source), str(target)) for source, target, _ in edge_data],
        directed=nx_graph.is_directed(),
        node_values=node_values,
        edge_values=edge_values,
    )


def _agrees(original: Edge, edge: Edge) -> bool:
    return all(original.get(name) == value for name, value in edge.attrs.items())


def merge_attributes(result: GraphDocument, original: GraphDocument) -> GraphDocument:
    """Re-join the original document's attributes onto an algorithm result.

    Nodes are matched by id. Edges are matched by endpoint pair. Among
    parallel edges the first unused original whose values agree with the
    result edge is taken, otherwise the first unused one. When either
    document is undirected the pair is unordered, so a spanning tree edge
    ('a', 'c') still finds the original ``c->a``. Attributes already present
    in the result win. Default statements and metadata come from the original.
    """
    unordered = not (result.directed and original.directed)

    def key(edge: Edge) -> tuple[str, str]:
        return tuple(sorted(edge.pair)) if unordered else edge.pair

    nodes = {}
    for node_id, node in result.nodes.items():
        source = original.nodes.get(node_id)
        attrs = {**source.attrs, **node.attrs} if source is not None else dict(node.attrs)
        nodes[node_id] = Node(node_id, attrs)

    occurrences: dict[tuple[str, str], list[Edge]] = defaultdict(list)
    for edge in original.edges:
        occurrences[key(edge)].append(edge)

    edges = []
    for edge in result.edges:
        candidates = occurrences[key(edge)]
        match = next((c for c in candidates if _agrees(c, edge)), candidates[0] if candidates else None)
        attrs = dict(edge.attrs)
        if match is not None:
            candidates.remove(match)
            attrs = {**match.attrs, **attrs}
        edges.append(Edge(edge.source, edge.target, attrs))

    node_columns = original.node_columns + tuple(
        c for c in result.node_columns if c not in original.node_columns)
    edge_columns = original.edge_columns + tuple(
        c for c in result.edge_columns if c not in original.edge_columns)

    return replace(
        result,
        nodes=nodes,
        edges=tuple(edges),
        node_columns=node_columns,
        edge_columns=edge_columns,
        graph_attrs=original.graph_attrs,
        node_attrs=original.node_attrs,
        edge_attrs=original.edge_attrs,
        name=original.name,
        time=original.time,
        tz=original.tz,
    )
