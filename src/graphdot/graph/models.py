"""Graph document model: node and edge tables plus default statements.

A ``GraphDocument`` is an immutable snapshot. Every builder method validates
its input completely and returns a new document, so a failed call never
leaves a partially updated graph behind.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from ..config import GraphdotConfig
from ..constants import NAMESPACES, RESERVED_EDGE_COLUMNS, RESERVED_NODE_COLUMNS
from ..errors import ConfigError, GraphReferenceError, SchemaError

logger = logging.getLogger(__name__)

AttrValue = str | int | float | bool | None


@dataclass(frozen=True)
class Node:
    """A node row: unique id plus its attribute cells."""
    id: str
    attrs: Mapping[str, AttrValue] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))

    def get(self, name: str) -> AttrValue:
        return self.attrs.get(name)


@dataclass(frozen=True)
class Edge:
    """An edge row: ordered endpoint pair plus its attribute cells."""
    source: str
    target: str
    attrs: Mapping[str, AttrValue] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))

    @property
    def pair(self) -> tuple[str, str]:
        return (self.source, self.target)

    def get(self, name: str) -> AttrValue:
        return self.attrs.get(name)


def _is_column_values(values: Any) -> bool:
    """Sequences (other than strings) are per-row columns, anything else broadcasts."""
    return isinstance(values, Sequence) and not isinstance(values, (str, bytes))


def _expand_rows(attrs: Mapping[str, Any] | None, count: int,
                 reserved: frozenset[str], table: str) -> tuple[list[dict], list[str]]:
    """Split column-oriented attribute input into per-row dicts.

    Returns the row dicts and the column names in the order given.
    """
    rows: list[dict] = [{} for _ in range(count)]
    names: list[str] = []

    for name, values in (attrs or {}).items():
        if not isinstance(name, str) or not name:
            raise SchemaError(f"{table} attribute names must be non-empty strings, got: {name!r}")
        if name in reserved:
            raise SchemaError(
                f"'{name}' is reserved in the {table} table",
                {"column": name, "reserved": sorted(reserved)}
            )

        if _is_column_values(values):
            if len(values) != count:
                raise SchemaError(
                    f"Column '{name}' has {len(values)} values for {count} {table}s",
                    {"column": name, "expected": count, "actual": len(values)}
                )
            column = list(values)
        else:
            column = [values] * count

        for row, value in zip(rows, column):
            if value is not None:
                row[name] = value
        names.append(name)

    return rows, names


def _append_columns(columns: tuple[str, ...], names: Iterable[str]) -> tuple[str, ...]:
    merged = list(columns)
    for name in names:
        if name not in merged:
            merged.append(name)
    return tuple(merged)


def _renamed(attrs: Mapping[str, AttrValue], attr_from: str, attr_to: str) -> dict:
    return {(attr_to if key == attr_from else key): value for key, value in attrs.items()}


def _check_rename(columns: tuple[str, ...], reserved: frozenset[str],
                  attr_from: str, attr_to: str, table: str) -> None:
    if attr_from == attr_to:
        raise ConfigError("You cannot rename using the same name", {"column": attr_from})
    if attr_to in reserved or attr_to in columns:
        raise ConfigError(
            f"You cannot use '{attr_to}' as a {table} attribute name",
            {"column": attr_to, "existing": list(columns)}
        )
    if attr_from not in columns:
        raise SchemaError(
            f"The {table} attribute '{attr_from}' is not in the {table} table",
            {"column": attr_from}
        )


def _check_pair(pair: Any) -> tuple[str, str]:
    if not _is_column_values(pair) or len(pair) != 2:
        raise SchemaError(f"Edges must be (from, to) pairs, got: {pair!r}")
    source, target = pair
    for endpoint in (source, target):
        if not isinstance(endpoint, str) or not endpoint:
            raise SchemaError(f"Edge endpoints must be non-empty strings, got: {pair!r}")
    return source, target


@dataclass(frozen=True)
class GraphDocument:
    """Attributed multigraph held as node and edge tables.

    ``node_columns`` and ``edge_columns`` record the column order of each
    table. That order drives attribute order in generated DOT text.
    """
    directed: bool = True
    nodes: Mapping[str, Node] = field(default_factory=dict)
    edges: tuple[Edge, ...] = ()
    node_columns: tuple[str, ...] = ()
    edge_columns: tuple[str, ...] = ()
    graph_attrs: tuple[str, ...] = ()
    node_attrs: tuple[str, ...] = ()
    edge_attrs: tuple[str, ...] = ()
    name: str | None = None
    time: str | None = None
    tz: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))
        object.__setattr__(self, "edges", tuple(self.edges))

    @classmethod
    def create_empty(cls, directed: bool = True, name: str | None = None,
                     time: str | None = None, tz: str | None = None) -> "GraphDocument":
        """Create a graph with no nodes, edges or default statements."""
        if time is not None and tz is None:
            tz = "GMT"
        return cls(directed=directed, name=name, time=time, tz=tz)

    # Accessors

    @property
    def node_ids(self) -> tuple[str, ...]:
        return tuple(self.nodes)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def node(self, node_id: str) -> Node:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise GraphReferenceError(f"Node '{node_id}' is not in the graph", {"missing": [node_id]})

    def default_attrs(self, namespace: str) -> tuple[str, ...]:
        """Return the default statements for ``graph``, ``node`` or ``edge``."""
        if namespace not in NAMESPACES:
            raise SchemaError(f"Unknown attribute namespace '{namespace}'. Available: {list(NAMESPACES)}")
        return getattr(self, f"{namespace}_attrs")

    def node_attr_values(self, name: str, ids: Iterable[str] | None = None) -> list[AttrValue]:
        """Values of one node column for a selection of node ids (all by default)."""
        selected = self.node_ids if ids is None else list(ids)
        self._require_nodes(selected)
        return [self.nodes[node_id].get(name) for node_id in selected]

    def edge_attr_values(self, name: str, indices: Iterable[int] | None = None) -> list[AttrValue]:
        """Values of one edge column for a selection of edge positions (all by default)."""
        selected = range(len(self.edges)) if indices is None else list(indices)
        try:
            return [self.edges[index].get(name) for index in selected]
        except IndexError:
            raise SchemaError(f"Edge selection {list(selected)} is out of range for {len(self.edges)} edges")

    # Builders

    def with_nodes(self, ids: str | Iterable[str], attrs: Mapping[str, Any] | None = None) -> "GraphDocument":
        """Add nodes, with optional attribute columns (scalar or one value per id)."""
        ids = [ids] if isinstance(ids, str) else list(ids)

        seen = set(self.nodes)
        for node_id in ids:
            if not isinstance(node_id, str) or not node_id:
                raise SchemaError(f"Node ids must be non-empty strings, got: {node_id!r}")
            if node_id in seen:
                raise SchemaError(f"Duplicate node id '{node_id}'", {"duplicate": node_id})
            seen.add(node_id)

        rows, names = _expand_rows(attrs, len(ids), RESERVED_NODE_COLUMNS, "node")

        nodes = dict(self.nodes)
        for node_id, row in zip(ids, rows):
            nodes[node_id] = Node(node_id, row)

        return replace(self, nodes=nodes, node_columns=_append_columns(self.node_columns, names))

    def with_edges(self, pairs: Iterable[Sequence[str]], attrs: Mapping[str, Any] | None = None,
                   auto_create_nodes: bool = False) -> "GraphDocument":
        """Add edges between existing nodes.

        Args:
            pairs: (from, to) node id pairs; repeated pairs are kept
            attrs: Attribute columns, scalar or one value per pair
            auto_create_nodes: Create nodes for unknown endpoints instead
                of raising GraphReferenceError

        Returns:
            New document with the edges appended
        """
        pairs = [_check_pair(pair) for pair in pairs]
        rows, names = _expand_rows(attrs, len(pairs), RESERVED_EDGE_COLUMNS, "edge")

        # Sources first, then targets
        endpoints = [source for source, _ in pairs] + [target for _, target in pairs]
        missing = list(dict.fromkeys(e for e in endpoints if e not in self.nodes))

        doc = self
        if missing:
            if not auto_create_nodes:
                raise GraphReferenceError(
                    f"Edge endpoints not found in graph: {missing}",
                    {"missing": missing}
                )
            logger.debug(f"Creating {len(missing)} nodes for unknown edge endpoints")
            doc = doc.with_nodes(missing)

        edges = doc.edges + tuple(Edge(source, target, row) for (source, target), row in zip(pairs, rows))
        return replace(doc, edges=edges, edge_columns=_append_columns(doc.edge_columns, names))

    def with_default_attrs(self, namespace: str, statements: str | Iterable[str]) -> "GraphDocument":
        """Replace the default statements of one namespace."""
        if namespace not in NAMESPACES:
            raise SchemaError(f"Unknown attribute namespace '{namespace}'. Available: {list(NAMESPACES)}")

        statements = (statements,) if isinstance(statements, str) else tuple(statements)
        for statement in statements:
            if not isinstance(statement, str):
                raise SchemaError(f"Default statements must be strings, got: {statement!r}")

        return replace(self, **{f"{namespace}_attrs": statements})

    def with_node_attrs(self, name: str, values: Any, ids: Iterable[str] | None = None) -> "GraphDocument":
        """Set one node column for all nodes or a selection of them.

        ``None`` clears the cell. The column keeps its position if it exists
        and is appended otherwise.
        """
        selected = self.node_ids if ids is None else list(ids)
        self._require_nodes(selected)
        rows, names = _expand_rows({name: values}, len(selected), RESERVED_NODE_COLUMNS, "node")

        nodes = dict(self.nodes)
        for node_id, row in zip(selected, rows):
            attrs = dict(nodes[node_id].attrs)
            if name in row:
                attrs[name] = row[name]
            else:
                attrs.pop(name, None)
            nodes[node_id] = Node(node_id, attrs)

        return replace(self, nodes=nodes, node_columns=_append_columns(self.node_columns, names))

    def with_edge_attrs(self, name: str, values: Any, indices: Iterable[int] | None = None) -> "GraphDocument":
        """Set one edge column for all edges or a selection of edge positions."""
        selected = list(range(len(self.edges))) if indices is None else list(indices)
        for index in selected:
            if not 0 <= index < len(self.edges):
                raise SchemaError(f"Edge index {index} is out of range for {len(self.edges)} edges")
        rows, names = _expand_rows({name: values}, len(selected), RESERVED_EDGE_COLUMNS, "edge")

        edges = list(self.edges)
        for index, row in zip(selected, rows):
            edge = edges[index]
            attrs = dict(edge.attrs)
            if name in row:
                attrs[name] = row[name]
            else:
                attrs.pop(name, None)
            edges[index] = Edge(edge.source, edge.target, attrs)

        return replace(self, edges=tuple(edges), edge_columns=_append_columns(self.edge_columns, names))

    def rename_node_attrs(self, attr_from: str, attr_to: str) -> "GraphDocument":
        """Rename a node column, keeping its position in the table."""
        _check_rename(self.node_columns, RESERVED_NODE_COLUMNS, attr_from, attr_to, "node")

        nodes = {node_id: Node(node_id, _renamed(node.attrs, attr_from, attr_to))
                 for node_id, node in self.nodes.items()}
        columns = tuple(attr_to if column == attr_from else column for column in self.node_columns)
        return replace(self, nodes=nodes, node_columns=columns)

    def rename_edge_attrs(self, attr_from: str, attr_to: str) -> "GraphDocument":
        """Rename an edge column, keeping its position in the table."""
        _check_rename(self.edge_columns, RESERVED_EDGE_COLUMNS, attr_from, attr_to, "edge")

        edges = tuple(Edge(edge.source, edge.target, _renamed(edge.attrs, attr_from, attr_to))
                      for edge in self.edges)
        columns = tuple(attr_to if column == attr_from else column for column in self.edge_columns)
        return replace(self, edges=edges, edge_columns=columns)

    def colorize_node_attrs(self, attr_from: str, attr_to: str, alpha: int | None = None) -> "GraphDocument":
        """Color nodes by the distinct values of ``attr_from`` using a viridis palette."""
        from .colors import colorize_node_attrs
        return colorize_node_attrs(self, attr_from, attr_to, alpha)

    def _require_nodes(self, ids: Iterable[str]) -> None:
        missing = [node_id for node_id in ids if node_id not in self.nodes]
        if missing:
            raise GraphReferenceError(f"Nodes not found in graph: {missing}", {"missing": missing})


def create_graph(nodes: Iterable[str] | None = None,
                 edges: Iterable[Sequence[str]] | None = None,
                 node_data: Mapping[str, Any] | None = None,
                 edge_data: Mapping[str, Any] | None = None,
                 graph_attrs: Iterable[str] | None = None,
                 node_attrs: Iterable[str] | None = None,
                 edge_attrs: Iterable[str] | None = None,
                 directed: bool | None = None,
                 name: str | None = None,
                 time: str | None = None,
                 tz: str | None = None,
                 config: GraphdotConfig | None = None) -> GraphDocument:
    """Build a graph document in one call.

    Default statements left as None come from the configuration defaults;
    pass an empty list to leave a namespace without defaults. When only
    edges are supplied, their endpoints become the node table.

    Args:
        nodes: Node ids
        edges: (from, to) pairs
        node_data: Node attribute columns aligned with ``nodes``
        edge_data: Edge attribute columns aligned with ``edges``
        graph_attrs: Graph default statements
        node_attrs: Node default statements
        edge_attrs: Edge default statements
        directed: Directedness; defaults to ``config.render.directed``
        name: Optional graph name
        time: Optional date or date-time string
        tz: Time zone for ``time``; GMT when omitted
        config: Configuration supplying defaults

    Returns:
        GraphDocument
    """
    config = config or GraphdotConfig()

    if directed is None:
        directed = config.render.directed

    doc = GraphDocument.create_empty(directed=directed, name=name, time=time, tz=tz)
    doc = doc.with_default_attrs("graph", config.defaults.graph_attrs if graph_attrs is None else graph_attrs)
    doc = doc.with_default_attrs("node", config.defaults.node_attrs if node_attrs is None else node_attrs)
    doc = doc.with_default_attrs("edge", config.defaults.edge_attrs if edge_attrs is None else edge_attrs)

    if nodes is not None:
        doc = doc.with_nodes(nodes, node_data)

    if edges is not None:
        doc = doc.with_edges(edges, edge_data, auto_create_nodes=nodes is None)

    logger.debug(f"Created graph with {doc.node_count} nodes and {doc.edge_count} edges")
    return doc
