"""Graphviz DOT renderer for graph documents."""

import logging
import re

from ..config import GraphdotConfig
from ..constants import DEFAULT_STATEMENT_CONTINUATION
from .attributes import EDGE_RESOLVER, NODE_RESOLVER, AttributeResolver, derive_positions
from .colors import ColorAlphaTransform
from .framework import DotSections, EdgeLine, GraphRenderer, NodeLine, RankGroup
from .grouping import ClusterGrouper, RankGrouper
from .models import GraphDocument

logger = logging.getLogger(__name__)

EMPTY_ATTR_LIST = re.compile(r" \[\]$", re.MULTILINE)


class DotRenderer(GraphRenderer):
    """Renders a graph document as DOT text.

    Stages run in a fixed order: node positions and alpha colors are
    resolved on the document, default statements, node and edge lines are
    produced, clusters are collapsed, ranks grouped, and the sections are
    assembled. A final pass strips empty ``[]`` attribute lists.
    """

    def __init__(self, config: GraphdotConfig | None = None,
                 node_resolver: AttributeResolver = NODE_RESOLVER,
                 edge_resolver: AttributeResolver = EDGE_RESOLVER):
        self.config = config or GraphdotConfig()
        self.indent = self.config.render.indent
        self.node_resolver = node_resolver
        self.edge_resolver = edge_resolver
        self.alpha_transform = ColorAlphaTransform()
        self.cluster_grouper = ClusterGrouper()
        self.rank_grouper = RankGrouper()

    @property
    def format_name(self) -> str:
        return "dot"

    def get_file_extension(self) -> str:
        return ".gv"

    def render(self, doc: GraphDocument) -> str:
        """Render the document as DOT text."""
        logger.info(f"Rendering DOT for graph with {doc.node_count} nodes and {doc.edge_count} edges")

        doc = self.alpha_transform.apply(derive_positions(doc))
        sections = DotSections(header="digraph" if doc.directed else "graph")

        statements = self._attr_statements(doc)
        if statements:
            sections.attr_statements = statements

        if doc.nodes:
            sections.node_lines = [
                NodeLine(node.id, self.node_resolver.resolve(node.attrs, doc.node_columns))
                for node in doc.nodes.values()
            ]

        if doc.edges:
            sections.edge_lines = [
                EdgeLine(edge.source, edge.target, self.edge_resolver.resolve(edge.attrs, doc.edge_columns))
                for edge in doc.edges
            ]

        if sections.node_lines is not None:
            sections.node_lines, edge_lines = self.cluster_grouper.apply(
                doc, sections.node_lines, sections.edge_lines or []
            )
            if sections.edge_lines is not None:
                sections.edge_lines = edge_lines
            sections.node_lines, sections.rank_groups = self.rank_grouper.apply(doc, sections.node_lines)

        return self._cleanup(self._assemble(sections, doc.directed))

    def _attr_statements(self, doc: GraphDocument) -> list[str]:
        """Default statements in graph, node, edge order; empty namespaces omitted."""
        statements = []
        for namespace, attrs in (("graph", doc.graph_attrs),
                                 ("node", doc.node_attrs),
                                 ("edge", doc.edge_attrs)):
            if not attrs:
                continue
            separator = ",\n" + DEFAULT_STATEMENT_CONTINUATION[namespace]
            statements.append(f"{namespace} [{separator.join(attrs)}]")
        return statements

    def _node_line(self, line: NodeLine, depth: int = 1) -> str:
        return f"{self.indent * depth}'{line.node_id}' [{line.attrs}]"

    def _edge_line(self, line: EdgeLine, connector: str) -> str:
        return f"{self.indent}'{line.source}'{connector}'{line.target}' [{line.attrs}]"

    def _rank_block(self, group: RankGroup) -> list[str]:
        lines = [f"{self.indent}subgraph{{rank = same"]
        lines.extend(self._node_line(line, depth=2) for line in group.lines)
        lines.append(f"{self.indent}}}")
        return lines

    def _assemble(self, sections: DotSections, directed: bool) -> str:
        blocks = []

        if sections.attr_statements is not None:
            blocks.append("\n\n".join(sections.attr_statements))

        # Node and edge statements form one block
        lines = []
        if sections.node_lines is not None:
            lines.extend(self._node_line(line) for line in sections.node_lines)
            for group in sections.rank_groups:
                lines.extend(self._rank_block(group))
        if sections.edge_lines:
            connector = "->" if directed else "--"
            lines.extend(self._edge_line(line, connector) for line in sections.edge_lines)
        if lines:
            blocks.append("\n".join(lines))

        body = "\n\n".join(blocks)
        if not body:
            return f"{sections.header} {{\n\n}}"
        return f"{sections.header} {{\n\n{body}\n}}"

    def _cleanup(self, text: str) -> str:
        """Remove attribute lists that resolved to nothing."""
        return EMPTY_ATTR_LIST.sub("", text)


def render_dot(doc: GraphDocument, config: GraphdotConfig | None = None) -> str:
    """Render a graph document as DOT text with a default renderer."""
    return DotRenderer(config).render(doc)
