"""Cluster collapsing and same-rank grouping of node declarations."""

import logging

from ..constants import CLUSTER_COLUMN, CLUSTER_PLACEHOLDER_STYLE, RANK_COLUMN
from .attributes import to_text
from .framework import EdgeLine, NodeLine, RankGroup
from .models import GraphDocument

logger = logging.getLogger(__name__)


def _group_by(doc: GraphDocument, column: str) -> dict[str, list[str]]:
    """Node ids per distinct non-empty value of a column, in first-appearance order."""
    groups: dict[str, list[str]] = {}
    if column not in doc.node_columns:
        return groups
    for node in doc.nodes.values():
        value = to_text(node.get(column))
        if value:
            groups.setdefault(value, []).append(node.id)
    return groups


class ClusterGrouper:
    """Collapses nodes sharing a ``cluster`` value into one placeholder node.

    Member declarations are replaced by a ``cluster_<n>`` placeholder whose
    label carries the member count and cluster value. When a node already
    uses that id, ``_<k>`` suffixes are tried until one is free. Edges inside
    a cluster are dropped; edges leaving a cluster are re-attached to its
    placeholder.
    """

    def __init__(self, column: str = CLUSTER_COLUMN):
        self.column = column

    def _clusters(self, doc: GraphDocument) -> list[tuple[str, list[str], str]]:
        """(cluster value, member ids, placeholder id) in first-appearance order."""
        taken = set(doc.nodes)
        clusters = []
        for index, (value, members) in enumerate(_group_by(doc, self.column).items(), start=1):
            placeholder = f"cluster_{index}"
            suffix = 1
            while placeholder in taken:
                placeholder = f"cluster_{index}_{suffix}"
                suffix += 1
            taken.add(placeholder)
            clusters.append((value, members, placeholder))
        return clusters

    def placeholders(self, doc: GraphDocument) -> dict[str, str]:
        """Map every clustered node id to its placeholder id."""
        return {
            node_id: placeholder
            for _, members, placeholder in self._clusters(doc)
            for node_id in members
        }

    def apply(self, doc: GraphDocument, node_lines: list[NodeLine],
              edge_lines: list[EdgeLine]) -> tuple[list[NodeLine], list[EdgeLine]]:
        clusters = self._clusters(doc)
        if not clusters:
            return node_lines, edge_lines

        style = ", ".join(f"{name} = '{setting}'" for name, setting in CLUSTER_PLACEHOLDER_STYLE)
        placeholder_lines = []
        mapping = {}
        for value, members, placeholder in clusters:
            label = f"label = '{len(members)}N\\n{value}'"
            placeholder_lines.append(NodeLine(placeholder, f"{label}, {style}"))
            mapping.update((node_id, placeholder) for node_id in members)
            logger.debug(f"Collapsed cluster '{value}' ({len(members)} nodes) into {placeholder}")

        remaining = [line for line in node_lines if line.node_id not in mapping]

        rewritten = []
        for line in edge_lines:
            source = mapping.get(line.source, line.source)
            target = mapping.get(line.target, line.target)
            if line.source in mapping and line.target in mapping and source == target:
                continue
            rewritten.append(EdgeLine(source, target, line.attrs))

        logger.debug(f"Dropped {len(edge_lines) - len(rewritten)} edges internal to clusters")
        return placeholder_lines + remaining, rewritten


class RankGrouper:
    """Wraps nodes that share a ``rank`` value into same-rank groups.

    Only ranks held by two or more declared nodes form a group; a lone
    member stays a standalone declaration. Edges are never affected.
    """

    def __init__(self, column: str = RANK_COLUMN):
        self.column = column

    def apply(self, doc: GraphDocument,
              node_lines: list[NodeLine]) -> tuple[list[NodeLine], list[RankGroup]]:
        declared = {line.node_id for line in node_lines}
        ranks = {
            rank: members
            for rank, members in _group_by(doc, self.column).items()
            if len([node_id for node_id in members if node_id in declared]) > 1
        }
        if not ranks:
            return node_lines, []

        rank_of = {node_id: rank for rank, members in ranks.items() for node_id in members}
        standalone = [line for line in node_lines if line.node_id not in rank_of]
        groups = [
            RankGroup(rank, tuple(line for line in node_lines if rank_of.get(line.node_id) == rank))
            for rank in ranks
        ]

        logger.debug(f"Formed {len(groups)} same-rank groups")
        return standalone, groups
