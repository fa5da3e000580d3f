"""Attribute resolution: table rows to ordered ``key = 'value'`` lists."""

import logging
from collections.abc import Iterable, Mapping

from ..constants import EDGE_ATTRIBUTES, NODE_ATTRIBUTES, POSITION_COLUMNS
from .models import AttrValue, GraphDocument

logger = logging.getLogger(__name__)


def to_text(value: AttrValue) -> str:
    """Coerce a cell value to the text written into DOT statements."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class AttributeResolver:
    """Turns an element's attribute cells into DOT attribute fragments.

    Columns are visited in table order and only recognized attribute names
    are emitted. Cells that are missing or resolve to an empty string are
    skipped. Every emitted value is wrapped in single quotes; quotes inside
    values are not escaped.
    """

    def __init__(self, recognized: Iterable[str]):
        self.recognized = frozenset(recognized)

    def fragments(self, attrs: Mapping[str, AttrValue], columns: Iterable[str]) -> tuple[str, ...]:
        """Resolve one row into ``name = 'value'`` fragments in column order."""
        resolved: tuple[str, ...] = ()
        for column in columns:
            if column not in self.recognized:
                continue
            text = to_text(attrs.get(column))
            if text == "":
                continue
            resolved = resolved + (f"{column} = '{text}'",)
        return resolved

    def resolve(self, attrs: Mapping[str, AttrValue], columns: Iterable[str]) -> str:
        """Resolve one row into a comma separated attribute list."""
        return ", ".join(self.fragments(attrs, columns))


NODE_RESOLVER = AttributeResolver(NODE_ATTRIBUTES)
EDGE_RESOLVER = AttributeResolver(EDGE_ATTRIBUTES)


def derive_positions(doc: GraphDocument) -> GraphDocument:
    """Derive ``pos`` from ``x`` and ``y`` node columns when both exist.

    Nodes with both coordinates get ``pos = "x,y!"`` (pinned position).
    Nodes missing either coordinate keep their existing ``pos`` value.
    """
    x_column, y_column = POSITION_COLUMNS
    if x_column not in doc.node_columns or y_column not in doc.node_columns:
        return doc

    positions = []
    for node in doc.nodes.values():
        x, y = to_text(node.get(x_column)), to_text(node.get(y_column))
        positions.append(f"{x},{y}!" if x and y else node.get("pos"))

    logger.debug(f"Derived node positions from '{x_column}' and '{y_column}' columns")
    return doc.with_node_attrs("pos", positions)
