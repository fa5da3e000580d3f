"""Color transforms: alpha blending from companion columns and palette recoding."""

import logging
import re
from collections.abc import Mapping, Sequence

from matplotlib import colormaps
from matplotlib.colors import to_hex

from ..constants import ALPHA_COLUMN, ALPHA_PREFIX, COLOR_ATTRIBUTES, X11_COLORS
from ..errors import ConfigError, SchemaError
from .attributes import to_text
from .models import AttrValue, GraphDocument

logger = logging.getLogger(__name__)

HEX_COLOR = re.compile(r"#[0-9a-fA-F]{6}")


def alpha_suffix(alpha: AttrValue) -> str:
    """Two-digit alpha suffix for an opacity percentage.

    0 gives "00" (transparent) and 100 gives no suffix at all, matching
    the meaning of an unsuffixed hex color.
    """
    try:
        level = round(float(to_text(alpha)))
    except (ValueError, OverflowError):
        raise ConfigError(f"Alpha must be a number between 0 and 100, got: {alpha!r}")
    if not 0 <= level <= 100:
        raise ConfigError(f"Alpha must be between 0 and 100, got: {alpha!r}")
    return "" if level == 100 else f"{level:02d}"


class ColorAlphaTransform:
    """Blends color columns with their ``alpha:<attribute>`` companion column.

    A bare ``alpha`` column targets the only color column of the table. When
    an alpha companion sits next to more than one of color, fillcolor and
    fontcolor the target is ambiguous and a ConfigError is raised.
    """

    def __init__(self, color_names: Mapping[str, str] = X11_COLORS):
        self.color_names = color_names

    def resolve_target(self, columns: Sequence[str]) -> tuple[str, str] | None:
        """Find the (alpha column, color column) pair of a table, if any."""
        alpha_columns = [c for c in columns if c == ALPHA_COLUMN or c.startswith(ALPHA_PREFIX)]
        if not alpha_columns:
            return None

        color_columns = [c for c in columns if c in COLOR_ATTRIBUTES]
        if len(color_columns) > 1:
            raise ConfigError(
                f"Alpha column is ambiguous with several color columns: {color_columns}",
                {"alpha": alpha_columns, "colors": color_columns}
            )
        if len(alpha_columns) > 1:
            raise ConfigError(f"Only one alpha column is allowed, got: {alpha_columns}",
                              {"alpha": alpha_columns})

        alpha_column = alpha_columns[0]
        if alpha_column == ALPHA_COLUMN:
            if not color_columns:
                return None
            return alpha_column, color_columns[0]

        target = alpha_column[len(ALPHA_PREFIX):]
        if target not in COLOR_ATTRIBUTES:
            raise ConfigError(
                f"'{alpha_column}' must reference one of {list(COLOR_ATTRIBUTES)}",
                {"alpha": alpha_column}
            )
        if target not in columns:
            raise ConfigError(f"'{alpha_column}' references missing column '{target}'",
                              {"alpha": alpha_column})
        return alpha_column, target

    def blend(self, color: AttrValue, alpha: AttrValue) -> AttrValue:
        """Apply one alpha value to one color value."""
        text = to_text(color)
        if text == "" or to_text(alpha) == "":
            return color

        suffix = alpha_suffix(alpha)
        named = self.color_names.get(text)
        if named is not None:
            return named + suffix
        if HEX_COLOR.fullmatch(text):
            return text + suffix
        return color

    def apply(self, doc: GraphDocument) -> GraphDocument:
        """Return a document whose node and edge colors carry their alpha."""
        target = self.resolve_target(doc.node_columns)
        if target is not None:
            alpha_column, color_column = target
            values = [self.blend(node.get(color_column), node.get(alpha_column))
                      for node in doc.nodes.values()]
            doc = doc.with_node_attrs(color_column, values)
            logger.debug(f"Applied node alpha from '{alpha_column}' to '{color_column}'")

        target = self.resolve_target(doc.edge_columns)
        if target is not None:
            alpha_column, color_column = target
            values = [self.blend(edge.get(color_column), edge.get(alpha_column))
                      for edge in doc.edges]
            doc = doc.with_edge_attrs(color_column, values)
            logger.debug(f"Applied edge alpha from '{alpha_column}' to '{color_column}'")

        return doc


def viridis_palette(count: int) -> list[str]:
    """Return ``count`` evenly spaced viridis colors as ``#RRGGBB``."""
    if count <= 0:
        return []
    cmap = colormaps["viridis"]
    if count == 1:
        return [to_hex(cmap(0.0)).upper()]
    return [to_hex(cmap(i / (count - 1))).upper() for i in range(count)]


def colorize_node_attrs(doc: GraphDocument, attr_from: str, attr_to: str,
                        alpha: int | None = None) -> GraphDocument:
    """Recode the distinct values of one node column into viridis colors.

    Args:
        doc: Source document
        attr_from: Column whose distinct values are recoded
        attr_to: Column receiving the colors; replaced in place when present
        alpha: Optional opacity 0-100 appended as a two-digit suffix

    Returns:
        New document with the color column set
    """
    if attr_from not in doc.node_columns:
        raise SchemaError(f"The node attribute '{attr_from}' is not in the node table",
                          {"column": attr_from})

    suffix = "" if alpha is None else alpha_suffix(alpha)

    values = [to_text(node.get(attr_from)) for node in doc.nodes.values()]
    levels = sorted({value for value in values if value})
    palette = dict(zip(levels, viridis_palette(len(levels))))

    colors = [palette[value] + suffix if value else None for value in values]
    logger.debug(f"Recoded {len(levels)} values of '{attr_from}' into '{attr_to}'")
    return doc.with_node_attrs(attr_to, colors)
