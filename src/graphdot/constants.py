"""Attribute vocabularies and color tables for DOT generation.

Recognized attribute names, reserved table columns and the X11 color name
table used by the alpha transform are centralized here.
"""

from typing import Dict, FrozenSet, Tuple

# Node table columns emitted into node statements
NODE_ATTRIBUTES: FrozenSet[str] = frozenset({
    "color", "distortion", "fillcolor", "fixedsize", "fontcolor",
    "fontname", "fontsize", "group", "height", "label", "labelloc",
    "margin", "orientation", "penwidth", "peripheries", "pos", "shape",
    "sides", "skew", "style", "tooltip", "width", "img", "icon",
})

# Edge table columns emitted into edge statements
EDGE_ATTRIBUTES: FrozenSet[str] = frozenset({
    "arrowhead", "arrowsize", "arrowtail", "color", "constraint",
    "decorate", "dir", "edgeURL", "edgehref", "edgetarget", "edgetooltip",
    "fontcolor", "fontname", "fontsize", "headclip", "headhref",
    "headlabel", "headport", "headtarget", "headtooltip", "headURL",
    "href", "id", "label", "labelangle", "labeldistance", "labelfloat",
    "labelfontcolor", "labelfontname", "labelfontsize", "labelhref",
    "labelURL", "labeltarget", "labeltooltip", "layer", "lhead", "ltail",
    "minlen", "penwidth", "samehead", "sametail", "style", "tailclip",
    "tailhref", "taillabel", "tailport", "tailtarget", "tailtooltip",
    "tailURL", "target", "tooltip", "weight",
})

# Columns that would collide with the id/endpoint columns of a table
RESERVED_NODE_COLUMNS: FrozenSet[str] = frozenset({"id", "node", "nodes"})
RESERVED_EDGE_COLUMNS: FrozenSet[str] = frozenset({"from", "to"})

NAMESPACES: Tuple[str, ...] = ("graph", "node", "edge")

# Color attributes that may carry an alpha companion column
COLOR_ATTRIBUTES: Tuple[str, ...] = ("color", "fillcolor", "fontcolor")
ALPHA_COLUMN = "alpha"
ALPHA_PREFIX = "alpha:"

# Structural node columns consumed by the grouping stages
CLUSTER_COLUMN = "cluster"
RANK_COLUMN = "rank"
POSITION_COLUMNS: Tuple[str, str] = ("x", "y")

# Placeholder node styling for collapsed clusters
CLUSTER_PLACEHOLDER_STYLE: Tuple[Tuple[str, str], ...] = (
    ("shape", "circle"),
    ("fixedsize", "true"),
    ("fontsize", "8pt"),
    ("peripheries", "2"),
)

# Continuation indent of multi-line default statements, per namespace
DEFAULT_STATEMENT_CONTINUATION: Dict[str, str] = {
    "graph": " " * 7,
    "node": " " * 5,
    "edge": " " * 5,
}

# X11 color names (rgb.txt values, which differ from CSS for gray,
# green, maroon and purple)
_X11_BASE_COLORS: Dict[str, str] = {
    "aliceblue": "#F0F8FF", "antiquewhite": "#FAEBD7",
    "aquamarine": "#7FFFD4", "azure": "#F0FFFF", "beige": "#F5F5DC",
    "bisque": "#FFE4C4", "black": "#000000", "blanchedalmond": "#FFEBCD",
    "blue": "#0000FF", "blueviolet": "#8A2BE2", "brown": "#A52A2A",
    "burlywood": "#DEB887", "cadetblue": "#5F9EA0",
    "chartreuse": "#7FFF00", "chocolate": "#D2691E", "coral": "#FF7F50",
    "cornflowerblue": "#6495ED", "cornsilk": "#FFF8DC", "cyan": "#00FFFF",
    "darkblue": "#00008B", "darkcyan": "#008B8B",
    "darkgoldenrod": "#B8860B", "darkgray": "#A9A9A9",
    "darkgreen": "#006400", "darkgrey": "#A9A9A9", "darkkhaki": "#BDB76B",
    "darkmagenta": "#8B008B", "darkolivegreen": "#556B2F",
    "darkorange": "#FF8C00", "darkorchid": "#9932CC", "darkred": "#8B0000",
    "darksalmon": "#E9967A", "darkseagreen": "#8FBC8F",
    "darkslateblue": "#483D8B", "darkslategray": "#2F4F4F",
    "darkslategrey": "#2F4F4F", "darkturquoise": "#00CED1",
    "darkviolet": "#9400D3", "deeppink": "#FF1493",
    "deepskyblue": "#00BFFF", "dimgray": "#696969", "dimgrey": "#696969",
    "dodgerblue": "#1E90FF", "firebrick": "#B22222",
    "floralwhite": "#FFFAF0", "forestgreen": "#228B22",
    "gainsboro": "#DCDCDC", "ghostwhite": "#F8F8FF", "gold": "#FFD700",
    "goldenrod": "#DAA520", "gray": "#BEBEBE", "green": "#00FF00",
    "greenyellow": "#ADFF2F", "grey": "#BEBEBE", "honeydew": "#F0FFF0",
    "hotpink": "#FF69B4", "indianred": "#CD5C5C", "ivory": "#FFFFF0",
    "khaki": "#F0E68C", "lavender": "#E6E6FA", "lavenderblush": "#FFF0F5",
    "lawngreen": "#7CFC00", "lemonchiffon": "#FFFACD",
    "lightblue": "#ADD8E6", "lightcoral": "#F08080", "lightcyan": "#E0FFFF",
    "lightgoldenrod": "#EEDD82", "lightgoldenrodyellow": "#FAFAD2",
    "lightgray": "#D3D3D3", "lightgreen": "#90EE90", "lightgrey": "#D3D3D3",
    "lightpink": "#FFB6C1", "lightsalmon": "#FFA07A",
    "lightseagreen": "#20B2AA", "lightskyblue": "#87CEFA",
    "lightslateblue": "#8470FF", "lightslategray": "#778899",
    "lightslategrey": "#778899", "lightsteelblue": "#B0C4DE",
    "lightyellow": "#FFFFE0", "limegreen": "#32CD32", "linen": "#FAF0E6",
    "magenta": "#FF00FF", "maroon": "#B03060",
    "mediumaquamarine": "#66CDAA", "mediumblue": "#0000CD",
    "mediumorchid": "#BA55D3", "mediumpurple": "#9370DB",
    "mediumseagreen": "#3CB371", "mediumslateblue": "#7B68EE",
    "mediumspringgreen": "#00FA9A", "mediumturquoise": "#48D1CC",
    "mediumvioletred": "#C71585", "midnightblue": "#191970",
    "mintcream": "#F5FFFA", "mistyrose": "#FFE4E1", "moccasin": "#FFE4B5",
    "navajowhite": "#FFDEAD", "navy": "#000080", "navyblue": "#000080",
    "oldlace": "#FDF5E6", "olivedrab": "#6B8E23", "orange": "#FFA500",
    "orangered": "#FF4500", "orchid": "#DA70D6",
    "palegoldenrod": "#EEE8AA", "palegreen": "#98FB98",
    "paleturquoise": "#AFEEEE", "palevioletred": "#DB7093",
    "papayawhip": "#FFEFD5", "peachpuff": "#FFDAB9", "peru": "#CD853F",
    "pink": "#FFC0CB", "plum": "#DDA0DD", "powderblue": "#B0E0E6",
    "purple": "#A020F0", "red": "#FF0000", "rosybrown": "#BC8F8F",
    "royalblue": "#4169E1", "saddlebrown": "#8B4513", "salmon": "#FA8072",
    "sandybrown": "#F4A460", "seagreen": "#2E8B57", "seashell": "#FFF5EE",
    "sienna": "#A0522D", "skyblue": "#87CEEB", "slateblue": "#6A5ACD",
    "slategray": "#708090", "slategrey": "#708090", "snow": "#FFFAFA",
    "springgreen": "#00FF7F", "steelblue": "#4682B4", "tan": "#D2B48C",
    "thistle": "#D8BFD8", "tomato": "#FF6347", "turquoise": "#40E0D0",
    "violet": "#EE82EE", "violetred": "#D02090", "wheat": "#F5DEB3",
    "white": "#FFFFFF", "whitesmoke": "#F5F5F5", "yellow": "#FFFF00",
    "yellowgreen": "#9ACD32",
}

# Channel value of grayN / greyN for N = 0..100
_X11_GRAY_LEVELS: Tuple[int, ...] = (
    0, 3, 5, 8, 10, 13, 15, 18, 20, 23,
    26, 28, 31, 33, 36, 38, 41, 43, 46, 48,
    51, 54, 56, 59, 61, 64, 66, 69, 71, 74,
    77, 79, 82, 84, 87, 89, 92, 94, 97, 99,
    102, 105, 107, 110, 112, 115, 117, 120, 122, 125,
    127, 130, 133, 135, 138, 140, 143, 145, 148, 150,
    153, 156, 158, 161, 163, 166, 168, 171, 173, 176,
    179, 181, 184, 186, 189, 191, 194, 196, 199, 201,
    204, 207, 209, 212, 214, 217, 219, 222, 224, 227,
    229, 232, 235, 237, 240, 242, 245, 247, 250, 252,
    255,
)


def _build_x11_table() -> Dict[str, str]:
    table = dict(_X11_BASE_COLORS)
    for level, channel in enumerate(_X11_GRAY_LEVELS):
        hex_value = f"#{channel:02X}{channel:02X}{channel:02X}"
        table[f"gray{level}"] = hex_value
        table[f"grey{level}"] = hex_value
    return table


X11_COLORS: Dict[str, str] = _build_x11_table()
