"""graphdot - attributed multigraph documents rendered as Graphviz DOT.

graphdot keeps a graph as node and edge tables with default attribute
statements and turns it into DOT text for an external layout engine.
"""

__version__ = "0.1.0"
__description__ = "Attributed multigraph documents rendered as Graphviz DOT"

from graphdot.config import GraphdotConfig, load_config
from graphdot.errors import ConfigError, GraphdotError, GraphReferenceError, SchemaError
from graphdot.graph import GraphDocument, create_graph, render_dot

__all__ = [
    "__version__",
    "__description__",
    "GraphdotConfig",
    "load_config",
    "GraphdotError",
    "SchemaError",
    "GraphReferenceError",
    "ConfigError",
    "GraphDocument",
    "create_graph",
    "render_dot",
]
