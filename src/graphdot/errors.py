"""Error taxonomy for graph document construction and rendering.

Every failure is raised synchronously before a new document value is
produced, so callers never observe a half-built graph.
"""


class GraphdotError(Exception):
    """Base class for graphdot errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class SchemaError(GraphdotError):
    """Raised when node or edge tables are malformed.

    Covers missing or empty ids, duplicate node ids, malformed endpoint
    pairs, misaligned attribute columns and reserved column names.
    """
    pass


class GraphReferenceError(GraphdotError, ReferenceError):
    """Raised when an edge endpoint names a node that is not in the graph."""
    pass


class ConfigError(GraphdotError):
    """Raised for ambiguous or colliding attribute configuration."""
    pass
