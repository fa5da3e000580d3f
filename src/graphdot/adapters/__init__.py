"""Adapters between graph documents and external graph libraries."""

from .external import (
    ExternalGraph,
    from_external,
    from_networkx,
    merge_attributes,
    to_external,
    to_networkx,
)

__all__ = [
    "ExternalGraph",
    "to_external",
    "from_external",
    "to_networkx",
    "from_networkx",
    "merge_attributes",
]
