"""Renderer framework: statement types, renderer base class and registry."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from .models import GraphDocument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeLine:
    """A node declaration: id and its resolved attribute list."""
    node_id: str
    attrs: str = ""


@dataclass(frozen=True)
class EdgeLine:
    """An edge statement: endpoints and the resolved attribute list."""
    source: str
    target: str
    attrs: str = ""


@dataclass(frozen=True)
class RankGroup:
    """Node declarations that must share a rank in the layout."""
    rank: str
    lines: tuple[NodeLine, ...] = ()


@dataclass
class DotSections:
    """Intermediate result filled in stage by stage before assembly.

    Optional fields stay None until the stage that produces them has run.
    """
    header: str
    attr_statements: list[str] | None = None
    node_lines: list[NodeLine] | None = None
    rank_groups: list[RankGroup] = field(default_factory=list)
    edge_lines: list[EdgeLine] | None = None


class GraphRenderer(ABC):
    """Abstract base class for graph renderers."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name of the output format."""
        pass

    @abstractmethod
    def render(self, doc: GraphDocument) -> str:
        """Render a graph document to text."""
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get file extension for this format."""
        pass


class GraphGenerator:
    """Selects a registered renderer by format name."""

    def __init__(self):
        self.renderers: dict[str, GraphRenderer] = {}

    def add_renderer(self, renderer: GraphRenderer) -> None:
        """Add a graph renderer."""
        self.renderers[renderer.format_name] = renderer

    def render_graph(self, doc: GraphDocument, format_name: str = "dot") -> str:
        """Render a graph document with the named renderer.

        Args:
            doc: Graph document to render
            format_name: Output format

        Returns:
            Rendered graph as string
        """
        if format_name not in self.renderers:
            available = list(self.renderers.keys())
            raise ValueError(f"Unknown format '{format_name}'. Available: {available}")

        renderer = self.renderers[format_name]
        logger.info(f"Rendering graph with {renderer.format_name} renderer")
        return renderer.render(doc)
