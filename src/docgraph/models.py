"""Pydantic models for docgraph's graph pipeline."""

from __future__ import annotations

from enum import Enum
from typing import Iterator, Literal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Content tree (external input)
# ---------------------------------------------------------------------------

class TreeEntry(BaseModel):
    """One entry of the host's documentation tree."""

    name: str
    path: str
    type: Literal["file", "directory"]
    children: list[TreeEntry] = Field(default_factory=list)


TreeEntry.model_rebuild()


# ---------------------------------------------------------------------------
# Graph model
# ---------------------------------------------------------------------------

class NodeKind(str, Enum):
    page = "page"
    group = "group"


class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0


class Node(BaseModel):
    """A documentation entry placed in the graph."""

    id: str
    title: str
    path: str
    kind: NodeKind
    level: int = 0
    connections: list[str] = Field(default_factory=list)
    position: Position = Field(default_factory=Position)

    def connect(self, other_id: str) -> bool:
        """Record *other_id* as a neighbour.  Returns False if already present."""
        if other_id == self.id or other_id in self.connections:
            return False
        self.connections.append(other_id)
        return True


STRUCTURAL_WEIGHT = 1.0
RELATED_WEIGHT = 0.7


class Edge(BaseModel):
    """A connection instantiated for rendering."""

    source: str
    target: str
    weight: float = STRUCTURAL_WEIGHT

    def keys(self) -> Iterator[str]:
        """Both orientations of the link key."""
        yield link_key(self.source, self.target)
        yield link_key(self.target, self.source)


def link_key(a: str, b: str) -> str:
    return f"{a}-{b}"


class GraphModel(BaseModel):
    """Nodes and edges built from one content tree."""

    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)

    def get(self, node_id: str | None) -> Node | None:
        if node_id is None:
            return None
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def by_id(self) -> dict[str, Node]:
        return {n.id: n for n in self.nodes}


# ---------------------------------------------------------------------------
# Render snapshot
# ---------------------------------------------------------------------------

class GraphMode(str, Enum):
    focus = "focus"
    search = "search"


class NodeRole(str, Enum):
    """Rendering role, in the order the host should prefer them."""

    search = "search"
    current = "current"
    focused = "focused"
    group = "group"
    page = "page"


class ViewportTransform(BaseModel):
    scale: float = 1.0
    translate: Position = Field(default_factory=Position)
    zoom_label: str = ""


class RenderNode(BaseModel):
    id: str
    title: str
    path: str
    kind: NodeKind
    level: int
    position: Position
    visible: bool
    role: NodeRole
    radius: float
    search_score: float = 0.0


class RenderEdge(BaseModel):
    source: str
    target: str
    weight: float
    visible: bool


class RenderSnapshot(BaseModel):
    """Everything the host needs to draw one frame of the graph."""

    mode: GraphMode
    query: str = ""
    focus_id: str | None = None
    current_path: str | None = None
    compact: bool = False
    nodes: list[RenderNode] = Field(default_factory=list)
    edges: list[RenderEdge] = Field(default_factory=list)
    viewport: ViewportTransform = Field(default_factory=ViewportTransform)

    # Interaction state
    clicked_id: str | None = None
    pending_switch_id: str | None = None
    navigating: bool = False
    debug_cursor: bool = False

    @property
    def visible_nodes(self) -> list[RenderNode]:
        return [n for n in self.nodes if n.visible]

    @property
    def visible_edges(self) -> list[RenderEdge]:
        return [e for e in self.edges if e.visible]


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class GraphConfig(BaseModel):
    """User configuration stored in ``.docgraph/config.toml``.

    CLI flags override these values for a single invocation.
    Precedence: CLI flag > config.toml > default.
    """

    width: float = Field(default=800.0, allow_inf_nan=False)
    """Default rendering width in layout units."""

    height: float = Field(default=600.0, allow_inf_nan=False)
    """Default rendering height.  Heights of 300 or less use compact radii."""

    reduced_motion: bool = False
    """Shorten the click-confirmation fade from 600 ms to 50 ms."""

    debug_logging: bool = False
    """Emit DEBUG-level logs from the graph pipeline."""

    debug_cursor: bool = False
    """Ask the host to draw its debug cursor overlay."""

    search_limit: int = Field(default=8, ge=1)
    """Maximum number of search results shown in search mode."""

    hub_limit: int = Field(default=3, ge=0)
    """Nodes shown when there is neither a focus nor a query."""
