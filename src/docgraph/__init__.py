"""Docgraph - interactive documentation graph."""

__version__ = "0.1.0"

from .builder import build_graph_model  # noqa: E402
from .errors import ConfigError, DocGraphError, TreeLoadError  # noqa: E402
from .interaction import InteractionController  # noqa: E402
from .layout import layout_nodes  # noqa: E402
from .models import (  # noqa: E402 -- public re-exports
    Edge,
    GraphConfig,
    GraphModel,
    Node,
    RenderSnapshot,
    TreeEntry,
)
from .search import search_nodes  # noqa: E402
from .session import GraphSession  # noqa: E402
from .viewport import ViewportController  # noqa: E402
from .visibility import resolve_visibility  # noqa: E402

__all__ = [
    "ConfigError",
    "DocGraphError",
    "Edge",
    "GraphConfig",
    "GraphModel",
    "GraphSession",
    "InteractionController",
    "Node",
    "RenderSnapshot",
    "TreeEntry",
    "TreeLoadError",
    "ViewportController",
    "build_graph_model",
    "layout_nodes",
    "resolve_visibility",
    "search_nodes",
]
