"""Decide which nodes and links are drawn for the current focus or query."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .models import GraphMode, GraphModel, link_key
from .search import SearchResult, normalize_query

DEFAULT_SEARCH_LIMIT = 8
DEFAULT_HUB_LIMIT = 3


@dataclass
class Visibility:
    mode: GraphMode
    visible_nodes: set[str] = field(default_factory=set)
    # Both "a-b" and "b-a" are stored so lookups ignore edge orientation.
    visible_links: set[str] = field(default_factory=set)

    def shows_node(self, node_id: str) -> bool:
        return node_id in self.visible_nodes

    def shows_link(self, source: str, target: str) -> bool:
        return link_key(source, target) in self.visible_links

    def _add_link(self, a: str, b: str) -> None:
        self.visible_links.add(link_key(a, b))
        self.visible_links.add(link_key(b, a))


def resolve_visibility(
    model: GraphModel,
    *,
    query: str = "",
    results: Sequence[SearchResult] = (),
    focus_id: str | None = None,
    search_limit: int = DEFAULT_SEARCH_LIMIT,
    hub_limit: int = DEFAULT_HUB_LIMIT,
) -> Visibility:
    """Compute the visible node and link sets.  *model* is not modified.

    A non-blank *query* selects search mode, where *results* must already
    be ranked.  Otherwise the view is built around *focus_id*; an id that
    is not in the model counts as no focus.
    """
    if normalize_query(query):
        return _search_view(model, results, search_limit)
    return _focus_view(model, focus_id, hub_limit)


def _search_view(
    model: GraphModel, results: Sequence[SearchResult], limit: int
) -> Visibility:
    vis = Visibility(mode=GraphMode.search)
    top = {r.id for r in results[:limit]}
    vis.visible_nodes.update(top)

    for edge in model.edges:
        if edge.source in top and edge.target in top:
            vis._add_link(edge.source, edge.target)
    return vis


def _focus_view(model: GraphModel, focus_id: str | None, hub_limit: int) -> Visibility:
    vis = Visibility(mode=GraphMode.focus)
    focus = model.get(focus_id)

    if focus is None:
        hubs = [n for n in model.nodes if len(n.connections) > 1][:hub_limit]
        vis.visible_nodes.update(n.id for n in hubs)
        return vis

    vis.visible_nodes.add(focus.id)
    for conn_id in focus.connections:
        vis.visible_nodes.add(conn_id)
        vis._add_link(focus.id, conn_id)

    # connections are symmetric, but resolve the reverse side explicitly.
    for node in model.nodes:
        if focus.id in node.connections:
            vis.visible_nodes.add(node.id)
            vis._add_link(node.id, focus.id)
    return vis
