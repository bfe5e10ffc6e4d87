"""Graph session -- the object a host embeds.

Holds the content tree and the transient UI state (current path, focus,
query, dimensions, viewport, click gesture) and turns them into render
snapshots.  Nothing here is persisted.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from .builder import build_graph_model
from .interaction import InteractionController, Scheduler
from .layout import effective_size, is_compact, layout_nodes
from .models import (
    GraphConfig,
    GraphModel,
    Node,
    NodeKind,
    NodeRole,
    RenderEdge,
    RenderNode,
    RenderSnapshot,
    TreeEntry,
)
from .search import SearchResult, normalize_query, score_map, search_nodes
from .viewport import ViewportController
from .visibility import Visibility, resolve_visibility

logger = logging.getLogger(__name__)

COMPACT_RADIUS_SCALE = 0.6


def node_role(node: Node, *, query: str, score: float, current_path: str | None,
              focus_id: str | None) -> NodeRole:
    if normalize_query(query) and score > 0:
        return NodeRole.search
    if node.id == current_path:
        return NodeRole.current
    if node.id == focus_id:
        return NodeRole.focused
    if node.kind is NodeKind.group:
        return NodeRole.group
    return NodeRole.page


def node_radius(node: Node, *, query: str, score: float, current_path: str | None,
                focus_id: str | None, compact: bool) -> float:
    base = COMPACT_RADIUS_SCALE if compact else 1.0
    if node.id == current_path:
        return 8 * base
    if node.id == focus_id:
        return 7 * base
    if normalize_query(query) and score > 0.8:
        return 7 * base
    return (6 if node.kind is NodeKind.group else 5) * base


class GraphSession:
    """Interactive documentation graph for one embedding."""

    def __init__(
        self,
        tree: Sequence[TreeEntry],
        current_path: str | None = None,
        on_navigate: Callable[[str], None] | None = None,
        config: GraphConfig | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.config = config or GraphConfig()
        self._tree = list(tree)
        self.current_path: str | None = None
        self.query = ""

        self._size = (self.config.width, self.config.height)
        self._pending_size: tuple[float, float] | None = None
        self._model: GraphModel | None = None
        self._revision = 0

        # (key, layout, visibility, results) of the last recompute.
        self._frame: tuple[tuple, list[Node], Visibility, list[SearchResult]] | None = None

        self.viewport = ViewportController()
        self.interaction = InteractionController(
            on_navigate,
            reduced_motion=self.config.reduced_motion,
            scheduler=scheduler,
        )
        self.set_current_path(current_path)

    # -- inputs --------------------------------------------------------------

    def set_tree(self, tree: Sequence[TreeEntry]) -> None:
        self._tree = list(tree)
        self._model = None

    def set_current_path(self, path: str | None) -> None:
        """Record where the host navigated.  A non-empty path takes focus."""
        self.current_path = path or None
        if path:
            self.interaction.set_focus(path)

    def set_query(self, query: str) -> None:
        self.query = query or ""

    def resize(self, width: float, height: float) -> None:
        """Queue new dimensions.  Only the latest is applied, on the next snapshot."""
        self._pending_size = (width, height)

    def click(self, node_id: str) -> bool:
        if self.model.get(node_id) is None:
            logger.debug("Ignoring click on unknown node %r", node_id)
            return False
        return self.interaction.click(node_id)

    def activate_switch(self, node_id: str | None = None) -> bool:
        return self.interaction.activate_switch(node_id)

    # -- derived state -------------------------------------------------------

    @property
    def size(self) -> tuple[float, float]:
        return self._pending_size or self._size

    @property
    def focus_id(self) -> str | None:
        return self.interaction.focus_id or self.current_path

    @property
    def model(self) -> GraphModel:
        self._apply_pending_size()
        if self._model is None:
            width, height = effective_size(*self._size)
            self._model = build_graph_model(self._tree, width=width, height=height)
            self._revision += 1
        return self._model

    def search(self) -> list[SearchResult]:
        return search_nodes(self.query, self.model.nodes, self.focus_id)

    def snapshot(self) -> RenderSnapshot:
        model = self.model
        focus_id = self.focus_id
        width, height = self._size
        layout, visibility, results = self._recompute(model, focus_id, width, height)

        compact = is_compact(width, height)
        scores = score_map(results)
        mode = visibility.mode

        nodes = []
        for node in layout:
            score = scores.get(node.id, 0.0)
            nodes.append(RenderNode(
                id=node.id,
                title=node.title,
                path=node.path,
                kind=node.kind,
                level=node.level,
                position=node.position.model_copy(),
                visible=visibility.shows_node(node.id),
                role=node_role(node, query=self.query, score=score,
                               current_path=self.current_path, focus_id=focus_id),
                radius=node_radius(node, query=self.query, score=score,
                                   current_path=self.current_path, focus_id=focus_id,
                                   compact=compact),
                search_score=score,
            ))

        edges = [
            RenderEdge(
                source=e.source,
                target=e.target,
                weight=e.weight,
                visible=visibility.shows_link(e.source, e.target),
            )
            for e in model.edges
        ]

        return RenderSnapshot(
            mode=mode,
            query=self.query,
            focus_id=focus_id if model.get(focus_id) else None,
            current_path=self.current_path,
            compact=compact,
            nodes=nodes,
            edges=edges,
            viewport=self.viewport.transform(),
            clicked_id=self.interaction.clicked_id,
            pending_switch_id=self.interaction.pending_switch_id,
            navigating=self.interaction.navigating,
            debug_cursor=self.config.debug_cursor,
        )

    # -- internals -----------------------------------------------------------

    def _apply_pending_size(self) -> None:
        if self._pending_size is None:
            return
        new_size, self._pending_size = self._pending_size, None
        if new_size != self._size:
            self._size = new_size
            # Seed positions depend on the dimensions.
            self._model = None

    def _recompute(
        self, model: GraphModel, focus_id: str | None, width: float, height: float
    ) -> tuple[list[Node], Visibility, list[SearchResult]]:
        key = (self._revision, focus_id, normalize_query(self.query), width, height)
        if self._frame is not None and self._frame[0] == key:
            return self._frame[1], self._frame[2], self._frame[3]

        results = self.search()
        visibility = resolve_visibility(
            model,
            query=self.query,
            results=results,
            focus_id=focus_id,
            search_limit=self.config.search_limit,
            hub_limit=self.config.hub_limit,
        )
        layout = layout_nodes(model.nodes, focus_id, width, height)
        self._frame = (key, layout, visibility, results)
        logger.debug(
            "Recomputed frame: mode=%s focus=%s visible=%d",
            visibility.mode.value, focus_id, len(visibility.visible_nodes),
        )
        return layout, visibility, results
