"""Graph model builder -- flattens the content tree into nodes and edges."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .models import (
    RELATED_WEIGHT,
    STRUCTURAL_WEIGHT,
    Edge,
    GraphModel,
    Node,
    NodeKind,
    Position,
    TreeEntry,
)

logger = logging.getLogger(__name__)

# Related topics that are linked even though they live in different
# sections.  Each term is matched as a substring of node paths.
RELATED_TOPICS: list[tuple[str, str]] = [
    ("installation", "quick-start"),
    ("basic-usage", "configuration"),
    ("overview", "authentication"),
    ("endpoints", "authentication"),
    ("code-examples", "best-practices"),
]

_PAGE_SUFFIXES = (".mdx", ".md")


def title_from_name(name: str) -> str:
    """Strip a markdown extension from a tree entry name."""
    for suffix in _PAGE_SUFFIXES:
        if name.lower().endswith(suffix):
            return name[: -len(suffix)].strip()
    return name.strip()


@dataclass
class _Accumulator:
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    index: dict[str, Node] = field(default_factory=dict)


def build_graph_model(
    tree: Sequence[TreeEntry],
    *,
    width: float = 800.0,
    height: float = 600.0,
    related_topics: Iterable[tuple[str, str]] = RELATED_TOPICS,
) -> GraphModel:
    """Build the node/edge model for *tree*.

    Every node starts at the viewport centre; the layout engine moves it.
    Building twice from the same tree gives identical output.
    """
    acc = _Accumulator()
    seed = Position(x=width / 2 if width > 0 else 400.0, y=height / 2 if height > 0 else 300.0)
    _walk(tree, 0, None, acc, seed)
    structural = len(acc.edges)

    related = _link_related(acc, related_topics)

    logger.debug(
        "Built graph: %d nodes, %d structural edges, %d related edges",
        len(acc.nodes), structural, related,
    )
    return GraphModel(nodes=acc.nodes, edges=acc.edges)


def _walk(
    entries: Sequence[TreeEntry],
    level: int,
    parent_id: str | None,
    acc: _Accumulator,
    seed: Position,
) -> None:
    for entry in entries:
        if entry.path in acc.index:
            logger.warning("Duplicate tree path %r skipped", entry.path)
            continue

        node = Node(
            id=entry.path,
            title=title_from_name(entry.name),
            path=entry.path,
            kind=NodeKind.group if entry.type == "directory" else NodeKind.page,
            level=level,
            position=seed.model_copy(),
        )
        acc.nodes.append(node)
        acc.index[node.id] = node

        if parent_id is not None:
            _connect(acc, parent_id, node.id, STRUCTURAL_WEIGHT)

        if entry.children:
            _walk(entry.children, level + 1, node.id, acc, seed)


def _connect(acc: _Accumulator, a: str, b: str, weight: float) -> bool:
    """Add an undirected edge, recording both directions.  Skips duplicates."""
    node_a = acc.index[a]
    node_b = acc.index[b]
    if b in node_a.connections:
        return False
    node_a.connect(b)
    node_b.connect(a)
    acc.edges.append(Edge(source=a, target=b, weight=weight))
    return True


def _first_path_match(nodes: list[Node], term: str) -> Node | None:
    for node in nodes:
        if term in node.path:
            return node
    return None


def _link_related(acc: _Accumulator, pairs: Iterable[tuple[str, str]]) -> int:
    added = 0
    for term_a, term_b in pairs:
        node_a = _first_path_match(acc.nodes, term_a)
        node_b = _first_path_match(acc.nodes, term_b)
        if node_a is None or node_b is None or node_a.id == node_b.id:
            logger.debug("Related topics %r <-> %r not found", term_a, term_b)
            continue
        if _connect(acc, node_a.id, node_b.id, RELATED_WEIGHT):
            added += 1
    return added
