"""Heuristic search over graph nodes.

Scores titles and paths against a free-text query and boosts nodes close
to the current focus.  This is a lightweight ranking for the graph's search
box, not a full-text index.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .models import Node

EXACT_TITLE = 1.0
TITLE_PREFIX = 0.9
TITLE_CONTAINS = 0.7
PATH_CONTAINS = 0.4

FOCUS_BOOST = 0.2
NEIGHBOUR_BOOST = 0.1


@dataclass
class SearchResult:
    node: Node
    score: float

    @property
    def id(self) -> str:
        return self.node.id


def normalize_query(query: str | None) -> str:
    return (query or "").strip().lower()


def base_score(node: Node, query: str) -> float:
    """Score *node* against an already-normalised *query*, before boosts."""
    title = node.title.lower()
    if title == query:
        return EXACT_TITLE
    if title.startswith(query):
        return TITLE_PREFIX
    if query in title:
        return TITLE_CONTAINS
    if query in node.path.lower():
        return PATH_CONTAINS
    return 0.0


def score_node(node: Node, query: str, focus: Node | None = None) -> float:
    """Relevance of *node* for *query* in [0, 1].

    Boosts only apply to nodes that already match.
    """
    q = normalize_query(query)
    if not q:
        return 0.0

    score = base_score(node, q)
    if score <= 0:
        return 0.0

    if focus is not None:
        if node.id == focus.id:
            score += FOCUS_BOOST
        elif node.id in focus.connections:
            score += NEIGHBOUR_BOOST

    return min(score, 1.0)


def search_nodes(
    query: str,
    nodes: Sequence[Node],
    focus_id: str | None = None,
    limit: int | None = None,
) -> list[SearchResult]:
    """Return matching nodes sorted by descending score.

    Ties keep model order.  A blank query matches nothing.
    """
    if not normalize_query(query):
        return []

    focus = next((n for n in nodes if n.id == focus_id), None) if focus_id else None

    results = []
    for node in nodes:
        score = score_node(node, query, focus)
        if score > 0:
            results.append(SearchResult(node=node, score=score))

    # sorted() is stable, so equal scores stay in tree order.
    results = sorted(results, key=lambda r: r.score, reverse=True)
    if limit is not None:
        results = results[:limit]
    return results


def score_map(results: Sequence[SearchResult]) -> dict[str, float]:
    return {r.id: r.score for r in results}
