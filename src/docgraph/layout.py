"""Focus-centred radial layout.

The focused node sits at the centre of the viewport, its direct
connections on an inner ring and nodes that point back at it on an outer
ring.  Everything else is parked beyond the visible area so it can animate
in when the focus changes.  With no focus, nodes share a single ring.

The layout is a pure function of its inputs: no randomness, no state.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .models import Node, Position

FALLBACK_WIDTH = 800.0
FALLBACK_HEIGHT = 600.0
COMPACT_MAX_HEIGHT = 300.0

# Maximum ring slots when no node is focused.
UNFOCUSED_SLOTS = 8


@dataclass(frozen=True)
class Radii:
    inner: float
    outer: float
    parked: float
    unfocused: float


FULL_RADII = Radii(inner=120.0, outer=200.0, parked=400.0, unfocused=150.0)
COMPACT_RADII = Radii(inner=80.0, outer=140.0, parked=300.0, unfocused=100.0)


def effective_size(width: float, height: float) -> tuple[float, float]:
    """Replace unmeasured or non-finite dimensions with the nominal 800x600."""
    if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
        return FALLBACK_WIDTH, FALLBACK_HEIGHT
    return width, height


def is_compact(width: float, height: float) -> bool:
    """Sidebar-sized embeds use tighter rings."""
    _, h = effective_size(width, height)
    return h <= COMPACT_MAX_HEIGHT


def _on_ring(cx: float, cy: float, angle: float, radius: float) -> Position:
    return Position(x=cx + math.cos(angle) * radius, y=cy + math.sin(angle) * radius)


def layout_nodes(
    nodes: Sequence[Node],
    focus_id: str | None,
    width: float,
    height: float,
) -> list[Node]:
    """Return copies of *nodes* with positions assigned.

    A *focus_id* that matches no node is treated as no focus.
    """
    w, h = effective_size(width, height)
    radii = COMPACT_RADII if h <= COMPACT_MAX_HEIGHT else FULL_RADII
    cx, cy = w / 2, h / 2

    focus = next((n for n in nodes if n.id == focus_id), None) if focus_id else None
    placed: dict[str, Position] = {}

    if focus is None:
        slots = min(len(nodes), UNFOCUSED_SLOTS) or 1
        for i, node in enumerate(nodes):
            placed[node.id] = _on_ring(cx, cy, 2 * math.pi * i / slots, radii.unfocused)
        return [n.model_copy(update={"position": placed[n.id]}, deep=True) for n in nodes]

    placed[focus.id] = Position(x=cx, y=cy)

    known = {n.id for n in nodes}
    ring = [c for c in focus.connections if c in known]
    for i, conn_id in enumerate(ring):
        if conn_id in placed:
            continue
        placed[conn_id] = _on_ring(cx, cy, 2 * math.pi * i / len(ring), radii.inner)

    reverse = [n for n in nodes if focus.id in n.connections]
    for i, node in enumerate(reverse):
        if node.id in placed:
            continue
        angle = 2 * math.pi * i / len(reverse) + math.pi
        placed[node.id] = _on_ring(cx, cy, angle, radii.outer)

    total = len(nodes)
    for i, node in enumerate(nodes):
        if node.id in placed:
            continue
        placed[node.id] = _on_ring(cx, cy, 2 * math.pi * i / total, radii.parked)

    return [n.model_copy(update={"position": placed[n.id]}, deep=True) for n in nodes]
