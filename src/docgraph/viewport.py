"""Pan/zoom state for the graph viewport.

The host passes pointer coordinates and tells the controller whether an
event happened over the graph container or on its background; the
controller never looks anything up on its own.
"""

from __future__ import annotations

import logging

from .models import Position, ViewportTransform

logger = logging.getLogger(__name__)

MIN_SCALE = 0.5
MAX_SCALE = 2.0
ZOOM_STEP = 1.2
PAN_LIMIT = 200.0

RESET_KEY = "0"


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class ViewportController:
    """Scale and translation, always within bounds."""

    def __init__(self) -> None:
        self.scale: float = 1.0
        self.translate = Position()
        self.dragging: bool = False
        self._drag_start = Position()
        self._drag_origin = Position()

    # -- zoom ----------------------------------------------------------------

    def zoom_in(self) -> None:
        self._set_scale(self.scale * ZOOM_STEP)

    def zoom_out(self) -> None:
        self._set_scale(self.scale / ZOOM_STEP)

    def wheel(self, delta_y: float, over_graph: bool = True) -> bool:
        """Zoom on a wheel event.

        Returns True when the event was consumed.  Events outside the graph
        container are left alone so page scrolling keeps working.
        """
        if not over_graph:
            return False
        if delta_y > 0:
            self.zoom_out()
        else:
            self.zoom_in()
        return True

    def reset(self) -> None:
        self.scale = 1.0
        self.translate = Position()
        self.dragging = False

    def handle_key(self, key: str, ctrl: bool = False, meta: bool = False) -> bool:
        """Ctrl+0 / Cmd+0 resets the view.  Returns True if handled."""
        if key == RESET_KEY and (ctrl or meta):
            self.reset()
            return True
        return False

    # -- pan -----------------------------------------------------------------

    def drag_start(self, x: float, y: float, on_background: bool = True) -> bool:
        """Begin a pan.  Drags that start on a node are ignored."""
        if not on_background:
            return False
        self.dragging = True
        self._drag_start = Position(x=x, y=y)
        self._drag_origin = self.translate.model_copy()
        return True

    def drag_move(self, x: float, y: float) -> None:
        if not self.dragging:
            return
        self.translate = self._clamped(
            self._drag_origin.x + (x - self._drag_start.x),
            self._drag_origin.y + (y - self._drag_start.y),
        )

    def drag_end(self) -> None:
        self.dragging = False

    # -- state ---------------------------------------------------------------

    @property
    def pan_limit(self) -> float:
        """Panning range grows with zoom."""
        return PAN_LIMIT * self.scale

    def transform(self) -> ViewportTransform:
        return ViewportTransform(
            scale=self.scale,
            translate=self.translate.model_copy(),
            zoom_label=zoom_label(self.scale),
        )

    def _set_scale(self, scale: float) -> None:
        self.scale = _clamp(scale, MIN_SCALE, MAX_SCALE)
        # Zooming out shrinks the pan range; keep the translation inside it.
        self.translate = self._clamped(self.translate.x, self.translate.y)
        logger.debug("Viewport scale %.3f", self.scale)

    def _clamped(self, x: float, y: float) -> Position:
        limit = self.pan_limit
        return Position(x=_clamp(x, -limit, limit), y=_clamp(y, -limit, limit))


def zoom_label(scale: float) -> str:
    """``"(120%)"`` style indicator, empty at 100%."""
    if scale == 1:
        return ""
    return f"({round(scale * 100)}%)"
