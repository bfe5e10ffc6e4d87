"""Click-then-confirm navigation gesture.

Clicking a node focuses it and offers a "switch?" affordance; only
activating that affordance asks the host to navigate.  Timers clear the
transient markers and commit the navigation after a short delay.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

CLICK_FADE_SECONDS = 0.6
CLICK_FADE_REDUCED_SECONDS = 0.05
NAVIGATE_DELAY_SECONDS = 0.1


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> None: ...


class TimerScheduler:
    """Runs callbacks on daemon ``threading.Timer`` threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()


class InteractionState(Enum):
    idle = "idle"
    clicked = "clicked"
    confirming = "confirming"


class InteractionController:
    """State machine for node clicks and the switch affordance."""

    def __init__(
        self,
        on_navigate: Callable[[str], None] | None = None,
        *,
        reduced_motion: bool = False,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._on_navigate = on_navigate
        self._scheduler = scheduler or TimerScheduler()
        self.reduced_motion = reduced_motion

        self.focus_id: str | None = None
        self.clicked_id: str | None = None
        self.pending_switch_id: str | None = None
        self.navigating: bool = False

    @property
    def state(self) -> InteractionState:
        with self._lock:
            if self.clicked_id is not None:
                return InteractionState.clicked
            if self.pending_switch_id is not None:
                return InteractionState.confirming
            return InteractionState.idle

    def set_focus(self, node_id: str | None) -> None:
        """Move focus without a click (e.g. the host navigated elsewhere)."""
        with self._lock:
            self.focus_id = node_id

    def click(self, node_id: str) -> bool:
        """Focus *node_id* and show its switch affordance.

        Returns False when ignored because a navigation is in flight.
        """
        with self._lock:
            if self.navigating:
                return False
            self.focus_id = node_id
            self.clicked_id = node_id
            self.pending_switch_id = node_id

        delay = CLICK_FADE_REDUCED_SECONDS if self.reduced_motion else CLICK_FADE_SECONDS
        self._scheduler.call_later(delay, lambda: self._clear_clicked(node_id))
        logger.debug("Clicked %s", node_id)
        return True

    def activate_switch(self, node_id: str | None = None) -> bool:
        """Commit navigation to *node_id* (default: the pending node).

        Returns False when nothing was scheduled.
        """
        with self._lock:
            if self.navigating:
                return False
            target = node_id or self.pending_switch_id
            if target is None:
                return False
            self.navigating = True
            self.pending_switch_id = None

        self._scheduler.call_later(NAVIGATE_DELAY_SECONDS, lambda: self._navigate(target))
        return True

    def _clear_clicked(self, node_id: str) -> None:
        with self._lock:
            # A newer click owns the marker now.
            if self.clicked_id == node_id:
                self.clicked_id = None

    def _navigate(self, path: str) -> None:
        logger.info("Navigating to %s", path)
        try:
            if self._on_navigate is not None:
                self._on_navigate(path)
        except Exception:
            logger.exception("Navigation handler failed for %s", path)
        finally:
            with self._lock:
                self.navigating = False
