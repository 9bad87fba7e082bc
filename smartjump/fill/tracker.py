"""
Window fill tracker.

Remembers which display each top-level window was last seen on. When a move
notification shows a window on a different display than before, the window is
resized to fill its new display after a short settle delay, letting the move
finish first. The first move seen for an untracked window only records it.
"""

from __future__ import annotations

import logging
from typing import Optional

from smartjump.host.backend import (
    Scheduler,
    TimerHandle,
    WindowEventHandlers,
    WindowHost,
    WindowRef,
    WindowSubscription,
)

__all__ = ["WindowFillTracker"]

logger = logging.getLogger(__name__)

_DEFAULT_SETTLE_DELAY_SECONDS: float = 0.1


class WindowFillTracker:
    """Fills windows to their display after cross-display moves"""

    def __init__(
        self,
        window_host: WindowHost,
        scheduler: Scheduler,
        settle_delay: float = _DEFAULT_SETTLE_DELAY_SECONDS,
    ) -> None:
        """
        Initialize tracker

        Args:
            window_host: Window enumeration and events
            scheduler: Deferred action provider
            settle_delay: Seconds between the move and the fill
        """
        self._window_host: WindowHost = window_host
        self._scheduler: Scheduler = scheduler
        self._settle_delay: float = settle_delay
        self._window_displays: dict[int, int] = {}
        self._pending: dict[int, TimerHandle] = {}
        self._subscription: Optional[WindowSubscription] = None

    @property
    def window_displays(self) -> dict[int, int]:
        """window id -> last known display id"""
        return self._window_displays

    def start(self) -> None:
        """Subscribe to window events and seed existing windows"""
        self.stop()
        self._subscription = self._window_host.windowEvents_subscribe(
            WindowEventHandlers(
                created=self.window_track,
                focused=self.window_track,
                moved=self.windowMoved_handle,
                destroyed=self.window_forget,
            )
        )
        windows = self._window_host.windows_list()
        for win in windows:
            self.window_track(win)
        logger.info("Smart fill screen loaded")
        logger.info("  Tracking %d existing windows", len(windows))

    def stop(self) -> None:
        """Unsubscribe and cancel pending fills; idempotent"""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        for handle in self._pending.values():
            handle.stop()
        self._pending.clear()

    def window_track(self, win: WindowRef) -> None:
        """Record a window's current display"""
        if win.window_id <= 0:
            return
        display_id = win.displayId_get()
        if display_id is not None:
            self._window_displays[win.window_id] = display_id

    def window_forget(self, win: WindowRef) -> None:
        """Drop tracking for a destroyed window"""
        self._window_displays.pop(win.window_id, None)
        handle = self._pending.pop(win.window_id, None)
        if handle is not None:
            handle.stop()

    def windowMoved_handle(self, win: WindowRef) -> None:
        """
        React to a window move

        Args:
            win: Moved window
        """
        window_id = win.window_id
        if window_id <= 0:
            return

        current = win.displayId_get()
        if current is None:
            return

        previous = self._window_displays.get(window_id)
        self._window_displays[window_id] = current

        if previous is None or previous == current:
            return

        logger.debug(
            "Window '%s' moved to display %d (was %d) - filling",
            win.title() or "untitled",
            current,
            previous,
        )
        earlier = self._pending.pop(window_id, None)
        if earlier is not None:
            earlier.stop()
        self._pending[window_id] = self._scheduler.deferred_schedule(
            self._settle_delay, lambda: self.window_fill(win)
        )

    def window_fill(self, win: WindowRef) -> bool:
        """
        Resize a window to fill the display it is on now

        Args:
            win: Window to fill

        Returns:
            True if the frame was applied
        """
        self._pending.pop(win.window_id, None)
        if not win.isValid():
            logger.debug("Window %d vanished before fill", win.window_id)
            return False

        frame = win.displayFrame_get()
        display_id = win.displayId_get()
        if frame is None or display_id is None:
            return False

        win.frame_set(frame)
        self._window_displays[win.window_id] = display_id
        logger.info(
            "Filled window '%s' to display %d (%dx%d+%d+%d)",
            win.title() or "untitled",
            display_id,
            frame.w,
            frame.h,
            frame.x,
            frame.y,
        )
        return True
