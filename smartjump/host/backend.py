"""Host protocols for displays, pointer, timers, and windows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from smartjump.common.types import DisplayFrame, Position

Callback = Callable[[], None]


class TimerHandle(Protocol):
    """Handle to a scheduled periodic or deferred callback."""

    def stop(self) -> None:
        """Cancel the callback. Safe to call more than once."""


class Scheduler(Protocol):
    """Periodic timer and deferred action provider."""

    def periodic_schedule(self, interval: float, callback: Callback) -> TimerHandle:
        """
        Run callback every interval seconds until stopped.

        Args:
            interval: Period in seconds.
            callback: Zero-argument callable.

        Returns:
            Handle used to stop the timer.
        """

    def deferred_schedule(self, delay: float, callback: Callback) -> TimerHandle:
        """
        Run callback once after delay seconds unless stopped first.

        Args:
            delay: Delay in seconds.
            callback: Zero-argument callable.

        Returns:
            Handle used to cancel the action.
        """


class Clock(Protocol):
    """Monotonic time source."""

    def monotonic_get(self) -> float:
        """Return monotonic time in seconds."""


class DisplayWatcher(Protocol):
    """Display-configuration change watcher."""

    def start(self) -> None:
        """Begin delivering change notifications."""

    def stop(self) -> None:
        """Stop delivering change notifications."""


class DisplayHost(Protocol):
    """Display enumeration and change notification."""

    def displays_enumerate(self) -> list[DisplayFrame]:
        """
        Enumerate active displays.

        Returns:
            Display rectangles in host order; order defines identity.
        """

    def displayWatcher_create(self, callback: Callback) -> DisplayWatcher:
        """
        Create a watcher that calls callback on display-configuration change.

        Args:
            callback: Zero-argument callable.

        Returns:
            Unstarted watcher.
        """


class PointerHost(Protocol):
    """Absolute pointer position access."""

    def cursorPosition_get(self) -> Position:
        """Return the cursor position in absolute screen coordinates."""

    def cursorPosition_set(self, position: Position) -> None:
        """Warp the cursor to an absolute screen position."""


class CursorHost(DisplayHost, PointerHost, Protocol):
    """Everything the cursor controller needs from the host."""


class WindowRef(Protocol):
    """A top-level window as seen by the window fill tracker."""

    @property
    def window_id(self) -> int:
        """Host window identifier; values <= 0 are not trackable."""

    def title(self) -> str:
        """Window title, empty if unknown."""

    def isValid(self) -> bool:
        """Check that the window still exists."""

    def displayId_get(self) -> Optional[int]:
        """Return the 1-based id of the display holding the window."""

    def displayFrame_get(self) -> Optional[DisplayFrame]:
        """Return the usable frame of the display holding the window."""

    def frame_set(self, frame: DisplayFrame) -> None:
        """Move and resize the window to frame."""


WindowCallback = Callable[[WindowRef], None]


@dataclass
class WindowEventHandlers:
    """
    Callback bundle for window notifications.

    Attributes:
        created:
            New top-level window appeared.
        focused:
            Window became active.
        moved:
            Window position or size changed.
        destroyed:
            Window went away.
    """

    created: Optional[WindowCallback] = None
    focused: Optional[WindowCallback] = None
    moved: Optional[WindowCallback] = None
    destroyed: Optional[WindowCallback] = None


class WindowSubscription(Protocol):
    """Active window-event subscription."""

    def unsubscribe(self) -> None:
        """Stop delivering window events. Safe to call more than once."""


class WindowHost(Protocol):
    """Window enumeration and event subscription."""

    def windows_list(self) -> list[WindowRef]:
        """Return all current top-level windows."""

    def windowEvents_subscribe(self, handlers: WindowEventHandlers) -> WindowSubscription:
        """
        Subscribe to window notifications.

        Args:
            handlers: Callbacks to invoke; None entries are skipped.

        Returns:
            Subscription handle.
        """
