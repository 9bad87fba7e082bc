"""Host abstraction layer: collaborator protocols and the event loop."""

from smartjump.host.backend import (
    Clock,
    CursorHost,
    DisplayHost,
    DisplayWatcher,
    PointerHost,
    Scheduler,
    TimerHandle,
    WindowEventHandlers,
    WindowHost,
    WindowRef,
    WindowSubscription,
)
from smartjump.host.loop import EventLoop

__all__ = [
    "Clock",
    "CursorHost",
    "DisplayHost",
    "DisplayWatcher",
    "EventLoop",
    "PointerHost",
    "Scheduler",
    "TimerHandle",
    "WindowEventHandlers",
    "WindowHost",
    "WindowRef",
    "WindowSubscription",
]
