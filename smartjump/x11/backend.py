"""
X11 host implementation.

Implements the display, pointer, display-watcher and window host protocols on
top of one python-xlib connection. Nothing here blocks: X events are drained by
`events_dispatch`, which the daemon registers as an event-loop pump, so every
notification is delivered on the loop thread.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from Xlib import X
from Xlib.ext import randr

from smartjump.common.types import Display, DisplayFrame, Position
from smartjump.host.backend import Callback, WindowEventHandlers, WindowRef
from smartjump.jump.topology import display_locate, displays_build
from smartjump.x11.display import DisplayManager
from smartjump.x11.windows import X11Window

__all__ = ["X11Host", "X11DisplayWatcher", "X11WindowSubscription"]

logger = logging.getLogger(__name__)


class X11DisplayWatcher:
    """Display-configuration watcher fed by RandR screen-change events"""

    def __init__(self, host: "X11Host", callback: Callback) -> None:
        self._host = host
        self._callback: Callback = callback
        self.active: bool = False

    def start(self) -> None:
        """Begin delivering change notifications"""
        self.active = True
        self._host.watcher_add(self)

    def stop(self) -> None:
        """Stop delivering change notifications"""
        self.active = False
        self._host.watcher_remove(self)

    def notify(self) -> None:
        """Invoke the callback if started"""
        if self.active:
            self._callback()


class X11WindowSubscription:
    """Window-event subscription registered with an X11Host"""

    def __init__(self, host: "X11Host", handlers: WindowEventHandlers) -> None:
        self._host = host
        self.handlers: WindowEventHandlers = handlers
        self.active: bool = True

    def unsubscribe(self) -> None:
        """Stop delivering window events"""
        self.active = False
        self._host.subscription_remove(self)


class X11Host:
    """Host services for one X11 display connection"""

    def __init__(self, display_manager: DisplayManager) -> None:
        """
        Initialize X11 host

        Args:
            display_manager: Display manager; connected by connection_establish
        """
        self._display_manager: DisplayManager = display_manager
        self._randr_event_base: Optional[int] = None
        self._watchers: list[X11DisplayWatcher] = []
        self._subscriptions: list[X11WindowSubscription] = []
        self._client_ids: set[int] = set()
        self._displays: Optional[list[Display]] = None
        self._ewmh_supported: Optional[set[int]] = None

    @property
    def display_manager(self) -> DisplayManager:
        """Underlying display manager"""
        return self._display_manager

    def connection_establish(self) -> None:
        """Connect and select the root-window events the host dispatches"""
        self._display_manager.connection_establish()
        display = self._display_manager.display_get()
        root = self._display_manager.root_get()

        if self._display_manager.randr_isAvailable():
            ext_info = display.query_extension("RANDR")
            self._randr_event_base = ext_info.first_event
            root.xrandr_select_input(randr.RRScreenChangeNotifyMask)
        else:
            logger.warning("RANDR not available; display changes will not be detected")

        root.change_attributes(event_mask=X.PropertyChangeMask)
        display.sync()

    def connection_close(self) -> None:
        """Close the X11 connection"""
        self._display_manager.connection_close()

    # ------------------------------------------------------------------
    # DisplayHost / PointerHost
    # ------------------------------------------------------------------

    def displays_enumerate(self) -> list[DisplayFrame]:
        """Enumerate active monitors"""
        return self._display_manager.monitors_query()

    def displayWatcher_create(self, callback: Callback) -> X11DisplayWatcher:
        """Create an unstarted RandR display watcher"""
        return X11DisplayWatcher(self, callback)

    def cursorPosition_get(self) -> Position:
        """Current pointer position"""
        return self._display_manager.pointerPosition_get()

    def cursorPosition_set(self, position: Position) -> None:
        """Warp pointer"""
        self._display_manager.cursorPosition_set(position)

    def watcher_add(self, watcher: X11DisplayWatcher) -> None:
        """Register a started watcher"""
        if watcher not in self._watchers:
            self._watchers.append(watcher)

    def watcher_remove(self, watcher: X11DisplayWatcher) -> None:
        """Unregister a watcher"""
        if watcher in self._watchers:
            self._watchers.remove(watcher)

    # ------------------------------------------------------------------
    # Display lookup for windows
    # ------------------------------------------------------------------

    def displays_get(self) -> list[Display]:
        """Identified displays, cached until the next RandR change"""
        if self._displays is None:
            self._displays = displays_build(self)
        return self._displays

    def displayAt_get(self, position: Position) -> Optional[Display]:
        """Display holding position, nearest one as fallback"""
        return display_locate(self.displays_get(), position)

    def usableFrame_get(self, display_id: int) -> Optional[DisplayFrame]:
        """
        Display rectangle clipped to the window manager's work area

        Args:
            display_id: 1-based display id

        Returns:
            Usable frame, None for an unknown id
        """
        display = next((d for d in self.displays_get() if d.id == display_id), None)
        if display is None:
            return None

        frame = display.frame_get()
        workarea = self._display_manager.workarea_get()
        if workarea is None:
            return frame
        return frame_intersect(frame, workarea) or frame

    def ewmh_supports(self, name: str) -> bool:
        """Check if the window manager advertises an EWMH atom"""
        if self._ewmh_supported is None:
            supported = self._display_manager.rootProperty_get("_NET_SUPPORTED")
            self._ewmh_supported = set(supported or [])
        return self._display_manager.atom_get(name) in self._ewmh_supported

    # ------------------------------------------------------------------
    # WindowHost
    # ------------------------------------------------------------------

    def clientIds_get(self) -> list[int]:
        """Window ids from _NET_CLIENT_LIST"""
        return list(self._display_manager.rootProperty_get("_NET_CLIENT_LIST") or [])

    def windows_list(self) -> list[WindowRef]:
        """All managed top-level windows"""
        return [X11Window(self, xid) for xid in self.clientIds_get()]

    def windowEvents_subscribe(self, handlers: WindowEventHandlers) -> X11WindowSubscription:
        """
        Subscribe to window notifications

        Args:
            handlers: Callbacks to invoke

        Returns:
            Subscription handle
        """
        subscription = X11WindowSubscription(self, handlers)
        self._subscriptions.append(subscription)
        if len(self._subscriptions) == 1:
            self._client_ids = set()
            for xid in self.clientIds_get():
                self.clientWindow_select(xid)
        return subscription

    def subscription_remove(self, subscription: X11WindowSubscription) -> None:
        """Drop a window-event subscription"""
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def clientWindow_select(self, xid: int) -> None:
        """Select structure events on one client window"""
        display = self._display_manager.display_get()
        window = display.create_resource_object("window", xid)
        window.change_attributes(event_mask=X.StructureNotifyMask)
        self._client_ids.add(xid)

    # ------------------------------------------------------------------
    # Event dispatch
    # ------------------------------------------------------------------

    def events_dispatch(self) -> int:
        """
        Drain pending X events and deliver them to watchers and subscribers

        Returns:
            Number of events processed
        """
        display = self._display_manager.display_get()
        count = 0
        while display.pending_events() > 0:
            event = display.next_event()
            count += 1
            self.event_route(event)
        return count

    def event_route(self, event: Any) -> None:
        """Route one X event"""
        if (
            self._randr_event_base is not None
            and event.type == self._randr_event_base + randr.RRScreenChangeNotify
        ):
            self.screenChange_handle()
        elif event.type == X.ConfigureNotify:
            self.windowEvent_deliver("moved", event.window.id)
        elif event.type == X.DestroyNotify:
            xid = event.window.id
            if xid in self._client_ids:
                self._client_ids.discard(xid)
                self.windowEvent_deliver("destroyed", xid)
        elif event.type == X.PropertyNotify:
            self.rootProperty_handle(event.atom)

    def screenChange_handle(self) -> None:
        """Invalidate cached layout and notify display watchers"""
        self._displays = None
        for watcher in list(self._watchers):
            watcher.notify()

    def rootProperty_handle(self, atom: int) -> None:
        """React to root property changes from the window manager"""
        if not self._subscriptions:
            return
        manager = self._display_manager
        if atom == manager.atom_get("_NET_ACTIVE_WINDOW"):
            active = manager.rootProperty_get("_NET_ACTIVE_WINDOW")
            if active and active[0]:
                self.windowEvent_deliver("focused", active[0])
        elif atom == manager.atom_get("_NET_CLIENT_LIST"):
            current = set(self.clientIds_get())
            for xid in sorted(current - self._client_ids):
                self.clientWindow_select(xid)
                self.windowEvent_deliver("created", xid)
            for xid in sorted(self._client_ids - current):
                self._client_ids.discard(xid)
                self.windowEvent_deliver("destroyed", xid)

    def windowEvent_deliver(self, kind: str, xid: int) -> None:
        """
        Invoke one handler kind on every active subscription

        Args:
            kind: Handler attribute name on WindowEventHandlers
            xid: Window id
        """
        window = X11Window(self, xid)
        for subscription in list(self._subscriptions):
            handler = getattr(subscription.handlers, kind)
            if subscription.active and handler is not None:
                handler(window)


def frame_intersect(a: DisplayFrame, b: DisplayFrame) -> Optional[DisplayFrame]:
    """
    Intersect two rectangles

    Returns:
        Overlap, None when they do not overlap
    """
    left = max(a.x, b.x)
    top = max(a.y, b.y)
    right = min(a.x + a.w, b.x + b.w)
    bottom = min(a.y + a.h, b.y + b.h)
    if right <= left or bottom <= top:
        return None
    return DisplayFrame(x=left, y=top, w=right - left, h=bottom - top)
