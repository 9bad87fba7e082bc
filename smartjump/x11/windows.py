"""X11 top-level window wrapper for the window fill tracker"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from Xlib import X
from Xlib.error import XError
from Xlib.protocol import event as xevent

from smartjump.common.types import DisplayFrame, Position

if TYPE_CHECKING:
    from smartjump.x11.backend import X11Host

logger = logging.getLogger(__name__)

# _NET_MOVERESIZE_WINDOW flags: NorthWest gravity, x/y/width/height present,
# source indication 2 (pager/tool request)
_MOVERESIZE_GRAVITY_NORTHWEST: int = 1
_MOVERESIZE_FIELDS_ALL: int = 0xF << 8
_MOVERESIZE_SOURCE_TOOL: int = 2 << 12


class X11Window:
    """WindowRef backed by an X11 client window id"""

    def __init__(self, host: "X11Host", xid: int) -> None:
        """
        Initialize window wrapper

        Args:
            host: Owning X11 host, used for display lookup and atoms
            xid: X11 window id
        """
        self._host = host
        self._xid: int = xid

    @property
    def window_id(self) -> int:
        """X11 window id"""
        return self._xid

    def __eq__(self, other: object) -> bool:
        return isinstance(other, X11Window) and other._xid == self._xid

    def __hash__(self) -> int:
        return hash(self._xid)

    def __repr__(self) -> str:
        return f"X11Window(0x{self._xid:x})"

    def _resource_get(self) -> Any:
        display = self._host.display_manager.display_get()
        return display.create_resource_object("window", self._xid)

    def title(self) -> str:
        """Window title from _NET_WM_NAME or WM_NAME, empty if unknown"""
        try:
            window = self._resource_get()
            prop = window.get_full_property(
                self._host.display_manager.atom_get("_NET_WM_NAME"),
                self._host.display_manager.atom_get("UTF8_STRING"),
            )
            if prop is not None and prop.value:
                value = prop.value
                return value.decode("utf-8", "replace") if isinstance(value, bytes) else str(value)
            name = window.get_wm_name()
            return name or ""
        except XError as e:
            logger.debug("Title query failed for %r: %s", self, e)
            return ""

    def isValid(self) -> bool:
        """Check that the window still exists"""
        try:
            self._resource_get().get_geometry()
            return True
        except XError:
            return False

    def geometry_get(self) -> Optional[DisplayFrame]:
        """
        Window rectangle in root coordinates

        Returns:
            Frame, None if the window is gone
        """
        try:
            window = self._resource_get()
            geom = window.get_geometry()
            origin = self._host.display_manager.root_get().translate_coords(window, 0, 0)
            return DisplayFrame(x=origin.x, y=origin.y, w=geom.width, h=geom.height)
        except XError as e:
            logger.debug("Geometry query failed for %r: %s", self, e)
            return None

    def center_get(self) -> Optional[Position]:
        """Center of the window in root coordinates"""
        frame = self.geometry_get()
        if frame is None:
            return None
        return Position(x=frame.x + frame.w // 2, y=frame.y + frame.h // 2)

    def displayId_get(self) -> Optional[int]:
        """Id of the display holding the window's center"""
        center = self.center_get()
        if center is None:
            return None
        display = self._host.displayAt_get(center)
        return display.id if display is not None else None

    def displayFrame_get(self) -> Optional[DisplayFrame]:
        """Usable frame of the display holding the window"""
        display_id = self.displayId_get()
        if display_id is None:
            return None
        return self._host.usableFrame_get(display_id)

    def frame_set(self, frame: DisplayFrame) -> None:
        """
        Move and resize the window

        Prefers an EWMH _NET_MOVERESIZE_WINDOW request so the window manager
        applies frame decorations; falls back to a plain configure.

        Args:
            frame: Target rectangle in root coordinates
        """
        manager = self._host.display_manager
        window = self._resource_get()
        if self._host.ewmh_supports("_NET_MOVERESIZE_WINDOW"):
            flags = _MOVERESIZE_GRAVITY_NORTHWEST | _MOVERESIZE_FIELDS_ALL | _MOVERESIZE_SOURCE_TOOL
            message = xevent.ClientMessage(
                window=window,
                client_type=manager.atom_get("_NET_MOVERESIZE_WINDOW"),
                data=(32, [flags, frame.x, frame.y, frame.w, frame.h]),
            )
            manager.root_get().send_event(
                message,
                event_mask=X.SubstructureRedirectMask | X.SubstructureNotifyMask,
            )
        else:
            window.configure(x=frame.x, y=frame.y, width=frame.w, height=frame.h)
        manager.connection_sync()
