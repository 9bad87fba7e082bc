"""X11 display connection and monitor/pointer queries"""

import logging
from typing import Any, Optional

from Xlib import X, display as xdisplay
from Xlib.display import Display

from smartjump.common.types import DisplayFrame, Position

logger = logging.getLogger(__name__)


class DisplayManager:
    """Manages the X11 connection, monitor layout and pointer access"""

    def __init__(self, display_name: Optional[str] = None) -> None:
        """
        Initialize display manager

        Args:
            display_name: X11 display name (e.g., ':0'), None for default
        """
        self._display: Optional[Display] = None
        self._display_name: Optional[str] = display_name
        self._atoms: dict[str, int] = {}

    def connection_establish(self) -> None:
        """Establish connection to X11 display"""
        self._display = xdisplay.Display(self._display_name)
        self._display.set_error_handler(self._asyncError_log)
        logger.debug("Connected to X11 display %s", self._display.get_display_name())

    def connection_close(self) -> None:
        """Close X11 display connection"""
        if self._display is not None:
            self._display.close()
            self._display = None
            self._atoms.clear()

    def connection_sync(self) -> None:
        """Flush and sync the X11 connection"""
        self.display_get().sync()

    def display_get(self) -> Display:
        """
        Get X11 display object

        Returns:
            X11 Display object

        Raises:
            RuntimeError: If not connected to display
        """
        if self._display is None:
            raise RuntimeError("Not connected to X11 display")
        return self._display

    def root_get(self) -> Any:
        """Get the root window of the default screen"""
        return self.display_get().screen().root

    def __enter__(self) -> "DisplayManager":
        """Context manager entry"""
        self.connection_establish()
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Context manager exit"""
        self.connection_close()

    def randr_isAvailable(self) -> bool:
        """Check if the RANDR extension is present"""
        return bool(self.display_get().has_extension("RANDR"))

    def monitors_query(self) -> list[DisplayFrame]:
        """
        Query active monitor rectangles

        Uses RandR 1.5 monitors when available and falls back to the root
        window geometry as a single display.

        Returns:
            Monitor rectangles in server order
        """
        root = self.root_get()
        if self.randr_isAvailable():
            try:
                reply = root.xrandr_get_monitors(is_active=True)
                frames = [
                    DisplayFrame(
                        x=monitor.x,
                        y=monitor.y,
                        w=monitor.width_in_pixels,
                        h=monitor.height_in_pixels,
                    )
                    for monitor in reply.monitors
                ]
                if frames:
                    return frames
            except Exception as e:
                logger.warning(f"RandR monitor query failed, using root geometry: {e}")

        geom = root.get_geometry()
        return [DisplayFrame(x=0, y=0, w=geom.width, h=geom.height)]

    def pointerPosition_get(self) -> Position:
        """Get current pointer position in root coordinates"""
        pointer_data = self.root_get().query_pointer()
        return Position(x=pointer_data.root_x, y=pointer_data.root_y)

    def cursorPosition_set(self, position: Position) -> None:
        """
        Move cursor to absolute position

        Args:
            position: Target position

        Raises:
            RuntimeError: If not connected to display
        """
        self.root_get().warp_pointer(int(position.x), int(position.y))
        self.display_get().sync()

    def atom_get(self, name: str) -> int:
        """Intern an atom, caching the result"""
        atom = self._atoms.get(name)
        if atom is None:
            atom = self.display_get().intern_atom(name)
            self._atoms[name] = atom
        return atom

    def rootProperty_get(self, name: str) -> Optional[list[int]]:
        """
        Read a CARDINAL/WINDOW/ATOM list property from the root window

        Args:
            name: Property atom name

        Returns:
            Property values, None if unset
        """
        prop = self.root_get().get_full_property(self.atom_get(name), X.AnyPropertyType)
        if prop is None:
            return None
        return list(prop.value)

    def workarea_get(self) -> Optional[DisplayFrame]:
        """
        Usable desktop area from _NET_WORKAREA for the current desktop

        Returns:
            Work area rectangle, None when the window manager does not set it
        """
        values = self.rootProperty_get("_NET_WORKAREA")
        if not values or len(values) < 4:
            return None
        desktop_values = self.rootProperty_get("_NET_CURRENT_DESKTOP")
        desktop = desktop_values[0] if desktop_values else 0
        offset = desktop * 4
        if offset + 4 > len(values):
            offset = 0
        x, y, w, h = values[offset:offset + 4]
        return DisplayFrame(x=x, y=y, w=w, h=h)

    @staticmethod
    def _asyncError_log(error: object, request: object = None) -> None:
        # Requests on windows that vanished mid-flight are expected
        logger.debug("X11 error: %s", error)
