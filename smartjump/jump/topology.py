"""Display topology builder and point-to-display resolution"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from smartjump.common.types import Display, Edge, Position
from smartjump.host.backend import DisplayHost

__all__ = ["displays_build", "display_locate", "edge_detect"]

logger = logging.getLogger(__name__)


def displays_build(host: DisplayHost) -> list[Display]:
    """
    Enumerate active displays into identified rectangles

    Identities are 1-based and follow host order. An empty list is a valid
    result; callers treat it as "no jumps possible".

    Args:
        host: Display enumeration provider

    Returns:
        Displays in host order
    """
    displays = [
        Display(id=index, x=frame.x, y=frame.y, w=frame.w, h=frame.h)
        for index, frame in enumerate(host.displays_enumerate(), start=1)
    ]
    if not displays:
        logger.warning("Host reported no displays; edge jumps disabled")
    return displays


def display_locate(displays: Sequence[Display], position: Position) -> Optional[Display]:
    """
    Find the display holding position, or the nearest one

    Positions outside every rectangle (rounding, transient layout states)
    fall back to the display with the smallest clamped distance; the first
    display wins ties.

    Args:
        displays: Current displays
        position: Cursor position

    Returns:
        Matching display, None only when there are no displays
    """
    for display in displays:
        if display.contains(position):
            return display

    nearest: Optional[Display] = None
    nearest_distance: Optional[int] = None
    for display in displays:
        distance = display.distance_calculate(position)
        if nearest_distance is None or distance < nearest_distance:
            nearest = display
            nearest_distance = distance
    return nearest


def edge_detect(position: Position, display: Display, threshold: int) -> Optional[Edge]:
    """
    Detect if position is within threshold pixels of a display edge

    Checked in order left, right, top, bottom; the first match wins when a
    corner is near two edges.

    Args:
        position: Cursor position
        display: Display the cursor is on
        threshold: Edge distance in pixels

    Returns:
        Edge the cursor is at, None otherwise
    """
    if position.x <= display.x + threshold:
        return Edge.LEFT
    if position.x >= display.right - threshold:
        return Edge.RIGHT
    if position.y <= display.y + threshold:
        return Edge.TOP
    if position.y >= display.bottom - threshold:
        return Edge.BOTTOM
    return None
