"""Common types and data structures for smartjump"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Edge(Enum):
    """Display edges"""
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"

    def isSideEdge(self) -> bool:
        """
        Check if this is a left/right edge

        Side edges share the vertical (y) axis with their neighbours; top and
        bottom edges share the horizontal (x) axis.
        """
        return self in (Edge.LEFT, Edge.RIGHT)


# First match wins when a point is near two edges at once (corners)
EDGE_PRIORITY: tuple[Edge, ...] = (Edge.LEFT, Edge.RIGHT, Edge.TOP, Edge.BOTTOM)


@dataclass(frozen=True)
class Position:
    """2D position in absolute screen coordinates"""
    x: int
    y: int


@dataclass(frozen=True)
class Velocity:
    """Per-tick cursor displacement"""
    dx: int
    dy: int

    @staticmethod
    def zero() -> "Velocity":
        """Velocity of a cursor that has not moved"""
        return Velocity(dx=0, dy=0)

    @staticmethod
    def between(previous: Position, current: Position) -> "Velocity":
        """
        Instantaneous velocity from one sample to the next

        Args:
            previous: Earlier position
            current: Later position

        Returns:
            Delta between the two positions, no smoothing
        """
        return Velocity(dx=current.x - previous.x, dy=current.y - previous.y)


@dataclass(frozen=True)
class DisplayFrame:
    """Raw display rectangle as reported by the host"""
    x: int
    y: int
    w: int
    h: int


@dataclass(frozen=True)
class Display:
    """A display rectangle with a stable numeric identity"""
    id: int
    x: int
    y: int
    w: int
    h: int

    @property
    def right(self) -> int:
        """Exclusive right boundary"""
        return self.x + self.w

    @property
    def bottom(self) -> int:
        """Exclusive bottom boundary"""
        return self.y + self.h

    def contains(self, pos: Position) -> bool:
        """Check if position lies on this display (half-open bounds)"""
        return self.x <= pos.x < self.right and self.y <= pos.y < self.bottom

    def distance_calculate(self, pos: Position) -> int:
        """
        Axis-aligned clamped distance from position to this display

        Args:
            pos: Position to measure from

        Returns:
            Manhattan distance to the nearest pixel of the display, 0 inside
        """
        dx = 0
        dy = 0
        if pos.x < self.x:
            dx = self.x - pos.x
        elif pos.x >= self.right:
            dx = pos.x - self.right + 1
        if pos.y < self.y:
            dy = self.y - pos.y
        elif pos.y >= self.bottom:
            dy = pos.y - self.bottom + 1
        return dx + dy

    def frame_get(self) -> DisplayFrame:
        """Rectangle of this display without its identity"""
        return DisplayFrame(x=self.x, y=self.y, w=self.w, h=self.h)


@dataclass(frozen=True)
class Span:
    """Inclusive coordinate range along one axis"""
    low: int
    high: int

    @property
    def center(self) -> float:
        """Midpoint of the range"""
        return (self.low + self.high) / 2

    def contains(self, value: float) -> bool:
        """Check if value is inside the range (bounds included)"""
        return self.low <= value <= self.high

    def distance_calculate(self, value: float) -> float:
        """Distance from value to the nearest bound, 0 when contained"""
        if value < self.low:
            return self.low - value
        if value > self.high:
            return value - self.high
        return 0

    def clamp(self, value: float, inset: int = 0) -> float:
        """Clamp value into the range shrunk by inset on both ends"""
        return max(self.low + inset, min(value, self.high - inset))


@dataclass(frozen=True)
class JumpZone:
    """Directed adjacency from a source display edge to a target display"""
    source_id: int
    edge: Edge
    target: Display
    source_span: Span  # Source-side range this target applies to (shared axis)
    target_span: Span  # Target's full extent on the shared axis
    landing: int       # Landing coordinate on the perpendicular axis


@dataclass(frozen=True)
class JumpTarget:
    """Resolved warp destination"""
    position: Position
    display: Display
    score: float
