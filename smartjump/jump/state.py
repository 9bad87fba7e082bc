"""Cursor controller state"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from smartjump.common.types import Position, Velocity


@dataclass
class CursorState:
    """
    Per-tick cursor bookkeeping owned by one CursorController.

    Only the controller tick writes these fields, once per tick.
    """

    last_position: Optional[Position] = None
    velocity: Velocity = field(default_factory=Velocity.zero)
    last_jump_time: Optional[float] = None
    tick_count: int = 0

    def sample_record(self, position: Position) -> Velocity:
        """
        Update velocity from a new sample

        The last position is not replaced here; callers record the position
        that should seed the next tick (raw sample or landing point).

        Args:
            position: Sampled cursor position

        Returns:
            Updated velocity, unchanged when there is no prior sample
        """
        if self.last_position is not None:
            self.velocity = Velocity.between(self.last_position, position)
        return self.velocity

    def isCoolingDown(self, now: float, cooldown: float) -> bool:
        """Check if a recent jump still blocks scoring"""
        if self.last_jump_time is None:
            return False
        return now - self.last_jump_time < cooldown

    def jump_record(self, landing: Position, now: float) -> None:
        """Record a performed jump"""
        self.last_jump_time = now
        self.last_position = landing

    def reset(self) -> None:
        """Reset state to initial values"""
        self.last_position = None
        self.velocity = Velocity.zero()
        self.last_jump_time = None
        self.tick_count = 0
