"""
Poll-driven cursor controller.

Owns the topology and cursor state for the edge-jump feature and drives them
from a periodic host timer. Each tick samples the pointer, derives velocity,
honours the post-jump cooldown, resolves the current display and edge, asks
the scorer for a target and warps the cursor.

Display-configuration changes rebuild the topology wholesale; cursor state,
including any running cooldown, survives the rebuild.
"""

from __future__ import annotations

import logging
from typing import Optional

from smartjump.common.config import JumpConfig
from smartjump.common.settings import settings
from smartjump.common.types import Display, JumpTarget, Position
from smartjump.host.backend import Clock, CursorHost, DisplayWatcher, Scheduler, TimerHandle
from smartjump.jump.scorer import target_find
from smartjump.jump.state import CursorState
from smartjump.jump.topology import display_locate, displays_build, edge_detect
from smartjump.jump.zones import Topology, zones_compute

__all__ = ["CursorController"]

logger = logging.getLogger(__name__)


class CursorController:
    """Samples the cursor on a fixed interval and warps it across display edges"""

    def __init__(
        self,
        host: CursorHost,
        scheduler: Scheduler,
        clock: Clock,
        config: Optional[JumpConfig] = None,
    ) -> None:
        """
        Initialize cursor controller

        Args:
            host: Display and pointer provider
            scheduler: Periodic timer provider
            clock: Monotonic clock
            config: Jump settings, defaults when None
        """
        self._host: CursorHost = host
        self._scheduler: Scheduler = scheduler
        self._clock: Clock = clock
        self._config: JumpConfig = config or JumpConfig()
        self._topology: Topology = Topology()
        self._state: CursorState = CursorState()
        self._timer: Optional[TimerHandle] = None
        self._watcher: Optional[DisplayWatcher] = None

    @property
    def topology(self) -> Topology:
        """Current compiled topology"""
        return self._topology

    @property
    def state(self) -> CursorState:
        """Current cursor state"""
        return self._state

    @property
    def displays(self) -> tuple[Display, ...]:
        """Displays of the current topology"""
        return self._topology.displays

    def isRunning(self) -> bool:
        """Check if the poll timer is active"""
        return self._timer is not None

    def initialize(self) -> None:
        """Rebuild displays and jump zones from the current host configuration"""
        displays = displays_build(self._host)
        # Swap in one assignment so no tick sees a half-built topology
        self._topology = zones_compute(displays)

    def start(self) -> None:
        """
        Start polling

        Any running timer and watcher are stopped first so two timers never
        operate on divergent topologies.
        """
        self.stop()
        self.initialize()
        self._timer = self._scheduler.periodic_schedule(
            self._config.poll_interval_seconds, self.tick_guarded
        )
        self._watcher = self._host.displayWatcher_create(self.displays_changed)
        self._watcher.start()
        self.startupBanner_log()

    def stop(self) -> None:
        """Stop polling and display watching; idempotent"""
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
        if self._watcher is not None:
            self._watcher.stop()
            self._watcher = None

    def displays_changed(self) -> None:
        """Handle a display-configuration change notification"""
        logger.info("Display configuration changed - recomputing jump zones")
        self.initialize()
        logger.info(
            "%d display(s), %d jump zone(s)",
            len(self._topology.displays),
            self._topology.zones_count(),
        )

    def tick_guarded(self) -> None:
        """Run one tick, logging and isolating any fault"""
        try:
            self.tick()
        except Exception:
            logger.exception("Error in cursor tick %d", self._state.tick_count)

    def tick(self) -> Optional[JumpTarget]:
        """
        Execute one polling step

        Returns:
            The jump performed this tick, None otherwise
        """
        state = self._state
        state.tick_count += 1
        if state.tick_count % settings.HEARTBEAT_TICKS == 0:
            logger.debug("Heartbeat: tick %d", state.tick_count)

        position: Position = self._host.cursorPosition_get()
        now: float = self._clock.monotonic_get()
        velocity = state.sample_record(position)

        if state.isCoolingDown(now, self._config.cooldown_seconds):
            state.last_position = position
            return None

        display = display_locate(self._topology.displays, position)
        if display is None:
            state.last_position = position
            return None

        edge = edge_detect(position, display, self._config.edge_threshold)
        if edge is not None:
            target = target_find(self._topology, display.id, edge, position, velocity)
            if target is not None:
                logger.info(
                    "JUMP: (%d, %d) -> (%d, %d) [display %d -> %d] (vel: %d, %d)",
                    position.x,
                    position.y,
                    target.position.x,
                    target.position.y,
                    display.id,
                    target.display.id,
                    velocity.dx,
                    velocity.dy,
                )
                self._host.cursorPosition_set(target.position)
                state.jump_record(target.position, now)
                return target

        state.last_position = position
        return None

    def startupBanner_log(self) -> None:
        """Log effective settings and detected displays"""
        logger.info("Smart cursor jump loaded")
        logger.info("  Edge threshold: %dpx", self._config.edge_threshold)
        logger.info("  Check interval: %dms", self._config.poll_interval_ms)
        logger.info("  Jump cooldown: %dms", self._config.cooldown_ms)
        logger.info("  Detected displays:")
        for display in self._topology.displays:
            logger.info(
                "    Display %d: x=%d, y=%d, w=%d, h=%d (right=%d, bottom=%d)",
                display.id,
                display.x,
                display.y,
                display.w,
                display.h,
                display.right,
                display.bottom,
            )
        logger.info("  %d jump zone(s) computed", self._topology.zones_count())
