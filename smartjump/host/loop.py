"""
Single-threaded host event loop.

This module provides the cooperative runtime that every smartjump component
runs inside. Periodic timers, deferred actions and event pumps are all invoked
from the thread that calls `EventLoop.run()`, one at a time and never
re-entrantly, so component state needs no locking.

A callback that raises is logged and isolated; the loop and all other timers
keep running.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from typing import Callable, Optional

from smartjump.host.backend import Callback

__all__ = ["EventLoop", "LoopTimer"]

logger = logging.getLogger(__name__)

_DEFAULT_IDLE_INTERVAL_SECONDS: float = 0.01


class LoopTimer:
    """Timer entry owned by an EventLoop; doubles as its TimerHandle."""

    def __init__(
        self,
        deadline: float,
        callback: Callback,
        interval: Optional[float] = None,
    ) -> None:
        """
        Initialize timer entry

        Args:
            deadline: Monotonic time of the first run
            callback: Zero-argument callable
            interval: Period for repeating timers, None for one-shot
        """
        self.deadline: float = deadline
        self.callback: Callback = callback
        self.interval: Optional[float] = interval
        self.active: bool = True

    def stop(self) -> None:
        """Cancel the timer; a stopped timer is dropped on its next deadline"""
        self.active = False

    def isRepeating(self) -> bool:
        """Check if this is a periodic timer"""
        return self.interval is not None


class _PumpHandle:
    """Handle returned by pump_register"""

    def __init__(self, loop: "EventLoop", pump: Callback) -> None:
        self._loop = loop
        self._pump = pump

    def stop(self) -> None:
        self._loop.pump_unregister(self._pump)


class EventLoop:
    """Cooperative scheduler implementing the Scheduler and Clock protocols"""

    def __init__(
        self,
        clock_func: Callable[[], float] = time.monotonic,
        sleep_func: Callable[[float], None] = time.sleep,
        idle_interval: float = _DEFAULT_IDLE_INTERVAL_SECONDS,
    ) -> None:
        """
        Initialize event loop

        Args:
            clock_func: Monotonic time source in seconds
            sleep_func: Blocking sleep used between iterations
            idle_interval: Longest sleep between pump passes
        """
        self._clock_func = clock_func
        self._sleep_func = sleep_func
        self._idle_interval: float = idle_interval
        self._timers: list[tuple[float, int, LoopTimer]] = []
        self._sequence = itertools.count()
        self._pumps: list[Callback] = []
        self._running: bool = False

    def monotonic_get(self) -> float:
        """Return loop time in seconds"""
        return self._clock_func()

    def periodic_schedule(self, interval: float, callback: Callback) -> LoopTimer:
        """
        Run callback every interval seconds until stopped

        Args:
            interval: Period in seconds, must be positive
            callback: Zero-argument callable

        Returns:
            Timer handle

        Raises:
            ValueError: If interval is not positive
        """
        if interval <= 0:
            raise ValueError(f"Timer interval must be positive, got {interval}")
        timer = LoopTimer(self.monotonic_get() + interval, callback, interval)
        self._timer_push(timer)
        return timer

    def deferred_schedule(self, delay: float, callback: Callback) -> LoopTimer:
        """
        Run callback once after delay seconds

        Args:
            delay: Delay in seconds; negative values run on the next pass
            callback: Zero-argument callable

        Returns:
            Timer handle
        """
        timer = LoopTimer(self.monotonic_get() + max(delay, 0.0), callback)
        self._timer_push(timer)
        return timer

    def pump_register(self, pump: Callback) -> _PumpHandle:
        """
        Register a callable invoked on every loop pass

        Pumps drain host event queues (e.g. pending X11 events) and dispatch
        them to subscribers.

        Args:
            pump: Zero-argument callable

        Returns:
            Handle whose stop() unregisters the pump
        """
        self._pumps.append(pump)
        return _PumpHandle(self, pump)

    def pump_unregister(self, pump: Callback) -> None:
        """Remove a registered pump if present"""
        if pump in self._pumps:
            self._pumps.remove(pump)

    def timersActive_count(self) -> int:
        """Number of timers that have not been stopped or fired"""
        return sum(1 for _, _, timer in self._timers if timer.active)

    def iteration_run(self) -> float:
        """
        Execute one loop pass: pumps first, then every due timer

        Returns:
            Seconds until the next timer is due, capped at the idle interval
        """
        for pump in list(self._pumps):
            self._callback_invoke(pump)

        now = self.monotonic_get()
        while self._timers and self._timers[0][0] <= now:
            _, _, timer = heapq.heappop(self._timers)
            if not timer.active:
                continue
            if timer.isRepeating():
                timer.deadline += timer.interval
                # Drop missed periods instead of running a burst of catch-up ticks
                if timer.deadline <= now:
                    timer.deadline = now + timer.interval
                self._timer_push(timer)
            else:
                timer.active = False
            self._callback_invoke(timer.callback)

        return self._nextDelay_get()

    def run(self) -> None:
        """Run until stop() is called"""
        self._running = True
        logger.debug("Event loop started")
        while self._running:
            delay = self.iteration_run()
            if self._running and delay > 0:
                self._sleep_func(delay)
        logger.debug("Event loop stopped")

    def stop(self) -> None:
        """Ask run() to return after the current pass"""
        self._running = False

    @property
    def running(self) -> bool:
        """Whether run() is active"""
        return self._running

    def _timer_push(self, timer: LoopTimer) -> None:
        heapq.heappush(self._timers, (timer.deadline, next(self._sequence), timer))

    def _nextDelay_get(self) -> float:
        while self._timers and not self._timers[0][2].active:
            heapq.heappop(self._timers)
        if not self._timers:
            return self._idle_interval
        delay = self._timers[0][0] - self.monotonic_get()
        return max(0.0, min(delay, self._idle_interval))

    def _callback_invoke(self, callback: Callback) -> None:
        try:
            callback()
        except Exception:
            logger.exception("Unhandled error in event loop callback %r", callback)
