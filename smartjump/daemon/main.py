"""smartjump daemon main entry point"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from typing import Optional, TextIO

from smartjump import __version__
from smartjump.common.config import Config
from smartjump.daemon.bootstrap import (
    configWithSettings_load,
    loggingWithConfig_setup,
    x11Host_create,
)
from smartjump.daemon.daemon_logging import logging_setup
from smartjump.daemon.instance_lock import InstanceLock
from smartjump.fill.tracker import WindowFillTracker
from smartjump.host.backend import DisplayHost
from smartjump.host.loop import EventLoop
from smartjump.jump.controller import CursorController
from smartjump.jump.topology import displays_build
from smartjump.jump.zones import Topology, zones_compute

logger = logging.getLogger(__name__)


def zones_dump(host: DisplayHost, out: TextIO) -> Topology:
    """
    Print the displays and jump zones for the current layout

    Args:
        host: Display provider
        out: Output stream

    Returns:
        The compiled topology
    """
    topology = zones_compute(displays_build(host))
    out.write(f"{len(topology.displays)} display(s)\n")
    for display in topology.displays:
        out.write(
            f"  Display {display.id}: {display.w}x{display.h}+{display.x}+{display.y}\n"
        )
    out.write(f"{topology.zones_count()} jump zone(s)\n")
    for zone in topology.zones_iterate():
        out.write(
            f"  Display {zone.source_id} {zone.edge.value} edge -> "
            f"Display {zone.target.id} "
            f"(source {zone.source_span.low}-{zone.source_span.high}, "
            f"target {zone.target_span.low}-{zone.target_span.high}, "
            f"landing {zone.landing})\n"
        )
    return topology


def signalHandlers_install(loop: EventLoop) -> None:
    """Stop the loop on SIGINT and SIGTERM"""

    def _handler(signum: int, _frame: object) -> None:
        logger.info("Received signal %d, shutting down", signum)
        loop.stop()

    signal.signal(signal.SIGINT, _handler)
    signal.signal(signal.SIGTERM, _handler)


def daemon_run(args: argparse.Namespace) -> None:
    """
    Run the smartjump daemon

    Args:
        args: Parsed command line arguments
    """
    config: Config = configWithSettings_load(args)
    loggingWithConfig_setup(args, config, logging_setup)

    host = x11Host_create(config)

    if getattr(args, "dump_zones", False):
        try:
            zones_dump(host, sys.stdout)
        finally:
            host.connection_close()
        return

    logger.info("smartjump %s starting", __version__)
    lock: Optional[InstanceLock] = InstanceLock(config.pid_file) if config.pid_file else None
    loop = EventLoop()
    controller: Optional[CursorController] = None
    tracker: Optional[WindowFillTracker] = None

    try:
        if lock is not None:
            lock.acquire()
        loop.pump_register(host.events_dispatch)

        if config.jump.enabled:
            controller = CursorController(host, loop, loop, config.jump)
            controller.start()
        else:
            logger.info("Cursor edge jump disabled")

        if config.fill.enabled:
            tracker = WindowFillTracker(host, loop, config.fill.settle_delay_seconds)
            tracker.start()
        else:
            logger.info("Window fill disabled")

        if controller is None and tracker is None:
            logger.warning("Nothing to do: both jump and fill are disabled")
            return

        signalHandlers_install(loop)
        logger.info("smartjump loaded - all components active")
        loop.run()
    finally:
        if tracker is not None:
            tracker.stop()
        if controller is not None:
            controller.stop()
        host.connection_close()
        if lock is not None:
            lock.release()
        logger.info("smartjump stopped")
