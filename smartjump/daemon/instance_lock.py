"""
Single-instance PID file.

Starting a second daemon stops the first: the running instance recorded in the
PID file is sent SIGTERM before the new PID is written.
"""

from __future__ import annotations

import logging
import os
import signal
import time
from pathlib import Path
from typing import Callable, Optional

__all__ = ["InstanceLock"]

logger = logging.getLogger(__name__)

_TERMINATE_WAIT_SECONDS: float = 1.0


class InstanceLock:
    """PID file owner for the running daemon"""

    def __init__(
        self,
        pid_file: str | Path,
        kill_func: Callable[[int, int], None] = os.kill,
        sleep_func: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize lock

        Args:
            pid_file: PID file path; `~` is expanded
            kill_func: Signal sender
            sleep_func: Wait used after signalling an older instance
        """
        self._path: Path = Path(pid_file).expanduser()
        self._kill = kill_func
        self._sleep = sleep_func
        self._held: bool = False

    @property
    def path(self) -> Path:
        """PID file path"""
        return self._path

    def previousPid_read(self) -> Optional[int]:
        """PID recorded in the file, None if absent or unreadable"""
        try:
            return int(self._path.read_text().strip())
        except FileNotFoundError:
            return None
        except ValueError:
            logger.warning("Ignoring malformed PID file %s", self._path)
            return None

    def acquire(self) -> None:
        """Stop any running instance and record this process"""
        old_pid = self.previousPid_read()
        if old_pid is not None and old_pid != os.getpid():
            try:
                self._kill(old_pid, 0)
            except ProcessLookupError:
                logger.debug("Stale PID file for %d", old_pid)
            except PermissionError:
                logger.warning("PID %d belongs to another user; not stopping it", old_pid)
            else:
                logger.info("An instance is already running (PID %d). Stopping it.", old_pid)
                self._kill(old_pid, signal.SIGTERM)
                self._sleep(_TERMINATE_WAIT_SECONDS)

        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(str(os.getpid()))
        self._held = True

    def release(self) -> None:
        """Remove the PID file if this process still owns it"""
        if not self._held:
            return
        self._held = False
        if self.previousPid_read() == os.getpid():
            self._path.unlink(missing_ok=True)
