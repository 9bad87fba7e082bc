"""Pytest configuration and shared fixtures for smartjump tests

This module provides fakes for the host protocols so the jump and fill
components can be driven deterministically without an X server.
"""

import logging
from pathlib import Path
from typing import Callable, Generator, Optional

import pytest

from smartjump.common.config import Config, ConfigLoader
from smartjump.common.settings import settings
from smartjump.common.types import DisplayFrame, Position
from smartjump.host.backend import WindowEventHandlers
from smartjump.host.loop import EventLoop


class FakeClock:
    """Manually advanced monotonic clock"""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def monotonic_get(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeDisplayWatcher:
    """Display watcher whose change notification is fired by the test"""

    def __init__(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.started = False
        self.stopped = False

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.stopped = True

    def fire(self) -> None:
        if self.started and not self.stopped:
            self.callback()


class FakeCursorHost:
    """Display and pointer host backed by plain lists"""

    def __init__(self, frames: Optional[list[DisplayFrame]] = None) -> None:
        self.frames: list[DisplayFrame] = list(frames or [])
        self.position = Position(0, 0)
        self.warps: list[Position] = []
        self.watchers: list[FakeDisplayWatcher] = []
        self.fail_next_get = False

    def displays_enumerate(self) -> list[DisplayFrame]:
        return list(self.frames)

    def displayWatcher_create(self, callback: Callable[[], None]) -> FakeDisplayWatcher:
        watcher = FakeDisplayWatcher(callback)
        self.watchers.append(watcher)
        return watcher

    def cursorPosition_get(self) -> Position:
        if self.fail_next_get:
            self.fail_next_get = False
            raise RuntimeError("pointer query failed")
        return self.position

    def cursorPosition_set(self, position: Position) -> None:
        self.warps.append(position)
        self.position = position


class FakeWindow:
    """WindowRef with a settable display and validity"""

    def __init__(
        self,
        window_id: int,
        display_id: Optional[int],
        frames: Optional[dict[int, DisplayFrame]] = None,
        title: str = "",
    ) -> None:
        self._window_id = window_id
        self.display_id = display_id
        self.frames = frames or {}
        self.valid = True
        self.applied: list[DisplayFrame] = []
        self._title = title

    @property
    def window_id(self) -> int:
        return self._window_id

    def title(self) -> str:
        return self._title

    def isValid(self) -> bool:
        return self.valid

    def displayId_get(self) -> Optional[int]:
        return self.display_id

    def displayFrame_get(self) -> Optional[DisplayFrame]:
        if self.display_id is None:
            return None
        return self.frames.get(self.display_id)

    def frame_set(self, frame: DisplayFrame) -> None:
        self.applied.append(frame)


class FakeSubscription:
    """Subscription handle recorded by FakeWindowHost"""

    def __init__(self, host: "FakeWindowHost", handlers: WindowEventHandlers) -> None:
        self.host = host
        self.handlers = handlers
        self.active = True

    def unsubscribe(self) -> None:
        self.active = False


class FakeWindowHost:
    """Window host whose events are emitted by the test"""

    def __init__(self, windows: Optional[list[FakeWindow]] = None) -> None:
        self.windows: list[FakeWindow] = list(windows or [])
        self.subscriptions: list[FakeSubscription] = []

    def windows_list(self) -> list[FakeWindow]:
        return list(self.windows)

    def windowEvents_subscribe(self, handlers: WindowEventHandlers) -> FakeSubscription:
        subscription = FakeSubscription(self, handlers)
        self.subscriptions.append(subscription)
        return subscription

    def emit(self, kind: str, win: FakeWindow) -> None:
        for subscription in self.subscriptions:
            handler = getattr(subscription.handlers, kind)
            if subscription.active and handler is not None:
                handler(win)


SIDE_BY_SIDE: list[DisplayFrame] = [
    DisplayFrame(x=0, y=0, w=1920, h=1080),
    DisplayFrame(x=1920, y=0, w=1920, h=1080),
]


@pytest.fixture
def fake_clock() -> FakeClock:
    """Manually advanced clock"""
    return FakeClock()


@pytest.fixture
def event_loop(fake_clock: FakeClock) -> EventLoop:
    """Event loop driven by the fake clock, never sleeping"""
    return EventLoop(clock_func=fake_clock, sleep_func=lambda _s: None)


@pytest.fixture
def cursor_host() -> FakeCursorHost:
    """Two 1920x1080 displays side by side"""
    return FakeCursorHost(SIDE_BY_SIDE)


@pytest.fixture
def window_host() -> FakeWindowHost:
    """Empty window host"""
    return FakeWindowHost()


@pytest.fixture
def sample_config() -> Config:
    """Load the sample configuration shipped with the repository

    Returns:
        Config object with sample values
    """
    config_path = Path(__file__).parent.parent / "config.yml"
    if not config_path.exists():
        pytest.skip("config.yml not found - required for this test")
    return ConfigLoader.config_load(config_path)


@pytest.fixture
def reset_settings() -> Generator[None, None, None]:
    """Reset settings singleton between tests"""
    settings._config = None
    yield
    settings._config = None


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Setup logging for tests"""
    caplog.set_level(logging.DEBUG)
