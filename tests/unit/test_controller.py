"""Unit tests for the poll-driven cursor controller"""

import pytest

from conftest import FakeCursorHost, SIDE_BY_SIDE
from smartjump.common.config import JumpConfig
from smartjump.common.types import DisplayFrame, Position
from smartjump.jump.controller import CursorController


@pytest.fixture
def controller(cursor_host, event_loop):
    ctl = CursorController(cursor_host, event_loop, event_loop, JumpConfig())
    ctl.initialize()
    return ctl


class TestTick:
    """Test single polling steps"""

    def test_end_to_end_side_by_side_jump(self, controller, cursor_host):
        cursor_host.position = Position(1903, 540)
        assert controller.tick() is None

        cursor_host.position = Position(1918, 540)
        target = controller.tick()

        assert target is not None
        assert target.display.id == 2
        assert target.position == Position(1930, 540)
        assert cursor_host.warps == [Position(1930, 540)]
        assert controller.state.velocity.dx == 15
        assert controller.state.last_position == Position(1930, 540)

    def test_interior_position_no_jump(self, controller, cursor_host):
        cursor_host.position = Position(960, 540)
        assert controller.tick() is None
        assert cursor_host.warps == []
        assert controller.state.last_position == Position(960, 540)

    def test_cooldown_blocks_second_jump(self, controller, cursor_host, fake_clock):
        cursor_host.position = Position(1918, 540)
        assert controller.tick() is not None

        fake_clock.advance(0.010)
        cursor_host.position = Position(1918, 540)
        assert controller.tick() is None
        assert len(cursor_host.warps) == 1
        # Velocity is still tracked while cooling down
        assert controller.state.velocity.dx == 1918 - 1930
        assert controller.state.last_position == Position(1918, 540)

        fake_clock.advance(0.050)
        assert controller.tick() is not None
        assert len(cursor_host.warps) == 2

    def test_outside_every_display_uses_nearest(self, controller, cursor_host):
        cursor_host.position = Position(3900, 500)
        assert controller.tick() is None
        assert cursor_host.warps == []

    def test_no_displays_is_noop(self, event_loop):
        host = FakeCursorHost([])
        ctl = CursorController(host, event_loop, event_loop)
        ctl.initialize()
        host.position = Position(0, 0)
        assert ctl.tick() is None
        assert ctl.state.tick_count == 1

    def test_heartbeat_logged(self, controller, cursor_host, caplog):
        cursor_host.position = Position(960, 540)
        controller.state.tick_count = 249
        controller.tick()
        assert "Heartbeat: tick 250" in caplog.text

    def test_jump_logged(self, controller, cursor_host, caplog):
        cursor_host.position = Position(1918, 540)
        controller.tick()
        assert "JUMP: (1918, 540) -> (1930, 540) [display 1 -> 2]" in caplog.text


class TestLifecycle:
    """Test start/stop, display changes, and fault isolation"""

    def test_start_schedules_timer_and_watcher(self, controller, cursor_host, event_loop):
        controller.start()
        assert controller.isRunning()
        assert event_loop.timersActive_count() == 1
        assert cursor_host.watchers[-1].started
        assert controller.topology.zones_count() == 2

    def test_start_stops_previous(self, controller, cursor_host, event_loop):
        controller.start()
        first_watcher = cursor_host.watchers[-1]
        controller.start()
        assert first_watcher.stopped
        assert event_loop.timersActive_count() == 1
        assert len(cursor_host.watchers) == 2

    def test_stop_is_idempotent(self, controller, event_loop):
        controller.start()
        controller.stop()
        controller.stop()
        assert not controller.isRunning()
        assert event_loop.timersActive_count() == 0

    def test_timer_drives_ticks(self, controller, cursor_host, event_loop, fake_clock):
        cursor_host.position = Position(960, 540)
        controller.start()
        for _ in range(3):
            fake_clock.advance(0.020)
            event_loop.iteration_run()
        assert controller.state.tick_count == 3

    def test_display_change_rebuilds_topology(self, controller, cursor_host):
        controller.start()
        assert len(controller.displays) == 2

        cursor_host.frames = SIDE_BY_SIDE + [DisplayFrame(3840, 0, 1280, 1024)]
        cursor_host.watchers[-1].fire()

        assert len(controller.displays) == 3
        assert controller.topology.zones_count() == 6

    def test_display_change_keeps_cooldown(self, controller, cursor_host, fake_clock):
        controller.start()
        cursor_host.position = Position(1918, 540)
        controller.tick()
        jumped_at = controller.state.last_jump_time

        cursor_host.watchers[-1].fire()
        assert controller.state.last_jump_time == jumped_at

        fake_clock.advance(0.010)
        cursor_host.position = Position(1918, 540)
        assert controller.tick() is None

    def test_fault_is_logged_and_isolated(self, controller, cursor_host, caplog):
        cursor_host.fail_next_get = True
        controller.tick_guarded()
        assert "Error in cursor tick" in caplog.text

        cursor_host.position = Position(1918, 540)
        controller.tick_guarded()
        assert cursor_host.warps == [Position(1930, 540)]

    def test_startup_banner(self, controller, caplog):
        controller.start()
        assert "Smart cursor jump loaded" in caplog.text
        assert "Edge threshold: 5px" in caplog.text
        assert "Display 2: x=1920, y=0, w=1920, h=1080 (right=3840, bottom=1080)" in caplog.text
