"""Unit tests for the single-threaded event loop"""

import pytest

from smartjump.host.loop import EventLoop


class TestTimers:
    """Test periodic and deferred timers"""

    def test_deferred_runs_once_after_delay(self, event_loop, fake_clock):
        calls = []
        event_loop.deferred_schedule(0.1, lambda: calls.append("x"))

        event_loop.iteration_run()
        assert calls == []

        fake_clock.advance(0.1)
        event_loop.iteration_run()
        fake_clock.advance(0.1)
        event_loop.iteration_run()
        assert calls == ["x"]
        assert event_loop.timersActive_count() == 0

    def test_negative_delay_runs_next_pass(self, event_loop):
        calls = []
        event_loop.deferred_schedule(-1.0, lambda: calls.append(1))
        event_loop.iteration_run()
        assert calls == [1]

    def test_periodic_repeats_until_stopped(self, event_loop, fake_clock):
        calls = []
        timer = event_loop.periodic_schedule(0.5, lambda: calls.append(1))
        for _ in range(4):
            fake_clock.advance(0.5)
            event_loop.iteration_run()
        timer.stop()
        fake_clock.advance(0.5)
        event_loop.iteration_run()
        assert len(calls) == 4

    def test_missed_periods_are_dropped(self, event_loop, fake_clock):
        calls = []
        event_loop.periodic_schedule(0.5, lambda: calls.append(1))
        fake_clock.advance(10.0)
        event_loop.iteration_run()
        assert len(calls) == 1

    def test_invalid_interval(self, event_loop):
        with pytest.raises(ValueError):
            event_loop.periodic_schedule(0, lambda: None)

    def test_stopped_deferred_never_runs(self, event_loop, fake_clock):
        calls = []
        handle = event_loop.deferred_schedule(0.1, lambda: calls.append(1))
        handle.stop()
        fake_clock.advance(1.0)
        event_loop.iteration_run()
        assert calls == []

    def test_due_timers_run_in_deadline_order(self, event_loop, fake_clock):
        calls = []
        event_loop.deferred_schedule(0.2, lambda: calls.append("late"))
        event_loop.deferred_schedule(0.1, lambda: calls.append("early"))
        fake_clock.advance(1.0)
        event_loop.iteration_run()
        assert calls == ["early", "late"]

    def test_next_delay_capped(self, fake_clock):
        loop = EventLoop(clock_func=fake_clock, idle_interval=0.01)
        loop.deferred_schedule(5.0, lambda: None)
        assert loop.iteration_run() == pytest.approx(0.01)


class TestPumpsAndErrors:
    """Test pumps, exception isolation, and run/stop"""

    def test_pump_runs_every_pass(self, event_loop):
        calls = []
        handle = event_loop.pump_register(lambda: calls.append(1))
        event_loop.iteration_run()
        event_loop.iteration_run()
        handle.stop()
        event_loop.iteration_run()
        assert len(calls) == 2

    def test_callback_exception_isolated(self, event_loop, fake_clock, caplog):
        calls = []

        def boom():
            raise RuntimeError("boom")

        event_loop.deferred_schedule(0.0, boom)
        event_loop.deferred_schedule(0.0, lambda: calls.append(1))
        event_loop.iteration_run()
        assert calls == [1]
        assert "Unhandled error in event loop callback" in caplog.text

    def test_run_until_stop(self, event_loop, fake_clock):
        sleeps = []
        loop = EventLoop(clock_func=fake_clock, sleep_func=sleeps.append)
        ticks = []

        def tick():
            ticks.append(1)
            fake_clock.advance(0.01)
            if len(ticks) == 3:
                loop.stop()

        loop.pump_register(tick)
        loop.run()
        assert len(ticks) == 3
        assert not loop.running
