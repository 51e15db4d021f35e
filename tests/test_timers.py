# ==============================================================================
# Tests for TimerRegistry
# ==============================================================================
"""
Unit tests for the named-stopwatch registry.

Tests cover:
- Elapsed milliseconds for start/stop
- restart_timer returning the lap and restarting
- Absent timers degrading to None
- Overwriting a running timer
- reset() dropping every timer
"""

from analytics_dispatcher.core.timers import TimerRegistry


class TestStartStop:
    """Tests for start_timer() and stop_timer()."""

    def test_stop_returns_elapsed_ms(self, timers, clock):
        timers.start_timer("video")
        clock.advance(1500)
        assert timers.stop_timer("video") == 1500

    def test_stop_removes_timer(self, timers, clock):
        timers.start_timer("video")
        timers.stop_timer("video")
        assert not timers.is_running("video")
        assert timers.stop_timer("video") is None

    def test_stop_unknown_timer_returns_none(self, timers):
        assert timers.stop_timer("never-started") is None

    def test_start_overwrites_running_timer(self, timers, clock):
        timers.start_timer("video")
        clock.advance(1000)
        timers.start_timer("video")
        clock.advance(250)
        assert timers.stop_timer("video") == 250

    def test_elapsed_is_rounded_to_ms(self, timers, clock):
        timers.start_timer("video")
        clock.advance(12.6)
        assert timers.stop_timer("video") == 13

    def test_default_clock_is_monotonic(self):
        """Real clock produces a non-negative elapsed value."""
        timers = TimerRegistry()
        timers.start_timer("real")
        assert timers.stop_timer("real") >= 0


class TestRestart:
    """Tests for restart_timer()."""

    def test_first_restart_returns_none_and_starts(self, timers, clock):
        assert timers.restart_timer("page") is None
        assert timers.is_running("page")
        clock.advance(300)
        assert timers.elapsed("page") == 300

    def test_restart_measures_since_last_restart(self, timers, clock):
        timers.restart_timer("page")
        clock.advance(400)
        assert timers.restart_timer("page") == 400
        clock.advance(700)
        assert timers.restart_timer("page") == 700


class TestReset:
    """Tests for reset() and introspection."""

    def test_reset_clears_all(self, timers):
        timers.start_timer("a")
        timers.start_timer("b")
        timers.reset()
        assert timers.names == []
        assert timers.elapsed("a") is None

    def test_names_in_start_order(self, timers):
        timers.start_timer("b")
        timers.start_timer("a")
        assert timers.names == ["b", "a"]

    def test_elapsed_does_not_mutate(self, timers, clock):
        timers.start_timer("a")
        clock.advance(100)
        assert timers.elapsed("a") == 100
        clock.advance(100)
        assert timers.elapsed("a") == 200
