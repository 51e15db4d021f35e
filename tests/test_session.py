# ==============================================================================
# Tests for SessionModel and session statistics
# ==============================================================================
"""
Unit tests for the session lifecycle and the idle-timeout correction.

Tests cover:
- mean / sample SD / page correction helpers
- Idempotent start() and end()
- Page time samples (falsy values discarded, cleared on end)
- Raw vs corrected session durations
- Correction logging above logging level 1
"""

import logging

import pytest

from analytics_dispatcher.core.models import SESSION_TIMER
from analytics_dispatcher.core.session import (
    SessionModel,
    corrected_duration,
    mean,
    page_correction,
    sample_sd,
)

# ==============================================================================
# Statistics
# ==============================================================================


class TestStatistics:
    """Tests for the module-level statistics helpers."""

    def test_mean(self):
        assert mean([100, 200, 300]) == 200

    def test_mean_empty(self):
        assert mean([]) == 0.0

    def test_sd_single_sample_is_zero(self):
        assert sample_sd([1234]) == 0.0

    def test_sd_is_bessel_corrected(self):
        assert sample_sd([1000, 2000, 3000]) == pytest.approx(1000.0)

    def test_page_correction_no_samples(self):
        assert page_correction([]) == 0

    def test_page_correction_mean_plus_sd(self):
        assert page_correction([1000, 2000, 3000]) == 3000

    def test_page_correction_rounds_half_up(self):
        # mean 2.5, sd 0 -> 3 (banker's rounding would give 2)
        assert page_correction([2.5]) == 3

    def test_corrected_duration(self):
        assert corrected_duration(20000, 5000, [1000, 2000, 3000]) == 12000

    def test_corrected_duration_without_samples(self):
        assert corrected_duration(20000, 5000, []) == 15000

    def test_corrected_duration_not_clamped(self):
        assert corrected_duration(1000, 5000, []) == -4000


# ==============================================================================
# Lifecycle
# ==============================================================================


class TestLifecycle:
    """Tests for start()/end() state transitions."""

    def test_start_sets_running_and_timer(self, timers):
        session = SessionModel(timers)
        session.start()
        assert session.running
        assert timers.is_running(SESSION_TIMER)

    def test_double_start_keeps_original_start(self, timers, clock):
        session = SessionModel(timers)
        session.start()
        clock.advance(1000)
        session.start()
        clock.advance(1000)
        assert session.end() == 2000

    def test_end_stops_running(self, timers, clock):
        session = SessionModel(timers)
        session.start()
        clock.advance(500)
        assert session.end() == 500
        assert not session.running
        assert not timers.is_running(SESSION_TIMER)

    def test_end_when_idle_returns_none(self, timers):
        session = SessionModel(timers)
        assert session.end() is None
        assert not session.running

    def test_reusable_across_sessions(self, timers, clock):
        session = SessionModel(timers)
        session.start()
        clock.advance(100)
        session.end()
        session.start()
        clock.advance(300)
        assert session.end() == 300


# ==============================================================================
# Page times and correction
# ==============================================================================


class TestPageTimes:
    """Tests for add_page_time()."""

    def test_falsy_samples_discarded(self, timers):
        session = SessionModel(timers)
        session.add_page_time(0)
        session.add_page_time(None)
        session.add_page_time(1200)
        assert session.page_times == [1200]

    def test_page_times_cleared_on_end(self, timers):
        session = SessionModel(timers)
        session.start()
        session.add_page_time(1200)
        session.end()
        assert session.page_times == []


class TestCorrection:
    """Tests for estimated session timing."""

    def test_raw_duration_when_disabled(self, timers, clock):
        session = SessionModel(timers, idle_timeout=5000, use_estimated_timing=False)
        session.start()
        for sample in (1000, 2000, 3000):
            session.add_page_time(sample)
        clock.advance(20000)
        assert session.end() == 20000

    def test_corrected_duration_when_enabled(self, timers, clock):
        session = SessionModel(timers, idle_timeout=5000, use_estimated_timing=True)
        session.start()
        for sample in (1000, 2000, 3000):
            session.add_page_time(sample)
        clock.advance(20000)
        assert session.end() == 12000

    def test_no_samples_subtracts_idle_timeout_only(self, timers, clock):
        session = SessionModel(timers, idle_timeout=5000, use_estimated_timing=True)
        session.start()
        clock.advance(20000)
        assert session.end() == 15000

    def test_estimate_duration_passes_none_through(self, timers):
        session = SessionModel(timers, idle_timeout=5000, use_estimated_timing=True)
        assert session.estimate_duration(None) is None

    def test_correction_logged_above_level_one(self, timers, clock, caplog):
        session = SessionModel(
            timers, idle_timeout=5000, use_estimated_timing=True, logging_level=2
        )
        session.start()
        clock.advance(20000)
        with caplog.at_level(logging.INFO, logger="analytics_dispatcher.core.session"):
            session.end()
        assert "applying length correction of -5.000 S" in caplog.text
        assert "was 20.000 S, now 15.000 S" in caplog.text

    def test_correction_silent_at_level_one(self, timers, clock, caplog):
        session = SessionModel(
            timers, idle_timeout=5000, use_estimated_timing=True, logging_level=1
        )
        session.start()
        clock.advance(20000)
        with caplog.at_level(logging.INFO, logger="analytics_dispatcher.core.session"):
            session.end()
        assert "correction" not in caplog.text
