# ==============================================================================
# Session Model - Pure Domain Logic
# ==============================================================================
"""
Session lifecycle and session-duration estimation.

A session is Idle -> Running -> Idle and the same SessionModel is reused for
every session of a dispatcher. While running it collects the dwell time of
each completed page view.

Estimated session timing
------------------------
On a kiosk the session is usually ended by the host's idle timeout (a
screensaver) rather than by the user, so the raw session timer also counts
the idle period and the unobserved time spent on the last page. When
estimation is enabled the model replaces that tail with an estimate:

    page_correction = round(mean(page_times) + sample_sd(page_times))
    correction      = idle_timeout + page_correction
    corrected       = raw_duration - correction

It assumes the last page took about as long as the earlier pages, plus one
standard deviation (Bessel-corrected) of headroom. This is a heuristic, not a
measurement. Results are not clamped: a negative duration is returned as is.
"""

import logging
import math
from collections.abc import Sequence

from analytics_dispatcher.core.models import SESSION_TIMER
from analytics_dispatcher.core.timers import TimerRegistry

logger = logging.getLogger(__name__)


# ==============================================================================
# Statistics
# ==============================================================================


def mean(data: Sequence[float]) -> float:
    """Arithmetic mean. An empty sequence has a mean of 0."""
    if not data:
        return 0.0
    return sum(data) / len(data)


def sample_sd(data: Sequence[float]) -> float:
    """Sample standard deviation (divides by n - 1). 0 for fewer than two samples."""
    if len(data) < 2:
        return 0.0
    m = mean(data)
    return math.sqrt(sum((x - m) ** 2 for x in data) / (len(data) - 1))


def page_correction(page_times: Sequence[float]) -> int:
    """
    Estimate the dwell time of the unobserved last page.

    Args:
        page_times: Dwell-time samples in milliseconds

    Returns:
        mean + one sample SD, rounded half up; 0 without samples
    """
    if not page_times:
        return 0
    return math.floor(mean(page_times) + sample_sd(page_times) + 0.5)


def corrected_duration(raw_duration: int, idle_timeout: int, page_times: Sequence[float]) -> int:
    """Subtract the idle timeout and the page correction from *raw_duration*."""
    return raw_duration - (idle_timeout + page_correction(page_times))


# ==============================================================================
# Session Model
# ==============================================================================


class SessionModel:
    """
    One dispatcher's session state.

    Args:
        timers: Timer registry shared with the dispatcher
        idle_timeout: Host idle timeout in milliseconds
        use_estimated_timing: Apply the idle-timeout correction on end()
        logging_level: Diagnostic verbosity; corrections are logged above 1
    """

    def __init__(
        self,
        timers: TimerRegistry,
        idle_timeout: int = 0,
        use_estimated_timing: bool = False,
        logging_level: int = 0,
    ):
        self._timers = timers
        self.idle_timeout = idle_timeout
        self.use_estimated_timing = use_estimated_timing
        self.logging_level = logging_level
        self.running = False
        self.page_times: list[int] = []

    def start(self) -> None:
        if self.running:
            return
        self.running = True
        self._timers.start_timer(SESSION_TIMER)

    def add_page_time(self, duration_ms: int | None) -> None:
        """Record a page dwell time. Zero and None are discarded."""
        if duration_ms:
            self.page_times.append(duration_ms)

    def end(self) -> int | None:
        """
        End the session and return its duration in milliseconds.

        Returns:
            The raw duration, or the corrected one when estimated timing is
            enabled. None if the session timer was never started.
        """
        self.running = False
        raw_duration = self._timers.stop_timer(SESSION_TIMER)
        duration = self.estimate_duration(raw_duration)
        self.page_times = []
        return duration

    def estimate_duration(self, raw_duration: int | None) -> int | None:
        """Apply the correction to *raw_duration* using the current page times."""
        if not self.use_estimated_timing or raw_duration is None:
            return raw_duration

        duration = corrected_duration(raw_duration, self.idle_timeout, self.page_times)
        if self.logging_level > 1:
            logger.info(
                "[SESSION] applying length correction of -%.3f S",
                (raw_duration - duration) / 1000,
            )
            logger.info(
                "[SESSION] was %.3f S, now %.3f S", raw_duration / 1000, duration / 1000
            )
        return duration
