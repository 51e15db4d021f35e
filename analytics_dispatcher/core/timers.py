# ==============================================================================
# Timer Registry
# ==============================================================================
"""
Named stopwatches used for page, session and ad-hoc timing.

Timing is best-effort instrumentation: querying a timer that was never
started yields None instead of raising.

Usage::

    timers = TimerRegistry()
    timers.start_timer("checkout")
    ...
    elapsed_ms = timers.stop_timer("checkout")
"""

import time
from collections.abc import Callable


class TimerRegistry:
    """Stopwatches keyed by name, reporting elapsed time in milliseconds.

    Args:
        clock: Callable returning a monotonic time in seconds.
            Defaults to ``time.monotonic``.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._started: dict[str, float] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start_timer(self, name: str) -> None:
        """Start *name*, overwriting its start instant if already running."""
        self._started[name] = self._clock()

    def restart_timer(self, name: str) -> int | None:
        """Return elapsed ms for *name* (None if never started) and start it again."""
        now = self._clock()
        elapsed = self._elapsed_since(name, now)
        self._started[name] = now
        return elapsed

    def stop_timer(self, name: str) -> int | None:
        """Return elapsed ms for *name* and remove it (None if never started)."""
        elapsed = self._elapsed_since(name, self._clock())
        self._started.pop(name, None)
        return elapsed

    def elapsed(self, name: str) -> int | None:
        """Return elapsed ms for *name* without touching the timer."""
        return self._elapsed_since(name, self._clock())

    def is_running(self, name: str) -> bool:
        return name in self._started

    def reset(self) -> None:
        """Drop every timer."""
        self._started.clear()

    @property
    def names(self) -> list[str]:
        """Names of the running timers, in start order."""
        return list(self._started)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _elapsed_since(self, name: str, now: float) -> int | None:
        started = self._started.get(name)
        if started is None:
            return None
        return round((now - started) * 1000)
