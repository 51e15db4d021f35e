# ==============================================================================
# Shared Test Fixtures
# ==============================================================================
"""
Pytest fixtures shared across all test modules.

Provides:
- A manually advanced clock and a TimerRegistry driven by it
- A provider that records every dispatch() call
- A dispatcher factory wired to both
"""

import pytest

from analytics_dispatcher.core.dispatcher import AnalyticsDispatcher
from analytics_dispatcher.core.timers import TimerRegistry
from analytics_dispatcher.utils.config import DispatcherSettings


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


class RecordingProvider:
    """Provider that keeps every dispatch() call as a tuple."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.closed = False

    def dispatch(self, *args):
        self.calls.append(args)

    def close(self):
        self.closed = True

    @property
    def kinds(self) -> list:
        return [call[0] for call in self.calls]


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def timers(clock):
    return TimerRegistry(clock=clock)


@pytest.fixture()
def recorder():
    return RecordingProvider()


@pytest.fixture()
def make_dispatcher(recorder, timers):
    """Build a dispatcher with the recording provider and fake-clock timers.

    Keyword arguments are passed to DispatcherSettings.
    """

    def _make(**options) -> AnalyticsDispatcher:
        return AnalyticsDispatcher([recorder], DispatcherSettings(**options), timers=timers)

    return _make
