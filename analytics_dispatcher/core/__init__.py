# ==============================================================================
# Core Domain Logic
# ==============================================================================
"""
Event dispatch and session timing, with no vendor dependencies.

This module contains:
- Domain models (EventKind, CanonicalEvent, payload helpers)
- Timer registry (named stopwatches)
- Session model (lifecycle and idle-timeout correction)
- The dispatcher (public analytics API)

All code here is provider-agnostic and easily unit-testable.
"""

from analytics_dispatcher.core.dispatcher import AnalyticsDispatcher
from analytics_dispatcher.core.models import (
    PAGE_VIEW_TIMER,
    SESSION_END_PAGE,
    SESSION_TIMER,
    CanonicalEvent,
    EventKind,
    event_payload,
    timing_payload,
)
from analytics_dispatcher.core.session import (
    SessionModel,
    corrected_duration,
    mean,
    page_correction,
    sample_sd,
)
from analytics_dispatcher.core.timers import TimerRegistry

__all__ = [
    "AnalyticsDispatcher",
    "CanonicalEvent",
    "EventKind",
    "PAGE_VIEW_TIMER",
    "SESSION_END_PAGE",
    "SESSION_TIMER",
    "SessionModel",
    "TimerRegistry",
    "corrected_duration",
    "event_payload",
    "mean",
    "page_correction",
    "sample_sd",
    "timing_payload",
]
