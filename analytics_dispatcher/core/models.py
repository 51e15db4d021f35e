# ==============================================================================
# Analytics Domain Models
# ==============================================================================
"""
Canonical event kinds and the event record exchanged with providers.

The dispatcher broadcasts ``(EventKind, *payload)`` to every provider. Providers
that need a serializable record (Kafka, Logstash) wrap the call in a
CanonicalEvent.

This module is part of the core domain layer and has no external dependencies
beyond Pydantic.
"""

import time
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class EventKind(str, Enum):
    """Event kinds every provider must handle."""

    SET_LANGUAGE = "set_language"
    PAGE_VIEW = "page_view"
    EVENT = "event"
    TIMING = "timing"
    SET_PAGE = "set_page"
    SET_APP_VERSION = "set_app_version"
    SET_APP_NAME = "set_app_name"
    SET_APP_ID = "set_app_id"
    SET_USER_ID = "set_user_id"
    START_SESSION = "start_session"
    END_SESSION = "end_session"


# Timer name owned by page-time instrumentation
PAGE_VIEW_TIMER = "pageView"

# Timer name owned by the session model
SESSION_TIMER = "session"

# Synthetic page used to bracket session end on kiosks
SESSION_END_PAGE = "/session-end"


def _now_ms() -> int:
    return int(time.time() * 1000)


class CanonicalEvent(BaseModel):
    """
    A single canonical event as broadcast by the dispatcher.

    Attributes:
        kind: Event kind
        payload: URL or identifier, key/value mapping, any JSON scalar, or None
        timestamp: Unix timestamp in milliseconds when the event was recorded
    """

    kind: EventKind = Field(..., description="Event kind")
    payload: Any = Field(None, description="Kind-specific payload (JSON-serializable)")
    timestamp: int = Field(default_factory=_now_ms, description="Unix timestamp in milliseconds")

    @property
    def event_time(self) -> datetime:
        """Convert timestamp to datetime object."""
        return datetime.fromtimestamp(self.timestamp / 1000.0)

    @classmethod
    def from_dispatch(cls, kind: EventKind, *payload: Any) -> "CanonicalEvent":
        """Build an event from the arguments of a provider ``dispatch()`` call."""
        return cls(kind=kind, payload=payload[0] if payload else None)

    def to_message(self) -> dict:
        """Serialize event for a JSON message body."""
        return {
            "kind": self.kind.value,
            "payload": self.payload,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_message(cls, data: dict) -> "CanonicalEvent":
        """Deserialize event from a JSON message body."""
        return cls(
            kind=data["kind"],
            payload=data.get("payload"),
            timestamp=data["timestamp"],
        )


def event_payload(
    category: str,
    action: str,
    label: str | None = None,
    value: int | None = None,
    **extra: Any,
) -> dict:
    """Build an Event payload. Unset optional keys are left out."""
    payload: dict[str, Any] = {"category": category, "action": action}
    if label is not None:
        payload["label"] = label
    if value is not None:
        payload["value"] = value
    payload.update(extra)
    return payload


def timing_payload(
    category: str,
    var: str,
    value: int | None,
    label: str | None = None,
) -> dict:
    """Build a Timing payload. ``label`` is left out when None."""
    payload: dict[str, Any] = {"category": category, "var": var, "value": value}
    if label is not None:
        payload["label"] = label
    return payload
