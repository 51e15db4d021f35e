# ==============================================================================
# Provider Contract
# ==============================================================================
"""
The capability every analytics provider must offer, plus a base class that
routes canonical events to per-kind handlers.

The dispatcher only depends on the Provider protocol: any object with a
``dispatch(kind, *payload)`` method can be registered. BaseProvider is a
convenience for concrete providers; it performs the exhaustive switch over
EventKind and silently drops unknown kinds.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable

from analytics_dispatcher.core.models import EventKind

logger = logging.getLogger(__name__)


@runtime_checkable
class Provider(Protocol):
    """Anything that accepts canonical events."""

    def dispatch(self, kind: Any, *payload: Any) -> None: ...


class BaseProvider(ABC):
    """
    Base class for concrete providers.

    Subclasses implement ``_send()`` to deliver a vendor-specific command and
    may override individual handlers. When the provider has no identifier
    (tracking id, URL, broker list) it skips vendor initialization and
    ``_send()`` is replaced by a log record: console-only mode.

    Args:
        provider_id: Vendor identifier. Falsy values select console-only mode.
        debug: Use the vendor's debug/validation endpoint where one exists.
        logging_level: Diagnostic verbosity. A message at level n is logged
            when logging_level > n.
    """

    def __init__(self, provider_id: str | None = None, debug: bool = False, logging_level: int = 0):
        self.provider_id = provider_id or None
        self.debug = debug
        self.logging_level = logging_level

        self._log(0, "Initialising %s.", self.name)

        if self.provider_id:
            self.initialise()
        else:
            self._log(0, "No provider ID - logging to console instead.")

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Provider name as used in configuration.

        Examples:
            'console'
            'google_analytics'
        """
        pass

    @property
    def enabled(self) -> bool:
        """True when events are delivered to the vendor, False in console-only mode."""
        return self.provider_id is not None

    def initialise(self) -> None:
        """Vendor-side setup, called once when a provider id is present."""

    def close(self) -> None:
        """Release vendor resources (flush buffers, close sessions)."""

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, kind: Any, *payload: Any) -> None:
        """Route a canonical event to its handler. Unknown kinds are ignored."""
        try:
            kind = EventKind(kind)
        except (ValueError, TypeError):
            return

        match kind:
            case EventKind.SET_LANGUAGE:
                self.set_language(*payload)
            case EventKind.SET_APP_NAME:
                self.set_app_name(*payload)
            case EventKind.SET_APP_VERSION:
                self.set_app_version(*payload)
            case EventKind.SET_APP_ID:
                self.set_app_id(*payload)
            case EventKind.PAGE_VIEW:
                self.page_view(*payload)
            case EventKind.SET_PAGE:
                self.set_page(*payload)
            case EventKind.EVENT:
                self.event(*payload)
            case EventKind.TIMING:
                self.timing(*payload)
            case EventKind.SET_USER_ID:
                self.set_user_id(*payload)
            case EventKind.START_SESSION:
                self.session("start")
            case EventKind.END_SESSION:
                self.session("end")

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def page_view(self, url: str | None = None) -> None:
        self._log(1, "[PAGEVIEW] %s", url or "[send]")
        self._deliver(EventKind.PAGE_VIEW, url)

    def set_page(self, url: str | None = None) -> None:
        self._log(1, "[SET_PAGE] %s", url)
        self._deliver(EventKind.SET_PAGE, url)

    def set_language(self, language: str | None = None) -> None:
        self._log(1, "[LANGUAGE] %s", language)
        self._deliver(EventKind.SET_LANGUAGE, language)

    def set_app_name(self, app_name: str | None = None) -> None:
        if app_name is None:
            self.missing_params("set_app_name", "app_name")
            return
        self._log(1, "[APP NAME] %s", app_name)
        self._deliver(EventKind.SET_APP_NAME, app_name)

    def set_app_id(self, app_id: str | None = None) -> None:
        if app_id is None:
            self.missing_params("set_app_id", "app_id")
            return
        self._log(1, "[APP ID] %s", app_id)
        self._deliver(EventKind.SET_APP_ID, app_id)

    def set_app_version(self, app_version: str | None = None) -> None:
        if app_version is None:
            self.missing_params("set_app_version", "app_version")
            return
        self._log(1, "[APP VERSION] %s", app_version)
        self._deliver(EventKind.SET_APP_VERSION, app_version)

    def event(self, event_data: dict | None = None) -> None:
        self._log(1, "[EVENT] %s", event_data)
        self._deliver(EventKind.EVENT, event_data)

    def timing(self, timing_data: dict | None = None) -> None:
        self._log(1, "[TIMING] %s", timing_data)
        self._deliver(EventKind.TIMING, timing_data)

    def set_user_id(self, user_id: str | None = None) -> None:
        self._log(1, "[USER ID] %s", user_id)
        self._deliver(EventKind.SET_USER_ID, user_id)

    def session(self, state: str) -> None:
        self._log(1, "[SESSION] %s", state)
        kind = EventKind.START_SESSION if state == "start" else EventKind.END_SESSION
        self._deliver(kind, None)

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    def _deliver(self, kind: EventKind, payload: Any) -> None:
        if self.enabled:
            self._send(kind, payload)
        else:
            logger.info("[%s] %s %s", self.name, kind.value, payload)

    @abstractmethod
    def _send(self, kind: EventKind, payload: Any) -> None:
        """Deliver one event to the vendor."""
        ...

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def _log(self, level: int, msg: str, *args: Any) -> None:
        if self.logging_level > level:
            logger.info("[%s] " + msg, self.name, *args)

    def missing_params(self, function_name: str, *params: str) -> None:
        logger.warning(
            "[%s] function %s() is missing: %s", self.name, function_name, ", ".join(params)
        )
