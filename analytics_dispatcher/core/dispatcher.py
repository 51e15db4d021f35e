# ==============================================================================
# Analytics Dispatcher - Event Router
# ==============================================================================
"""
The public analytics API.

Application code calls semantic operations (page views, events, timings,
session boundaries, identity metadata). Each one becomes one or more
canonical events broadcast to every provider in registration order.

Page and session timing are applied around the public operations according
to DispatcherSettings:

- track_page_time: each page view closes the previous page's timer and sends
  its dwell time as a Timing event labelled with the previous URL.
- track_session_time: events and page views start a session implicitly, and
  end_session() sends the session length as a Timing event.
- adjust_session_timing_for_timeout: the session length is corrected for
  idle-timeout endings (see core.session).
- kiosk_home_page: set as the first page, and restored after session end
  behind a synthetic "/session-end" page.

Broadcasting is synchronous. A provider that raises is logged and skipped;
the remaining providers still receive the event and the caller never sees
the error.
"""

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from analytics_dispatcher.core.models import (
    PAGE_VIEW_TIMER,
    SESSION_END_PAGE,
    EventKind,
    event_payload,
    timing_payload,
)
from analytics_dispatcher.core.session import SessionModel
from analytics_dispatcher.core.timers import TimerRegistry
from analytics_dispatcher.utils.config import DispatcherSettings, Settings

if TYPE_CHECKING:
    from analytics_dispatcher.base.provider import Provider

logger = logging.getLogger(__name__)


class AnalyticsDispatcher:
    """
    Routes semantic analytics calls to a fixed list of providers.

    Args:
        providers: Providers in delivery order. Stored as a tuple.
        settings: Behaviour flags. Defaults to DispatcherSettings().
        timers: Timer registry. Each dispatcher gets its own by default.
    """

    def __init__(
        self,
        providers: Iterable["Provider"] = (),
        settings: DispatcherSettings | None = None,
        timers: TimerRegistry | None = None,
    ):
        self.providers: tuple["Provider", ...] = tuple(providers)
        self.settings = settings or DispatcherSettings()
        self.timers = timers or TimerRegistry()

        self.current_page_url: str | None = None
        self.time_on_current_page: int | None = None

        self.session = SessionModel(
            self.timers,
            idle_timeout=self.settings.idle_timeout_ms,
            use_estimated_timing=self.settings.adjust_session_timing_for_timeout,
            logging_level=self.settings.logging_level,
        )

        if self.settings.kiosk_home_page:
            self.set_page(self.settings.kiosk_home_page)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        providers: Iterable["Provider"] | None = None,
    ) -> "AnalyticsDispatcher":
        """
        Build a dispatcher from application settings.

        Args:
            settings: Application settings. If None, uses get_settings().
            providers: Explicit providers. If None, the provider factory
                       builds the ones enabled in settings.
        """
        if settings is None:
            from analytics_dispatcher.utils.config import get_settings

            settings = get_settings()
        if providers is None:
            from analytics_dispatcher.providers.factory import get_providers

            providers = get_providers(settings)
        return cls(providers, settings.dispatcher)

    def __enter__(self) -> "AnalyticsDispatcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """End a running session and close providers that support it."""
        self.end_session()
        for provider in self.providers:
            close = getattr(provider, "close", None)
            if callable(close):
                try:
                    close()
                except Exception:
                    logger.exception("Provider %r failed to close", provider)

    # ------------------------------------------------------------------
    # Language, events, pages
    # ------------------------------------------------------------------

    def set_language(self, language: str) -> None:
        """Set the ISO 639-1 language code."""
        if self.settings.track_session_time:
            self.start_session(was_event=True)

        self._log(1, "[SET_LANGUAGE] %s", language)
        self._broadcast(EventKind.SET_LANGUAGE, language)

    def change_language(self, language: str) -> None:
        """Set the language and record the change as an event."""
        if self.settings.track_session_time:
            self.start_session(was_event=True)

        self._broadcast(EventKind.SET_LANGUAGE, language)
        self.event(event_payload("Language", "Change", label=language))

    def event(self, event_data: dict) -> None:
        if self.settings.track_session_time:
            self.start_session(was_event=True)

        self._log(1, "[EVENT] %s", event_data)
        self._broadcast(EventKind.EVENT, event_data)

    def set_page(self, url: str) -> None:
        """Set the current page without recording a page view."""
        self.current_page_url = url

        self._log(1, "[SET_PAGE] %s", url)
        self._broadcast(EventKind.SET_PAGE, url)

    def page_view(self, url: str) -> None:
        """Record a page view of *url*."""
        if self.settings.track_session_time:
            self.start_session()

        self._log_current_page_time()

        # Set the page before sending the view so every provider agrees on
        # the page later events belong to.
        self.set_page(url)

        self._log(1, "[PAGEVIEW] [send]")
        self._broadcast(EventKind.PAGE_VIEW)

    def _log_current_page_time(self) -> None:
        if not self.settings.track_page_time:
            return

        # Always the duration of the previous page, which is still current here
        self.time_on_current_page = self.timers.restart_timer(PAGE_VIEW_TIMER)

        if self.time_on_current_page:
            if self.session.running:
                self.session.add_page_time(self.time_on_current_page)
            self.timing(
                timing_payload(
                    "Page View", "Length", self.time_on_current_page, label=self.current_page_url
                )
            )

    # ------------------------------------------------------------------
    # Timing
    # ------------------------------------------------------------------

    def timing(self, timing_data: dict) -> None:
        self._log(1, "[TIMING] %s", timing_data)
        self._broadcast(EventKind.TIMING, timing_data)

    def start_time_tracker(self, name: str) -> None:
        """Start a named timer. The page-view timer name is reserved."""
        if name == PAGE_VIEW_TIMER:
            logger.debug("Ignoring start of reserved timer %r", name)
            return
        self.timers.start_timer(name)

    def stop_time_tracker(self, name: str, category: str = "Misc") -> None:
        """Stop a named timer and send its elapsed time."""
        elapsed = self.timers.stop_timer(name)
        self.timing(timing_payload(category, "Length", elapsed, label=name))

    # ------------------------------------------------------------------
    # Application and user metadata
    # ------------------------------------------------------------------

    def set_app_version(self, app_version: str) -> None:
        self._log(1, "[SET_APP_VERSION] %s", app_version)
        self._broadcast(EventKind.SET_APP_VERSION, app_version)

    def set_app_name(self, app_name: str) -> None:
        self._log(1, "[SET_APP_NAME] %s", app_name)
        self._broadcast(EventKind.SET_APP_NAME, app_name)

    def set_app_id(self, app_id: str) -> None:
        self._log(1, "[SET_APP_ID] %s", app_id)
        self._broadcast(EventKind.SET_APP_ID, app_id)

    def set_user_id(self, user_id: str) -> None:
        self._log(1, "[SET_USER_ID] %s", user_id)
        self._broadcast(EventKind.SET_USER_ID, user_id)

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def start_session(self, was_event: bool = False) -> None:
        """
        Start a session unless one is running.

        Args:
            was_event: True when the session is started by something other
                       than a page view. The page timer then starts now, so
                       the first page is timed from the session start.
        """
        if self.session.running:
            return
        self.session.start()

        if self.settings.track_page_time and was_event:
            self.timers.start_timer(PAGE_VIEW_TIMER)

        self._log(1, "[SESSION] [start]")
        self._broadcast(EventKind.START_SESSION)

    def end_session(self) -> None:
        """End the running session, if any."""
        if not self.session.running:
            return

        duration = self.session.end()
        if self.settings.track_session_time and duration:
            self.timing(timing_payload("Session", "Length", duration))

        home_page = self.settings.kiosk_home_page

        # Session end is attributed to the current page, so park on a
        # synthetic page to keep the real last page's numbers clean.
        if home_page:
            self.set_page(SESSION_END_PAGE)

        self.timers.reset()

        self._log(1, "[SESSION] [end]")
        self._broadcast(EventKind.END_SESSION)

        if home_page:
            self.set_page(home_page)

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------

    def raw(self, *payload: Any) -> None:
        """Send *payload* to every provider as is, bypassing the event kinds."""
        self._broadcast(*payload)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _broadcast(self, *args: Any) -> None:
        for provider in self.providers:
            try:
                provider.dispatch(*args)
            except Exception:
                logger.exception("Provider %r failed to handle %r", provider, args[:1])

    def _log(self, level: int, msg: str, *args: Any) -> None:
        if self.settings.logging_level > level:
            logger.info("[AD] " + msg, *args)
