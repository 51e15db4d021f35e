# ==============================================================================
# Google Analytics Provider
# ==============================================================================
"""
Provider for Google Analytics using the Measurement Protocol (v1).

``set`` style events (page, language, app and user identity) update fields
that are attached to every later hit. Page views, events, timings and session
boundaries are sent as hits:

    page_view      -> t=pageview
    event          -> t=event  (ec, ea, el, ev)
    timing         -> t=timing (utc, utv, utt, utl)
    start_session  -> t=pageview, sc=start
    end_session    -> t=pageview, sc=end

Protocol reference:
https://developers.google.com/analytics/devguides/collection/protocol/v1/parameters
"""

import logging
from typing import Any

import requests

from analytics_dispatcher.base.provider import BaseProvider
from analytics_dispatcher.core.models import EventKind
from analytics_dispatcher.utils.config import new_client_id
from analytics_dispatcher.utils.retry import retry_light

logger = logging.getLogger(__name__)

COLLECT_URL = "https://www.google-analytics.com/collect"
DEBUG_COLLECT_URL = "https://www.google-analytics.com/debug/collect"

# Field set by each "set" event kind
FIELD_PARAMS = {
    EventKind.SET_PAGE: "dp",
    EventKind.SET_LANGUAGE: "ul",
    EventKind.SET_APP_NAME: "an",
    EventKind.SET_APP_VERSION: "av",
    EventKind.SET_APP_ID: "aid",
    EventKind.SET_USER_ID: "uid",
}

EVENT_PARAMS = {"category": "ec", "action": "ea", "label": "el", "value": "ev"}
TIMING_PARAMS = {"category": "utc", "var": "utv", "value": "utt", "label": "utl"}


class GoogleAnalyticsProvider(BaseProvider):
    """
    Sends canonical events to Google Analytics.

    Args:
        tracking_id: Property id (UA-XXXXX-X). Without it no hits are sent
                     and events are logged instead.
        client_id: Anonymous client id sent as ``cid``. A random UUID v4
                   is generated when omitted.
        debug: Send hits to the validation endpoint
        timeout: HTTP request timeout in seconds
        logging_level: Diagnostic verbosity
    """

    def __init__(
        self,
        tracking_id: str | None = None,
        client_id: str | None = None,
        debug: bool = False,
        timeout: float = 5.0,
        logging_level: int = 0,
    ):
        self.client_id = client_id or new_client_id()
        self.timeout = timeout
        self.fields: dict[str, Any] = {}
        self._http: requests.Session | None = None
        super().__init__(provider_id=tracking_id, debug=debug, logging_level=logging_level)

    @property
    def name(self) -> str:
        return "google_analytics"

    @property
    def collect_url(self) -> str:
        """Endpoint hits are posted to, based on debug (or not)."""
        return DEBUG_COLLECT_URL if self.debug else COLLECT_URL

    def initialise(self) -> None:
        self._http = requests.Session()
        self._log(0, "Sending hits for %s to %s", self.provider_id, self.collect_url)

    def close(self) -> None:
        if self._http is not None:
            self._http.close()
            self._http = None

    # ------------------------------------------------------------------
    # Hit building
    # ------------------------------------------------------------------

    def build_hit(self, kind: EventKind, payload: Any) -> dict[str, Any] | None:
        """
        Translate an event into Measurement Protocol parameters.

        Returns:
            Hit parameters, or None for events that only update fields.
        """
        if kind in FIELD_PARAMS:
            self.fields[FIELD_PARAMS[kind]] = payload
            return None

        hit: dict[str, Any] = {"v": "1", "tid": self.provider_id, "cid": self.client_id}
        hit.update({k: v for k, v in self.fields.items() if v is not None})

        match kind:
            case EventKind.PAGE_VIEW:
                hit["t"] = "pageview"
                if payload:
                    hit["dp"] = payload
            case EventKind.EVENT:
                hit["t"] = "event"
                hit.update(_map_params(payload, EVENT_PARAMS))
            case EventKind.TIMING:
                hit["t"] = "timing"
                hit.update(_map_params(payload, TIMING_PARAMS))
            case EventKind.START_SESSION:
                hit["t"] = "pageview"
                hit["sc"] = "start"
            case EventKind.END_SESSION:
                hit["t"] = "pageview"
                hit["sc"] = "end"
        return hit

    def _send(self, kind: EventKind, payload: Any) -> None:
        hit = self.build_hit(kind, payload)
        if hit is None:
            return
        try:
            self._post(hit)
        except requests.exceptions.RequestException as e:
            logger.warning("[%s] Dropping %s hit: %s", self.name, hit["t"], e)

    @retry_light(logger)
    def _post(self, hit: dict[str, Any]) -> None:
        http = self._http or requests
        response = http.post(self.collect_url, data=hit, timeout=self.timeout)
        response.raise_for_status()
        if self.debug:
            self._log(0, "Validation result: %s", response.text)


def _map_params(payload: Any, params: dict[str, str]) -> dict[str, Any]:
    if not isinstance(payload, dict):
        return {}
    return {params[key]: value for key, value in payload.items() if key in params and value is not None}
