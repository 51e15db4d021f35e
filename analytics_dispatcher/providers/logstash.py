# ==============================================================================
# Logstash Provider
# ==============================================================================
"""
Provider for the Logstash HTTP input plugin.

Every canonical event is posted as one JSON document:

    {"kind": "page_view", "payload": null, "timestamp": 1700000000000}

Plugin reference:
https://www.elastic.co/guide/en/logstash/current/plugins-inputs-http.html
"""

import logging
from typing import Any

import requests

from analytics_dispatcher.base.provider import BaseProvider
from analytics_dispatcher.core.models import CanonicalEvent, EventKind
from analytics_dispatcher.utils.retry import retry_light

logger = logging.getLogger(__name__)


class LogStashProvider(BaseProvider):
    """
    Posts canonical events to a Logstash HTTP input.

    Args:
        url: HTTP input URL. Without it events are logged instead.
        auth: Optional (user, password) for basic auth
        timeout: HTTP request timeout in seconds
        logging_level: Diagnostic verbosity
    """

    def __init__(
        self,
        url: str | None = None,
        auth: tuple[str, str] | None = None,
        timeout: float = 5.0,
        logging_level: int = 0,
    ):
        self.auth = auth
        self.timeout = timeout
        self._http: requests.Session | None = None
        super().__init__(provider_id=url, logging_level=logging_level)

    @property
    def name(self) -> str:
        return "logstash"

    def initialise(self) -> None:
        self._http = requests.Session()
        if self.auth:
            self._http.auth = self.auth

    def close(self) -> None:
        if self._http is not None:
            self._http.close()
            self._http = None

    def _send(self, kind: EventKind, payload: Any) -> None:
        event = CanonicalEvent(kind=kind, payload=payload)
        try:
            self._post(event.to_message())
        except requests.exceptions.RequestException as e:
            logger.warning("[%s] Dropping %s event: %s", self.name, kind.value, e)

    @retry_light(logger)
    def _post(self, body: dict) -> None:
        http = self._http or requests
        response = http.post(self.provider_id, json=body, timeout=self.timeout)
        response.raise_for_status()
