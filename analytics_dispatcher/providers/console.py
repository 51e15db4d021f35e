# ==============================================================================
# Console Provider
# ==============================================================================
"""
Provider that writes every canonical event to the log.

Useful during development and as the default when no analytics backend is
configured.
"""

import logging
from typing import Any

from analytics_dispatcher.base.provider import BaseProvider
from analytics_dispatcher.core.models import EventKind

logger = logging.getLogger(__name__)


class LogProvider(BaseProvider):
    """Logs events at INFO through the ``analytics_dispatcher.providers.console`` logger."""

    def __init__(self, logging_level: int = 0):
        super().__init__(provider_id="console", logging_level=logging_level)

    @property
    def name(self) -> str:
        return "console"

    def _send(self, kind: EventKind, payload: Any) -> None:
        if payload is None:
            logger.info("[%s]", kind.value)
        else:
            logger.info("[%s] %s", kind.value, payload)
