# ==============================================================================
# Kafka Provider
# ==============================================================================
"""
Provider that publishes canonical events to a Kafka topic using
confluent-kafka (librdkafka C wrapper).

Messages are JSON-encoded CanonicalEvent records keyed by the client id.
``dispatch()`` only enqueues; delivery happens in the background and is
flushed on close().
"""

import json
import logging
from typing import TYPE_CHECKING, Any

from analytics_dispatcher.base.provider import BaseProvider
from analytics_dispatcher.core.models import CanonicalEvent, EventKind

if TYPE_CHECKING:
    from analytics_dispatcher.utils.config import KafkaSettings

logger = logging.getLogger(__name__)

# Seconds to wait for outstanding deliveries on close
FLUSH_TIMEOUT = 10


def build_producer_config(settings: "KafkaSettings") -> dict:
    """
    Build confluent-kafka producer configuration from settings.

    Note: confluent-kafka uses dot-notation keys (e.g., 'bootstrap.servers').

    Args:
        settings: KafkaSettings instance

    Returns:
        Dict with confluent-kafka producer configuration
    """
    config = {
        "bootstrap.servers": settings.bootstrap_servers,
        # Analytics events are small and infrequent; keep latency low
        "linger.ms": 5,
        "acks": "all",
        "retries": 3,
        "retry.backoff.ms": 100,
    }

    if settings.security_protocol == "SSL":
        config["security.protocol"] = "SSL"
        if settings.ssl_ca_file:
            config["ssl.ca.location"] = settings.ssl_ca_file
        if settings.ssl_cert_file:
            config["ssl.certificate.location"] = settings.ssl_cert_file
        if settings.ssl_key_file:
            config["ssl.key.location"] = settings.ssl_key_file
    else:
        config["security.protocol"] = "PLAINTEXT"

    return config


class KafkaProvider(BaseProvider):
    """
    Publishes canonical events to Kafka.

    Args:
        settings: Kafka settings. Without bootstrap servers events are
                  logged instead.
        logging_level: Diagnostic verbosity
    """

    def __init__(self, settings: "KafkaSettings", logging_level: int = 0):
        self.settings = settings
        self.topic = settings.events_topic
        self.key = settings.client_id
        self.delivery_errors = 0
        self._producer = None
        super().__init__(provider_id=settings.bootstrap_servers, logging_level=logging_level)

    @property
    def name(self) -> str:
        return "kafka"

    def initialise(self) -> None:
        from confluent_kafka import Producer

        self._producer = Producer(build_producer_config(self.settings))
        self._log(0, "Publishing to topic %s", self.topic)

    def close(self) -> None:
        if self._producer is None:
            return
        remaining = self._producer.flush(FLUSH_TIMEOUT)
        if remaining:
            logger.warning("[%s] %d events not delivered on close", self.name, remaining)
        if self.delivery_errors:
            logger.warning("[%s] Total delivery errors: %d", self.name, self.delivery_errors)
        self._producer = None

    def _on_delivery(self, err, msg) -> None:
        """Callback for message delivery reports."""
        if err is not None:
            self.delivery_errors += 1
            if self.delivery_errors <= 10:  # Only log first 10 errors
                logger.error("[%s] Message delivery failed: %s", self.name, err)

    def _send(self, kind: EventKind, payload: Any) -> None:
        if self._producer is None:
            return
        value = json.dumps(CanonicalEvent(kind=kind, payload=payload).to_message())
        try:
            self._producer.produce(
                self.topic, key=self.key, value=value, callback=self._on_delivery
            )
        except BufferError:
            # Queue full - drain once and retry
            self._producer.poll(1.0)
            try:
                self._producer.produce(
                    self.topic, key=self.key, value=value, callback=self._on_delivery
                )
            except BufferError:
                logger.warning("[%s] Queue full, dropping %s event", self.name, kind.value)
                return
        self._producer.poll(0)
