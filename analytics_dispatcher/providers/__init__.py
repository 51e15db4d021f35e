# ==============================================================================
# Analytics Providers
# ==============================================================================
"""
Concrete providers translating canonical events into vendor calls.

Available providers:
- console: LogProvider, writes events to the log
- google_analytics: GoogleAnalyticsProvider, Measurement Protocol over HTTP
- logstash: LogStashProvider, Logstash HTTP input
- kafka: KafkaProvider, JSON messages on a Kafka topic

Use get_providers() to build the providers enabled in settings.
"""

from analytics_dispatcher.providers.factory import get_provider, get_providers

__all__ = ["get_provider", "get_providers"]
