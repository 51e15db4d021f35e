# ==============================================================================
# Provider Factory
# ==============================================================================
"""
Factory function for creating provider instances.

Uses PROVIDERS_ENABLED environment variable (via config) to determine which
providers a dispatcher receives, and in which order.
"""

from analytics_dispatcher.base.provider import BaseProvider
from analytics_dispatcher.utils.config import Settings


def get_provider(name: str, settings: Settings) -> BaseProvider:
    """
    Create one provider from settings.

    Args:
        name: "console", "google_analytics", "logstash" or "kafka"
        settings: Application settings

    Returns:
        Provider instance

    Raises:
        ValueError: If the provider name is unknown
    """
    logging_level = settings.dispatcher.logging_level

    match name:
        case "console":
            from analytics_dispatcher.providers.console import LogProvider

            return LogProvider(logging_level=logging_level)
        case "google_analytics":
            from analytics_dispatcher.providers.google_analytics import GoogleAnalyticsProvider

            ga = settings.google_analytics
            return GoogleAnalyticsProvider(
                tracking_id=ga.tracking_id,
                client_id=ga.client_id,
                debug=ga.debug,
                timeout=ga.timeout_seconds,
                logging_level=logging_level,
            )
        case "logstash":
            from analytics_dispatcher.providers.logstash import LogStashProvider

            ls = settings.logstash
            return LogStashProvider(
                url=ls.url,
                auth=ls.auth,
                timeout=ls.timeout_seconds,
                logging_level=logging_level,
            )
        case "kafka":
            from analytics_dispatcher.providers.kafka import KafkaProvider

            return KafkaProvider(settings.kafka, logging_level=logging_level)
        case _:
            raise ValueError(
                f"Unknown provider: '{name}'.\n"
                "Valid options are: console, google_analytics, logstash, kafka"
            )


def get_providers(settings: Settings | None = None) -> list[BaseProvider]:
    """
    Create every enabled provider, in configured order.

    Args:
        settings: Application settings. If None, uses get_settings().
    """
    if settings is None:
        from analytics_dispatcher.utils.config import get_settings

        settings = get_settings()
    return [get_provider(name, settings) for name in settings.providers.names]
