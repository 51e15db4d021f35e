# ==============================================================================
# Analytics Dispatcher Utilities
# ==============================================================================
"""
Shared utilities: configuration and retry policy.
"""

from analytics_dispatcher.utils.config import (
    PROVIDER_NAMES,
    DispatcherSettings,
    GoogleAnalyticsSettings,
    KafkaSettings,
    LogStashSettings,
    ProviderSettings,
    Settings,
    get_settings,
)
from analytics_dispatcher.utils.retry import retry_light

__all__ = [
    # Config
    "PROVIDER_NAMES",
    "DispatcherSettings",
    "GoogleAnalyticsSettings",
    "KafkaSettings",
    "LogStashSettings",
    "ProviderSettings",
    "Settings",
    "get_settings",
    # Retry
    "retry_light",
]
