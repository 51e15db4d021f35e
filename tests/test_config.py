# ==============================================================================
# Tests for Configuration and the Provider Factory
# ==============================================================================
"""
Tests for environment-driven settings and provider construction.

Tests cover:
- Defaults and env prefixes for each settings group
- Validation of numeric settings
- Enabled provider parsing and order
- get_provider()/get_providers() mapping and errors
"""

import uuid

import pytest
from pydantic import ValidationError

from analytics_dispatcher.providers.console import LogProvider
from analytics_dispatcher.providers.factory import get_provider, get_providers
from analytics_dispatcher.providers.google_analytics import GoogleAnalyticsProvider
from analytics_dispatcher.providers.kafka import KafkaProvider
from analytics_dispatcher.providers.logstash import LogStashProvider
from analytics_dispatcher.utils.config import (
    DispatcherSettings,
    GoogleAnalyticsSettings,
    KafkaSettings,
    LogStashSettings,
    ProviderSettings,
    Settings,
    get_settings,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove settings env vars that may leak in from the host."""
    for name in (
        "DISPATCHER_TRACK_PAGE_TIME",
        "DISPATCHER_TRACK_SESSION_TIME",
        "DISPATCHER_IDLE_TIMEOUT_MS",
        "DISPATCHER_KIOSK_HOME_PAGE",
        "PROVIDERS_ENABLED",
        "GA_TRACKING_ID",
        "GA_CLIENT_ID",
        "KAFKA_CLIENT_ID",
        "LOGSTASH_URL",
        "KAFKA_BOOTSTRAP_SERVERS",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestDispatcherSettings:
    """Tests for DISPATCHER_ settings."""

    def test_defaults(self):
        settings = DispatcherSettings()
        assert settings.logging_level == 0
        assert not settings.track_page_time
        assert not settings.track_session_time
        assert not settings.adjust_session_timing_for_timeout
        assert settings.kiosk_home_page is None
        assert settings.idle_timeout_ms == 0

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DISPATCHER_TRACK_PAGE_TIME", "true")
        monkeypatch.setenv("DISPATCHER_IDLE_TIMEOUT_MS", "30000")
        monkeypatch.setenv("DISPATCHER_KIOSK_HOME_PAGE", "/")
        settings = Settings().dispatcher
        assert settings.track_page_time
        assert settings.idle_timeout_ms == 30000
        assert settings.kiosk_home_page == "/"

    def test_negative_idle_timeout_rejected(self):
        with pytest.raises(ValidationError):
            DispatcherSettings(idle_timeout_ms=-1)


class TestProviderSettings:
    """Tests for PROVIDERS_ENABLED parsing."""

    def test_default_is_console(self):
        assert ProviderSettings().names == ["console"]

    def test_order_and_whitespace(self, monkeypatch):
        monkeypatch.setenv("PROVIDERS_ENABLED", " kafka, console ,,logstash ")
        assert Settings().providers.names == ["kafka", "console", "logstash"]

    def test_empty(self):
        assert ProviderSettings(enabled="").names == []


class TestLogStashSettings:
    """Tests for the Logstash auth helper."""

    def test_auth_requires_both(self):
        assert LogStashSettings(user="user").auth is None
        assert LogStashSettings(user="user", password="secret").auth == ("user", "secret")


class TestClientIds:
    """Default client ids are random UUID v4 values."""

    def test_google_analytics_default(self):
        first, second = GoogleAnalyticsSettings(), GoogleAnalyticsSettings()
        assert uuid.UUID(first.client_id).version == 4
        assert first.client_id != second.client_id

    def test_kafka_default(self):
        assert uuid.UUID(KafkaSettings().client_id).version == 4

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("GA_CLIENT_ID", "kiosk-7")
        assert Settings().google_analytics.client_id == "kiosk-7"


class TestGetSettings:
    """Tests for the cached settings accessor."""

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_general_fields(self):
        assert set(Settings.model_fields) == {
            "dispatcher",
            "providers",
            "google_analytics",
            "logstash",
            "kafka",
            "log_level",
        }


class TestProviderFactory:
    """Tests for get_provider() and get_providers()."""

    @pytest.mark.parametrize(
        "name, cls",
        [
            ("console", LogProvider),
            ("google_analytics", GoogleAnalyticsProvider),
            ("logstash", LogStashProvider),
            ("kafka", KafkaProvider),
        ],
    )
    def test_known_names(self, name, cls):
        assert isinstance(get_provider(name, Settings()), cls)

    def test_unconfigured_vendors_are_console_only(self):
        settings = Settings()
        for name in ("google_analytics", "logstash", "kafka"):
            assert not get_provider(name, settings).enabled

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown provider: 'mixpanel'"):
            get_provider("mixpanel", Settings())

    def test_settings_passed_through(self, monkeypatch):
        monkeypatch.setenv("GA_TRACKING_ID", "UA-12345-1")
        provider = get_provider("google_analytics", Settings())
        assert provider.provider_id == "UA-12345-1"
        provider.close()

    def test_get_providers_in_order(self):
        settings = Settings(providers=ProviderSettings(enabled="logstash,console"))
        providers = get_providers(settings)
        assert [p.name for p in providers] == ["logstash", "console"]

    def test_get_providers_defaults_to_cached_settings(self, monkeypatch):
        monkeypatch.setenv("PROVIDERS_ENABLED", "console,console")
        providers = get_providers()
        assert [p.name for p in providers] == ["console", "console"]

    def test_logging_level_shared(self):
        settings = Settings(dispatcher=DispatcherSettings(logging_level=3))
        assert get_provider("console", settings).logging_level == 3
