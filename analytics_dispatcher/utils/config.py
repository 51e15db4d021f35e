# ==============================================================================
# Application Configuration
# ==============================================================================
"""
Configuration management using pydantic-settings.

All configuration is loaded from environment variables, with support for
.env files via python-dotenv.
"""

import uuid
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file before any settings are instantiated
load_dotenv()

# Provider names understood by the provider factory
PROVIDER_NAMES = ("console", "google_analytics", "logstash", "kafka")


def new_client_id() -> str:
    """Random UUID v4, the anonymous client id format the Measurement Protocol expects."""
    return str(uuid.uuid4())


class DispatcherSettings(BaseSettings):
    """Dispatcher behaviour.

    Each flag gates one implicit side effect of the public dispatcher
    operations (page timing, session lifecycle, session correction, kiosk
    page bracketing).
    """

    model_config = SettingsConfigDict(env_prefix="DISPATCHER_")

    logging_level: int = Field(default=0, ge=0, description="Diagnostic verbosity threshold")
    track_page_time: bool = Field(
        default=False, description="Send a Timing event for each completed page view"
    )
    track_session_time: bool = Field(
        default=False,
        description="Start sessions implicitly and send a Timing event for each session",
    )
    adjust_session_timing_for_timeout: bool = Field(
        default=False,
        description="Correct session length for idle-timeout endings (kiosk mode)",
    )
    kiosk_home_page: Optional[str] = Field(
        default=None, description="Kiosk home page URL, restored after each session end"
    )
    idle_timeout_ms: int = Field(
        default=0, ge=0, description="Host idle timeout in milliseconds (session correction input)"
    )


class ProviderSettings(BaseSettings):
    """Which providers the factory builds."""

    model_config = SettingsConfigDict(env_prefix="PROVIDERS_")

    enabled: str = Field(
        default="console",
        description="Comma-separated provider names (console, google_analytics, logstash, kafka)",
    )

    @property
    def names(self) -> list[str]:
        """Enabled provider names, in configured order."""
        return [name.strip() for name in self.enabled.split(",") if name.strip()]


class GoogleAnalyticsSettings(BaseSettings):
    """Google Analytics Measurement Protocol settings."""

    model_config = SettingsConfigDict(env_prefix="GA_")

    tracking_id: Optional[str] = Field(default=None, description="Property id (UA-XXXXX-X)")
    client_id: str = Field(
        default_factory=new_client_id,
        description="Anonymous client id sent with every hit (random per process if unset)",
    )
    debug: bool = Field(default=False, description="Send hits to the validation endpoint")
    timeout_seconds: float = Field(default=5.0, description="HTTP request timeout")


class LogStashSettings(BaseSettings):
    """Logstash HTTP input settings."""

    model_config = SettingsConfigDict(env_prefix="LOGSTASH_")

    url: Optional[str] = Field(default=None, description="Logstash HTTP input URL")
    user: Optional[str] = Field(default=None, description="Basic auth username")
    password: Optional[str] = Field(default=None, description="Basic auth password")
    timeout_seconds: float = Field(default=5.0, description="HTTP request timeout")

    @property
    def auth(self) -> tuple[str, str] | None:
        """Basic auth tuple for requests, or None."""
        if self.user and self.password:
            return (self.user, self.password)
        return None


class KafkaSettings(BaseSettings):
    """Kafka connection settings for the Kafka provider."""

    model_config = SettingsConfigDict(env_prefix="KAFKA_")

    bootstrap_servers: Optional[str] = Field(default=None, description="Kafka bootstrap servers")
    security_protocol: str = Field(
        default="PLAINTEXT", description="Security protocol (PLAINTEXT or SSL)"
    )

    # SSL settings for mTLS authentication
    ssl_ca_file: Optional[str] = Field(default=None, description="Path to CA certificate file")
    ssl_cert_file: Optional[str] = Field(
        default=None, description="Path to client certificate file"
    )
    ssl_key_file: Optional[str] = Field(default=None, description="Path to client private key file")

    events_topic: str = Field(default="analytics-events", description="Events topic name")
    client_id: str = Field(
        default_factory=new_client_id,
        description="Client id used as the message key (random per process if unset)",
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    # Nested settings
    dispatcher: DispatcherSettings = Field(default_factory=DispatcherSettings)
    providers: ProviderSettings = Field(default_factory=ProviderSettings)
    google_analytics: GoogleAnalyticsSettings = Field(default_factory=GoogleAnalyticsSettings)
    logstash: LogStashSettings = Field(default_factory=LogStashSettings)
    kafka: KafkaSettings = Field(default_factory=KafkaSettings)

    # General settings
    log_level: str = Field(default="INFO", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once and cached for subsequent calls.
    """
    return Settings()
