"""Configuration system using pydantic-settings with environment variable loading.

Settings are read once at startup and are frozen afterwards; request
handlers only ever read them through app.state.
"""

from datetime import timezone

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hedge_proxy.timerange import offset_timezone


class ProxySettings(BaseSettings):
    """Shared secret gating every proxied operation."""

    model_config = SettingsConfigDict(
        env_prefix="PROXY_", env_file=".env", extra="ignore", frozen=True
    )

    api_key: SecretStr = SecretStr("")


class ExchangeSettings(BaseSettings):
    """Binance connection settings."""

    model_config = SettingsConfigDict(
        env_prefix="BINANCE_", env_file=".env", extra="ignore", frozen=True
    )

    api_key: SecretStr = SecretStr("")
    api_secret: SecretStr = SecretStr("")
    spot_base_url: str = "https://api.binance.com"
    futures_base_url: str = "https://fapi.binance.com"
    recv_window: int = 5000  # ms tolerance for signed calls
    timeout_seconds: float = 10.0

    @property
    def has_credentials(self) -> bool:
        """True when both halves of the key pair are configured."""
        return bool(
            self.api_key.get_secret_value() and self.api_secret.get_secret_value()
        )


class KeepAliveSettings(BaseSettings):
    """Self-ping configuration for hosts that idle out quiet processes."""

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", frozen=True, populate_by_name=True
    )

    enabled: bool = Field(default=True, validation_alias="KEEP_ALIVE")
    url: str = Field(default="", validation_alias="SELF_PING_URL")
    interval_ms: int = Field(default=14 * 60 * 1000, validation_alias="PING_INTERVAL_MS")
    timeout_seconds: float = Field(default=10.0, validation_alias="PING_TIMEOUT_SECONDS")

    @field_validator("interval_ms")
    @classmethod
    def _positive_interval(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("PING_INTERVAL_MS must be positive")
        return value


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    timezone_offset_hours: float = 8.0
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    exchange: ExchangeSettings = Field(default_factory=ExchangeSettings)
    self_ping: KeepAliveSettings = Field(default_factory=KeepAliveSettings)

    @field_validator("timezone_offset_hours")
    @classmethod
    def _offset_in_range(cls, value: float) -> float:
        if abs(round(value * 60)) >= 24 * 60:
            raise ValueError(
                "TIMEZONE_OFFSET_HOURS must round to less than 24 hours either way"
            )
        return value

    @property
    def tz_offset(self) -> timezone:
        """The configured local-day offset as a tzinfo."""
        return offset_timezone(self.timezone_offset_hours)
