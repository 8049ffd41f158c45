"""Configuration architecture using pydantic-settings for typed environment loading."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackendConfig(BaseSettings):
    """Shadow backend API configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SHADOW_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = "http://localhost:8080/api"
    timeout_seconds: float = Field(default=30.0, gt=0)


class WalletConfig(BaseSettings):
    """Wallet view runtime configuration.

    Message durations are the auto-clear delays of each message kind.
    """

    model_config = SettingsConfigDict(
        env_prefix="WALLET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    advisory_message_seconds: float = Field(default=4.0, ge=0)
    action_message_seconds: float = Field(default=6.0, ge=0)
    faucet_message_seconds: float = Field(default=5.0, ge=0)
    default_amount: str = "1"
    currency: str = "SHOL"
    # Shown on the faucet button only; the credited amount comes from the backend
    faucet_amount_hint: float = 1000.0


class LogConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    directory: str = "logs"


class Settings:
    """Root settings aggregating all configuration sections."""

    def __init__(self) -> None:
        self.backend = BackendConfig()
        self.wallet = WalletConfig()
        self.log = LogConfig()


# Global settings instance - lazily loaded
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
