"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    # TLS (required in production)
    https_key: str = Field(default="")  # /path/to/privkey.pem
    https_cert: str = Field(default="")  # /path/to/cert.pem

    # Quote source
    quote_source: Literal["synthetic", "coinmarketcap"] = Field(default="synthetic")
    cmc_api_key: str = Field(default="")  # https://coinmarketcap.com/api/features
    quotation_symbol: str = Field(default="USDT")
    http_timeout_seconds: float = Field(default=10.0)

    # Cadence overrides (source defaults apply when unset)
    list_interval_seconds: Optional[float] = Field(default=None, gt=0)
    quote_interval_seconds: Optional[float] = Field(default=None, gt=0)

    # Persisted alerts and subscriptions
    state_file: str = Field(default="database.json")

    # Web push (VAPID key pair)
    vapid_public_key: str = Field(default="")
    vapid_private_key: str = Field(default="")
    vapid_subject: str = Field(default="mailto:alerts@example.com")

    # Browser app served at /
    webapp_dir: str = Field(default="webapp")

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def push_enabled(self) -> bool:
        return bool(self.vapid_public_key and self.vapid_private_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
