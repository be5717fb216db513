"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.

Backend selection is positional: the first configured store wins
(``redis_url``, then ``database_url``); with neither set the service
runs in sample mode without persistence.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Key-value backend
    redis_url: str | None = None
    email_to_id_secret: str = ""  # HMAC key for email -> id derivation

    # Relational backend
    database_url: str | None = None
    pool_min_size: int = 1  # Minimum connections in pool
    pool_max_size: int = 10  # Maximum connections in pool
    ticket_sequence: Literal["count", "sequence"] = "count"

    # Captcha settings
    captcha_enabled: bool = False
    hcaptcha_secret_key: str = ""
    captcha_verify_url: str = "https://hcaptcha.com/siteverify"
    captcha_timeout_seconds: float = 5.0

    # Session cookie
    environment: str = "development"
    cookie_name: str = "user-id"
    cookie_path: str = "/api"
    cookie_ttl_days: int = 7

    # Sample mode (no backend configured)
    sample_ticket_number: int = 1234

    @property
    def is_production(self) -> bool:
        """Cookies are only marked Secure in production."""
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
