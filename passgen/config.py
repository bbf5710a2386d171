"""
Runtime configuration for passgen.

Values are read from ``PASSGEN_*`` environment variables (or a ``.env`` file)
through Pydantic Settings. The crack-time rates are deliberately exposed here:
they are assumptions about an attacker, not derived quantities.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="PASSGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Breach lookup
    breach_enabled: bool = Field(default=False, description="Check generated values against the breach corpus")
    breach_api_url: str = Field(
        default="https://api.pwnedpasswords.com", description="Base URL of the range-lookup service"
    )
    breach_timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")
    breach_debounce: float = Field(default=0.3, ge=0, description="Quiet period before a lookup is sent")

    # Crack-time model
    online_rate: float = Field(default=100.0, gt=0, description="Guesses per second, throttled online attack")
    offline_rate: float = Field(default=1e10, gt=0, description="Guesses per second, offline GPU attack")
    median_factor: float = Field(default=0.5, gt=0, le=1, description="Fraction of the space searched on average")

    # Generation
    default_word_list: str = Field(default="common", description="Word list for readable mode")
    bulk_max: int = Field(default=500, ge=1, description="Upper bound for bulk generation")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Logging level"
    )
    log_json: bool = Field(default=False, description="Emit JSON log lines")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
