"""
Application Configuration

All settings loaded from environment variables (prefix BOLLINGER_).
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from bollinger.schemas.indicators import BollingerBandsParams


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BOLLINGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Bollinger Engine"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Indicator defaults
    default_length: int = 20
    default_std_dev_multiplier: float = 2.0
    default_offset: int = 0
    default_source: str = "close"

    # Display
    display_decimals: int = 2
    missing_value_placeholder: str = "--"

    # Sample data
    sample_candle_count: int = 250
    sample_start_price: float = 100.0
    sample_seed: Optional[int] = None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()


def default_bollinger_params(config: Optional[Settings] = None) -> BollingerBandsParams:
    """Build BollingerBandsParams from configured defaults."""
    config = config or settings
    return BollingerBandsParams(
        length=config.default_length,
        std_dev_multiplier=config.default_std_dev_multiplier,
        offset=config.default_offset,
        source=config.default_source,
    )
