"""
Configuration
=============
Centralized configuration management using Pydantic Settings.

Переменные окружения с префиксом STABLECOIN_ (например, STABLECOIN_LOG_LEVEL).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.domain.units import EPOCH_START_TS, TOKEN_DECIMALS


class Settings(BaseSettings):
    """Token settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STABLECOIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Token metadata
    token_name: str = Field(default="Stablecoin", min_length=1)
    token_symbol: str = Field(default="SC", min_length=1)
    token_decimals: int = Field(default=TOKEN_DECIMALS, ge=0, le=77)

    # Pricing
    epoch_start_ts: int = Field(
        default=EPOCH_START_TS, gt=0, description="Момент, когда цена токена = 1 quote-единица"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
