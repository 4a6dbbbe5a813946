"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from decimal import Decimal
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .currency import MAX_AMOUNT


class AtmConfig(BaseSettings):
    """ATM banking terminal configuration"""

    model_config = SettingsConfigDict(
        env_prefix="ATM_",
        env_file=".env",
        case_sensitive=False,
    )

    # Ledger configuration
    history_capacity: int = Field(default=20, gt=0)  # Retained transactions per account
    default_statement_count: int = Field(default=5, gt=0)
    max_balance: Decimal = Field(default=MAX_AMOUNT, gt=0, le=MAX_AMOUNT)  # Per-account balance ceiling

    # Concurrency configuration
    lock_timeout_seconds: Optional[float] = Field(default=5.0, gt=0)  # None waits forever

    # Logging configuration
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "text"

    # Startup configuration
    seed_demo_accounts: bool = True


# Global configuration instance
config = AtmConfig()


def get_config() -> AtmConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> AtmConfig:
    """Reload configuration from environment"""
    global config
    config = AtmConfig()
    return config
