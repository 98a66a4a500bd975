"""Application configuration schema and validation."""

import logging
from enum import IntEnum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SimulationSize(IntEnum):
    """Common batch-set sizes offered to callers."""

    SMALL = 1_000
    MEDIUM = 5_000
    LARGE = 10_000


class AppConfig(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    default_batch_size: int = Field(
        default=SimulationSize.MEDIUM.value,
        ge=1_000,
        le=100_000,
        description="Default number of Monte Carlo batches per simulation",
    )
    default_dice_count: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Default number of dice rolled per batch",
    )
    include_frozen: bool = Field(
        default=True,
        description="Keep pinned (frozen) dice at their values while sampling",
    )
    random_seed: int | None = Field(
        default=None,
        ge=0,
        description="Seed for the batch generator (None = OS entropy)",
    )
    plot_k_max: int = Field(
        default=10_000,
        ge=10,
        le=100_000,
        description="Horizon (in rolls) for rolls-until-success distributions",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level names a standard logging level."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level


_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or create the singleton AppConfig instance."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config


def reset_config() -> None:
    """Drop the cached AppConfig so the next get_config() re-reads the environment."""
    global _config
    _config = None
