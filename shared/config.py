"""
Shared configuration management for the fact matching engine.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MatchingConfig(BaseSettings):
    """Engine configuration read from MATCHING_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MATCHING_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Tie-break randomness; unseeded when None
    random_seed: Optional[int] = Field(default=None)

    # Observability
    enable_metrics: bool = Field(default=False)

    # Evaluators
    float_tolerance: float = Field(default=1e-9, ge=0.0)


@lru_cache(maxsize=1)
def get_config() -> MatchingConfig:
    """Get the process-wide engine configuration."""
    return MatchingConfig()


def reset_config() -> None:
    """Drop the cached configuration so the environment is read again."""
    get_config.cache_clear()
