"""
Environment-based configuration using pydantic-settings.

Provides defaults for unattended play from the command line. Rule constants
live in `hare_hedgehog.config.GameConfig`.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GameSettings(BaseSettings):
    """
    Runtime settings for simulated games.

    Environment variables (prefix: HARE_):
        HARE_SEED       - Fixed card-shuffle seed (default: random per game)
        HARE_MAX_TURNS  - Turn limit for the time-limit variant (default: none)
        HARE_LOG_DIR    - Directory for JSONL game logs (default: current dir)
        HARE_LOG_LEVEL  - Python logging level name (default: WARNING)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="HARE_",
    )

    seed: Optional[int] = Field(
        default=None,
        description="Card-shuffle seed. None draws a fresh random seed per game.",
    )
    max_turns: Optional[int] = Field(
        default=None,
        gt=0,
        description="End the game after this many turns.",
    )
    log_dir: Path = Field(
        default=Path("."),
        description="Directory where JSONL game logs are written.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level for the hare_hedgehog loggers.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Optional[str]) -> str:
        """Accept lower-case level names and fall back to WARNING."""
        if not value:
            return "WARNING"
        return str(value).upper()


@lru_cache
def get_game_settings() -> GameSettings:
    """Return cached game settings instance."""
    return GameSettings()
