"""Configuration settings using Pydantic Settings.

Provides typed configuration for the colony loop and the simulated room
with environment variable support.

Usage:
    from colonytasks.config import ColonySettings

    # Load from environment variables (COLONY_*)
    settings = ColonySettings()

    # Or override with explicit values
    settings = ColonySettings(housekeeping_interval=5)
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ColonySettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the per-tick colony loop.

    Attributes:
        log_level: Level for the colonytasks logger.
        housekeeping_interval: Ticks between prunes of dead agents' entries.
        max_population: Agent count at which spawning stops.
        tower_range: Range within which towers attack and repair.
        history_size: Tick records kept in memory (0 disables history).

    Environment Variables:
        COLONY_LOG_LEVEL
        COLONY_HOUSEKEEPING_INTERVAL
        COLONY_MAX_POPULATION
        COLONY_TOWER_RANGE
        COLONY_HISTORY_SIZE
    """

    model_config = SettingsConfigDict(
        env_prefix="COLONY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    housekeeping_interval: int = Field(default=10, gt=0)
    max_population: int = Field(default=6, gt=0)
    tower_range: int = Field(default=20, gt=0)
    history_size: int = Field(default=100, ge=0)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level
