"""Configuration management for the NPC generator.

Settings come from pydantic-settings, so every value can be supplied
through environment variables or a .env file.

Example:
    >>> from npc_generator.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.generation.normal_heritage_weight
    0.8

Environment Variables:
    NPC_GENERATOR_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    NPC_GENERATOR_JSON_LOGS: Emit JSON log lines
    NPC_GENERATOR_DATA_PATH: Directory or zip archive holding generator data
    NPC_GENERATOR_GENERATION_NORMAL_HERITAGE_WEIGHT: Chance of no heritage
    NPC_GENERATOR_GENERATION_SKILL_RETRY_BUDGET: Attempts for extra skills
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from npc_generator.core.constants import (
    DEFAULT_LEVEL,
    DEFAULT_NORMAL_HERITAGE_WEIGHT,
    SKILL_SELECTION_RETRY_BUDGET,
)
from npc_generator.core.exceptions import ConfigurationError


class GenerationSettings(BaseSettings):
    """Configuration for the character-build engine.

    Attributes:
        normal_heritage_weight: Probability that a character has no heritage.
        skill_retry_budget: Draw attempts when picking additional skills.
        default_level: Level used for proficiency bonuses without an archetype.
        enforce_heritage_ancestry: Only draw heritages that admit the ancestry.
        weighted_backgrounds: Sample backgrounds by weight instead of uniformly.
    """

    model_config = SettingsConfigDict(
        env_prefix="NPC_GENERATOR_GENERATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    normal_heritage_weight: float = Field(
        default=DEFAULT_NORMAL_HERITAGE_WEIGHT,
        ge=0.0,
        le=1.0,
        description="Probability of a normal (non-heritage) lineage",
    )
    skill_retry_budget: int = Field(
        default=SKILL_SELECTION_RETRY_BUDGET,
        ge=1,
        description="Maximum draws when selecting additional skills",
    )
    default_level: int = Field(
        default=DEFAULT_LEVEL,
        ge=-1,
        le=25,
        description="Level used when no archetype supplies one",
    )
    enforce_heritage_ancestry: bool = Field(
        default=True,
        description="Filter heritages by their valid-ancestry constraint",
    )
    weighted_backgrounds: bool = Field(
        default=False,
        description="Sample backgrounds by weight instead of uniformly",
    )


class StorageSettings(BaseSettings):
    """Configuration for locating generator data.

    Attributes:
        data_path: Directory or zip archive with the generator tables.
    """

    model_config = SettingsConfigDict(
        env_prefix="NPC_GENERATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_path: Path = Field(
        default=Path("data"),
        description="Directory or zip archive holding generator data",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit JSON logs instead of console output.
        generation: Character-build engine settings.
        storage: Data location settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="NPC_GENERATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="PF2e NPC Generator",
        description="Application name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "GenerationSettings",
    "StorageSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
