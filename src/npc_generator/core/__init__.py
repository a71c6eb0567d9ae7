"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        NpcGeneratorError: Base exception for all generator errors.
        GenerationError: Base for per-decision build failures.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
"""

from __future__ import annotations

from npc_generator.core.config import (
    GenerationSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from npc_generator.core.exceptions import (
    AbilityGenerationError,
    AgeGenerationError,
    AncestryGenerationError,
    BackgroundGenerationError,
    ConfigurationError,
    DataLoadError,
    FlavorGenerationError,
    GenerationError,
    HairGenerationError,
    HeritageGenerationError,
    NpcGeneratorError,
    SexGenerationError,
    SkillGenerationError,
    TemplateRenderError,
    WeightedError,
)
from npc_generator.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)


__all__ = [
    # Exceptions
    "NpcGeneratorError",
    "ConfigurationError",
    "DataLoadError",
    "WeightedError",
    "TemplateRenderError",
    "GenerationError",
    "AgeGenerationError",
    "AncestryGenerationError",
    "AbilityGenerationError",
    "SkillGenerationError",
    "HairGenerationError",
    "HeritageGenerationError",
    "BackgroundGenerationError",
    "SexGenerationError",
    "FlavorGenerationError",
    # Configuration
    "Settings",
    "GenerationSettings",
    "StorageSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
]
