"""Custom exception hierarchy for the NPC generator.

Every error raised by the generator inherits from NpcGeneratorError, so a
caller can treat "this character could not be built" uniformly while still
distinguishing the decision that failed.

Example:
    >>> from npc_generator.core.exceptions import HairGenerationError
    >>> raise HairGenerationError("Hair table is empty", feature="color")
"""

from __future__ import annotations

from typing import Any


class NpcGeneratorError(Exception):
    """Base exception for all NPC generator errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Data Exceptions
# =============================================================================


class ConfigurationError(NpcGeneratorError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class DataLoadError(NpcGeneratorError):
    """Raised when generator data cannot be read or validated.

    This covers missing files inside a data directory or archive as well
    as documents that fail schema validation.
    """

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize data load error with source context.

        Args:
            message: Human-readable error description.
            source: Path or archive member that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if source:
            combined_details["source"] = source
        super().__init__(message, details=combined_details)


class WeightedError(NpcGeneratorError):
    """Raised when a weighted table cannot be sampled.

    A table is unusable when it is empty or when no entry carries a
    positive weight.
    """


class TemplateRenderError(NpcGeneratorError):
    """Raised when a text template fails to compile or render."""

    def __init__(
        self,
        message: str,
        *,
        template: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize template error with the offending source.

        Args:
            message: Human-readable error description.
            template: The template source that failed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if template:
            combined_details["template"] = template
        super().__init__(message, details=combined_details)


# =============================================================================
# Generation Exceptions
# =============================================================================


class GenerationError(NpcGeneratorError):
    """Base exception for a character build that could not complete."""


class AgeGenerationError(GenerationError):
    """Raised when no age range or age could be drawn."""


class AncestryGenerationError(GenerationError):
    """Raised when the ancestry table cannot be sampled."""


class AbilityGenerationError(GenerationError):
    """Raised when a free ability boost has no ability left to pick."""


class SkillGenerationError(GenerationError):
    """Raised when a skill cannot be drawn."""


class HairGenerationError(GenerationError):
    """Raised when the hair description cannot be generated."""

    def __init__(
        self,
        message: str,
        *,
        feature: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize hair error with the failing hair feature.

        Args:
            message: Human-readable error description.
            feature: Which hair table failed (color, type or length).
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if feature:
            combined_details["feature"] = feature
        self.feature = feature
        super().__init__(message, details=combined_details)


class HeritageGenerationError(GenerationError):
    """Raised when the heritage trial or heritage table is unusable."""


class BackgroundGenerationError(GenerationError):
    """Raised when there is no background to choose from."""


class SexGenerationError(GenerationError):
    """Raised when no sex could be chosen."""


class FlavorGenerationError(GenerationError):
    """Raised when the narrative flavor text cannot be assembled.

    Wraps a missing ancestry precondition, hair, eye and skin line
    failures, and template rendering failures.
    """

    def __init__(
        self,
        message: str,
        *,
        line: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize flavor error with the failing line.

        Args:
            message: Human-readable error description.
            line: Name of the flavor line that failed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if line:
            combined_details["line"] = line
        super().__init__(message, details=combined_details)


__all__ = [
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
]
