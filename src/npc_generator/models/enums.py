"""Enumeration types for the NPC generator.

This module defines the closed vocabularies the generator draws from:
abilities, age ranges, sizes, proficiency tiers, skills and mutations.
Lore skills are open-ended (one per topic) and live beside the Skill enum
as the Lore model.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer

from npc_generator.core.constants import (
    EXPERT_BONUS,
    LEGENDARY_BONUS,
    MASTER_BONUS,
    TRAINED_BONUS,
)


class Ability(StrEnum):
    """The six core abilities."""

    STR = "strength"
    DEX = "dexterity"
    CON = "constitution"
    INT = "intelligence"
    WIS = "wisdom"
    CHA = "charisma"

    @property
    def full_name(self) -> str:
        """Get the full name of the ability (e.g. 'Strength')."""
        return self.value.capitalize()

    @property
    def abbreviation(self) -> str:
        """Get the short label used on statblocks (e.g. 'Str')."""
        return self.name.capitalize()


ABILITIES: tuple[Ability, ...] = tuple(Ability)
"""Every ability, in draw order."""


class AgeRange(StrEnum):
    """Named segments of an ancestry's age axis, youngest first."""

    INFANT = "infant"
    CHILD = "child"
    YOUTH = "youth"
    ADULT = "adult"
    MIDDLE_AGED = "middle_aged"
    OLD = "old"
    VENERABLE = "venerable"

    @property
    def display_name(self) -> str:
        """Get human-readable range name (e.g. 'Middle Aged')."""
        return self.value.replace("_", " ").title()


class Size(StrEnum):
    """Creature sizes."""

    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    HUGE = "huge"
    GARGANTUAN = "gargantuan"

    @property
    def display_name(self) -> str:
        """Get the capitalized size, which doubles as the size trait."""
        return self.value.capitalize()


class Proficiency(IntEnum):
    """Proficiency tiers, ordered from Untrained to Legendary."""

    UNTRAINED = 0
    TRAINED = 1
    EXPERT = 2
    MASTER = 3
    LEGENDARY = 4

    def bonus_for_level(self, level: int) -> int:
        """Calculate the proficiency bonus at a given level.

        Untrained never adds anything; every other tier adds the level
        plus a flat tier bonus.

        Args:
            level: Character level.

        Returns:
            The proficiency bonus.

        Example:
            >>> Proficiency.TRAINED.bonus_for_level(1)
            3
            >>> Proficiency.UNTRAINED.bonus_for_level(20)
            0
        """
        tier_bonuses = {
            Proficiency.TRAINED: TRAINED_BONUS,
            Proficiency.EXPERT: EXPERT_BONUS,
            Proficiency.MASTER: MASTER_BONUS,
            Proficiency.LEGENDARY: LEGENDARY_BONUS,
        }
        if self is Proficiency.UNTRAINED:
            return 0
        return level + tier_bonuses[self]


class Mutation(StrEnum):
    """Rare physical variations with a per-ancestry probability."""

    HETEROCHROMIA = "heterochromia"


class Skill(StrEnum):
    """Standard skills and their governing abilities.

    Lore skills are modelled separately by Lore.
    """

    ACROBATICS = "acrobatics"
    ARCANA = "arcana"
    ATHLETICS = "athletics"
    CRAFTING = "crafting"
    DECEPTION = "deception"
    DIPLOMACY = "diplomacy"
    INTIMIDATION = "intimidation"
    MEDICINE = "medicine"
    NATURE = "nature"
    OCCULTISM = "occultism"
    PERFORMANCE = "performance"
    RELIGION = "religion"
    SOCIETY = "society"
    STEALTH = "stealth"
    SURVIVAL = "survival"
    THIEVERY = "thievery"

    @property
    def display_name(self) -> str:
        """Get the capitalized skill name."""
        return self.value.capitalize()

    @property
    def ability(self) -> Ability:
        """Get the ability that governs this skill.

        Returns:
            The Ability enum value associated with this skill.
        """
        skill_abilities: dict[Skill, Ability] = {
            Skill.ACROBATICS: Ability.DEX,
            Skill.ARCANA: Ability.INT,
            Skill.ATHLETICS: Ability.STR,
            Skill.CRAFTING: Ability.INT,
            Skill.DECEPTION: Ability.CHA,
            Skill.DIPLOMACY: Ability.CHA,
            Skill.INTIMIDATION: Ability.CHA,
            Skill.MEDICINE: Ability.WIS,
            Skill.NATURE: Ability.WIS,
            Skill.OCCULTISM: Ability.INT,
            Skill.PERFORMANCE: Ability.CHA,
            Skill.RELIGION: Ability.WIS,
            Skill.SOCIETY: Ability.INT,
            Skill.STEALTH: Ability.DEX,
            Skill.SURVIVAL: Ability.WIS,
            Skill.THIEVERY: Ability.DEX,
        }
        return skill_abilities[self]


class Lore(BaseModel):
    """A Lore skill about a single topic, always governed by Intelligence."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    topic: str

    @property
    def display_name(self) -> str:
        """Get the skill name as printed (e.g. 'Warfare Lore')."""
        return f"{self.topic} Lore"

    @property
    def ability(self) -> Ability:
        """Lore is always an Intelligence skill."""
        return Ability.INT

    def __str__(self) -> str:
        return self.display_name


def parse_skill(value: Any) -> Any:
    """Coerce loose skill input into a Skill or Lore.

    Accepts enum members, Lore instances, skill names in any case
    ("Acrobatics"), lore names ("Warfare Lore") and {"lore": topic}
    mappings. Anything else is passed through for pydantic to reject.
    """
    if isinstance(value, (Skill, Lore)):
        return value
    if isinstance(value, dict) and "lore" in value:
        return Lore(topic=value["lore"])
    if isinstance(value, str):
        text = value.strip()
        if text.lower().endswith(" lore"):
            return Lore(topic=text[: -len(" lore")].strip())
        try:
            return Skill(text.lower())
        except ValueError:
            return value
    return value


def skill_name(skill: Skill | Lore) -> str:
    """Get the display name of a standard or Lore skill."""
    return skill.display_name


AnySkill = Annotated[
    Skill | Lore,
    BeforeValidator(parse_skill),
    PlainSerializer(skill_name, return_type=str),
]
"""A standard skill or a Lore skill, parsed from its display name."""

SKILLS_EXCLUDING_LORE: tuple[Skill, ...] = tuple(Skill)
"""Skills eligible for random training."""


__all__ = [
    "Ability",
    "ABILITIES",
    "AgeRange",
    "Size",
    "Proficiency",
    "Mutation",
    "Skill",
    "Lore",
    "AnySkill",
    "SKILLS_EXCLUDING_LORE",
    "parse_skill",
    "skill_name",
]
