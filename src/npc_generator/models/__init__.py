"""Pydantic V2 models for the NPC generator.

Submodules:
    weights: Weighted tables (WeightMap, WeightedIndex)
    enums: Enumeration types (Ability, AgeRange, Size, Proficiency, Skill)
    records: Loaded records (Ancestry, Heritage, Background, Archetype)
    statblock: Generated character (Statblock, NpcFlavor, Proficiencies)
    options: Generation inputs (GeneratorData, NpcOptions, WeightPreset)

Example:
    >>> from npc_generator.models import AgeRanges, AgeRange
    >>> ranges = AgeRanges(child=2, youth=10, adulthood=15, middle_age=35,
    ...                    old=55, venerable=75, lifespan=90)
    >>> ranges.bounds(AgeRange.VENERABLE)
    (75, 91)
"""

from __future__ import annotations

# =============================================================================
# Weighted Tables
# =============================================================================
from npc_generator.models.weights import WeightedIndex, WeightMap

# =============================================================================
# Enumerations
# =============================================================================
from npc_generator.models.enums import (
    ABILITIES,
    SKILLS_EXCLUDING_LORE,
    Ability,
    AgeRange,
    AnySkill,
    Lore,
    Mutation,
    Proficiency,
    Size,
    Skill,
)

# =============================================================================
# Records
# =============================================================================
from npc_generator.models.records import (
    AbilityModification,
    AbilityStats,
    AgeRanges,
    AllOf,
    Ancestry,
    AnyAncestry,
    Archetype,
    Background,
    Boost,
    Flaw,
    Free,
    Heritage,
    Language,
    NameFormats,
    Only,
    ValidAncestries,
)

# =============================================================================
# Statblock
# =============================================================================
from npc_generator.models.statblock import NpcFlavor, Proficiencies, Statblock

# =============================================================================
# Generation Inputs
# =============================================================================
from npc_generator.models.options import (
    GeneratorData,
    GeneratorTemplates,
    NameTables,
    NpcOptions,
    WeightPreset,
)


__all__ = [
    # Weighted tables
    "WeightMap",
    "WeightedIndex",
    # Enums
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
    # Records
    "Boost",
    "Flaw",
    "Free",
    "AbilityModification",
    "AbilityStats",
    "AnyAncestry",
    "AllOf",
    "Only",
    "ValidAncestries",
    "Language",
    "AgeRanges",
    "NameFormats",
    "Ancestry",
    "Heritage",
    "Background",
    "Archetype",
    # Statblock
    "Proficiencies",
    "NpcFlavor",
    "Statblock",
    # Inputs
    "NameTables",
    "WeightPreset",
    "GeneratorTemplates",
    "GeneratorData",
    "NpcOptions",
]
