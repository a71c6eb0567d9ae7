"""Rule and generation constants for the NPC generator."""

from __future__ import annotations

# =============================================================================
# Proficiency
# =============================================================================

TRAINED_BONUS = 2
"""Flat bonus added to the level for Trained proficiency."""

EXPERT_BONUS = 4
"""Flat bonus added to the level for Expert proficiency."""

MASTER_BONUS = 6
"""Flat bonus added to the level for Master proficiency."""

LEGENDARY_BONUS = 8
"""Flat bonus added to the level for Legendary proficiency."""

BASE_ADDITIONAL_SKILLS = 2
"""Skills trained on top of the background before Intelligence is added."""

SKILL_SELECTION_RETRY_BUDGET = 10_000
"""Draws allowed while collecting additional skills."""

# =============================================================================
# Ability Allocation
# =============================================================================

GENERIC_BOOST_ROUNDS = 2
"""Rounds of free boosts after the ancestry program."""

BOOSTS_PER_ROUND = 4
"""Free boosts applied in each generic round."""

# =============================================================================
# Generation Defaults
# =============================================================================

DEFAULT_NORMAL_HERITAGE_WEIGHT = 0.8
"""Chance that a character has no versatile heritage."""

DEFAULT_LEVEL = 0
"""Level of a background-built character."""

SEXES = ("male", "female")
"""Sexes drawn for non-asexual ancestries."""

NAME_ERROR = "@@NAME_ERROR@@"
"""Sentinel used when no name table matches the character."""

DEFAULT_HAIR_SUBSTANCE = "hair"
DEFAULT_SKIN_SUBSTANCE = "skin"

NO_HERITAGE_LABEL = "Normal"
"""Label used in statistics for characters without a heritage."""


# =============================================================================
# Default Templates
# =============================================================================

DEFAULT_FULL_NAME_FORMAT = "{{ first_name }} {{ surname }}"
"""Jinja2 template joining a first name and a surname."""

DEFAULT_LINEAGE_FORMAT = "Their lineage is {{ lineage }}."
"""Jinja2 template for the heritage lineage sentence."""

DEFAULT_DESCRIPTION_FORMAT = """\
{%- if age_range == "infant" -%}
{%- if age == 0 -%}
{{ name }} is a{{ sex }} {{ ancestry }}{{ heritage }} newborn.
{%- else -%}
{{ name }} is a {{ age }} year old{{ sex }} {{ ancestry }}{{ heritage }} infant.
{%- endif -%}
{%- elif age_range == "child" -%}
{{ name }} is a {{ age }} year old{{ sex }} {{ ancestry }}{{ heritage }} child {{ job }}.
{%- elif age_range == "youth" -%}
{{ name }} is a {{ age }} year old{{ sex }} {{ ancestry }}{{ heritage }} {{ job }} in their youths.
{%- elif age_range == "adult" -%}
{{ name }} is an adult, {{ age }} year old{{ sex }} {{ ancestry }}{{ heritage }} {{ job }}.
{%- elif age_range == "middle_aged" -%}
{{ name }} is a middle-aged, {{ age }} year old{{ sex }} {{ ancestry }}{{ heritage }} {{ job }}.
{%- elif age_range == "old" -%}
{{ name }} is an old, {{ age }} year old{{ sex }} {{ ancestry }}{{ heritage }} {{ job }}.
{%- else -%}
{{ name }} is a venerable, {{ age }} year old{{ sex }} {{ ancestry }}{{ heritage }} {{ job }}.
{%- endif -%}
"""
"""Jinja2 template for the description sentence, phrased per age range."""


__all__ = [
    "TRAINED_BONUS",
    "EXPERT_BONUS",
    "MASTER_BONUS",
    "LEGENDARY_BONUS",
    "BASE_ADDITIONAL_SKILLS",
    "SKILL_SELECTION_RETRY_BUDGET",
    "GENERIC_BOOST_ROUNDS",
    "BOOSTS_PER_ROUND",
    "DEFAULT_NORMAL_HERITAGE_WEIGHT",
    "DEFAULT_LEVEL",
    "SEXES",
    "NAME_ERROR",
    "DEFAULT_HAIR_SUBSTANCE",
    "DEFAULT_SKIN_SUBSTANCE",
    "NO_HERITAGE_LABEL",
    "DEFAULT_FULL_NAME_FORMAT",
    "DEFAULT_LINEAGE_FORMAT",
    "DEFAULT_DESCRIPTION_FORMAT",
]
