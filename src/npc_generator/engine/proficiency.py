"""Proficiency and skill derivation.

A background-built character is trained in its background's skills,
in ``2 + Intelligence`` further skills drawn at random, and in
perception, all saves, unarmed attacks and unarmored defense. Every
number on the sheet is then an ability modifier plus a proficiency
bonus.
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass

from npc_generator.core.constants import BASE_ADDITIONAL_SKILLS, SKILL_SELECTION_RETRY_BUDGET
from npc_generator.core.exceptions import SkillGenerationError
from npc_generator.core.logging import get_logger
from npc_generator.models.enums import SKILLS_EXCLUDING_LORE, AnySkill, Proficiency, Skill
from npc_generator.models.records import AbilityStats, Ancestry, Background
from npc_generator.models.statblock import Proficiencies


logger = get_logger(__name__)


@dataclass(frozen=True)
class DerivedMechanics:
    """Everything computed from abilities, background and level."""

    proficiencies: Proficiencies
    skills: list[tuple[AnySkill, int]]
    perception: int
    armor_class: int
    fortitude_save: int
    reflex_save: int
    will_save: int
    hit_points: int
    land_speed: int


def additional_skill_count(attributes: AbilityStats) -> int:
    """Number of random skills a character is trained in."""
    return max(0, BASE_ADDITIONAL_SKILLS + attributes.intelligence)


def select_additional_skills(
    rng: random.Random,
    count: int,
    excluded: Iterable[AnySkill],
    *,
    retry_budget: int = SKILL_SELECTION_RETRY_BUDGET,
) -> list[Skill]:
    """Draw distinct non-Lore skills that are not already trained.

    Args:
        rng: Random source to draw from.
        count: How many skills to collect.
        excluded: Skills that must not be picked.
        retry_budget: Maximum number of draws.

    Returns:
        Up to ``count`` skills in draw order. Fewer are returned when the
        budget runs out first.

    Raises:
        SkillGenerationError: If there are no skills to draw from.
    """
    if not SKILLS_EXCLUDING_LORE:
        raise SkillGenerationError("No skills to draw from")

    excluded_set = set(excluded)
    selected: list[Skill] = []
    attempts = 0
    while len(selected) < count and attempts < retry_budget:
        skill = rng.choice(SKILLS_EXCLUDING_LORE)
        if skill not in excluded_set and skill not in selected:
            selected.append(skill)
        attempts += 1

    if len(selected) < count:
        logger.warning(
            "Skill selection ran out of attempts",
            wanted=count,
            selected=len(selected),
            attempts=attempts,
        )
    return selected


def derive_proficiencies(
    rng: random.Random,
    attributes: AbilityStats,
    background: Background,
    *,
    retry_budget: int = SKILL_SELECTION_RETRY_BUDGET,
) -> Proficiencies:
    """Work out which skills and defenses a character is trained in."""
    skills: dict[AnySkill, Proficiency] = {
        skill: Proficiency.TRAINED for skill in background.trainings
    }
    extra = select_additional_skills(
        rng,
        additional_skill_count(attributes),
        skills,
        retry_budget=retry_budget,
    )
    skills.update((skill, Proficiency.TRAINED) for skill in extra)

    return Proficiencies(
        perception=Proficiency.TRAINED,
        fortitude_save=Proficiency.TRAINED,
        reflex_save=Proficiency.TRAINED,
        will_save=Proficiency.TRAINED,
        unarmed=Proficiency.TRAINED,
        unarmored_defense=Proficiency.TRAINED,
        skills=skills,
    )


def skill_modifiers(
    attributes: AbilityStats,
    proficiencies: Proficiencies,
    level: int,
) -> list[tuple[AnySkill, int]]:
    """Compute the modifier of every skill the character has a tier in."""
    return [
        (skill, attributes.get(skill.ability) + proficiency.bonus_for_level(level))
        for skill, proficiency in proficiencies.skills.items()
    ]


def derive_mechanics(
    rng: random.Random,
    attributes: AbilityStats,
    ancestry: Ancestry,
    background: Background,
    level: int,
    *,
    retry_budget: int = SKILL_SELECTION_RETRY_BUDGET,
) -> DerivedMechanics:
    """Derive proficiencies, skills and combat numbers.

    Reflex and Will use the Fortitude proficiency tier.

    Args:
        rng: Random source for additional skills.
        attributes: Allocated ability scores.
        ancestry: Supplies base HP and speed.
        background: Supplies trained skills.
        level: Character level.
        retry_budget: Maximum draws for additional skills.

    Returns:
        The derived mechanics.
    """
    proficiencies = derive_proficiencies(rng, attributes, background, retry_budget=retry_budget)
    save_bonus = proficiencies.fortitude_save.bonus_for_level(level)

    return DerivedMechanics(
        proficiencies=proficiencies,
        skills=skill_modifiers(attributes, proficiencies, level),
        perception=attributes.wisdom + proficiencies.perception.bonus_for_level(level),
        armor_class=attributes.dexterity + proficiencies.unarmored_defense.bonus_for_level(level),
        fortitude_save=attributes.constitution + save_bonus,
        reflex_save=attributes.dexterity + save_bonus,
        will_save=attributes.wisdom + save_bonus,
        hit_points=ancestry.base_hp + attributes.constitution,
        land_speed=ancestry.speed,
    )


__all__ = [
    "DerivedMechanics",
    "additional_skill_count",
    "select_additional_skills",
    "derive_proficiencies",
    "skill_modifiers",
    "derive_mechanics",
]
