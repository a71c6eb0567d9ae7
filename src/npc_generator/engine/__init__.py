"""Character-build engine.

Submodules:
    abilities: Ability-score allocation
    proficiency: Proficiencies, skill modifiers and combat numbers
    templates: Jinja2 sentence rendering
    flavor: Narrative flavor lines
    generator: Generator orchestrating a full build
    statistics: Multi-threaded population sampling
"""

from __future__ import annotations

from npc_generator.engine.abilities import (
    AllocationRound,
    AllocationTrace,
    allocate_ability_scores,
    draw_free_ability,
)
from npc_generator.engine.flavor import build_flavor, generate_name
from npc_generator.engine.generator import Generator
from npc_generator.engine.proficiency import (
    DerivedMechanics,
    derive_mechanics,
    derive_proficiencies,
    select_additional_skills,
    skill_modifiers,
)
from npc_generator.engine.statistics import DistributionReport, sample_distribution
from npc_generator.engine.templates import TemplateEngine


__all__ = [
    "AllocationRound",
    "AllocationTrace",
    "allocate_ability_scores",
    "draw_free_ability",
    "DerivedMechanics",
    "derive_mechanics",
    "derive_proficiencies",
    "select_additional_skills",
    "skill_modifiers",
    "TemplateEngine",
    "build_flavor",
    "generate_name",
    "Generator",
    "DistributionReport",
    "sample_distribution",
]
