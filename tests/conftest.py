"""Pytest configuration and shared fixtures.

This module provides a small in-memory data set (a few ancestries,
heritages, backgrounds, name tables and one archetype) shared by the
unit and integration tests, plus a similar data set written to disk
for the loader and command-line tests.
"""

from __future__ import annotations

import json
import random
from typing import TYPE_CHECKING

import pytest

from npc_generator.core.config import GenerationSettings
from npc_generator.engine.templates import TemplateEngine
from npc_generator.models import (
    Ability,
    AbilityStats,
    AgeRange,
    AgeRanges,
    AllOf,
    Ancestry,
    Archetype,
    Background,
    Boost,
    Flaw,
    Free,
    GeneratorData,
    Heritage,
    Language,
    Lore,
    Mutation,
    Only,
    Size,
    Skill,
    WeightMap,
    WeightPreset,
)


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from npc_generator.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def generation_settings() -> GenerationSettings:
    """Provide default generation settings independent of the environment."""
    return GenerationSettings(
        normal_heritage_weight=0.8,
        skill_retry_budget=10_000,
        default_level=0,
        enforce_heritage_ancestry=True,
        weighted_backgrounds=False,
    )


@pytest.fixture
def engine() -> TemplateEngine:
    """Provide a template engine."""
    return TemplateEngine()


@pytest.fixture
def rng() -> random.Random:
    """Provide a seeded random source."""
    return random.Random(1234)


# =============================================================================
# Record Fixtures
# =============================================================================


@pytest.fixture
def human_age_ranges() -> AgeRanges:
    """Provide human age cut points."""
    return AgeRanges(
        child=1,
        youth=8,
        adulthood=15,
        middle_age=35,
        old=50,
        venerable=70,
        lifespan=90,
    )


@pytest.fixture
def human(human_age_ranges: AgeRanges) -> Ancestry:
    """Provide a Human ancestry with two free boosts and base HP 8."""
    return Ancestry(
        name="Human",
        traits=["Human", "Humanoid"],
        ability_modifications=[Free(), Free()],
        languages=[Language(name="Common")],
        size=Size.MEDIUM,
        speed=25,
        base_hp=8,
        possible_eye_colors={"brown": 6, "blue": 3, "green": 1},
        possible_hair_colors={"black": 4, "brown": 4, "blond": 2},
        possible_hair_length={"short": 3, "long": 2},
        possible_hair_type={"straight": 2, "curly": 1},
        possible_skin_tone={"pale": 1, "tan": 2, "dark": 2},
        possible_skin_texture={"smooth": 3, "freckled": 1},
        mutation_probabilities={Mutation.HETEROCHROMIA: 0.0},
        specimen_surnames={"Reed": 1, "Marsh": 1},
        age_ranges=human_age_ranges,
        age_range_distribution={AgeRange.ADULT: 6, AgeRange.MIDDLE_AGED: 3, AgeRange.OLD: 1},
    )


@pytest.fixture
def elf() -> Ancestry:
    """Provide an Elf ancestry with fixed boosts and a flaw."""
    return Ancestry(
        name="Elf",
        traits=["Elf", "Humanoid"],
        ability_modifications=[
            Boost(ability=Ability.DEX),
            Boost(ability=Ability.INT),
            Flaw(ability=Ability.CON),
            Free(),
        ],
        languages=[Language(name="Common"), Language(name="Elven")],
        senses=["low-light vision"],
        size=Size.MEDIUM,
        speed=30,
        base_hp=6,
        possible_eye_colors={"green": 2, "violet": 1},
        possible_hair_colors={"silver": 1, "gold": 1},
        possible_hair_length={"long": 1},
        possible_hair_type={"straight": 1},
        possible_skin_tone={"fair": 1},
        possible_skin_texture={"smooth": 1},
        age_ranges=AgeRanges(
            child=5,
            youth=20,
            adulthood=100,
            middle_age=200,
            old=400,
            venerable=600,
            lifespan=750,
        ),
        age_range_distribution={AgeRange.ADULT: 1},
    )


@pytest.fixture
def leshy() -> Ancestry:
    """Provide an asexual, hairless Leshy ancestry."""
    return Ancestry(
        name="Leshy",
        traits=["Leshy", "Plant"],
        ability_modifications=[Boost(ability=Ability.CON), Boost(ability=Ability.WIS), Free()],
        size=Size.SMALL,
        speed=25,
        base_hp=8,
        possible_skin_tone={"green": 1},
        possible_skin_texture={"barky": 1},
        skin_substance="bark",
        is_asexual=True,
        age_ranges=AgeRanges(
            child=0,
            youth=1,
            adulthood=2,
            middle_age=20,
            old=40,
            venerable=60,
            lifespan=80,
        ),
        age_range_distribution={AgeRange.ADULT: 1},
    )


@pytest.fixture
def changeling() -> Heritage:
    """Provide a heritage available to any ancestry that forces heterochromia."""
    return Heritage(
        name="Changeling",
        traits=["Changeling"],
        lineage="a hag's brood",
        force_heterochromia="bright green",
        additional_eye_colors={"grey": 1},
    )


@pytest.fixture
def half_elf() -> Heritage:
    """Provide a heritage restricted to humans."""
    return Heritage(
        name="Half-Elf",
        traits=["Elf", "Half-Elf"],
        valid_ancestries=Only(ancestries=["Human"]),
        additional_hair_colors={"silver": 1},
    )


@pytest.fixture
def plant_heritage() -> Heritage:
    """Provide a heritage requiring the Plant trait."""
    return Heritage(
        name="Rootbound",
        traits=["Rootbound"],
        valid_ancestries=AllOf(traits=["Plant"]),
    )


@pytest.fixture
def farmhand() -> Background:
    """Provide a background trained in Athletics and Farming Lore."""
    return Background(name="Farmhand", trainings=[Skill.ATHLETICS, Lore(topic="Farming")])


@pytest.fixture
def drifter() -> Background:
    """Provide a background with no trained skills."""
    return Background(name="Drifter")


@pytest.fixture
def guard() -> Archetype:
    """Provide a level 1 guard archetype."""
    return Archetype(
        name="Guard",
        level=1,
        perception=7,
        skills={Skill.ATHLETICS: 7, Skill.INTIMIDATION: 5},
        attributes=AbilityStats(
            strength=4,
            dexterity=2,
            constitution=3,
            intelligence=0,
            wisdom=1,
            charisma=0,
        ),
        items=["halberd", "chain mail"],
        armor_class=18,
        fortitude_save=10,
        reflex_save=7,
        will_save=5,
        hp=20,
        speed=25,
        actions=["Attack of Opportunity"],
    )


# =============================================================================
# Generator Data Fixtures
# =============================================================================


@pytest.fixture
def name_tables() -> dict[str, dict[str, WeightMap[str]]]:
    """Provide first-name tables keyed by trait and sex."""
    return {
        "Human": {
            "male": WeightMap({"Aldric": 1, "Bram": 1}),
            "female": WeightMap({"Brenna": 1, "Cora": 1}),
        },
        "Elf": {
            "male": WeightMap({"Faerin": 1}),
            "female": WeightMap({"Lirael": 1}),
        },
        "Leshy": {
            "": WeightMap({"Moss": 1}),
        },
    }


@pytest.fixture
def generator_data(
    human: Ancestry,
    elf: Ancestry,
    leshy: Ancestry,
    changeling: Heritage,
    half_elf: Heritage,
    farmhand: Background,
    drifter: Background,
    guard: Archetype,
    name_tables: dict[str, dict[str, WeightMap[str]]],
) -> GeneratorData:
    """Provide a complete in-memory data set."""
    return GeneratorData(
        ancestries=WeightMap({human: 6, elf: 3, leshy: 1}),
        normal_heritage_weight=0.8,
        versatile_heritages=WeightMap({changeling: 1, half_elf: 1}),
        backgrounds=WeightMap({farmhand: 1, drifter: 1}),
        names=name_tables,
        archetypes=[guard],
        presets=[
            WeightPreset(name="Elves only", ancestry_weights={"Human": 0, "Elf": 1, "Leshy": 0}),
        ],
    )


# =============================================================================
# On-Disk Data Fixtures
# =============================================================================


DATA_FILES: dict[str, object] = {
    "ancestries.json": [
        {
            "element": {
                "name": "Human",
                "traits": ["Human", "Humanoid"],
                "ability_modifications": ["free", "free"],
                "languages": [{"name": "Common"}],
                "size": "medium",
                "speed": 25,
                "base_hp": 8,
                "possible_eye_colors": {"brown": 6, "blue": 3},
                "possible_hair_colors": {"black": 1, "brown": 1},
                "possible_hair_length": {"short": 1},
                "possible_hair_type": {"straight": 1},
                "possible_skin_tone": {"tan": 1},
                "possible_skin_texture": {"smooth": 1},
                "mutation_probabilities": {"heterochromia": 0.01},
                "specimen_surnames": {"Reed": 1},
                "age_ranges": {
                    "child": 1,
                    "youth": 8,
                    "adulthood": 15,
                    "middle_age": 35,
                    "old": 50,
                    "venerable": 70,
                    "lifespan": 90,
                },
                "age_range_distribution": {"adult": 1},
            },
            "weight": 3,
        },
        {
            "element": {
                "name": "Dwarf",
                "traits": ["Dwarf", "Humanoid"],
                "ability_modifications": [
                    {"boost": "constitution"},
                    {"boost": "wisdom"},
                    {"flaw": "charisma"},
                    "free",
                ],
                "languages": [{"name": "Common"}, {"name": "Dwarven"}],
                "senses": ["darkvision"],
                "speed": 20,
                "base_hp": 10,
                "possible_eye_colors": {"grey": 1},
                "possible_hair_colors": {"red": 1},
                "possible_hair_length": {"long": 1},
                "possible_hair_type": {"braided": 1},
                "possible_skin_tone": {"ruddy": 1},
                "possible_skin_texture": {"weathered": 1},
                "age_ranges": {
                    "child": 2,
                    "youth": 20,
                    "adulthood": 40,
                    "middle_age": 90,
                    "old": 175,
                    "venerable": 250,
                    "lifespan": 350,
                },
                "age_range_distribution": {"adult": 2, "old": 1},
            },
            "weight": 1,
        },
    ],
    "heritages.json": [
        {
            "element": {
                "name": "Changeling",
                "traits": ["Changeling"],
                "lineage": "a hag's brood",
                "force_heterochromia": "bright green",
            },
            "weight": 1,
        },
        {
            "element": {
                "name": "Half-Orc",
                "traits": ["Half-Orc", "Orc"],
                "valid_ancestries": {"only": ["Human"]},
            },
            "weight": 1,
        },
    ],
    "backgrounds.json": [
        {"element": {"name": "Farmhand", "trainings": ["Athletics", "Farming Lore"]}, "weight": 1},
        {"element": {"name": "Scholar", "trainings": ["arcana"]}, "weight": 1},
    ],
    "names.json": {
        "Human": {"male": {"Bram": 1}, "female": {"Cora": 1}},
        "Dwarf": {"male": {"Torgar": 1}, "female": {"Helga": 1}},
    },
    "archetypes.json": [
        {
            "name": "Guard",
            "level": 1,
            "perception": 7,
            "skills": {"Athletics": 7, "Intimidation": 5},
            "attributes": {"strength": 4, "dexterity": 2, "constitution": 3},
            "items": ["halberd"],
            "armor_class": 18,
            "fortitude_save": 10,
            "reflex_save": 7,
            "will_save": 5,
            "hp": 20,
        }
    ],
    "presets.json": [
        {"name": "Dwarves only", "ancestry_weights": {"Human": 0, "Dwarf": 1}},
    ],
}


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Write a small data set to a directory."""
    directory = tmp_path / "data"
    directory.mkdir()
    for name, content in DATA_FILES.items():
        (directory / name).write_text(json.dumps(content), encoding="utf-8")
    return directory
