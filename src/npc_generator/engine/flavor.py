"""Narrative flavor text for generated characters.

Each line is built independently from the resolved ancestry, heritage
and identity. Appearance lines are weighted draws from the ancestry's
tables, with heritage tables merged on top. Sentences that depend on
data-supplied wording go through the TemplateEngine.
"""

from __future__ import annotations

import random

from npc_generator.core.constants import NAME_ERROR
from npc_generator.core.exceptions import (
    FlavorGenerationError,
    HairGenerationError,
    TemplateRenderError,
    WeightedError,
)
from npc_generator.core.logging import get_logger
from npc_generator.engine.templates import TemplateEngine
from npc_generator.models.enums import Mutation, Size
from npc_generator.models.options import GeneratorTemplates, NameTables
from npc_generator.models.records import Ancestry, Heritage
from npc_generator.models.statblock import NpcFlavor, Statblock
from npc_generator.models.weights import WeightMap


logger = get_logger(__name__)


SIZE_AND_BUILD_LINES: dict[Size, str] = {
    Size.TINY: "They are tiny, small enough to hide in a satchel.",
    Size.SMALL: "They are small of stature.",
    Size.MEDIUM: "They are of average height and build.",
    Size.LARGE: "They are large, towering over most folk.",
    Size.HUGE: "They are huge, dwarfing the buildings around them.",
    Size.GARGANTUAN: "They are gargantuan.",
}

FACE_LINE = "They have a face."
HABIT_LINE = ""


# =============================================================================
# Names
# =============================================================================


def generate_name(
    rng: random.Random,
    engine: TemplateEngine,
    ancestry: Ancestry,
    traits: list[str],
    names: NameTables,
    sex: str,
) -> str:
    """Draw a name for a character.

    A first name comes from the table of one of the character's traits
    (picked uniformly) for the character's sex. If the ancestry has a
    surname table, a surname is drawn too and both are joined through
    the ancestry's full-name template.

    A missing name table is not fatal: the error is logged and the
    NAME_ERROR sentinel is returned.

    Raises:
        FlavorGenerationError: If the surname table cannot be sampled or
            the full-name template fails.
    """
    name_traits = [t for t in traits if t in names]
    if not name_traits:
        logger.error("No name table for any trait", traits=traits)
        return NAME_ERROR

    name_trait = rng.choice(name_traits)
    first_names = names[name_trait].get(sex)
    if first_names is None:
        logger.error("No names for sex on name trait", sex=sex, name_trait=name_trait)
        return NAME_ERROR
    try:
        first_name = first_names.sample(rng)
    except WeightedError:
        logger.error("Name table cannot be sampled", sex=sex, name_trait=name_trait)
        return NAME_ERROR

    if ancestry.specimen_surnames is None:
        return first_name

    try:
        surname = ancestry.specimen_surnames.sample(rng)
    except WeightedError as e:
        raise FlavorGenerationError(
            f"Cannot draw a surname for {ancestry.name}",
            line="name",
        ) from e

    try:
        return engine.render(
            ancestry.formats.full_name,
            first_name=first_name,
            surname=surname,
            additional_names=[],
        )
    except TemplateRenderError as e:
        raise FlavorGenerationError("Full name template failed", line="name") from e


# =============================================================================
# Appearance
# =============================================================================


def describe_hair(rng: random.Random, ancestry: Ancestry, heritage: Heritage | None) -> str:
    """Describe hair as "length, type, color substance".

    Returns "no hair" when the ancestry has none of the three hair
    tables.

    Raises:
        HairGenerationError: If only some hair tables exist, or one of
            them cannot be sampled.
    """
    colors = ancestry.possible_hair_colors
    if colors is not None and heritage is not None:
        colors = colors.merged(heritage.additional_hair_colors)

    tables: dict[str, WeightMap[str] | None] = {
        "color": colors,
        "type": ancestry.possible_hair_type,
        "length": ancestry.possible_hair_length,
    }
    if all(table is None for table in tables.values()):
        return "no hair"

    drawn: dict[str, str] = {}
    for feature, table in tables.items():
        if table is None:
            raise HairGenerationError(
                f"{ancestry.name} has no hair {feature} table",
                feature=feature,
            )
        try:
            drawn[feature] = table.sample(rng)
        except WeightedError as e:
            raise HairGenerationError(
                f"Cannot draw hair {feature} for {ancestry.name}",
                feature=feature,
            ) from e

    return f"{drawn['length']}, {drawn['type']}, {drawn['color']} {ancestry.hair_substance}"


def describe_eyes(rng: random.Random, ancestry: Ancestry, heritage: Heritage | None) -> str:
    """Describe eyes, including heterochromia.

    A heritage that forces a heterochromia color always produces
    mismatched eyes; otherwise the ancestry's heterochromia probability
    decides. The odd eye is left or right with equal chance.

    Raises:
        FlavorGenerationError: If the eye color table cannot be sampled.
    """
    if ancestry.possible_eye_colors is None:
        return "no eyes"

    colors = ancestry.possible_eye_colors
    if heritage is not None:
        colors = colors.merged(heritage.additional_eye_colors)
    try:
        values, distribution = colors.split_weights()
    except WeightedError as e:
        raise FlavorGenerationError(
            f"Cannot draw eye color for {ancestry.name}",
            line="hair_and_eyes",
        ) from e

    eye_color = values[distribution.sample(rng)]
    heterochromia_color = values[distribution.sample(rng)]

    forced = heritage.force_heterochromia if heritage is not None else None
    if forced is not None:
        has_heterochromia = True
        heterochromia_color = forced
    else:
        probability = ancestry.mutation_probability(Mutation.HETEROCHROMIA)
        has_heterochromia = rng.random() < probability

    if has_heterochromia:
        alternatives = [
            value
            for value, weight in zip(values, distribution.weights)
            if weight > 0 and value != heterochromia_color
        ]
        if not alternatives:
            has_heterochromia = False

    if not has_heterochromia:
        return f"{eye_color} eyes"

    while eye_color == heterochromia_color:
        eye_color = values[distribution.sample(rng)]
    if rng.random() < 0.5:
        left_eye, right_eye = heterochromia_color, eye_color
    else:
        left_eye, right_eye = eye_color, heterochromia_color
    return f"heterochromatic eyes.\nTheir left eye is {left_eye} and their right eye is {right_eye}"


def hair_and_eyes_line(rng: random.Random, ancestry: Ancestry, heritage: Heritage | None) -> str:
    hair = describe_hair(rng, ancestry, heritage)
    eyes = describe_eyes(rng, ancestry, heritage)
    return f"They have {hair} and {eyes}."


def skin_line(rng: random.Random, ancestry: Ancestry) -> str:
    """Describe skin texture and tone.

    Raises:
        FlavorGenerationError: If either skin table cannot be sampled.
    """
    try:
        texture = ancestry.possible_skin_texture.sample(rng)
        tone = ancestry.possible_skin_tone.sample(rng)
    except WeightedError as e:
        raise FlavorGenerationError(
            f"Cannot draw skin for {ancestry.name}",
            line="skin",
        ) from e
    return f"They have {texture} {tone} {ancestry.skin_substance}."


def size_and_build_line(ancestry: Ancestry) -> str:
    return SIZE_AND_BUILD_LINES[ancestry.size]


# =============================================================================
# Templated Sentences
# =============================================================================


def lineage_line(engine: TemplateEngine, heritage: Heritage | None) -> str | None:
    """Render the heritage's lineage sentence, if it declares a lineage."""
    if heritage is None or heritage.lineage is None:
        return None
    try:
        return engine.render(
            heritage.lineage_format,
            lineage=heritage.lineage,
            heritage=heritage.name,
        )
    except TemplateRenderError as e:
        raise FlavorGenerationError("Lineage template failed", line="lineage") from e


def description_line(
    engine: TemplateEngine,
    templates: GeneratorTemplates,
    statblock: Statblock,
    ancestry: Ancestry,
    heritage: Heritage | None,
    job: str,
) -> str:
    """Render the opening description sentence.

    Template variables: ``name``, ``age``, ``age_range`` (the range's
    value, e.g. "middle_aged"), ``sex`` (with a leading space, or
    empty), ``ancestry``, ``heritage`` (with a leading space, or empty)
    and ``job``.
    """
    try:
        return engine.render(
            templates.description_line,
            name=statblock.name,
            age=statblock.age,
            age_range=statblock.age_range.value,
            sex=f" {statblock.sex}" if statblock.sex else "",
            ancestry=ancestry.name,
            heritage=f" {heritage.name}" if heritage is not None else "",
            job=job,
        )
    except TemplateRenderError as e:
        raise FlavorGenerationError("Description template failed", line="description") from e


def build_flavor(
    rng: random.Random,
    engine: TemplateEngine,
    templates: GeneratorTemplates,
    statblock: Statblock,
    ancestry: Ancestry,
    heritage: Heritage | None,
    job: str,
) -> NpcFlavor:
    """Assemble every flavor line for a character.

    Args:
        rng: Random source for appearance draws.
        engine: Renders templated sentences.
        templates: Description template source.
        statblock: Statblock with identity fields already set.
        ancestry: Resolved ancestry.
        heritage: Resolved heritage, if any.
        job: Background or archetype name used as occupation.

    Returns:
        The assembled flavor lines.

    Raises:
        HairGenerationError: If hair cannot be described.
        FlavorGenerationError: If any other line fails.
    """
    return NpcFlavor(
        description_line=description_line(engine, templates, statblock, ancestry, heritage, job),
        lineage_line=lineage_line(engine, heritage),
        hair_and_eyes_line=hair_and_eyes_line(rng, ancestry, heritage),
        skin_line=skin_line(rng, ancestry),
        size_and_build_line=size_and_build_line(ancestry),
        face_line=FACE_LINE,
        habit_line=HABIT_LINE,
    )


__all__ = [
    "SIZE_AND_BUILD_LINES",
    "generate_name",
    "describe_hair",
    "describe_eyes",
    "hair_and_eyes_line",
    "skin_line",
    "size_and_build_line",
    "lineage_line",
    "description_line",
    "build_flavor",
]
