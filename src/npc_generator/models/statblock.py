"""The generated character and its mechanical sheet.

A Statblock is never mutated. Generation starts from an empty Statblock
and moves it through a fixed sequence of stages, each returning a new
copy with more fields filled in:

1. with_identity: name, age, age range, sex, traits
2. with_mechanics or with_archetype: stats, skills, saves, HP, speed
3. with_origin: ancestry and heritage back-references, class label
4. with_flavor: narrative lines
"""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from npc_generator.models.enums import Ability, AgeRange, AnySkill, Proficiency
from npc_generator.models.records import AbilityStats, Ancestry, Archetype, Heritage


class Proficiencies(BaseModel):
    """Proficiency tiers for every trained category."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    perception: Proficiency = Proficiency.UNTRAINED
    fortitude_save: Proficiency = Proficiency.UNTRAINED
    reflex_save: Proficiency = Proficiency.UNTRAINED
    will_save: Proficiency = Proficiency.UNTRAINED
    unarmed: Proficiency = Proficiency.UNTRAINED
    simple_weapons: Proficiency = Proficiency.UNTRAINED
    martial_weapons: Proficiency = Proficiency.UNTRAINED
    advanced_weapons: Proficiency = Proficiency.UNTRAINED
    unarmored_defense: Proficiency = Proficiency.UNTRAINED
    light_armor: Proficiency = Proficiency.UNTRAINED
    medium_armor: Proficiency = Proficiency.UNTRAINED
    heavy_armor: Proficiency = Proficiency.UNTRAINED
    skills: dict[AnySkill, Proficiency] = Field(default_factory=dict)

    def skill(self, skill: AnySkill) -> Proficiency:
        """Get the tier of a skill, Untrained when absent."""
        return self.skills.get(skill, Proficiency.UNTRAINED)


class NpcFlavor(BaseModel):
    """Narrative description lines."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    description_line: str = ""
    hair_and_eyes_line: str = ""
    skin_line: str = ""
    lineage_line: str | None = None
    size_and_build_line: str = ""
    face_line: str = ""
    habit_line: str = ""

    def lines(self) -> list[str]:
        """Get the lines in reading order, skipping a missing lineage."""
        lines = [self.description_line, self.hair_and_eyes_line, self.skin_line]
        if self.lineage_line is not None:
            lines.append(self.lineage_line)
        lines.extend([self.size_and_build_line, self.face_line, self.habit_line])
        return lines

    def render(self) -> str:
        """Render every line followed by a blank line."""
        return "".join(f"{line}\n\n" for line in self.lines())

    def __str__(self) -> str:
        return self.render()


class Statblock(BaseModel):
    """A generated non-player character.

    Skills are stored as (skill, modifier) pairs in the order they were
    derived; the sheet sorts them by name.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Identity
    name: str = ""
    class_name: str = ""
    level: int = 0
    age: int = 0
    age_range: AgeRange = AgeRange.ADULT
    sex: str = ""
    traits: list[str] = Field(default_factory=list)

    # Mechanics
    perception: int = 0
    skills: list[tuple[AnySkill, int]] = Field(default_factory=list)
    attributes: AbilityStats = Field(default_factory=AbilityStats)
    proficiencies: Proficiencies = Field(default_factory=Proficiencies)
    items: list[str] = Field(default_factory=list)
    armor_class: int = 0
    fortitude_save: int = 0
    reflex_save: int = 0
    will_save: int = 0
    hit_points: int = 0
    land_speed: int = 0

    # Origin
    ancestry: Ancestry | None = None
    heritage: Heritage | None = None
    flavor: NpcFlavor = Field(default_factory=NpcFlavor)

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    def with_identity(
        self,
        *,
        name: str,
        age: int,
        age_range: AgeRange,
        sex: str,
        traits: list[str],
    ) -> Self:
        """Return a copy carrying the character's identity."""
        return self.model_copy(
            update={
                "name": name,
                "age": age,
                "age_range": age_range,
                "sex": sex,
                "traits": list(traits),
            }
        )

    def with_mechanics(
        self,
        *,
        level: int,
        attributes: AbilityStats,
        proficiencies: Proficiencies,
        skills: list[tuple[AnySkill, int]],
        perception: int,
        armor_class: int,
        fortitude_save: int,
        reflex_save: int,
        will_save: int,
        hit_points: int,
        land_speed: int,
    ) -> Self:
        """Return a copy carrying randomly derived mechanics."""
        return self.model_copy(
            update={
                "level": level,
                "attributes": attributes,
                "proficiencies": proficiencies,
                "skills": list(skills),
                "perception": perception,
                "armor_class": armor_class,
                "fortitude_save": fortitude_save,
                "reflex_save": reflex_save,
                "will_save": will_save,
                "hit_points": hit_points,
                "land_speed": land_speed,
            }
        )

    def with_archetype(self, archetype: Archetype) -> Self:
        """Return a copy whose mechanics are taken verbatim from an archetype."""
        return self.model_copy(
            update={
                "level": archetype.level,
                "attributes": archetype.attributes,
                "skills": list(archetype.skills.items()),
                "perception": archetype.perception,
                "items": list(archetype.items),
                "armor_class": archetype.armor_class,
                "fortitude_save": archetype.fortitude_save,
                "reflex_save": archetype.reflex_save,
                "will_save": archetype.will_save,
                "hit_points": archetype.hp,
                "land_speed": archetype.speed,
            }
        )

    def with_origin(
        self,
        *,
        ancestry: Ancestry,
        heritage: Heritage | None,
        class_name: str,
    ) -> Self:
        """Return a copy referencing the resolved ancestry and heritage."""
        return self.model_copy(
            update={"ancestry": ancestry, "heritage": heritage, "class_name": class_name}
        )

    def with_flavor(self, flavor: NpcFlavor) -> Self:
        """Return a copy carrying narrative flavor text."""
        return self.model_copy(update={"flavor": flavor})

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def skill_modifier(self, skill: AnySkill) -> int | None:
        """Get a skill's modifier, or None when the character lacks it."""
        for known, modifier in self.skills:
            if known == skill:
                return modifier
        return None

    def ability(self, ability: Ability) -> int:
        """Get one ability modifier."""
        return self.attributes.get(ability)

    @property
    def languages(self) -> list[str]:
        """Languages printed on the sheet."""
        if self.ancestry is not None and self.ancestry.languages:
            return [language.name for language in self.ancestry.languages]
        return ["Common"]

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _traits_line(self) -> str:
        return " ".join(["==Unique==", *(f"=={t}==" for t in sorted(self.traits))])

    def _skills_line(self) -> str:
        known = sorted(
            ((skill.display_name, modifier) for skill, modifier in self.skills if modifier != 0),
            key=lambda pair: pair[0],
        )
        return ", ".join(f"{name} {modifier:+}" for name, modifier in known)

    def _attributes_line(self) -> str:
        return ", ".join(
            f"**{ability.abbreviation}** {self.attributes.get(ability):+}" for ability in Ability
        )

    def render_sheet(self) -> str:
        """Render the statblock as a fenced pf2e-stats block.

        Returns:
            Markdown text suitable for statblock renderers that understand
            the pf2e-stats fence.
        """
        lines = [
            "```pf2e-stats",
            f"# {self.name}",
            f"## {self.class_name} {self.level}",
            self._traits_line(),
            "",
            f"**Perception** {self.perception:+}",
            f"**Languages** {', '.join(self.languages)}",
            f"**Skills** {self._skills_line()}".rstrip(),
            self._attributes_line(),
            "",
            "---",
            "",
            f"**AC** {self.armor_class}; **Fort** {self.fortitude_save:+}, "
            f"**Ref** {self.reflex_save:+}, **Will** {self.will_save:+}",
            f"**HP** {self.hit_points}",
            "",
            "---",
            "",
            f"**Speed** {self.land_speed}",
            "",
            "---",
            "",
            self.flavor.render(),
            "```",
        ]
        return "\n".join(lines) + "\n"


__all__ = [
    "Proficiencies",
    "NpcFlavor",
    "Statblock",
]
