"""Generation inputs: shared data, presets, templates and per-call options."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from npc_generator.core.constants import DEFAULT_DESCRIPTION_FORMAT, DEFAULT_NORMAL_HERITAGE_WEIGHT
from npc_generator.models.enums import AgeRange
from npc_generator.models.records import Ancestry, Archetype, Background, Heritage
from npc_generator.models.weights import WeightMap


NameTables = dict[str, dict[str, WeightMap[str]]]
"""First-name tables keyed by trait, then by sex."""


# =============================================================================
# Presets & Templates
# =============================================================================


class WeightPreset(BaseModel):
    """A named set of weight overrides applied while sampling.

    Overrides are keyed by ancestry or heritage name and replace the
    stored weight for that draw only.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    ancestry_weights: WeightMap[str] = Field(default_factory=WeightMap)
    heritage_weights: WeightMap[str] = Field(default_factory=WeightMap)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeightPreset):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(("preset", self.name))


class GeneratorTemplates(BaseModel):
    """Template sources shared by every generator."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    description_line: str = DEFAULT_DESCRIPTION_FORMAT


# =============================================================================
# Generator Data
# =============================================================================


class GeneratorData(BaseModel):
    """Every table a generator draws from.

    The bundle is frozen after loading and may be read by any number of
    generators at once.

    Attributes:
        ancestries: Weighted ancestry table.
        normal_heritage_weight: Chance that a character has no heritage.
        versatile_heritages: Weighted heritage table.
        backgrounds: Background table; weights are used only when
            weighted background selection is enabled.
        names: First-name tables keyed by trait and sex.
        archetypes: Fixed statblocks, sorted by level.
        presets: Named weight presets.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ancestries: WeightMap[Ancestry] = Field(default_factory=WeightMap)
    normal_heritage_weight: Annotated[float, Field(ge=0.0, le=1.0)] = DEFAULT_NORMAL_HERITAGE_WEIGHT
    versatile_heritages: WeightMap[Heritage] = Field(default_factory=WeightMap)
    backgrounds: WeightMap[Background] = Field(default_factory=WeightMap)
    names: NameTables = Field(default_factory=dict)
    archetypes: list[Archetype] = Field(default_factory=list)
    presets: list[WeightPreset] = Field(default_factory=list)

    @field_validator("archetypes")
    @classmethod
    def sort_archetypes(cls, v: list[Archetype]) -> list[Archetype]:
        """Keep archetypes ordered by level, then name."""
        return sorted(v, key=lambda archetype: (archetype.level, archetype.name))

    def find_ancestry(self, name: str) -> Ancestry | None:
        """Look up an ancestry by name (case-insensitive)."""
        return _find_by_name(self.ancestries, name)

    def find_heritage(self, name: str) -> Heritage | None:
        """Look up a versatile heritage by name (case-insensitive)."""
        return _find_by_name(self.versatile_heritages, name)

    def find_background(self, name: str) -> Background | None:
        """Look up a background by name (case-insensitive)."""
        return _find_by_name(self.backgrounds, name)

    def find_archetype(self, name: str) -> Archetype | None:
        """Look up an archetype by name (case-insensitive)."""
        return _find_by_name(self.archetypes, name)

    def find_preset(self, name: str) -> WeightPreset | None:
        """Look up a weight preset by name (case-insensitive)."""
        return _find_by_name(self.presets, name)


def _find_by_name(records: Iterable[Any], name: str) -> Any:
    wanted = name.casefold()
    for record in records:
        if record.name.casefold() == wanted:
            return record
    return None


# =============================================================================
# Options
# =============================================================================


class NpcOptions(BaseModel):
    """Caller overrides for a single generation.

    Any field left as None is drawn at random. Setting ``no_heritage``
    pins the heritage to "none" without a Bernoulli trial.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ancestry: Ancestry | None = None
    heritage: Heritage | None = None
    no_heritage: bool = False
    background: Background | None = None
    archetype: Archetype | None = None
    age_range: AgeRange | None = None
    sex: str | None = None
    ancestry_weights: WeightMap[str] | None = None
    level: int | None = Field(default=None, ge=-1, le=25)
    enable_flavor_text: bool = True

    @model_validator(mode="after")
    def check_heritage(self) -> NpcOptions:
        """Reject a pinned heritage combined with an explicit 'no heritage'."""
        if self.heritage is not None and self.no_heritage:
            raise ValueError("heritage and no_heritage are mutually exclusive")
        return self

    @property
    def heritage_is_pinned(self) -> bool:
        """Whether the caller decided the heritage question."""
        return self.no_heritage or self.heritage is not None


__all__ = [
    "NameTables",
    "WeightPreset",
    "GeneratorTemplates",
    "GeneratorData",
    "NpcOptions",
]
