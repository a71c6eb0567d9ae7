"""Domain records loaded from generator data.

These models describe the building blocks a character is assembled from:
ancestries, heritages, backgrounds and archetypes, plus the small value
types they are made of. All records are frozen once validated. Ancestries,
heritages and backgrounds compare and hash by name, so a record loaded
twice (once as a table key, once as a caller override) is the same record.

The two sum types follow a tagged-union layout:

- AbilityModification: Boost(ability) | Flaw(ability) | Free
- ValidAncestries: AnyAncestry | AllOf(traits) | Only(ancestries)
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    model_validator,
)

from npc_generator.core.constants import (
    DEFAULT_FULL_NAME_FORMAT,
    DEFAULT_HAIR_SUBSTANCE,
    DEFAULT_LINEAGE_FORMAT,
    DEFAULT_SKIN_SUBSTANCE,
)
from npc_generator.models.enums import Ability, AgeRange, AnySkill, Mutation, Size
from npc_generator.models.weights import WeightMap


# =============================================================================
# Type Definitions
# =============================================================================


Trait = Annotated[str, Field(min_length=1, description="Trait label, e.g. 'Human'")]
Sense = Annotated[str, Field(min_length=1, description="Sense, e.g. 'low-light vision'")]
Probability = Annotated[float, Field(ge=0.0, le=1.0)]


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# =============================================================================
# Ability Modifications
# =============================================================================


class Boost(_Record):
    """A fixed +1 to one ability."""

    kind: Literal["boost"] = "boost"
    ability: Ability


class Flaw(_Record):
    """A fixed -1 to one ability."""

    kind: Literal["flaw"] = "flaw"
    ability: Ability


class Free(_Record):
    """A +1 to a randomly drawn ability."""

    kind: Literal["free"] = "free"


def _parse_ability_modification(value: Any) -> Any:
    # Shorthand forms: "free", {"boost": "strength"}, {"flaw": "wisdom"}
    if isinstance(value, str) and value.strip().lower() == "free":
        return {"kind": "free"}
    if isinstance(value, dict) and "kind" not in value and len(value) == 1:
        ((kind, ability),) = value.items()
        if isinstance(kind, str) and kind.lower() in ("boost", "flaw"):
            return {"kind": kind.lower(), "ability": ability}
    return value


AbilityModification = Annotated[
    Boost | Flaw | Free,
    BeforeValidator(_parse_ability_modification),
]
"""One entry of an ancestry's ability-modification program."""


class AbilityStats(_Record):
    """Ability modifiers for all six abilities."""

    strength: int = 0
    dexterity: int = 0
    constitution: int = 0
    intelligence: int = 0
    wisdom: int = 0
    charisma: int = 0

    def get(self, ability: Ability) -> int:
        """Get the modifier of one ability."""
        return getattr(self, ability.value)

    @classmethod
    def from_mapping(cls, values: dict[Ability, int]) -> AbilityStats:
        """Build stats from an ability-keyed mapping; missing abilities are 0."""
        return cls(**{ability.value: value for ability, value in values.items()})

    def total(self) -> int:
        """Sum of all six modifiers."""
        return sum(self.get(ability) for ability in Ability)


# =============================================================================
# Ancestry Constraints
# =============================================================================


class AnyAncestry(_Record):
    """Admits every ancestry."""

    kind: Literal["any"] = "any"

    def admits(self, ancestry: Ancestry) -> bool:
        return True


class AllOf(_Record):
    """Admits ancestries carrying every listed trait."""

    kind: Literal["all_of"] = "all_of"
    traits: list[Trait] = Field(default_factory=list)

    def admits(self, ancestry: Ancestry) -> bool:
        return set(self.traits).issubset(ancestry.traits)


class Only(_Record):
    """Admits the listed ancestries by name."""

    kind: Literal["only"] = "only"
    ancestries: list[str] = Field(default_factory=list)

    def admits(self, ancestry: Ancestry) -> bool:
        return ancestry.name in self.ancestries


def _parse_valid_ancestries(value: Any) -> Any:
    if isinstance(value, str) and value.strip().lower() == "any":
        return {"kind": "any"}
    if isinstance(value, dict) and "kind" not in value and len(value) == 1:
        ((kind, entries),) = value.items()
        if kind in ("all_of", "AllOf"):
            return {"kind": "all_of", "traits": entries}
        if kind in ("only", "Only"):
            return {"kind": "only", "ancestries": entries}
    return value


ValidAncestries = Annotated[
    AnyAncestry | AllOf | Only,
    BeforeValidator(_parse_valid_ancestries),
]
"""Which ancestries a versatile heritage may be combined with."""


# =============================================================================
# Supporting Records
# =============================================================================


class Language(_Record):
    """A spoken language."""

    name: str = Field(min_length=1)
    traits: list[Trait] = Field(default_factory=list)

    def __str__(self) -> str:
        return self.name


class AgeRanges(_Record):
    """Cut points splitting an ancestry's age axis into seven ranges.

    Each range is a half-open interval starting at its own cut point and
    ending at the next one. Infant starts at 0 and Venerable runs up to and
    including the lifespan.

    Attributes:
        child: First age of the Child range.
        youth: First age of the Youth range.
        adulthood: First age of the Adult range.
        middle_age: First age of the Middle Aged range.
        old: First age of the Old range.
        venerable: First age of the Venerable range.
        lifespan: Oldest possible age.
    """

    child: int = Field(ge=0)
    youth: int = Field(ge=0)
    adulthood: int = Field(ge=0)
    middle_age: int = Field(ge=0)
    old: int = Field(ge=0)
    venerable: int = Field(ge=0)
    lifespan: int = Field(ge=0)

    @model_validator(mode="after")
    def check_ordering(self) -> AgeRanges:
        """Ensure cut points never decrease."""
        cuts = [
            self.child,
            self.youth,
            self.adulthood,
            self.middle_age,
            self.old,
            self.venerable,
            self.lifespan,
        ]
        if any(later < earlier for earlier, later in zip(cuts, cuts[1:])):
            raise ValueError(f"Age cut points must be non-decreasing, got {cuts}")
        return self

    def bounds(self, age_range: AgeRange) -> tuple[int, int]:
        """Get the half-open [start, stop) interval of an age range.

        Args:
            age_range: The range to look up.

        Returns:
            A (start, stop) tuple; the interval is empty when start == stop.
        """
        intervals = {
            AgeRange.INFANT: (0, self.child),
            AgeRange.CHILD: (self.child, self.youth),
            AgeRange.YOUTH: (self.youth, self.adulthood),
            AgeRange.ADULT: (self.adulthood, self.middle_age),
            AgeRange.MIDDLE_AGED: (self.middle_age, self.old),
            AgeRange.OLD: (self.old, self.venerable),
            AgeRange.VENERABLE: (self.venerable, self.lifespan + 1),
        }
        return intervals[age_range]

    def range_of(self, age: int) -> AgeRange | None:
        """Find the range an age falls in, or None past the lifespan."""
        for age_range in AgeRange:
            start, stop = self.bounds(age_range)
            if start <= age < stop:
                return age_range
        return None


class NameFormats(_Record):
    """Templates used to assemble names for an ancestry."""

    full_name: str = DEFAULT_FULL_NAME_FORMAT


# =============================================================================
# Ancestry
# =============================================================================


class Ancestry(_Record):
    """A playable ancestry and the appearance tables drawn for it.

    Identity is the name: two ancestries with the same name are equal
    and hash alike regardless of their other fields.
    """

    name: str = Field(min_length=1)
    traits: list[Trait] = Field(default_factory=list)
    ability_modifications: list[AbilityModification] = Field(default_factory=list)
    languages: list[Language] = Field(default_factory=list)
    senses: list[Sense] = Field(default_factory=list)
    size: Size = Size.MEDIUM
    speed: int = Field(default=25, ge=0)
    base_hp: int = Field(default=8, ge=0)

    possible_eye_colors: WeightMap[str] | None = None
    possible_hair_colors: WeightMap[str] | None = None
    possible_hair_length: WeightMap[str] | None = None
    possible_hair_type: WeightMap[str] | None = None
    possible_skin_tone: WeightMap[str]
    possible_skin_texture: WeightMap[str]
    mutation_probabilities: dict[Mutation, Probability] = Field(default_factory=dict)
    specimen_surnames: WeightMap[str] | None = None

    age_ranges: AgeRanges
    age_range_distribution: WeightMap[AgeRange]

    is_asexual: bool = False
    hair_substance: str = DEFAULT_HAIR_SUBSTANCE
    skin_substance: str = DEFAULT_SKIN_SUBSTANCE
    prd_reference: str | None = None
    formats: NameFormats = Field(default_factory=NameFormats)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ancestry):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(("ancestry", self.name))

    @property
    def size_trait(self) -> str:
        """The trait every member of this ancestry gets from its size."""
        return self.size.display_name

    def mutation_probability(self, mutation: Mutation) -> float:
        """Get the chance of a mutation; unlisted mutations never occur."""
        return self.mutation_probabilities.get(mutation, 0.0)


# =============================================================================
# Heritage
# =============================================================================


class Heritage(_Record):
    """A versatile heritage layered over an ancestry."""

    name: str = Field(min_length=1)
    traits: list[Trait] = Field(default_factory=list)
    lineage: str | None = None
    lineage_format: str = DEFAULT_LINEAGE_FORMAT
    valid_ancestries: ValidAncestries = Field(default_factory=AnyAncestry)
    additional_eye_colors: WeightMap[str] = Field(default_factory=WeightMap)
    additional_hair_colors: WeightMap[str] = Field(default_factory=WeightMap)
    force_heterochromia: str | None = None
    prd_reference: str | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Heritage):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(("heritage", self.name))

    def admits(self, ancestry: Ancestry) -> bool:
        """Check whether this heritage may be combined with an ancestry."""
        return self.valid_ancestries.admits(ancestry)


# =============================================================================
# Background & Archetype
# =============================================================================


class Background(_Record):
    """A background and the skills it trains."""

    name: str = Field(min_length=1)
    traits: list[Trait] = Field(default_factory=list)
    trainings: list[AnySkill] = Field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Background):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(("background", self.name))

    @classmethod
    def placeholder(cls, name: str) -> Background:
        """Create a background carrying only a name.

        Used in place of a real background when an archetype supplies
        the character's mechanics.
        """
        return cls(name=name)


class Archetype(_Record):
    """A fixed statblock used instead of randomly derived mechanics."""

    name: str = Field(min_length=1)
    prd_reference: str | None = None
    level: int = Field(default=0, ge=-1, le=25)
    perception: int = 0
    languages: list[Language] = Field(default_factory=list)
    skills: dict[AnySkill, int] = Field(default_factory=dict)
    attributes: AbilityStats = Field(default_factory=AbilityStats)
    items: list[str] = Field(default_factory=list)
    armor_class: int = 10
    fortitude_save: int = 0
    reflex_save: int = 0
    will_save: int = 0
    hp: int = Field(default=1, ge=0)
    speed: int = Field(default=25, ge=0)
    actions: list[str] = Field(default_factory=list)


__all__ = [
    "Trait",
    "Sense",
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
]
