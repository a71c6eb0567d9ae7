"""Tests for generator data records."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from npc_generator.models import (
    Ability,
    AbilityModification,
    AbilityStats,
    AgeRange,
    AgeRanges,
    AllOf,
    Ancestry,
    AnyAncestry,
    Background,
    Boost,
    Flaw,
    Free,
    Heritage,
    Lore,
    Mutation,
    Only,
    Skill,
)


class TestAbilityModification:
    """Tests for ability-modification parsing."""

    adapter = TypeAdapter(list[AbilityModification])

    def test_tagged_forms(self) -> None:
        """Test the tagged mapping form."""
        parsed = self.adapter.validate_python(
            [{"kind": "boost", "ability": "strength"}, {"kind": "flaw", "ability": "wisdom"}]
        )
        assert parsed == [Boost(ability=Ability.STR), Flaw(ability=Ability.WIS)]

    def test_shorthand_forms(self) -> None:
        """Test "free" and single-key mappings."""
        parsed = self.adapter.validate_python(
            ["free", {"boost": "dexterity"}, {"Flaw": "charisma"}]
        )
        assert parsed == [Free(), Boost(ability=Ability.DEX), Flaw(ability=Ability.CHA)]

    def test_unknown_ability_rejected(self) -> None:
        """Test an unknown ability fails validation."""
        with pytest.raises(ValidationError):
            self.adapter.validate_python([{"boost": "luck"}])


class TestAbilityStats:
    """Tests for AbilityStats."""

    def test_get_and_total(self) -> None:
        """Test per-ability access and the total."""
        stats = AbilityStats.from_mapping({Ability.STR: 2, Ability.CHA: -1})
        assert stats.get(Ability.STR) == 2
        assert stats.get(Ability.DEX) == 0
        assert stats.total() == 1

    def test_frozen(self) -> None:
        """Test stats cannot be modified."""
        stats = AbilityStats()
        with pytest.raises(ValidationError):
            stats.strength = 3


class TestAgeRanges:
    """Tests for age-range intervals."""

    @pytest.mark.parametrize(
        ("age_range", "expected"),
        [
            (AgeRange.INFANT, (0, 1)),
            (AgeRange.CHILD, (1, 8)),
            (AgeRange.YOUTH, (8, 15)),
            (AgeRange.ADULT, (15, 35)),
            (AgeRange.MIDDLE_AGED, (35, 50)),
            (AgeRange.OLD, (50, 70)),
            (AgeRange.VENERABLE, (70, 91)),
        ],
    )
    def test_bounds(
        self,
        human_age_ranges: AgeRanges,
        age_range: AgeRange,
        expected: tuple[int, int],
    ) -> None:
        """Test ranges are half-open and Venerable includes the lifespan."""
        assert human_age_ranges.bounds(age_range) == expected

    def test_ranges_tile_the_lifespan(self, human_age_ranges: AgeRanges) -> None:
        """Test every age up to the lifespan falls in exactly one range."""
        for age in range(human_age_ranges.lifespan + 1):
            matching = [
                r
                for r in AgeRange
                if human_age_ranges.bounds(r)[0] <= age < human_age_ranges.bounds(r)[1]
            ]
            assert len(matching) == 1

    def test_range_of(self, human_age_ranges: AgeRanges) -> None:
        """Test finding the range of an age."""
        assert human_age_ranges.range_of(0) == AgeRange.INFANT
        assert human_age_ranges.range_of(34) == AgeRange.ADULT
        assert human_age_ranges.range_of(35) == AgeRange.MIDDLE_AGED
        assert human_age_ranges.range_of(90) == AgeRange.VENERABLE
        assert human_age_ranges.range_of(91) is None

    def test_empty_range_allowed(self) -> None:
        """Test equal cut points give an empty range."""
        ranges = AgeRanges(
            child=0, youth=0, adulthood=5, middle_age=5, old=10, venerable=20, lifespan=30
        )
        start, stop = ranges.bounds(AgeRange.INFANT)
        assert start == stop

    def test_decreasing_cut_points_rejected(self) -> None:
        """Test cut points must not decrease."""
        with pytest.raises(ValidationError, match="non-decreasing"):
            AgeRanges(
                child=5, youth=3, adulthood=10, middle_age=20, old=30, venerable=40, lifespan=50
            )


class TestAncestry:
    """Tests for the Ancestry record."""

    def test_equality_by_name(self, human: Ancestry, human_age_ranges: AgeRanges) -> None:
        """Test ancestries with the same name are equal and hash alike."""
        other = Ancestry(
            name="Human",
            age_ranges=human_age_ranges,
            age_range_distribution={AgeRange.ADULT: 1},
            possible_skin_tone={"pale": 1},
            possible_skin_texture={"smooth": 1},
        )
        assert other == human
        assert hash(other) == hash(human)
        assert {human: 1}[other] == 1

    def test_size_trait(self, human: Ancestry, leshy: Ancestry) -> None:
        """Test the size trait is the capitalized size."""
        assert human.size_trait == "Medium"
        assert leshy.size_trait == "Small"

    def test_missing_mutation_is_zero(self, elf: Ancestry) -> None:
        """Test unlisted mutations have probability 0."""
        assert elf.mutation_probability(Mutation.HETEROCHROMIA) == 0.0

    def test_mutation_probability_range(self, human_age_ranges: AgeRanges) -> None:
        """Test mutation probabilities must lie in [0, 1]."""
        with pytest.raises(ValidationError):
            Ancestry(
                name="Odd",
                mutation_probabilities={Mutation.HETEROCHROMIA: 1.5},
                age_ranges=human_age_ranges,
                age_range_distribution={AgeRange.ADULT: 1},
                possible_skin_tone={"pale": 1},
                possible_skin_texture={"smooth": 1},
            )

    def test_extra_fields_rejected(self, human_age_ranges: AgeRanges) -> None:
        """Test unknown fields fail validation."""
        with pytest.raises(ValidationError):
            Ancestry(
                name="Odd",
                wings=True,
                age_ranges=human_age_ranges,
                age_range_distribution={AgeRange.ADULT: 1},
                possible_skin_tone={"pale": 1},
                possible_skin_texture={"smooth": 1},
            )

    @pytest.mark.parametrize("field", ["possible_skin_tone", "possible_skin_texture"])
    def test_skin_tables_required(self, human_age_ranges: AgeRanges, field: str) -> None:
        """Test an ancestry without both skin tables fails validation."""
        values = {
            "name": "Odd",
            "age_ranges": human_age_ranges,
            "age_range_distribution": {AgeRange.ADULT: 1},
            "possible_skin_tone": {"pale": 1},
            "possible_skin_texture": {"smooth": 1},
        }
        del values[field]
        with pytest.raises(ValidationError, match=field):
            Ancestry.model_validate(values)

    def test_defaults(self, leshy: Ancestry) -> None:
        """Test optional tables default to absent."""
        assert leshy.possible_hair_colors is None
        assert leshy.possible_eye_colors is None
        assert leshy.hair_substance == "hair"
        assert leshy.formats.full_name == "{{ first_name }} {{ surname }}"


class TestValidAncestries:
    """Tests for heritage ancestry constraints."""

    def test_any(self, human: Ancestry, leshy: Ancestry) -> None:
        """Test AnyAncestry admits everything."""
        assert AnyAncestry().admits(human)
        assert AnyAncestry().admits(leshy)

    def test_all_of(self, human: Ancestry, leshy: Ancestry) -> None:
        """Test AllOf requires every listed trait."""
        constraint = AllOf(traits=["Plant", "Leshy"])
        assert constraint.admits(leshy)
        assert not constraint.admits(human)

    def test_only(self, human: Ancestry, elf: Ancestry) -> None:
        """Test Only is a name whitelist."""
        constraint = Only(ancestries=["Human"])
        assert constraint.admits(human)
        assert not constraint.admits(elf)

    def test_heritage_admits(self, half_elf: Heritage, human: Ancestry, elf: Ancestry) -> None:
        """Test the heritage delegates to its constraint."""
        assert half_elf.admits(human)
        assert not half_elf.admits(elf)

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("any", AnyAncestry()),
            ({"all_of": ["Plant"]}, AllOf(traits=["Plant"])),
            ({"only": ["Human", "Elf"]}, Only(ancestries=["Human", "Elf"])),
            ({"kind": "only", "ancestries": ["Dwarf"]}, Only(ancestries=["Dwarf"])),
        ],
    )
    def test_shorthand_parsing(self, raw: object, expected: object) -> None:
        """Test every accepted spelling of the constraint."""
        heritage = Heritage(name="Test", valid_ancestries=raw)
        assert heritage.valid_ancestries == expected

    def test_default_is_any(self) -> None:
        """Test heritages admit every ancestry by default."""
        assert isinstance(Heritage(name="Test").valid_ancestries, AnyAncestry)


class TestBackground:
    """Tests for the Background record."""

    def test_trainings_parsed(self) -> None:
        """Test training names are parsed into skills."""
        background = Background(name="Sailor", trainings=["Athletics", "Sailing Lore"])
        assert background.trainings == [Skill.ATHLETICS, Lore(topic="Sailing")]

    def test_placeholder(self) -> None:
        """Test placeholder backgrounds carry only a name."""
        background = Background.placeholder("Guard")
        assert background.name == "Guard"
        assert background.trainings == []

    def test_equality_by_name(self, farmhand: Background) -> None:
        """Test backgrounds compare by name."""
        assert Background(name="Farmhand") == farmhand
