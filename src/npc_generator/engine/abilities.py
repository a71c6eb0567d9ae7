"""Ability-score allocation.

Scores start at 0 and are raised in rounds. Within a round an ability
can be picked at most once:

- Ancestry round: the ancestry's fixed boosts and flaws, then its free
  boosts drawn from the abilities not yet picked this round.
- Two generic rounds of four free boosts each.

Scores are not clamped.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from npc_generator.core.constants import BOOSTS_PER_ROUND, GENERIC_BOOST_ROUNDS
from npc_generator.core.exceptions import AbilityGenerationError
from npc_generator.core.logging import get_logger
from npc_generator.models.enums import ABILITIES, Ability
from npc_generator.models.records import AbilityModification, AbilityStats, Boost, Flaw, Free


logger = get_logger(__name__)


@dataclass(frozen=True)
class AllocationRound:
    """What happened to each ability during one round.

    Attributes:
        boosted: Abilities raised by one, in the order they were applied.
        flawed: Abilities lowered by one.
        free: The subset of ``boosted`` that was drawn at random.
    """

    boosted: tuple[Ability, ...] = ()
    flawed: tuple[Ability, ...] = ()
    free: tuple[Ability, ...] = ()

    @property
    def chosen(self) -> tuple[Ability, ...]:
        """Every ability touched this round."""
        return self.boosted + self.flawed


@dataclass(frozen=True)
class AllocationTrace:
    """Per-round record of an allocation, ancestry round first."""

    rounds: tuple[AllocationRound, ...]

    @property
    def ancestry_round(self) -> AllocationRound:
        return self.rounds[0]

    @property
    def generic_rounds(self) -> tuple[AllocationRound, ...]:
        return self.rounds[1:]


def draw_free_ability(rng: random.Random, chosen: set[Ability]) -> Ability:
    """Draw an ability uniformly, re-drawing while it was already chosen.

    Args:
        rng: Random source to draw from.
        chosen: Abilities already picked this round.

    Returns:
        An ability not in ``chosen``.

    Raises:
        AbilityGenerationError: If every ability has been chosen.
    """
    if chosen.issuperset(ABILITIES):
        raise AbilityGenerationError(
            "No ability left to boost this round",
            details={"chosen": sorted(chosen)},
        )
    ability = rng.choice(ABILITIES)
    while ability in chosen:
        ability = rng.choice(ABILITIES)
    return ability


def _ancestry_round(
    rng: random.Random,
    program: Sequence[AbilityModification],
    scores: dict[Ability, int],
) -> AllocationRound:
    chosen: set[Ability] = set()
    boosted: list[Ability] = []
    flawed: list[Ability] = []
    free: list[Ability] = []

    for modification in program:
        if isinstance(modification, Free) or modification.ability in chosen:
            continue
        if isinstance(modification, Boost):
            scores[modification.ability] += 1
            boosted.append(modification.ability)
        elif isinstance(modification, Flaw):
            scores[modification.ability] -= 1
            flawed.append(modification.ability)
        chosen.add(modification.ability)

    for modification in program:
        if not isinstance(modification, Free):
            continue
        ability = draw_free_ability(rng, chosen)
        scores[ability] += 1
        chosen.add(ability)
        boosted.append(ability)
        free.append(ability)

    return AllocationRound(boosted=tuple(boosted), flawed=tuple(flawed), free=tuple(free))


def _generic_round(rng: random.Random, scores: dict[Ability, int]) -> AllocationRound:
    chosen: set[Ability] = set()
    boosted: list[Ability] = []
    for _ in range(BOOSTS_PER_ROUND):
        ability = draw_free_ability(rng, chosen)
        scores[ability] += 1
        chosen.add(ability)
        boosted.append(ability)
    return AllocationRound(boosted=tuple(boosted), free=tuple(boosted))


def allocate_ability_scores(
    rng: random.Random,
    program: Iterable[AbilityModification],
) -> tuple[AbilityStats, AllocationTrace]:
    """Allocate ability scores for a character.

    Args:
        rng: Random source for free boosts.
        program: The ancestry's ability-modification program.

    Returns:
        The final scores and a trace of every round.

    Raises:
        AbilityGenerationError: If a free boost has nothing left to pick.

    Example:
        >>> stats, trace = allocate_ability_scores(random.Random(1), [Free(), Free()])
        >>> stats.total()
        10
    """
    scores = {ability: 0 for ability in ABILITIES}
    rounds = [_ancestry_round(rng, list(program), scores)]
    for _ in range(GENERIC_BOOST_ROUNDS):
        rounds.append(_generic_round(rng, scores))

    stats = AbilityStats.from_mapping(scores)
    logger.debug("Allocated ability scores", **stats.model_dump())
    return stats, AllocationTrace(rounds=tuple(rounds))


__all__ = [
    "AllocationRound",
    "AllocationTrace",
    "allocate_ability_scores",
    "draw_free_ability",
]
