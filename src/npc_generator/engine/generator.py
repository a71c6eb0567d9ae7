"""Character generation.

The Generator owns one random source and reads shared, frozen
GeneratorData. A build is a fixed sequence of decisions:

    ancestry -> heritage -> background -> sex -> age -> traits
    -> name -> mechanics -> flavor

Every decision draws from its own random.Random, seeded from the
Generator's source, and that seed is taken even when the caller pins
the decision. Pinning one field therefore never changes what later
decisions draw.
"""

from __future__ import annotations

import random

from npc_generator.core.config import GenerationSettings, get_settings
from npc_generator.core.constants import SEXES
from npc_generator.core.exceptions import (
    AgeGenerationError,
    AncestryGenerationError,
    BackgroundGenerationError,
    HeritageGenerationError,
    SexGenerationError,
    WeightedError,
)
from npc_generator.core.logging import bind_context, get_logger, unbind_context
from npc_generator.engine.abilities import allocate_ability_scores
from npc_generator.engine.flavor import build_flavor, generate_name
from npc_generator.engine.proficiency import derive_mechanics
from npc_generator.engine.templates import TemplateEngine
from npc_generator.models.enums import AgeRange
from npc_generator.models.options import GeneratorData, GeneratorTemplates, NpcOptions, WeightPreset
from npc_generator.models.records import Ancestry, Background, Heritage
from npc_generator.models.statblock import Statblock


logger = get_logger(__name__)


class Generator:
    """Builds statblocks from generator data.

    A Generator is used from one thread at a time. To generate in
    parallel, give each worker its own Generator over the same data.

    Example:
        >>> generator = Generator(random.Random(42), data)
        >>> statblock = generator.generate(NpcOptions(enable_flavor_text=False))
        >>> print(statblock.render_sheet())
    """

    def __init__(
        self,
        rng: random.Random,
        data: GeneratorData,
        templates: GeneratorTemplates | None = None,
        *,
        engine: TemplateEngine | None = None,
        settings: GenerationSettings | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            rng: Random source owned by this generator.
            data: Shared generator data; never modified.
            templates: Template sources; defaults to the built-in ones.
            engine: Template engine; a private one is created if omitted.
            settings: Generation settings; defaults to the global settings.
        """
        self._rng = rng
        self.data = data
        self.templates = templates or GeneratorTemplates()
        self.engine = engine or TemplateEngine()
        self.settings = settings or get_settings().generation

    def _fork(self) -> random.Random:
        return random.Random(self._rng.getrandbits(64))

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate(
        self,
        options: NpcOptions | None = None,
        weight_preset: WeightPreset | None = None,
    ) -> Statblock:
        """Generate one character.

        The ancestry and heritage names stay bound to the logging context
        for the rest of the build.

        Args:
            options: Caller overrides; everything not pinned is drawn.
            weight_preset: Optional ancestry and heritage weight overrides.

        Returns:
            The completed statblock.

        Raises:
            GenerationError: A subclass naming the decision that failed.
        """
        options = options or NpcOptions()

        ancestry_rng = self._fork()
        if options.ancestry is not None:
            ancestry = options.ancestry
        else:
            ancestry = self.generate_ancestry(ancestry_rng, options, weight_preset)

        heritage_rng = self._fork()
        if options.heritage_is_pinned:
            heritage = options.heritage
        else:
            heritage = self.generate_heritage(heritage_rng, ancestry, weight_preset)

        bind_context(
            ancestry=ancestry.name,
            heritage=heritage.name if heritage is not None else None,
        )
        try:
            return self._build(options, ancestry, heritage)
        finally:
            unbind_context("ancestry", "heritage")

    def _build(
        self,
        options: NpcOptions,
        ancestry: Ancestry,
        heritage: Heritage | None,
    ) -> Statblock:
        background_rng = self._fork()
        if options.archetype is not None:
            background = Background.placeholder(options.archetype.name)
        elif options.background is not None:
            background = options.background
        else:
            background = self.generate_background(background_rng)

        sex_rng = self._fork()
        if options.sex is not None:
            sex = options.sex
        elif ancestry.is_asexual:
            sex = ""
        else:
            sex = self.generate_sex(sex_rng)

        age_rng = self._fork()
        age_range, age = self.generate_age(age_rng, ancestry, options.age_range)

        traits = self.collect_traits(ancestry, heritage)

        names_rng = self._fork()
        name = ""
        if options.enable_flavor_text:
            name = generate_name(names_rng, self.engine, ancestry, traits, self.data.names, sex)
            name = generate_name(names_rng, self.engine, ancestry, traits, self.data.names, sex)

        statblock = Statblock().with_identity(
            name=name,
            age=age,
            age_range=age_range,
            sex=sex,
            traits=traits,
        )

        stats_rng = self._fork()
        if options.archetype is not None:
            statblock = statblock.with_archetype(options.archetype)
        else:
            level = options.level if options.level is not None else self.settings.default_level
            attributes, _ = allocate_ability_scores(stats_rng, ancestry.ability_modifications)
            mechanics = derive_mechanics(
                stats_rng,
                attributes,
                ancestry,
                background,
                level,
                retry_budget=self.settings.skill_retry_budget,
            )
            statblock = statblock.with_mechanics(
                level=level,
                attributes=attributes,
                proficiencies=mechanics.proficiencies,
                skills=mechanics.skills,
                perception=mechanics.perception,
                armor_class=mechanics.armor_class,
                fortitude_save=mechanics.fortitude_save,
                reflex_save=mechanics.reflex_save,
                will_save=mechanics.will_save,
                hit_points=mechanics.hit_points,
                land_speed=mechanics.land_speed,
            )

        statblock = statblock.with_origin(
            ancestry=ancestry,
            heritage=heritage,
            class_name=background.name,
        )

        flavor_rng = self._fork()
        if options.enable_flavor_text:
            flavor = build_flavor(
                flavor_rng,
                self.engine,
                self.templates,
                statblock,
                ancestry,
                heritage,
                job=background.name,
            )
            statblock = statblock.with_flavor(flavor)

        logger.debug(
            "Generated NPC",
            background=background.name,
            age=age,
        )
        return statblock

    # -------------------------------------------------------------------------
    # Decisions
    # -------------------------------------------------------------------------

    def generate_ancestry(
        self,
        rng: random.Random,
        options: NpcOptions,
        weight_preset: WeightPreset | None = None,
    ) -> Ancestry:
        """Draw an ancestry.

        Per-call weights in ``options`` take precedence over the preset.

        Raises:
            AncestryGenerationError: If the ancestry table cannot be sampled.
        """
        overrides = options.ancestry_weights
        if overrides is None and weight_preset is not None:
            overrides = weight_preset.ancestry_weights

        try:
            if overrides is None:
                return self.data.ancestries.sample(rng)
            return self.data.ancestries.sample(rng, lambda ancestry: overrides.get(ancestry.name))
        except WeightedError as e:
            raise AncestryGenerationError("Cannot draw an ancestry") from e

    def generate_heritage(
        self,
        rng: random.Random,
        ancestry: Ancestry,
        weight_preset: WeightPreset | None = None,
    ) -> Heritage | None:
        """Decide whether the character has a heritage, and draw it.

        Returns:
            None for a normal lineage, including when no heritage admits
            the ancestry, otherwise a versatile heritage.

        Raises:
            HeritageGenerationError: If the normal-lineage probability is
                invalid or the heritage table cannot be sampled.
        """
        probability = self.data.normal_heritage_weight
        if not 0.0 <= probability <= 1.0:
            raise HeritageGenerationError(
                "Normal heritage weight is not a probability",
                details={"normal_heritage_weight": probability},
            )
        if rng.random() < probability:
            return None

        enforce = self.settings.enforce_heritage_ancestry
        preset_weights = weight_preset.heritage_weights if weight_preset is not None else None

        def weight_of(heritage: Heritage) -> int | None:
            if enforce and not heritage.admits(ancestry):
                return 0
            if preset_weights is not None:
                return preset_weights.get(heritage.name)
            return None

        heritages = self.data.versatile_heritages
        if enforce and heritages and not any(h.admits(ancestry) for h in heritages):
            logger.debug("No heritage admits ancestry", ancestry=ancestry.name)
            return None

        try:
            return heritages.sample(rng, weight_of)
        except WeightedError as e:
            raise HeritageGenerationError(
                f"Cannot draw a heritage for {ancestry.name}",
            ) from e

    def generate_background(self, rng: random.Random) -> Background:
        """Draw a background, uniformly unless weighted selection is enabled.

        Raises:
            BackgroundGenerationError: If there are no backgrounds.
        """
        backgrounds = self.data.backgrounds.keys()
        if not backgrounds:
            raise BackgroundGenerationError("No backgrounds to choose from")
        if not self.settings.weighted_backgrounds:
            return rng.choice(backgrounds)
        try:
            return self.data.backgrounds.sample(rng)
        except WeightedError as e:
            raise BackgroundGenerationError("Cannot draw a weighted background") from e

    def generate_sex(self, rng: random.Random) -> str:
        """Draw a sex uniformly.

        Raises:
            SexGenerationError: If there is nothing to choose from.
        """
        if not SEXES:
            raise SexGenerationError("No sexes to choose from")
        return rng.choice(SEXES)

    def generate_age(
        self,
        rng: random.Random,
        ancestry: Ancestry,
        age_range: AgeRange | None = None,
    ) -> tuple[AgeRange, int]:
        """Draw an age range (unless given) and an age inside it.

        Raises:
            AgeGenerationError: If the age-range table cannot be sampled
                or the chosen range contains no ages.
        """
        if age_range is None:
            try:
                age_range = ancestry.age_range_distribution.sample(rng)
            except WeightedError as e:
                raise AgeGenerationError(f"Cannot draw an age range for {ancestry.name}") from e

        start, stop = ancestry.age_ranges.bounds(age_range)
        if start >= stop:
            raise AgeGenerationError(
                f"Age range {age_range} is empty for {ancestry.name}",
                details={"start": start, "stop": stop},
            )
        return age_range, rng.randrange(start, stop)

    @staticmethod
    def collect_traits(ancestry: Ancestry, heritage: Heritage | None) -> list[str]:
        """Union of ancestry, heritage and size traits, sorted."""
        traits = set(ancestry.traits)
        if heritage is not None:
            traits.update(heritage.traits)
        traits.add(ancestry.size_trait)
        return sorted(traits)


__all__ = ["Generator"]
