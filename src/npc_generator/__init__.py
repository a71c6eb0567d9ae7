"""npc_generator - Procedural Pathfinder 2e NPC builder.

Draws an ancestry, heritage, background (or archetype), sex, age and name
from weighted tables, allocates ability scores, derives proficiencies and
combat numbers, and writes narrative flavor text.

Example:
    >>> import random
    >>> from npc_generator import Generator, NpcOptions, load_generator_data
    >>>
    >>> data = load_generator_data("data")
    >>> generator = Generator(random.Random(7), data)
    >>> statblock = generator.generate(NpcOptions())
    >>> print(statblock.render_sheet())

Modules:
    core: Configuration, logging, constants and exceptions.
    models: Pydantic V2 records, weighted tables and the Statblock.
    engine: Ability allocation, proficiencies, flavor text, Generator.
    storage: Loading data sets from directories and zip archives.
"""

from __future__ import annotations

# Core
from npc_generator.core.config import Settings, get_settings
from npc_generator.core.exceptions import GenerationError, NpcGeneratorError
from npc_generator.core.logging import configure_logging, get_logger

# Models
from npc_generator.models import (
    Ancestry,
    Archetype,
    Background,
    GeneratorData,
    GeneratorTemplates,
    Heritage,
    NpcFlavor,
    NpcOptions,
    Statblock,
    WeightMap,
    WeightPreset,
)

# Engine
from npc_generator.engine import (
    DistributionReport,
    Generator,
    TemplateEngine,
    sample_distribution,
)

# Storage
from npc_generator.storage import load_generator_data, load_templates


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "NpcGeneratorError",
    "GenerationError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Ancestry",
    "Heritage",
    "Background",
    "Archetype",
    "WeightMap",
    "WeightPreset",
    "GeneratorData",
    "GeneratorTemplates",
    "NpcOptions",
    "NpcFlavor",
    "Statblock",
    # Engine
    "Generator",
    "TemplateEngine",
    "DistributionReport",
    "sample_distribution",
    # Storage
    "load_generator_data",
    "load_templates",
]
