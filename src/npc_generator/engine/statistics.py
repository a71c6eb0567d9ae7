"""Population statistics over many generated characters.

Runs generators on a thread pool and counts how often each ancestry and
heritage comes up. Every worker owns its Generator and random source;
only the shared counters are locked.
"""

from __future__ import annotations

import random
import threading
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from npc_generator.core.config import GenerationSettings
from npc_generator.core.constants import NO_HERITAGE_LABEL
from npc_generator.core.exceptions import GenerationError
from npc_generator.core.logging import get_logger
from npc_generator.engine.generator import Generator
from npc_generator.engine.templates import TemplateEngine
from npc_generator.models.options import GeneratorData, NpcOptions, WeightPreset


logger = get_logger(__name__)


@dataclass
class DistributionReport:
    """Aggregated counts from a sampling run.

    Attributes:
        sample_size: Number of generations attempted.
        ancestries: Successful generations per ancestry name.
        heritages: Successful generations per heritage name, with
            characters without a heritage counted as "Normal".
        errors: Failed generations per error class name.
    """

    sample_size: int = 0
    ancestries: Counter[str] = field(default_factory=Counter)
    heritages: Counter[str] = field(default_factory=Counter)
    errors: Counter[str] = field(default_factory=Counter)

    @property
    def successes(self) -> int:
        return sum(self.ancestries.values())

    @property
    def failures(self) -> int:
        return sum(self.errors.values())

    @staticmethod
    def _percentages(counts: Counter[str], total: int) -> list[tuple[str, float]]:
        if total <= 0:
            return []
        return [(name, 100.0 * count / total) for name, count in counts.most_common()]

    def ancestry_percentages(self) -> list[tuple[str, float]]:
        """Ancestry shares of the successful generations, most common first."""
        return self._percentages(self.ancestries, self.successes)

    def heritage_percentages(self) -> list[tuple[str, float]]:
        """Heritage shares of the successful generations, most common first."""
        return self._percentages(self.heritages, self.successes)

    def render(self) -> str:
        """Format the report as plain text."""
        lines = [f"Sample size: {self.sample_size}", "", "Ancestries:"]
        lines.extend(f"  {name}: {share:.2f}%" for name, share in self.ancestry_percentages())
        lines.extend(["", "Heritages:"])
        lines.extend(f"  {name}: {share:.2f}%" for name, share in self.heritage_percentages())
        if self.errors:
            lines.extend(["", "Errors:"])
            lines.extend(f"  {name}: {count}" for name, count in self.errors.most_common())
        return "\n".join(lines)


def _split(total: int, parts: int) -> list[int]:
    base, extra = divmod(total, parts)
    return [base + (1 if i < extra else 0) for i in range(parts)]


def sample_distribution(
    data: GeneratorData,
    sample_size: int,
    *,
    workers: int = 4,
    seed: int | None = None,
    weight_preset: WeightPreset | None = None,
    settings: GenerationSettings | None = None,
) -> DistributionReport:
    """Generate many characters and count ancestries and heritages.

    Flavor text is disabled so only the draws that shape the population
    run.

    Args:
        data: Shared generator data.
        sample_size: Number of characters to generate.
        workers: Number of worker threads.
        seed: Master seed; each worker is seeded from it.
        weight_preset: Optional weight overrides for every generation.
        settings: Generation settings passed to each generator.

    Returns:
        The aggregated report.

    Raises:
        ValueError: If sample_size is negative or workers is not positive.
    """
    if sample_size < 0:
        raise ValueError(f"sample_size must not be negative, got {sample_size}")
    if workers < 1:
        raise ValueError(f"workers must be positive, got {workers}")

    master = random.Random(seed)
    worker_seeds = [master.getrandbits(64) for _ in range(workers)]
    engine = TemplateEngine()
    options = NpcOptions(enable_flavor_text=False)

    report = DistributionReport(sample_size=sample_size)
    lock = threading.Lock()

    def run(worker_seed: int, count: int) -> None:
        generator = Generator(
            random.Random(worker_seed),
            data,
            engine=engine,
            settings=settings,
        )
        ancestries: Counter[str] = Counter()
        heritages: Counter[str] = Counter()
        errors: Counter[str] = Counter()
        for _ in range(count):
            try:
                statblock = generator.generate(options, weight_preset)
            except GenerationError as e:
                errors[type(e).__name__] += 1
                continue
            ancestries[statblock.ancestry.name if statblock.ancestry else "Unknown"] += 1
            heritages[statblock.heritage.name if statblock.heritage else NO_HERITAGE_LABEL] += 1

        with lock:
            report.ancestries.update(ancestries)
            report.heritages.update(heritages)
            report.errors.update(errors)

    logger.info("Sampling distribution", sample_size=sample_size, workers=workers, seed=seed)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(run, worker_seed, count)
            for worker_seed, count in zip(worker_seeds, _split(sample_size, workers))
        ]
        for future in futures:
            future.result()

    if report.failures:
        logger.warning("Some generations failed", failures=report.failures)
    return report


__all__ = [
    "DistributionReport",
    "sample_distribution",
]
