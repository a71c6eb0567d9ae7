"""Command-line entry point.

Examples:
    python -m npc_generator generate --data data --seed 7
    python -m npc_generator generate --data data.zip --archetype "Guard" --no-flavor
    python -m npc_generator statistics --data data --sample-size 100000 --workers 8
"""

from __future__ import annotations

import argparse
import random
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from npc_generator.core.config import get_settings
from npc_generator.core.exceptions import NpcGeneratorError
from npc_generator.core.logging import configure_logging, get_logger
from npc_generator.engine.generator import Generator
from npc_generator.engine.statistics import sample_distribution
from npc_generator.engine.templates import TemplateEngine
from npc_generator.models.options import GeneratorData, NpcOptions
from npc_generator.storage.loader import load_generator_data, load_templates


logger = get_logger(__name__)

T = TypeVar("T")


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="npc_generator",
        description="Generate Pathfinder 2e non-player characters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m npc_generator generate --data data --seed 7
  python -m npc_generator statistics --data data --sample-size 100000
        """,
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=settings.storage.data_path,
        help=f"Data directory or zip archive (default: {settings.storage.data_path})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible output",
    )
    parser.add_argument(
        "--preset",
        type=str,
        default=None,
        help="Name of a weight preset from presets.json",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate one character")
    generate.add_argument("--ancestry", type=str, default=None, help="Pin the ancestry")
    generate.add_argument("--heritage", type=str, default=None, help="Pin the heritage")
    generate.add_argument(
        "--no-heritage",
        action="store_true",
        help="Generate without a versatile heritage",
    )
    generate.add_argument("--background", type=str, default=None, help="Pin the background")
    generate.add_argument("--archetype", type=str, default=None, help="Use an archetype's stats")
    generate.add_argument("--sex", type=str, default=None, help="Pin the sex")
    generate.add_argument("--level", type=int, default=None, help="Character level")
    generate.add_argument(
        "--no-flavor",
        action="store_true",
        help="Skip name and flavor text",
    )

    statistics = subparsers.add_parser(
        "statistics",
        help="Sample many characters and print population percentages",
    )
    statistics.add_argument(
        "--sample-size",
        type=int,
        required=True,
        help="Number of characters to generate",
    )
    statistics.add_argument(
        "--workers",
        type=int,
        default=4,
        help="Worker threads (default: 4)",
    )

    return parser.parse_args(argv)


def _lookup(kind: str, name: str | None, finder: Callable[[str], T | None]) -> T | None:
    if name is None:
        return None
    found = finder(name)
    if found is None:
        raise NpcGeneratorError(f"Unknown {kind}: {name}", details={kind: name})
    return found


def build_options(args: argparse.Namespace, data: GeneratorData) -> NpcOptions:
    """Translate command line overrides into NpcOptions."""
    return NpcOptions(
        ancestry=_lookup("ancestry", args.ancestry, data.find_ancestry),
        heritage=_lookup("heritage", args.heritage, data.find_heritage),
        no_heritage=args.no_heritage,
        background=_lookup("background", args.background, data.find_background),
        archetype=_lookup("archetype", args.archetype, data.find_archetype),
        sex=args.sex,
        level=args.level,
        enable_flavor_text=not args.no_flavor,
    )


def run_generate(args: argparse.Namespace) -> int:
    data = load_generator_data(args.data)
    templates = load_templates(args.data)
    preset = _lookup("preset", args.preset, data.find_preset)

    generator = Generator(random.Random(args.seed), data, templates, engine=TemplateEngine())
    statblock = generator.generate(build_options(args, data), preset)
    print(statblock.render_sheet())
    return 0


def run_statistics(args: argparse.Namespace) -> int:
    data = load_generator_data(args.data)
    preset = _lookup("preset", args.preset, data.find_preset)

    report = sample_distribution(
        data,
        args.sample_size,
        workers=args.workers,
        seed=args.seed,
        weight_preset=preset,
    )
    print(report.render())
    return 1 if report.failures else 0


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface.

    Returns:
        Process exit code.
    """
    args = parse_arguments(argv)
    settings = get_settings()
    configure_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        json_format=settings.json_logs,
    )

    commands = {
        "generate": run_generate,
        "statistics": run_statistics,
    }
    try:
        return commands[args.command](args)
    except (NpcGeneratorError, ValueError) as e:
        logger.error("Command failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
