"""Integration tests for the command-line interface.

The full commands run in a subprocess so each invocation configures
logging from scratch.
"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

from npc_generator.__main__ import build_options, parse_arguments
from npc_generator.core.exceptions import NpcGeneratorError
from npc_generator.storage import load_generator_data


SRC_DIR = Path(__file__).resolve().parents[2] / "src"


def run_cli(*args: str, cwd: Path) -> subprocess.CompletedProcess[str]:
    env = {**os.environ, "PYTHONPATH": str(SRC_DIR)}
    return subprocess.run(
        [sys.executable, "-m", "npc_generator", *args],
        capture_output=True,
        text=True,
        cwd=cwd,
        env=env,
        timeout=120,
        check=False,
    )


# =============================================================================
# Argument Handling
# =============================================================================


class TestParseArguments:
    """Tests for argument parsing."""

    def test_generate(self, data_dir: Path) -> None:
        """Test generate options are parsed."""
        args = parse_arguments(
            [
                "--data", str(data_dir), "--seed", "7",
                "generate", "--ancestry", "Dwarf", "--no-flavor",
            ]
        )
        assert args.command == "generate"
        assert args.data == data_dir
        assert args.seed == 7
        assert args.ancestry == "Dwarf"
        assert args.no_flavor

    def test_statistics(self, data_dir: Path) -> None:
        """Test statistics options are parsed."""
        args = parse_arguments(["--data", str(data_dir), "statistics", "--sample-size", "10"])
        assert args.command == "statistics"
        assert args.sample_size == 10
        assert args.workers == 4

    def test_command_required(self) -> None:
        """Test a subcommand must be given."""
        with pytest.raises(SystemExit):
            parse_arguments([])


class TestBuildOptions:
    """Tests for translating arguments into options."""

    def test_lookups(self, data_dir: Path) -> None:
        """Test names are resolved case-insensitively."""
        data = load_generator_data(data_dir)
        args = parse_arguments(
            ["--data", str(data_dir), "generate", "--ancestry", "dwarf", "--background", "scholar"]
        )
        options = build_options(args, data)
        assert options.ancestry.name == "Dwarf"
        assert options.background.name == "Scholar"
        assert options.enable_flavor_text

    def test_unknown_name(self, data_dir: Path) -> None:
        """Test an unknown name raises NpcGeneratorError."""
        data = load_generator_data(data_dir)
        args = parse_arguments(["--data", str(data_dir), "generate", "--ancestry", "Dragon"])
        with pytest.raises(NpcGeneratorError, match="Unknown ancestry: Dragon"):
            build_options(args, data)


# =============================================================================
# Commands
# =============================================================================


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_prints_sheet(self, data_dir: Path, tmp_path: Path) -> None:
        """Test a seeded run prints a pf2e-stats sheet."""
        result = run_cli("--data", str(data_dir), "--seed", "7", "generate", cwd=tmp_path)

        assert result.returncode == 0, result.stderr
        assert result.stdout.startswith("```pf2e-stats\n")
        assert "**HP** " in result.stdout

    def test_reproducible(self, data_dir: Path, tmp_path: Path) -> None:
        """Test the same seed prints the same sheet."""
        first = run_cli("--data", str(data_dir), "--seed", "11", "generate", cwd=tmp_path)
        second = run_cli("--data", str(data_dir), "--seed", "11", "generate", cwd=tmp_path)
        assert first.stdout == second.stdout

    def test_archetype(self, data_dir: Path, tmp_path: Path) -> None:
        """Test an archetype run prints the archetype's numbers."""
        result = run_cli(
            "--data", str(data_dir), "generate", "--archetype", "guard", "--no-flavor",
            cwd=tmp_path,
        )
        assert result.returncode == 0, result.stderr
        assert "## Guard 1\n" in result.stdout
        assert "**AC** 18; **Fort** +10, **Ref** +7, **Will** +5\n" in result.stdout

    def test_unknown_archetype(self, data_dir: Path, tmp_path: Path) -> None:
        """Test an unknown name exits with an error."""
        result = run_cli("--data", str(data_dir), "generate", "--archetype", "Lich", cwd=tmp_path)
        assert result.returncode == 1
        assert "Unknown archetype: Lich" in result.stderr

    def test_missing_data(self, tmp_path: Path) -> None:
        """Test a missing data path exits with an error."""
        result = run_cli("--data", str(tmp_path / "nowhere"), "generate", cwd=tmp_path)
        assert result.returncode == 1
        assert "Data path does not exist" in result.stderr

    def test_broken_description_template(self, data_dir: Path, tmp_path: Path) -> None:
        """Test a template failing at render time exits with an error, not a traceback."""
        (data_dir / "templates").mkdir()
        (data_dir / "templates" / "description_line.j2").write_text("{{ age / 0 }}")

        result = run_cli("--data", str(data_dir), "--seed", "7", "generate", cwd=tmp_path)

        assert result.returncode == 1
        assert "Traceback" not in result.stderr
        assert "Description template failed" in result.stderr


class TestStatisticsCommand:
    """Tests for the statistics command."""

    def test_report(self, data_dir: Path, tmp_path: Path) -> None:
        """Test the report lists the sampled ancestries."""
        result = run_cli(
            "--data", str(data_dir), "--seed", "1", "statistics", "--sample-size", "50",
            cwd=tmp_path,
        )
        assert result.returncode == 0, result.stderr
        assert result.stdout.startswith("Sample size: 50\n")
        assert "Ancestries:" in result.stdout
        assert "Heritages:" in result.stdout

    def test_preset(self, data_dir: Path, tmp_path: Path) -> None:
        """Test a preset reweights the sample."""
        result = run_cli(
            "--data", str(data_dir), "--preset", "Dwarves only",
            "statistics", "--sample-size", "20", "--workers", "2",
            cwd=tmp_path,
        )
        assert result.returncode == 0, result.stderr
        assert "  Dwarf: 100.00%" in result.stdout

    def test_invalid_sample_size(self, data_dir: Path, tmp_path: Path) -> None:
        """Test a negative sample size exits with an error."""
        result = run_cli("--data", str(data_dir), "statistics", "--sample-size", "-5", cwd=tmp_path)
        assert result.returncode == 1
