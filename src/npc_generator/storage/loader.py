"""Loading generator data from a directory or a zip archive.

Expected layout (the same inside an archive):

    ancestries.json              weighted ancestry entries
    heritages.json               weighted versatile heritage entries
    backgrounds.json             weighted background entries
    names.json                   {trait: {sex: {name: weight}}}
    archetypes.json              list of archetypes
    presets.json                 optional list of weight presets
    templates/description_line.j2  optional description template

Weighted files are lists of {"element": ..., "weight": ...} records.
"""

from __future__ import annotations

import zipfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from npc_generator.core.config import GenerationSettings, get_settings
from npc_generator.core.exceptions import DataLoadError
from npc_generator.core.logging import get_logger
from npc_generator.models.options import (
    GeneratorData,
    GeneratorTemplates,
    NameTables,
    WeightPreset,
)
from npc_generator.models.records import Ancestry, Archetype, Background, Heritage
from npc_generator.models.weights import WeightMap


logger = get_logger(__name__)

T = TypeVar("T")

ANCESTRIES_FILE = "ancestries.json"
HERITAGES_FILE = "heritages.json"
BACKGROUNDS_FILE = "backgrounds.json"
NAMES_FILE = "names.json"
ARCHETYPES_FILE = "archetypes.json"
PRESETS_FILE = "presets.json"
DESCRIPTION_TEMPLATE_FILE = "templates/description_line.j2"


# =============================================================================
# Sources
# =============================================================================


class DataSource(ABC):
    """Read-only access to the files of a data set."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @abstractmethod
    def read(self, name: str) -> bytes | None:
        """Read a member, or return None when it does not exist."""

    def close(self) -> None:
        """Release any open handles."""

    def __enter__(self) -> DataSource:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class DirectorySource(DataSource):
    """Data files stored in a directory."""

    def read(self, name: str) -> bytes | None:
        file_path = self.path / name
        if not file_path.is_file():
            return None
        try:
            return file_path.read_bytes()
        except OSError as e:
            raise DataLoadError(f"Cannot read {file_path}: {e}", source=str(file_path)) from e


class ZipSource(DataSource):
    """Data files stored in a zip archive."""

    def __init__(self, path: Path) -> None:
        super().__init__(path)
        try:
            self._archive = zipfile.ZipFile(path)
        except (OSError, zipfile.BadZipFile) as e:
            raise DataLoadError(f"Cannot open archive {path}: {e}", source=str(path)) from e
        self._members = set(self._archive.namelist())

    def read(self, name: str) -> bytes | None:
        if name not in self._members:
            return None
        return self._archive.read(name)

    def close(self) -> None:
        self._archive.close()


def open_source(path: str | Path) -> DataSource:
    """Open a directory or zip archive as a data source.

    Raises:
        DataLoadError: If the path does not exist or is not a usable archive.
    """
    path = Path(path)
    if path.is_dir():
        return DirectorySource(path)
    if path.is_file():
        return ZipSource(path)
    raise DataLoadError(f"Data path does not exist: {path}", source=str(path))


# =============================================================================
# Loading
# =============================================================================


def _parse(
    source: DataSource,
    name: str,
    adapter: TypeAdapter[T],
    *,
    required: bool = True,
) -> T | None:
    raw = source.read(name)
    if raw is None:
        if required:
            raise DataLoadError(f"Missing data file {name}", source=name)
        return None
    try:
        return adapter.validate_json(raw)
    except ValidationError as e:
        raise DataLoadError(
            f"Invalid data in {name}",
            source=name,
            details={"errors": e.error_count(), "first_error": e.errors()[0]["msg"]},
        ) from e


def load_generator_data(
    path: str | Path,
    *,
    settings: GenerationSettings | None = None,
) -> GeneratorData:
    """Load and validate a data set.

    Args:
        path: Data directory or zip archive.
        settings: Supplies the normal-lineage probability; defaults to the
            global settings.

    Returns:
        The frozen generator data.

    Raises:
        DataLoadError: If a required file is missing or invalid.
    """
    settings = settings or get_settings().generation
    with open_source(path) as source:
        ancestries = _parse(source, ANCESTRIES_FILE, TypeAdapter(WeightMap[Ancestry]))
        heritages = _parse(source, HERITAGES_FILE, TypeAdapter(WeightMap[Heritage]))
        backgrounds = _parse(source, BACKGROUNDS_FILE, TypeAdapter(WeightMap[Background]))
        names = _parse(source, NAMES_FILE, TypeAdapter(NameTables))
        archetypes = _parse(source, ARCHETYPES_FILE, TypeAdapter(list[Archetype]))
        presets = _parse(source, PRESETS_FILE, TypeAdapter(list[WeightPreset]), required=False)

    data = GeneratorData(
        ancestries=ancestries,
        normal_heritage_weight=settings.normal_heritage_weight,
        versatile_heritages=heritages,
        backgrounds=backgrounds,
        names=names,
        archetypes=archetypes,
        presets=presets or [],
    )
    logger.info(
        "Loaded generator data",
        path=str(path),
        ancestries=len(data.ancestries),
        heritages=len(data.versatile_heritages),
        backgrounds=len(data.backgrounds),
        archetypes=len(data.archetypes),
    )
    return data


def load_templates(path: str | Path) -> GeneratorTemplates:
    """Load template overrides, falling back to the built-in templates.

    Raises:
        DataLoadError: If the path cannot be opened or a template is not UTF-8.
    """
    with open_source(path) as source:
        raw = source.read(DESCRIPTION_TEMPLATE_FILE)
    if raw is None:
        return GeneratorTemplates()
    try:
        return GeneratorTemplates(description_line=raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise DataLoadError(
            "Description template is not valid UTF-8",
            source=DESCRIPTION_TEMPLATE_FILE,
        ) from e


__all__ = [
    "DataSource",
    "DirectorySource",
    "ZipSource",
    "open_source",
    "load_generator_data",
    "load_templates",
]
