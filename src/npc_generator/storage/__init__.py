"""Storage module for loading generator data sets.

Data sets are JSON files in a directory or a zip archive.
"""

from npc_generator.storage.loader import (
    DataSource,
    DirectorySource,
    ZipSource,
    load_generator_data,
    load_templates,
    open_source,
)

__all__ = [
    "DataSource",
    "DirectorySource",
    "ZipSource",
    "open_source",
    "load_generator_data",
    "load_templates",
]
