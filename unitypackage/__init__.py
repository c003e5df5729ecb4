"""
unitypackage: read and write Unity ``.unitypackage`` archives.

A package is a gzip-compressed tar stream. Each asset lives in a directory
named after its GUID holding up to three members:

- ``asset.meta``: the YAML meta document (always present)
- ``pathname``: the asset's path inside the Unity project
- ``asset``: the raw file contents (absent for folders)

The package keeps entries keyed by GUID and always writes them in ascending
GUID order with fixed modes and timestamps, so rewriting a package is
reproducible.
"""

from .entries import Entry, EntryTable
from .errors import (
    FormatError,
    MissingFieldError,
    MissingMetaError,
    UnityPackageError,
    ValidationError,
)
from .ingest import IngestReport, Ingestor
from .metadoc import YamlMetaCodec
from .package import UnityPackage
from .reader import ArchiveReader, read_package
from .writer import ArchiveWriter, write_package

__version__ = "0.1"

__all__ = [
    "ArchiveReader",
    "ArchiveWriter",
    "Entry",
    "EntryTable",
    "FormatError",
    "IngestReport",
    "Ingestor",
    "MissingFieldError",
    "MissingMetaError",
    "UnityPackage",
    "UnityPackageError",
    "ValidationError",
    "YamlMetaCodec",
    "read_package",
    "write_package",
]
