from __future__ import annotations

from typing import Optional


class UnityPackageError(Exception):
    """Base class for unitypackage errors."""


# Decoding
class FormatError(UnityPackageError):
    pass


# Ingestion
class MissingMetaError(UnityPackageError):
    def __init__(self, path: str):
        super().__init__(f"no meta file for {path}")
        self.path = path


class MissingFieldError(UnityPackageError):
    def __init__(self, field: str, path: Optional[str] = None):
        where = f" in {path}" if path else ""
        super().__init__(f"meta document has no '{field}' field{where}")
        self.field = field
        self.path = path


# Encoding
class ValidationError(UnityPackageError):
    def __init__(self, identifier: str, message: str):
        super().__init__(f"{identifier}: {message}")
        self.identifier = identifier
