from __future__ import annotations

from typing import Any, Optional

import yaml

from .constants import IDENTIFIER_FIELD
from .errors import FormatError, MissingFieldError


class YamlMetaCodec:
    """Parse and serialize ``.meta`` documents.

    Unity writes meta files as plain YAML mappings (``fileFormatVersion``,
    ``guid``, importer settings). Documents are loaded with the safe loader
    and dumped in block style with the original key order kept.
    """

    def __init__(self, *, allow_unicode: bool = True, width: Optional[int] = None):
        self.allow_unicode = allow_unicode
        self.width = width

    def parse(self, data: bytes) -> Any:
        try:
            return yaml.safe_load(data)
        except yaml.YAMLError as exc:
            raise FormatError(f"malformed meta document: {exc}") from exc

    def serialize(self, document: Any) -> bytes:
        text = yaml.safe_dump(
            document,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=self.allow_unicode,
            width=self.width,
        )
        return text.encode("utf-8")


def identifier_of(document: Any, field: str = IDENTIFIER_FIELD, *, path: Optional[str] = None) -> str:
    """Return the identifier stored under ``field`` in a parsed document."""
    if not isinstance(document, dict):
        raise MissingFieldError(field, path)
    value = document.get(field)
    if value is None or value == "":
        raise MissingFieldError(field, path)
    return str(value)
