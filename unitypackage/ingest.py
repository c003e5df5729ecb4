from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from .constants import IDENTIFIER_FIELD, META_SUFFIX
from .entries import Entry, EntryTable
from .errors import FormatError, MissingMetaError
from .metadoc import YamlMetaCodec, identifier_of


logger = logging.getLogger(__name__)

PathArg = Union[str, "os.PathLike[str]"]


class LocalFilesystem:
    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def read_bytes(self, path: str) -> bytes:
        with open(path, "rb") as fh:
            return fh.read()


@dataclass
class IngestReport:
    added: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class Ingestor:
    """Admit assets from the filesystem into an :class:`EntryTable`.

    Every asset needs a companion ``<asset>.meta`` file holding its GUID.
    When it is missing, strict mode raises :class:`MissingMetaError` and stops
    the batch; lenient mode logs a warning, records it in the report and moves
    on to the next path.
    """

    def __init__(
        self,
        table: EntryTable,
        *,
        strict_missing_meta: bool = True,
        identifier_field: str = IDENTIFIER_FIELD,
        meta_codec: Optional[YamlMetaCodec] = None,
        fs: Optional[LocalFilesystem] = None,
    ):
        self.table = table
        self.strict_missing_meta = strict_missing_meta
        self.identifier_field = identifier_field
        self.meta_codec = meta_codec or YamlMetaCodec()
        self.fs = fs or LocalFilesystem()

    def add(self, files: Union[PathArg, Iterable[PathArg]]) -> IngestReport:
        if isinstance(files, (str, os.PathLike)):
            files = [files]
        report = IngestReport()
        for f in files:
            self._add_one(os.fspath(f), report)
        return report

    def _add_one(self, path: str, report: IngestReport) -> None:
        if os.path.splitext(path)[1] == META_SUFFIX:
            report.skipped.append(path)
            return
        meta_path = path + META_SUFFIX
        if not self.fs.is_file(meta_path):
            if self.strict_missing_meta:
                raise MissingMetaError(path)
            msg = f"no meta file for {path}"
            logger.warning(msg)
            report.warnings.append(msg)
            report.skipped.append(path)
            return

        try:
            meta = self.meta_codec.parse(self.fs.read_bytes(meta_path))
        except FormatError as exc:
            raise FormatError(f"{meta_path}: {exc}") from exc
        identifier = identifier_of(meta, self.identifier_field, path=meta_path)
        asset = self.fs.read_bytes(path) if self.fs.is_file(path) else None
        self.table.put(Entry(identifier=identifier, pathname=path, meta=meta, asset=asset))
        report.added.append(identifier)
