from __future__ import annotations

import gzip
import io
import logging
import tarfile
from typing import BinaryIO, Optional

from .constants import (
    DEFAULT_COMPRESSLEVEL,
    DEFAULT_MEMBER_MODE,
    DEFAULT_MTIME,
    MEMBER_ASSET,
    MEMBER_META,
    MEMBER_PATHNAME,
)
from .entries import Entry, EntryTable
from .errors import ValidationError
from .metadoc import YamlMetaCodec
from .pathutil import member_path


logger = logging.getLogger(__name__)


class ArchiveWriter:
    """Serialize an :class:`EntryTable` as a canonical ``.unitypackage``.

    Entries are emitted in ascending GUID order, each as ``asset.meta``,
    ``pathname`` and (when present) ``asset``. Member mode, mtime and the gzip
    header timestamp are fixed so equal tables produce equal bytes.
    """

    def __init__(
        self,
        fileobj: BinaryIO,
        *,
        mode: int = DEFAULT_MEMBER_MODE,
        mtime: int = DEFAULT_MTIME,
        compresslevel: int = DEFAULT_COMPRESSLEVEL,
        meta_codec: Optional[YamlMetaCodec] = None,
    ):
        self.fileobj = fileobj
        self.mode = mode
        self.mtime = mtime
        self.compresslevel = compresslevel
        self.meta_codec = meta_codec or YamlMetaCodec()

    def write(self, table: EntryTable) -> int:
        """Write every entry of ``table``; returns the number of entries written.

        Raises:
            ValidationError: an entry lacks its meta document or pathname, or
                its identifier cannot be stored as a tar directory name.
                Raised before anything is written to ``fileobj``.
        """
        for identifier, entry in table:
            self._validate(identifier, entry)
        count = 0
        with gzip.GzipFile(
            filename="",
            fileobj=self.fileobj,
            mode="wb",
            compresslevel=self.compresslevel,
            mtime=self.mtime,
        ) as gz:
            with tarfile.open(fileobj=gz, mode="w|", format=tarfile.USTAR_FORMAT) as tar:
                for identifier, entry in table:
                    self._write_entry(tar, identifier, entry)
                    count += 1
        logger.debug("wrote %d entries", count)
        return count

    def _validate(self, identifier: str, entry: Entry) -> None:
        if not identifier or identifier in (".", ".."):
            raise ValidationError(identifier, "invalid identifier")
        if "/" in identifier:
            raise ValidationError(identifier, "identifier may not contain '/'")
        try:
            tarfile.TarInfo(member_path(identifier, MEMBER_META)).tobuf(tarfile.USTAR_FORMAT)
        except ValueError as exc:
            raise ValidationError(identifier, f"identifier does not fit a ustar header: {exc}") from exc
        if entry.meta is None:
            raise ValidationError(identifier, "entry has no meta document")
        if entry.pathname is None:
            raise ValidationError(identifier, "entry has no pathname")

    def _write_entry(self, tar: tarfile.TarFile, identifier: str, entry: Entry) -> None:
        self._add_member(tar, member_path(identifier, MEMBER_META), self.meta_codec.serialize(entry.meta))
        self._add_member(tar, member_path(identifier, MEMBER_PATHNAME), entry.pathname.encode("utf-8"))
        if entry.asset is not None:
            self._add_member(tar, member_path(identifier, MEMBER_ASSET), entry.asset)

    def _add_member(self, tar: tarfile.TarFile, name: str, data: bytes) -> None:
        info = tarfile.TarInfo(name)
        info.size = len(data)
        info.mode = self.mode
        info.mtime = self.mtime
        tar.addfile(info, io.BytesIO(data))


def write_package(fileobj: BinaryIO, table: EntryTable, **options) -> int:
    return ArchiveWriter(fileobj, **options).write(table)
