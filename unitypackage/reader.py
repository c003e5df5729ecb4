from __future__ import annotations

import gzip
import logging
import tarfile
import zlib
from typing import BinaryIO, Optional

from .constants import KIND_ASSET, KIND_META, KIND_PATHNAME, KNOWN_KINDS
from .entries import EntryTable
from .errors import FormatError
from .metadoc import YamlMetaCodec
from .pathutil import split_member


logger = logging.getLogger(__name__)


class ArchiveReader:
    """Decode a ``.unitypackage`` byte stream into an :class:`EntryTable`.

    The stream is read sequentially (gzip, then tar in stream mode), so
    non-seekable inputs such as pipes work. The caller keeps ownership of
    ``fileobj``; only the decompression and tar layers are closed here.
    """

    def __init__(self, fileobj: BinaryIO, meta_codec: Optional[YamlMetaCodec] = None):
        self.fileobj = fileobj
        self.meta_codec = meta_codec or YamlMetaCodec()
        self.skipped_members = 0

    def read(self, table: Optional[EntryTable] = None) -> EntryTable:
        if table is None:
            table = EntryTable()
        try:
            with gzip.GzipFile(fileobj=self.fileobj, mode="rb") as gz:
                with tarfile.open(fileobj=gz, mode="r|") as tar:
                    for member in tar:
                        self._read_member(tar, member, table)
                    self._check_end(tar)
        except (gzip.BadGzipFile, EOFError, zlib.error, tarfile.TarError) as exc:
            raise FormatError(f"not a valid unitypackage stream: {exc}") from exc
        logger.debug("read %d entries (%d members skipped)", len(table), self.skipped_members)
        return table

    def _check_end(self, tar: tarfile.TarFile) -> None:
        # Stream-mode iteration also stops quietly on a bad header past the
        # first member; only zero padding may follow a real end-of-archive.
        while True:
            block = tar.fileobj.read(tarfile.RECORDSIZE)
            if not block:
                return
            if block.strip(tarfile.NUL):
                raise FormatError(f"corrupt tar header near offset {tar.offset}")

    def _read_member(self, tar: tarfile.TarFile, member: tarfile.TarInfo, table: EntryTable) -> None:
        if not member.isfile():
            self.skipped_members += 1
            return
        parts = split_member(member.name)
        if parts is None or parts[1] not in KNOWN_KINDS:
            self.skipped_members += 1
            return
        identifier, kind = parts
        fh = tar.extractfile(member)
        data = fh.read() if fh is not None else b""

        entry = table.ensure(identifier)
        if kind == KIND_PATHNAME:
            try:
                entry.pathname = data.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise FormatError(f"{identifier}: pathname is not valid UTF-8") from exc
        elif kind == KIND_ASSET:
            entry.asset = data
        elif kind == KIND_META:
            try:
                meta = self.meta_codec.parse(data)
            except FormatError as exc:
                raise FormatError(f"{identifier}: {exc}") from exc
            if meta is None:
                raise FormatError(f"{identifier}: empty meta document")
            entry.meta = meta


def read_package(fileobj: BinaryIO, meta_codec: Optional[YamlMetaCodec] = None) -> EntryTable:
    return ArchiveReader(fileobj, meta_codec=meta_codec).read()
