from __future__ import annotations

import os
from typing import BinaryIO, Iterable, Iterator, Optional, Tuple, Union

from .entries import Entry, EntryTable
from .ingest import IngestReport, Ingestor, LocalFilesystem, PathArg
from .metadoc import YamlMetaCodec
from .reader import ArchiveReader
from .writer import ArchiveWriter


Source = Union[str, "os.PathLike[str]", BinaryIO]


class UnityPackage:
    """Create, modify, or read a ``.unitypackage`` file.

    ``source`` may be a path or a readable binary stream; it is decoded
    immediately. ``missing_meta_error`` selects strict (raise) or lenient
    (warn and skip) handling of assets without a companion ``.meta`` file.
    """

    def __init__(
        self,
        source: Optional[Source] = None,
        *,
        missing_meta_error: bool = True,
        meta_codec: Optional[YamlMetaCodec] = None,
        fs: Optional[LocalFilesystem] = None,
    ):
        self.missing_meta_error = missing_meta_error
        self.meta_codec = meta_codec or YamlMetaCodec()
        self.fs = fs
        self.entries = EntryTable()
        if source is not None:
            if isinstance(source, (str, os.PathLike)):
                with open(source, "rb") as fh:
                    self.load(fh)
            else:
                self.load(source)

    @classmethod
    def open(cls, path: PathArg, **kwargs) -> "UnityPackage":
        return cls(path, **kwargs)

    def __iter__(self) -> Iterator[Tuple[str, Entry]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, guid: object) -> bool:
        return guid in self.entries

    def __lshift__(self, files: Union[PathArg, Iterable[PathArg]]) -> "UnityPackage":
        self.add(files)
        return self

    def get(self, guid: str) -> Optional[Entry]:
        return self.entries.get(guid)

    def load(self, fileobj: BinaryIO) -> None:
        """Decode an archive stream, merging its entries into this package."""
        ArchiveReader(fileobj, meta_codec=self.meta_codec).read(self.entries)

    def add(self, files: Union[PathArg, Iterable[PathArg]]) -> IngestReport:
        ingestor = Ingestor(
            self.entries,
            strict_missing_meta=self.missing_meta_error,
            meta_codec=self.meta_codec,
            fs=self.fs,
        )
        return ingestor.add(files)

    def write(self, fileobj: BinaryIO, **options) -> int:
        return ArchiveWriter(fileobj, meta_codec=self.meta_codec, **options).write(self.entries)

    def save(self, path: PathArg, **options) -> int:
        with open(path, "wb") as fh:
            return self.write(fh, **options)
