from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple


@dataclass
class Entry:
    identifier: str
    pathname: Optional[str] = None
    meta: Any = None
    asset: Optional[bytes] = None

    def is_complete(self) -> bool:
        return self.pathname is not None and self.meta is not None


class EntryTable:
    """Entries of one package keyed by GUID.

    Iteration always runs in ascending identifier order so that writing the
    same table twice produces the same member sequence. The table performs no
    validation; the reader may leave entries partially filled.
    """

    def __init__(self):
        self._entries: Dict[str, Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def __iter__(self) -> Iterator[Tuple[str, Entry]]:
        return self.items()

    def get(self, identifier: str) -> Optional[Entry]:
        return self._entries.get(identifier)

    def identifiers(self) -> List[str]:
        return sorted(self._entries)

    def items(self) -> Iterator[Tuple[str, Entry]]:
        for identifier in sorted(self._entries):
            yield identifier, self._entries[identifier]

    def put(self, entry: Entry) -> None:
        self._entries[entry.identifier] = entry

    def ensure(self, identifier: str) -> Entry:
        entry = self._entries.get(identifier)
        if entry is None:
            entry = Entry(identifier=identifier)
            self._entries[identifier] = entry
        return entry
