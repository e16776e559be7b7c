# dictcc/DB/memory_store.py
from __future__ import annotations
from typing import Dict, List, Tuple

from ..config import SCHEMA_VERSION
from ..errors import AlreadyImported, DictionaryNotFound, UnsupportedSchemaVersion
from ..models import LanguagePair, pair_storage_key


class MemoryStore:
    """Simple in-memory snapshots (useful for tests or ephemeral runs)."""
    def __init__(self) -> None:
        self._rows: Dict[str, Tuple[int, LanguagePair]] = {}

    # C
    def save(self, pair: LanguagePair, *, force: bool = False) -> None:
        key = pair.storage_key
        if key in self._rows and not force:
            raise AlreadyImported(key)
        self._rows[key] = (SCHEMA_VERSION, pair)

    # R
    def load(self, code: str) -> LanguagePair:
        key = pair_storage_key(code)
        try:
            version, pair = self._rows[key]
        except KeyError:
            raise DictionaryNotFound(key) from None
        if version != SCHEMA_VERSION:
            raise UnsupportedSchemaVersion(version, SCHEMA_VERSION)
        return pair

    def exists(self, code: str) -> bool:
        return pair_storage_key(code) in self._rows

    def available_pairs(self) -> List[str]:
        return sorted(self._rows)

    # D
    def delete(self, code: str) -> None:
        key = pair_storage_key(code)
        if self._rows.pop(key, None) is None:
            raise DictionaryNotFound(key)

    def close(self) -> None:
        self._rows.clear()
