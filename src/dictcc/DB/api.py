# dictcc/DB/api.py
from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Protocol

from ..config import DATA_DIR
from ..models import LanguagePair


class DictionaryStore(Protocol):
    """
    Persisted LanguagePair snapshots, one per language pair.

    Both directions of a pair ("en-de", "de-en") address the same snapshot.
    A snapshot is replaced as a whole; there is no per-entry update.
    """
    # Create / replace
    def save(self, pair: LanguagePair, *, force: bool = False) -> None: ...
    # Read
    def load(self, code: str) -> LanguagePair: ...
    def exists(self, code: str) -> bool: ...
    def available_pairs(self) -> List[str]: ...
    # Delete
    def delete(self, code: str) -> None: ...
    # lifecycle
    def close(self) -> None: ...


def make_store(dsn: Optional[str] = None) -> DictionaryStore:
    """
    Factory:
      - None              -> SQLiteStore in the default data directory
      - sqlite:///path    -> SQLiteStore keeping one .sqlite file per pair under path
      - memory://         -> MemoryStore (tests, throwaway sessions)
    """
    if dsn is None:
        from .sqlite_store import SQLiteStore
        return SQLiteStore(DATA_DIR)

    if dsn.startswith("sqlite:///"):
        from .sqlite_store import SQLiteStore
        return SQLiteStore(Path(dsn.removeprefix("sqlite:///")))

    if dsn.startswith("memory://"):
        from .memory_store import MemoryStore
        return MemoryStore()

    raise ValueError(f"Unsupported store DSN: {dsn}")
