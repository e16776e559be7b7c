# dictcc/engine.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .completion import CompletionState, complete, completion_candidates
from .DB.api import DictionaryStore, make_store
from .index import Index, build
from .loader import ImportReport, load_dictcc_file
from .errors import AlreadyImported
from .models import DictionaryEntry, LanguagePair, SearchHit, pair_storage_key, split_pair
from .search import rank

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - snapshot storage (DictionaryStore: SQLite directory or in-memory),
      - dict.cc import (loader.load_dictcc_file),
      - the per-side term Index,
      - ranking (search.rank) and tab-completion (completion).

    Public API (used by the CLI and the Flask UI):
      * import_file(path, force):  parse -> persist, returns an ImportReport
      * delete(pair) / available_pairs() / available_language_pairs() / available_languages()
      * load(pair, language_from): load snapshot -> build a fresh Index
      * search / rank(query, ...): ranked entries
      * completions(line) / complete(line, mode, state): tab-completion
      * shutdown():                close underlying resources

    Storage DSNs (via dictcc.DB.api.make_store):
      - None (default data directory)
      - "sqlite:///path/to/dir"
      - "memory://"
    """

    # ------------- lifecycle -------------

    def __init__(self, db_dsn: Optional[str] = None, *, verbose: bool = False) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
        self.verbose = verbose
        self._store: Optional[DictionaryStore] = make_store(db_dsn)
        self.pair: Optional[LanguagePair] = None
        self.language_from: Optional[str] = None
        self.index: Optional[Index] = None

    @property
    def store(self) -> DictionaryStore:
        if self._store is None:
            raise RuntimeError("Engine has been shut down.")
        return self._store

    # /* ~~~ Import a dict.cc file and persist it as a new snapshot ~~~ */
    def import_file(self, path: str | Path, *, force: bool = False) -> ImportReport:
        report = load_dictcc_file(path, progress=self.verbose or None)
        if not force and self.store.exists(report.pair.code):
            # fail before writing anything
            raise AlreadyImported(report.pair.storage_key)
        self.store.save(report.pair, force=force)
        log.info("Imported %s: %d entries, %d skipped",
                 report.pair.code, report.imported, len(report.skipped))
        return report

    def delete(self, language_pair: str) -> None:
        self.store.delete(language_pair)
        if self.pair is not None and self.pair.storage_key == pair_storage_key(language_pair):
            self._unload()

    def available_pairs(self) -> List[str]:
        return self.store.available_pairs()

    def available_language_pairs(self) -> List[str]:
        """Both directions of every imported pair ('de-en' and 'en-de' load the same snapshot)."""
        codes = set()
        for key in self.available_pairs():
            left, right = split_pair(key)
            codes.update((f"{left}-{right}", f"{right}-{left}"))
        return sorted(codes)

    def available_languages(self) -> List[str]:
        return sorted({lang for code in self.available_pairs() for lang in split_pair(code)})

    # /* ~~~ Load a snapshot and build the index for the query language ~~~ */
    def load(self, language_pair: str, language_from: str) -> Index:
        self._unload()
        pair = self.store.load(language_pair)
        side = pair.side_for(language_from)
        log.info("Building %s index for %s (%d entries)", side, pair.code, len(pair))
        idx = build(pair.entries, side)

        # Commit engine state only once everything succeeded
        self.pair = pair
        self.language_from = language_from.lower()
        self.index = idx
        log.info("Engine load() complete: terms=%d", len(idx))
        return idx

    @property
    def source_language(self) -> str:
        self._require_index()
        return self.language_from  # type: ignore[return-value]

    @property
    def target_language(self) -> str:
        self._require_index()
        return self.pair.other_language(self.language_from)  # type: ignore[union-attr,arg-type]

    # ------------- query -------------

    def rank(self, query: str, *, max_distance: int = 0, min_similarity: int = 0,
             limit: Optional[int] = None) -> List[SearchHit]:
        return rank(self._require_index(), query, max_distance, min_similarity, limit)

    def search(self, query: str, *, max_distance: int = 0, min_similarity: int = 0,
               limit: Optional[int] = None) -> List[DictionaryEntry]:
        return [h.entry for h in self.rank(query, max_distance=max_distance,
                                           min_similarity=min_similarity, limit=limit)]

    def completions(self, line: str) -> List[str]:
        return completion_candidates(self._require_index(), line)

    def complete(self, line: str, mode: str,
                 state: CompletionState) -> Tuple[Tuple[str, ...], CompletionState]:
        return complete(self.completions(line), mode, state)

    def translations(self, entries: Sequence[DictionaryEntry]) -> List[Tuple[str, str]]:
        """(query-language text, other-language text) rows for display."""
        idx = self._require_index()
        return [(e.side(idx.side).raw, e.other(idx.side).raw) for e in entries]

    # ------------- teardown -------------

    # /* ~~~ Close underlying resources (DB handles, etc.) ~~~ */
    def shutdown(self) -> None:
        try:
            if self._store:
                self._store.close()
        finally:
            self._store = None
            self._unload()
            log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _unload(self) -> None:
        self.pair = None
        self.language_from = None
        self.index = None

    def _require_index(self) -> Index:
        if self.index is None:
            raise RuntimeError("Engine not initialized. Call load() first.")
        return self.index
