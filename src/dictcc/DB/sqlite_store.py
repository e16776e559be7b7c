# dictcc/DB/sqlite_store.py
from __future__ import annotations
import logging
import os
import sqlite3
from pathlib import Path
from typing import List

from ..config import SCHEMA_VERSION, SNAPSHOT_SUFFIX
from ..errors import (AlreadyImported, DictionaryNotFound, InvalidLanguagePair, ParseError,
                      StorageUnavailable, UnsupportedSchemaVersion)
from ..models import SOURCE, TARGET, DictionaryEntry, LanguagePair, pair_storage_key, split_pair
from ..parser import parse

log = logging.getLogger(__name__)

# File format: one SQLite database per language pair.
#   meta    : schema_version, source_lang, target_lang
#   entries : raw columns in import order (seq = position); parsed again on load
_SCHEMA = """
CREATE TABLE meta (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL
);
CREATE TABLE entries (
  seq INTEGER PRIMARY KEY,
  source TEXT NOT NULL,
  target TEXT NOT NULL,
  word_classes TEXT NOT NULL,
  subject_labels TEXT NOT NULL
);
"""


class SQLiteStore:
    """Directory of `<pair>.sqlite` snapshots; each save rewrites one file atomically."""
    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def path_for(self, code: str) -> Path:
        return self.root / f"{pair_storage_key(code)}{SNAPSHOT_SUFFIX}"

    # ---- Create ----
    def save(self, pair: LanguagePair, *, force: bool = False) -> None:
        path = self.path_for(pair.code)
        if path.exists():
            if path.is_dir():
                raise StorageUnavailable(f"Expected a file, found a directory: {path}")
            if not force:
                raise AlreadyImported(pair.storage_key)

        tmp = path.with_name(path.name + ".tmp")
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            if tmp.exists():
                tmp.unlink()
            conn = sqlite3.connect(tmp)
            try:
                conn.executescript(_SCHEMA)
                conn.executemany(
                    "INSERT INTO meta(key, value) VALUES (?,?)",
                    [("schema_version", str(SCHEMA_VERSION)),
                     ("source_lang", pair.source_lang),
                     ("target_lang", pair.target_lang)],
                )
                conn.executemany(
                    "INSERT INTO entries(seq, source, target, word_classes, subject_labels) "
                    "VALUES (?,?,?,?,?)",
                    ((e.seq, e.source.raw, e.target.raw, e.word_classes, e.subject_labels)
                     for e in pair.entries),
                )
                conn.commit()
            finally:
                conn.close()
            os.replace(tmp, path)
        except (OSError, sqlite3.Error) as e:
            tmp.unlink(missing_ok=True)
            raise StorageUnavailable(f"Cannot write {path}: {e}") from e
        log.info("Saved %s: %d entries -> %s", pair.code, len(pair.entries), path)

    # ---- Read ----
    def load(self, code: str) -> LanguagePair:
        path = self.path_for(code)
        if not path.is_file():
            raise DictionaryNotFound(pair_storage_key(code))
        try:
            conn = sqlite3.connect(f"{path.resolve().as_uri()}?mode=ro", uri=True)
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Cannot open {path}: {e}") from e
        try:
            meta = self._read_meta(conn)
            version = meta.get("schema_version")
            if version != str(SCHEMA_VERSION):
                raise UnsupportedSchemaVersion(version, SCHEMA_VERSION)
            source_lang, target_lang = meta.get("source_lang"), meta.get("target_lang")
            if not source_lang or not target_lang:
                raise StorageUnavailable(f"Snapshot {path} does not name its languages")
            rows = conn.execute(
                "SELECT seq, source, target, word_classes, subject_labels FROM entries ORDER BY seq"
            ).fetchall()
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Cannot read {path}: {e}") from e
        finally:
            conn.close()

        entries = []
        for seq, source, target, word_classes, subject_labels in rows:
            try:
                entries.append(DictionaryEntry(
                    seq=int(seq),
                    source=parse(source, SOURCE),
                    target=parse(target, TARGET),
                    source_lang=source_lang,
                    target_lang=target_lang,
                    word_classes=word_classes,
                    subject_labels=subject_labels,
                ))
            except ParseError as e:
                raise StorageUnavailable(f"Corrupt entry {seq} in {path}: {e}") from e
        log.info("Loaded %s-%s: %d entries from %s", source_lang, target_lang, len(entries), path)
        return LanguagePair(source_lang=source_lang, target_lang=target_lang, entries=tuple(entries))

    @staticmethod
    def _read_meta(conn: sqlite3.Connection) -> dict:
        try:
            return dict(conn.execute("SELECT key, value FROM meta").fetchall())
        except sqlite3.OperationalError:
            # no meta table: not a snapshot this version knows how to read
            raise UnsupportedSchemaVersion(None, SCHEMA_VERSION) from None

    def exists(self, code: str) -> bool:
        return self.path_for(code).is_file()

    def available_pairs(self) -> List[str]:
        if not self.root.is_dir():
            return []
        pairs = []
        for p in sorted(self.root.glob(f"*{SNAPSHOT_SUFFIX}")):
            try:
                split_pair(p.stem)
            except InvalidLanguagePair:
                continue
            pairs.append(p.stem)
        return pairs

    # ---- Delete ----
    def delete(self, code: str) -> None:
        path = self.path_for(code)
        if not path.is_file():
            raise DictionaryNotFound(pair_storage_key(code))
        try:
            path.unlink()
        except OSError as e:
            raise StorageUnavailable(f"Cannot remove {path}: {e}") from e
        log.info("Removed %s", path)

    # ---- lifecycle ----
    def close(self) -> None:
        # connections are opened per operation
        pass
