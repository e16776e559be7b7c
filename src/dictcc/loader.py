"""
dict.cc export loading.

A dict.cc export is a UTF-8, tab-separated text file:

    # EN-DE vocabulary database	compiled by dict.cc
    # ...more comment lines...
    figment	Erfindung {f}	noun
    figment	Gebilde {n} [Phantasie]	noun
    to go	gehen	verb	[travel]

The first comment line names the language pair; every other line holds up to
four columns: source text, target text, word classes and subject labels.
HTML entities are decoded and text is NFC-normalized before parsing.

Key Functions:
    read_lang_pair(path): language pair from the header line
    iter_records(path): (line_no, fields) for every data line
    import_records(records, source_lang, target_lang): parse into a LanguagePair
    load_dictcc_file(path): all of the above for one file

A line whose brackets do not balance is skipped and reported; it never
aborts the rest of the import.
"""

from __future__ import annotations
import html
import logging
import unicodedata
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .config import ENCODING, FIELD_LEN, MIN_FIELD_LEN, PROGRESS_EVERY_LINES, VERBOSE
from .errors import NoLanguagePair, ParseError, StorageUnavailable
from .models import SOURCE, TARGET, DictionaryEntry, LanguagePair, split_pair
from .parser import parse

log = logging.getLogger(__name__)

Record = Tuple[int, Sequence[str]]


@dataclass
class ImportReport:
    """
    Outcome of one import.

    Attributes
    ----------
    pair : LanguagePair
        The freshly parsed snapshot, entries in file order.
    skipped : List[ParseError]
        Lines dropped because a side did not parse; each carries line_no and side.
    short_lines : List[int]
        Line numbers dropped because they had fewer than two columns.
    """
    pair: LanguagePair
    skipped: List[ParseError] = field(default_factory=list)
    short_lines: List[int] = field(default_factory=list)

    @property
    def imported(self) -> int:
        return len(self.pair.entries)


def _clean(text: str) -> str:
    return unicodedata.normalize("NFC", html.unescape(text))


def read_lang_pair(path: str | Path) -> str:
    """'# EN-DE vocabulary database ...' -> 'en-de'."""
    try:
        with open(path, "r", encoding=ENCODING, errors="replace") as f:
            first = f.readline()
    except OSError as e:
        raise StorageUnavailable(f"Cannot read {path}: {e}") from e
    first = first.lstrip("\ufeff")
    if not first.startswith("#"):
        raise NoLanguagePair()
    words = first[1:].split()
    if not words:
        raise NoLanguagePair()
    left, right = split_pair(words[0])
    return f"{left}-{right}"


def iter_records(path: str | Path) -> Iterator[Record]:
    """Yield (1-based line number, columns) for every non-comment, non-blank line."""
    try:
        with open(path, "r", encoding=ENCODING, errors="replace") as f:
            for line_no, raw in enumerate(f, start=1):
                line = raw.rstrip("\r\n")
                if not line.strip() or line.lstrip("\ufeff").startswith("#"):
                    continue
                yield line_no, line.split("\t")
    except OSError as e:
        raise StorageUnavailable(f"Cannot read {path}: {e}") from e


def parse_record(line_no: int, fields: Sequence[str], seq: int,
                 source_lang: str, target_lang: str) -> DictionaryEntry:
    """Build one entry; a ParseError comes back tagged with line number and side."""
    cols = [_clean(c) for c in list(fields)[:FIELD_LEN]]
    cols += [""] * (FIELD_LEN - len(cols))
    source_text, target_text, word_classes, subject_labels = cols

    try:
        source = parse(source_text, SOURCE)
    except ParseError as e:
        raise e.at_line(line_no, SOURCE) from None
    try:
        target = parse(target_text, TARGET)
    except ParseError as e:
        raise e.at_line(line_no, TARGET) from None

    return DictionaryEntry(
        seq=seq,
        source=source,
        target=target,
        source_lang=source_lang,
        target_lang=target_lang,
        word_classes=word_classes,
        subject_labels=subject_labels,
    )


def import_records(records: Iterable[Record], source_lang: str, target_lang: str,
                   *, progress: Optional[bool] = None) -> ImportReport:
    """
    Parse records in order; malformed lines are recorded and skipped.
    progress logs a line count every PROGRESS_EVERY_LINES records (default: DICTCC_VERBOSE).
    """
    if progress is None:
        progress = VERBOSE
    entries: List[DictionaryEntry] = []
    skipped: List[ParseError] = []
    short: List[int] = []

    for n, (line_no, fields) in enumerate(records, start=1):
        if len(fields) < MIN_FIELD_LEN:
            short.append(line_no)
            continue
        try:
            entries.append(parse_record(line_no, fields, len(entries), source_lang, target_lang))
        except ParseError as e:
            log.warning("Skipping line: %s", e)
            skipped.append(e)
        if progress and n % PROGRESS_EVERY_LINES == 0:
            log.info("[import] lines=%d entries=%d", n, len(entries))

    pair = LanguagePair(source_lang=source_lang, target_lang=target_lang, entries=tuple(entries))
    log.info("Parsed %s: entries=%d skipped=%d short=%d",
             pair.code, len(entries), len(skipped), len(short))
    return ImportReport(pair=pair, skipped=skipped, short_lines=short)


def load_dictcc_file(path: str | Path, *, progress: Optional[bool] = None) -> ImportReport:
    code = read_lang_pair(path)
    source_lang, target_lang = split_pair(code)
    log.info("Importing %s from %s", code, path)
    return import_records(iter_records(path), source_lang, target_lang, progress=progress)
