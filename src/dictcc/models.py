# src/dictcc/models.py
"""
Data models for the dictionary core.

- Word / Annotation: the two token kinds produced by the entry parser.
- ParsedEntry: one side (source or target language) of a dictionary line.
- DictionaryEntry: a parsed source/target pair with its import position.
- LanguagePair: the ordered entries imported for two languages.
- SearchHit: one ranked match returned by the fuzzy matcher.

These classes carry no business logic beyond small accessors; parsing,
normalization, indexing and ranking live in their own modules.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

from .errors import InvalidLanguagePair, LanguageNotAvailable

SOURCE = "source"
TARGET = "target"
SIDES = (SOURCE, TARGET)

# annotation kind -> (opening, closing) bracket
BRACKETS = {
    "round": ("(", ")"),
    "square": ("[", "]"),
    "curly": ("{", "}"),
    "angle": ("<", ">"),
}


@dataclass(frozen=True, slots=True)
class Word:
    text: str


@dataclass(frozen=True, slots=True)
class Annotation:
    """
    A bracket group: kind is "round", "square", "curly" or "angle" and
    content is the verbatim text between the brackets (nested groups are
    kept as opaque text, not re-tokenized).
    """
    kind: str
    content: str

    def __str__(self) -> str:
        opener, closer = BRACKETS[self.kind]
        return f"{opener}{self.content}{closer}"


Token = Union[Word, Annotation]


@dataclass(frozen=True, slots=True)
class ParsedEntry:
    """
    Tokens of one side of a dictionary line, in original order.

    Attributes
    ----------
    side : str
        "source" or "target".
    tokens : Tuple[Token, ...]
        Words and annotations as they appeared in the line.
    raw : str
        The text the tokens were parsed from; kept for display.
    """
    side: str
    tokens: Tuple[Token, ...]
    raw: str = ""

    @property
    def words(self) -> Tuple[str, ...]:
        return tuple(t.text for t in self.tokens if isinstance(t, Word))

    def annotations(self, kind: Optional[str] = None) -> Tuple[Annotation, ...]:
        return tuple(t for t in self.tokens
                     if isinstance(t, Annotation) and (kind is None or t.kind == kind))


@dataclass(frozen=True, slots=True)
class DictionaryEntry:
    """
    One imported dictionary line.

    seq is the 0-based position among the imported entries; it is the
    identity of the entry and the final tie-break when ranking.
    word_classes and subject_labels are the optional third and fourth
    dict.cc columns, kept for display only.
    """
    seq: int
    source: ParsedEntry
    target: ParsedEntry
    source_lang: str
    target_lang: str
    word_classes: str = ""
    subject_labels: str = ""

    def side(self, side: str) -> ParsedEntry:
        if side == SOURCE:
            return self.source
        if side == TARGET:
            return self.target
        raise ValueError(f"unknown side: {side!r}")

    def other(self, side: str) -> ParsedEntry:
        return self.side(TARGET if side == SOURCE else SOURCE)


def split_pair(code: str) -> Tuple[str, str]:
    """'EN-de' -> ('en', 'de'); exactly one '-' and two non-empty codes."""
    parts = code.strip().lower().split("-")
    if len(parts) != 2 or not all(parts):
        raise InvalidLanguagePair(code)
    return parts[0], parts[1]


def pair_storage_key(code: str) -> str:
    """Both directions of a pair share one snapshot: 'en-de' and 'de-en' -> 'de-en'."""
    left, right = split_pair(code)
    return "-".join(sorted((left, right)))


@dataclass(frozen=True, slots=True)
class LanguagePair:
    source_lang: str
    target_lang: str
    entries: Tuple[DictionaryEntry, ...] = ()

    @property
    def code(self) -> str:
        return f"{self.source_lang}-{self.target_lang}"

    @property
    def storage_key(self) -> str:
        return pair_storage_key(self.code)

    @property
    def languages(self) -> Tuple[str, str]:
        return self.source_lang, self.target_lang

    def side_for(self, language: str) -> str:
        language = language.lower()
        if language == self.source_lang:
            return SOURCE
        if language == self.target_lang:
            return TARGET
        raise LanguageNotAvailable(language, self.languages)

    def other_language(self, language: str) -> str:
        return self.target_lang if self.side_for(language) == SOURCE else self.source_lang

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[DictionaryEntry]:
        return iter(self.entries)


@dataclass(frozen=True, slots=True)
class SearchHit:
    """A ranked match: the entry, the indexed term it matched and its scores."""
    entry: DictionaryEntry
    term: str
    distance: int
    similarity: int
