from __future__ import annotations
import re
import unicodedata

from .models import ParsedEntry

_ws_re = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """NFC, casefold, collapse whitespace runs to one space, trim."""
    return _ws_re.sub(" ", unicodedata.normalize("NFC", text).casefold()).strip()


def normalize(entry: ParsedEntry) -> str:
    """
    The index key of a parsed entry: its words only, in order, folded.

    Annotations are display metadata and never part of the key, so
    "Gebilde {n}" and "gebilde [Phantasie]" normalize to the same term.
    """
    return normalize_text(" ".join(entry.words))


def normalize_query(query: str) -> str:
    """Fold a user query exactly the way index terms are folded."""
    return normalize_text(query)
