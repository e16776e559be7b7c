"""
Term index for one side of a language pair.

The index maps every NormalizedTerm to the entries that produced it, in
import order, so ranking can fall back to import order for ties. It is a
derived structure: built once from the full entry sequence at import or
load time and never patched afterwards.
"""

from __future__ import annotations
import bisect
from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Tuple

from .models import SIDES, DictionaryEntry
from .normalize import normalize


class Index:
    """
    Read-only term -> entries mapping plus a sorted lexicon for prefix scans.

    Attributes
    ----------
    side : str
        Which side of the entries ("source" or "target") was indexed.
    buckets : Dict[str, Tuple[DictionaryEntry, ...]]
        Terms in first-seen order; each bucket in import order.
    """

    def __init__(self, side: str, buckets: Dict[str, Tuple[DictionaryEntry, ...]]) -> None:
        self.side = side
        self.buckets = buckets
        self._term_lex: List[str] = sorted(buckets)
        # first-seen position of each term, used to order completions
        self._term_order: Dict[str, int] = {t: i for i, t in enumerate(buckets)}

    def terms(self) -> Iterator[str]:
        return iter(self.buckets)

    def entries_for(self, term: str) -> Tuple[DictionaryEntry, ...]:
        return self.buckets.get(term, ())

    def term_order(self, term: str) -> int:
        return self._term_order[term]

    def terms_with_prefix(self, prefix: str) -> List[str]:
        """All terms starting with prefix, in lexicographic order."""
        L = self._term_lex
        lo = bisect.bisect_left(L, prefix)
        hi = lo
        while hi < len(L) and L[hi].startswith(prefix):
            hi += 1
        return L[lo:hi]

    def __len__(self) -> int:
        return len(self.buckets)

    def __contains__(self, term: object) -> bool:
        return term in self.buckets

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Index):
            return NotImplemented
        return self.side == other.side and list(self.buckets.items()) == list(other.buckets.items())

    def __repr__(self) -> str:
        return f"Index(side={self.side!r}, terms={len(self.buckets)})"


def build(entries: Iterable[DictionaryEntry], side: str) -> Index:
    """Group entries by the NormalizedTerm of `side`; O(total entries), no dedup."""
    if side not in SIDES:
        raise ValueError(f"unknown side: {side!r}")
    buckets: Dict[str, List[DictionaryEntry]] = defaultdict(list)
    for entry in entries:
        buckets[normalize(entry.side(side))].append(entry)
    return Index(side, {term: tuple(items) for term, items in buckets.items()})
