from __future__ import annotations
from typing import List, Optional

from .config import MAX_SIMILARITY
from .index import Index
from .models import DictionaryEntry, SearchHit
from .normalize import normalize_query


def edit_distance(a: str, b: str, max_distance: Optional[int] = None) -> int:
    """
    Levenshtein distance with unit costs for insert, delete and substitute.

    With max_distance set, the scan stops as soon as every cell of a row
    exceeds the bound and returns max_distance + 1; callers only need to know
    the result is out of range.
    """
    if a == b:
        return 0
    if max_distance is not None and abs(len(a) - len(b)) > max_distance:
        return max_distance + 1
    if not a or not b:
        return len(a) or len(b)

    # Ensure a is shorter.
    if len(a) > len(b):
        a, b = b, a

    prev = list(range(len(a) + 1))
    for i, ch_b in enumerate(b, start=1):
        cur = [i]
        min_row = i
        for j, ch_a in enumerate(a, start=1):
            cost = 0 if ch_a == ch_b else 1
            val = min(prev[j] + 1, cur[j - 1] + 1, prev[j - 1] + cost)
            cur.append(val)
            min_row = min(min_row, val)
        prev = cur
        if max_distance is not None and min_row > max_distance:
            return max_distance + 1
    if max_distance is not None:
        return min(prev[-1], max_distance + 1)
    return prev[-1]


def similarity(query: str, term: str, distance: int) -> int:
    """
    1000 * (1 - distance / longest length), rounded half up, clamped to 0..1000.
    Two empty strings are identical (1000).
    """
    longest = max(len(query), len(term))
    if longest == 0:
        return MAX_SIMILARITY
    # integer round-half-up of MAX * (longest - distance) / longest
    num = MAX_SIMILARITY * (longest - distance)
    score = (2 * num + longest) // (2 * longest)
    return max(0, min(MAX_SIMILARITY, score))


def _check_options(max_distance: int, min_similarity: int, limit: Optional[int]) -> None:
    if max_distance < 0:
        raise ValueError(f"max_distance must be >= 0, got {max_distance}")
    if not 0 <= min_similarity <= MAX_SIMILARITY:
        raise ValueError(f"min_similarity must be within 0..{MAX_SIMILARITY}, got {min_similarity}")
    if limit is not None and limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")


def rank(index: Index, query: str, max_distance: int = 0,
         min_similarity: int = 0, limit: Optional[int] = None) -> List[SearchHit]:
    """
    Score every indexed term against the query and return the ranked hits.

    Order: ascending distance, then descending similarity, then import order.
    An empty list is a normal outcome (nothing within the thresholds).
    """
    _check_options(max_distance, min_similarity, limit)
    q = normalize_query(query)

    hits: List[SearchHit] = []
    for term in index.terms():
        d = edit_distance(q, term, max_distance)
        if d > max_distance:
            continue
        sim = similarity(q, term, d)
        if sim < min_similarity:
            continue
        hits.extend(SearchHit(entry, term, d, sim) for entry in index.entries_for(term))

    hits.sort(key=lambda h: (h.distance, -h.similarity, h.entry.seq))
    if limit is not None:
        del hits[limit:]
    return hits


def search(index: Index, query: str, max_distance: int = 0,
           min_similarity: int = 0, limit: Optional[int] = None) -> List[DictionaryEntry]:
    """Ranked entries for a query; see rank() for the ordering."""
    return [h.entry for h in rank(index, query, max_distance, min_similarity, limit)]
