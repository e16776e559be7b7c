"""
Tab-completion over indexed terms.

Two styles, matching the usual line-editor settings:
  - "list":     every call shows the whole candidate list.
  - "circular": every call selects the next candidate, wrapping at the end.

The selection lives in an explicit CompletionState value that the caller
passes in and gets back, so there is no hidden cursor between calls.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .index import Index
from .normalize import normalize_query

LIST = "list"
CIRCULAR = "circular"


@dataclass(frozen=True, slots=True)
class CompletionState:
    candidates: Tuple[str, ...] = ()
    offset: Optional[int] = None   # None until a circular step selected something


def complete(candidates: Sequence[str], mode: str,
             state: CompletionState) -> Tuple[Tuple[str, ...], CompletionState]:
    """Return (candidates to display, new state)."""
    cands = tuple(candidates)
    if mode == LIST:
        return cands, CompletionState(candidates=cands)
    if mode != CIRCULAR:
        raise ValueError(f"unknown completion mode: {mode!r}")

    if not cands:
        return (), state
    if cands != state.candidates or state.offset is None:
        offset = 0
    else:
        offset = (state.offset + 1) % len(cands)
    return (cands[offset],), CompletionState(candidates=cands, offset=offset)


def completion_candidates(index: Index, line: str) -> List[str]:
    """
    Terms that extend the typed line, shortest first:
    fewer words, then fewer characters, then first-imported.
    """
    prefix = normalize_query(line)
    if not prefix:
        return []
    terms = [t for t in index.terms_with_prefix(prefix) if len(t) > len(prefix)]
    terms.sort(key=lambda t: (len(t.split()), len(t), index.term_order(t)))
    return terms
