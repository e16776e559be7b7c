"""
Offline dict.cc dictionary lookup.

Turns the lines of a dict.cc export into structured entries, indexes one
language side of them and ranks free-text queries by edit distance.

Pipeline:
    parse(line, side)           -> ParsedEntry (words + bracket annotations)
    normalize(entry)            -> NormalizedTerm (words only, folded)
    build(entries, side)        -> Index (term -> entries, import order)
    search(index, query, ...)   -> ranked DictionaryEntry list
    complete(candidates, mode, state) -> tab-completion step

Example Usage:
    from dictcc import Engine

    eng = Engine("sqlite:///./dicts")
    eng.import_file("dictcc-en-de.txt")
    eng.load("en-de", "en")
    for source, target in eng.translations(eng.search("figmen", max_distance=1)):
        print(f"{source}  ->  {target}")
"""

from .completion import CompletionState, complete, completion_candidates
from .engine import Engine
from .index import Index, build
from .normalize import normalize, normalize_query
from .parser import parse
from .search import rank, search

__version__ = "1.0.0"
__all__ = [
    "Engine", "Index", "CompletionState",
    "parse", "normalize", "normalize_query", "build", "search", "rank",
    "complete", "completion_candidates",
]
