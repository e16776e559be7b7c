"""
Entry grammar for one side of a dict.cc line.

    entry   := (space | group | word)*
    group   := OPEN (space | group | word | stray)* CLOSE   -- CLOSE matches OPEN
    word    := run of characters that are neither whitespace nor one of ( [ { <

Closing brackets never end a word; a stray closer with no opener is just a
word character. The text between a group's brackets is captured verbatim as
the annotation payload; nested groups are only walked to find the matching
closer, they do not become tokens of their own.

Example:
    >>> parse("Gebilde {n} [Phantasie]").tokens
    (Word(text='Gebilde'), Annotation(kind='curly', content='n'), Annotation(kind='square', content='Phantasie'))
"""
from __future__ import annotations
from typing import Dict, List, Tuple

from .config import MAX_NESTING
from .errors import ParseError
from .models import BRACKETS, SIDES, SOURCE, Annotation, ParsedEntry, Token, Word

# opening bracket -> (annotation kind, closing bracket)
_OPENERS: Dict[str, Tuple[str, str]] = {op: (kind, cl) for kind, (op, cl) in BRACKETS.items()}


def parse(line: str, side: str = SOURCE) -> ParsedEntry:
    """Tokenize one side of a dictionary line. Raises ParseError on unclosed groups."""
    if side not in SIDES:
        raise ValueError(f"unknown side: {side!r}")

    tokens: List[Token] = []
    i, n = 0, len(line)
    while i < n:
        ch = line[i]
        if ch.isspace():
            i += 1
            continue
        if ch in _OPENERS:
            kind, closer = _OPENERS[ch]
            end = _group_end(line, i, closer, depth=1)
            tokens.append(Annotation(kind, line[i + 1:end]))
            i = end + 1
            continue
        j = i
        while j < n and not line[j].isspace() and line[j] not in _OPENERS:
            j += 1
        tokens.append(Word(line[i:j]))
        i = j
    return ParsedEntry(side=side, tokens=tuple(tokens), raw=line)


def _group_end(line: str, start: int, closer: str, depth: int) -> int:
    """Index of the bracket that closes the group opened at `start`."""
    if depth > MAX_NESTING:
        raise ParseError(ParseError.NESTING_TOO_DEEP, start, line)
    i = start + 1
    while i < len(line):
        ch = line[i]
        if ch == closer:
            return i
        if ch in _OPENERS:
            i = _group_end(line, i, _OPENERS[ch][1], depth + 1) + 1
            continue
        i += 1
    raise ParseError(ParseError.UNBALANCED_BRACKET, start, line)
