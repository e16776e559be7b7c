"""
Error types raised by the dictionary core and its collaborators.

Everything derives from DictError so callers (CLI, web UI) can report any
failure with a single except clause. Query-time conditions such as "no
match" are never errors: search and completion return empty sequences.
"""
from __future__ import annotations
from typing import Optional


class DictError(Exception):
    """Base class for every dictionary error."""


class ParseError(DictError):
    """
    A raw entry could not be tokenized.

    kind is "unbalanced_bracket" or "nesting_too_deep"; position is the
    0-based offset of the offending opening bracket. The importer fills in
    line_no (1-based) and side when it records a skipped line.
    """
    UNBALANCED_BRACKET = "unbalanced_bracket"
    NESTING_TOO_DEEP = "nesting_too_deep"

    def __init__(self, kind: str, position: int, text: str = "",
                 line_no: Optional[int] = None, side: Optional[str] = None) -> None:
        self.kind = kind
        self.position = position
        self.text = text
        self.line_no = line_no
        self.side = side
        super().__init__(self._describe())

    def _describe(self) -> str:
        what = "unclosed bracket" if self.kind == self.UNBALANCED_BRACKET else "brackets nested too deeply"
        where = f"column {self.position + 1}"
        if self.line_no is not None:
            where = f"line {self.line_no}, {where}"
        if self.side:
            where = f"{where} ({self.side})"
        return f"{what} at {where}: {self.text!r}"

    def at_line(self, line_no: int, side: str) -> "ParseError":
        """Return a copy that carries the import location."""
        return ParseError(self.kind, self.position, self.text, line_no=line_no, side=side)


class UnsupportedSchemaVersion(DictError):
    def __init__(self, found: object, supported: int) -> None:
        self.found = found
        self.supported = supported
        super().__init__(f"Unsupported dictionary schema version {found!r} (supported: {supported}). "
                         f"Re-import the dictionary.")


class StorageUnavailable(DictError):
    """Reading or writing a persisted snapshot failed."""


class AlreadyImported(DictError):
    def __init__(self, pair: str) -> None:
        super().__init__(f"The dictionary {pair} has already been imported. Use --force to overwrite it.")


class DictionaryNotFound(DictError):
    def __init__(self, pair: str) -> None:
        super().__init__(f"No dictionary imported for language pair {pair}.")


class NoLanguagePair(DictError):
    def __init__(self) -> None:
        super().__init__("No language pair found in dict.cc file.")


class InvalidLanguagePair(DictError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid language pair: {value!r}")


class LanguageNotAvailable(DictError):
    def __init__(self, language: str, available: tuple[str, str]) -> None:
        self.language = language
        self.available = available
        super().__init__(f"Source language {language} not available. Available are: {', '.join(available)}")
