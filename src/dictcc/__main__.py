from __future__ import annotations
import argparse
import sys
from typing import List, Optional, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import config as CFG
from .completion import CIRCULAR, CompletionState, complete
from .engine import Engine
from .errors import DictError

try:
    import readline
except ImportError:  # pragma: no cover - Windows without pyreadline
    readline = None  # type: ignore[assignment]


_stderr = Console(stderr=True, highlight=False)

def _err(msg: str) -> None:
    _stderr.print(msg, style="bold red", markup=False, soft_wrap=True)


# ---------- tables ----------

def results_table(headers: Sequence[str], rows: Sequence[Sequence[str]], *, ascii: bool = False) -> Table:
    """Full-grid table: every row is separated by a rule, the header by a double rule."""
    table = Table(box=box.ASCII_DOUBLE_HEAD if ascii else box.SQUARE_DOUBLE_HEAD, show_lines=True)
    for h in headers:
        table.add_column(h)
    for row in rows:
        # Text, not markup: "[Phantasie]" is content
        table.add_row(*(Text(cell) for cell in row))
    return table


# ---------- tab completion ----------

class TabCompleter:
    """
    readline completer over the loaded index.

    The whole line is the completion text. In circular mode a repeated Tab
    (line unchanged since the last pick) steps through the same candidate
    list instead of recomputing it from the picked candidate.
    """
    def __init__(self, engine: Engine, mode: str) -> None:
        self.engine = engine
        self.mode = mode
        self.state = CompletionState()
        self._matches: tuple[str, ...] = ()

    def __call__(self, text: str, n: int) -> Optional[str]:
        if n == 0:
            self._matches = self.matches(text)
        return self._matches[n] if n < len(self._matches) else None

    def matches(self, line: str) -> tuple[str, ...]:
        stepping = (self.mode == CIRCULAR and self.state.offset is not None
                    and line == self.state.candidates[self.state.offset])
        candidates = self.state.candidates if stepping else self.engine.completions(line)
        shown, self.state = complete(candidates, self.mode, self.state)
        return shown

    def install(self) -> None:
        if readline is None:
            return
        readline.set_completer(self)
        readline.set_completer_delims("")
        if "libedit" in (readline.__doc__ or ""):
            readline.parse_and_bind("bind ^I rl_complete")
        else:
            readline.parse_and_bind("tab: complete")
            readline.parse_and_bind("set bell-style none")


# ---------- commands ----------

def _non_negative(s: str) -> int:
    v = int(s)
    if v < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return v

def _positive(s: str) -> int:
    v = int(s)
    if v < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return v

def _similarity(s: str) -> int:
    v = int(s)
    if not 0 <= v <= CFG.MAX_SIMILARITY:
        raise argparse.ArgumentTypeError(f"possible values: 0 to {CFG.MAX_SIMILARITY}")
    return v


def _common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--db", default=None, help="Store DSN: sqlite:///dir or memory:// (default: data dir)")
    p.add_argument("--verbose", action="store_true")


def _admin_parser(pairs: Sequence[str] = ()) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="dictcc", description="Manage imported dict.cc dictionaries")
    sub = p.add_subparsers(dest="command", required=True)
    imp = sub.add_parser("import", help="Import a dict.cc file")
    imp.add_argument("-f", "--force", action="store_true", help="Overwrite existing database if necessary")
    imp.add_argument("file", metavar="FILE",
                     help="dict.cc file from https://www1.dict.cc/translation_file_request.php")
    _common(imp)
    dele = sub.add_parser("delete", help="Delete an imported dict.cc database")
    dele.add_argument("language_pair", metavar="LANGUAGE_PAIR", type=str.lower, choices=pairs or None,
                      help="The language pair of the database")
    _common(dele)
    return p


def _translate_parser(pairs: Sequence[str] = (), languages: Sequence[str] = ()) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dictcc",
        description="Offline dict.cc lookup. Subcommands: import FILE, delete LANGUAGE_PAIR.",
    )
    # nothing imported yet: accept any value and let load() report it
    p.add_argument("-l", "--language-pair", required=True, type=str.lower, choices=pairs or None,
                   help="Languages to translate between")
    p.add_argument("-f", "--from", dest="language_from", required=True, type=str.lower,
                   choices=languages or None,
                   help="The source language to translate from")
    p.add_argument("-d", "--distance", type=_non_negative, default=CFG.DEFAULT_DISTANCE,
                   help="Fuzzy distance to find entries")
    p.add_argument("-r", "--limit-results", type=_positive, default=None, help="Limit the amount of results")
    p.add_argument("-s", "--min-similarity", type=_similarity, default=CFG.DEFAULT_MIN_SIMILARITY,
                   help="Only show results with a specific minimum of similarity [0 to 1000]")
    p.add_argument("-c", "--completion-type", type=str.lower, choices=CFG.COMPLETION_TYPES,
                   default=CFG.DEFAULT_COMPLETION_TYPE, help="Tab completion style")
    p.add_argument("--ascii", action="store_true", help="Use ASCII tables")
    p.add_argument("search", metavar="SEARCH", nargs="?", default=None,
                   help="Search without interactive mode")
    _common(p)
    return p


def _run_admin(args: argparse.Namespace) -> int:
    eng = Engine(args.db, verbose=args.verbose)
    try:
        if args.command == "import":
            print("Initializing database...")
            report = eng.import_file(args.file, force=args.force)
            for e in report.skipped:
                _err(f"skipped: {e}")
            print(f"Initialized database {report.pair.code}: {report.imported} entries"
                  + (f", {len(report.skipped)} lines skipped" if report.skipped else "") + ".")
        else:
            eng.delete(args.language_pair)
            print(f"Deleted {args.language_pair.lower()}.")
        return 0
    finally:
        eng.shutdown()


def print_results(eng: Engine, line: str, args: argparse.Namespace) -> None:
    entries = eng.search(line, max_distance=args.distance,
                         min_similarity=args.min_similarity, limit=args.limit_results)
    if not entries:
        return
    headers = [eng.source_language.upper(), eng.target_language.upper()]
    Console().print(results_table(headers, eng.translations(entries), ascii=args.ascii))


def _run_translate(args: argparse.Namespace) -> int:
    eng = Engine(args.db, verbose=args.verbose)
    try:
        eng.load(args.language_pair, args.language_from)

        if args.search:
            print_results(eng, args.search, args)
            return 0

        TabCompleter(eng, args.completion_type).install()
        while True:
            try:
                line = input("> ")
            except EOFError:
                print(); break
            except KeyboardInterrupt:
                print(); continue
            if not line.strip():
                break
            print_results(eng, line, args)
        return 0
    finally:
        eng.shutdown()


def _available(argv: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Imported pairs (both directions) and languages in the store named by --db."""
    pre = argparse.ArgumentParser(add_help=False)
    _common(pre)
    known, _ = pre.parse_known_args(argv)
    eng = Engine(known.db)
    try:
        return eng.available_language_pairs(), eng.available_languages()
    finally:
        eng.shutdown()


def main(argv: List[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        pairs, languages = _available(argv)
        if argv and argv[0] in ("import", "delete"):
            return _run_admin(_admin_parser(pairs).parse_args(argv))
        return _run_translate(_translate_parser(pairs, languages).parse_args(argv))
    except DictError as e:
        _err(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
