import io
from pathlib import Path
import pytest
from rich.cells import cell_len
from rich.console import Console

from dictcc.__main__ import TabCompleter, main, results_table
from dictcc.completion import CIRCULAR, LIST
from dictcc.engine import Engine


def _render(table) -> list[str]:
    console = Console(file=io.StringIO(), width=100)
    console.print(table)
    return console.file.getvalue().splitlines()


def test_results_table_ascii():
    lines = _render(results_table(["A", "BB"], [("x", "y"), ("long", "z")], ascii=True))
    assert lines[0].startswith("+") and lines[-1].startswith("+")
    assert "=" in lines[2] and "|" in lines[1]
    assert [c.strip() for c in lines[1].split("|")[1:3]] == ["A", "BB"]
    # rule between rows, double rule under the header
    assert len(lines) == 7
    assert all(ord(ch) < 128 for line in lines for ch in line)


def test_results_table_utf8_keeps_columns_aligned():
    rows = [("日本", "Japan"), ("Cafe\u0301", "caf\u00e9"), ("Gebilde {n} [Phantasie]", "figment")]
    lines = _render(results_table(["JA", "EN"], rows))
    assert lines[0].startswith("┌") and lines[2].startswith("╞")
    assert len({cell_len(line) for line in lines}) == 1
    # brackets are content, not markup
    assert any("[Phantasie]" in line for line in lines)


@pytest.mark.e2e
def test_import_then_search(dictcc_file: Path, sqlite_dsn: str, capsys):
    assert main(["import", str(dictcc_file), "--db", sqlite_dsn]) == 0
    out, err = capsys.readouterr()
    assert "Initialized database en-de: 5 entries, 1 lines skipped." in out
    assert "line 6" in err

    assert main(["-l", "en-de", "-f", "en", "-d", "1", "--ascii", "--db", sqlite_dsn, "figmen"]) == 0
    out, _ = capsys.readouterr()
    assert [c.strip() for c in out.splitlines()[1].split("|")[1:3]] == ["EN", "DE"]
    assert "Erfindung {f}" in out and "Gebilde {n} [Phantasie]" in out


@pytest.mark.e2e
def test_no_results_prints_nothing(dictcc_file: Path, sqlite_dsn: str, capsys):
    main(["import", str(dictcc_file), "--db", sqlite_dsn])
    capsys.readouterr()
    assert main(["-l", "en-de", "-f", "en", "--db", sqlite_dsn, "zebra"]) == 0
    assert capsys.readouterr().out == ""


@pytest.mark.e2e
def test_errors_go_to_stderr(dictcc_file: Path, sqlite_dsn: str, capsys):
    main(["import", str(dictcc_file), "--db", sqlite_dsn])
    capsys.readouterr()

    assert main(["import", str(dictcc_file), "--db", sqlite_dsn]) == 1
    assert "already been imported" in capsys.readouterr().err
    assert main(["import", "-f", str(dictcc_file), "--db", sqlite_dsn]) == 0

    assert main(["delete", "de-en", "--db", sqlite_dsn]) == 0
    # nothing imported any more: the value is accepted and the store reports it
    assert main(["delete", "de-en", "--db", sqlite_dsn]) == 1
    assert "No dictionary imported" in capsys.readouterr().err


@pytest.mark.e2e
def test_pair_and_language_limited_to_imported(dictcc_file: Path, sqlite_dsn: str, capsys):
    main(["import", str(dictcc_file), "--db", sqlite_dsn])
    capsys.readouterr()

    for bad in (["-l", "en-fr", "-f", "en"], ["-l", "en-de", "-f", "fr"]):
        with pytest.raises(SystemExit) as ei:
            main([*bad, "--db", sqlite_dsn, "figment"])
        assert ei.value.code == 2
        assert "invalid choice" in capsys.readouterr().err

    # both directions and any case are accepted
    assert main(["-l", "DE-EN", "-f", "EN", "--db", sqlite_dsn, "figment"]) == 0
    assert "Erfindung {f}" in capsys.readouterr().out


@pytest.mark.e2e
def test_any_pair_accepted_before_first_import(sqlite_dsn: str, capsys):
    assert main(["-l", "en-de", "-f", "en", "--db", sqlite_dsn, "figment"]) == 1
    assert "No dictionary imported for language pair de-en" in capsys.readouterr().err


@pytest.mark.parametrize("bad", [["-s", "1001"], ["-d", "-1"], ["-r", "0"], ["-c", "menu"]])
def test_option_validation(bad):
    with pytest.raises(SystemExit) as ei:
        main(["-l", "en-de", "-f", "en", "--db", "memory://", *bad, "x"])
    assert ei.value.code == 2


@pytest.fixture
def engine(completion_file: Path):
    eng = Engine("memory://")
    eng.import_file(completion_file)
    eng.load("en-de", "en")
    yield eng
    eng.shutdown()


def test_tab_completer_circular_steps_on_repeated_tab(engine):
    tc = TabCompleter(engine, CIRCULAR)
    assert tc("to", 0) == "tomato" and tc("to", 1) is None
    assert tc("tomato", 0) == "to go"
    assert tc("to go", 0) == "to go out"
    assert tc("to go out", 0) == "tomato"


def test_tab_completer_list(engine):
    tc = TabCompleter(engine, LIST)
    assert [tc("to", n) for n in range(4)] == ["tomato", "to go", "to go out", None]
