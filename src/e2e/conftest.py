from pathlib import Path
import pytest

# dict.cc export: header, a comment, a blank line (5), one unbalanced
# line (6) and one single-column line (8)
DICTCC_EN_DE = (
    "# EN-DE vocabulary database\tcompiled by dict.cc\n"
    "# Date and time\t2024-01-01 00:00\n"
    "figment\tErfindung {f}\tnoun\n"
    "figment\tGebilde {n} [Phantasie]\tnoun\n"
    "\n"
    "to go (by bus\tfahren\tverb\n"
    "Ben &amp; Jerry's\tBen &amp; Jerry's\n"
    "onlyonecolumn\n"
    "to go\tgehen\tverb\t[travel]\n"
    "pigment\tPigment {n}\tnoun\n"
)

COMPLETION_EN_DE = (
    "# EN-DE vocabulary database\n"
    "to go\tgehen\tverb\n"
    "tomato\tTomate {f}\tnoun\n"
    "to\tzu\tprep\n"
    "to go out\tausgehen\tverb\n"
    "go\tGo {n}\tnoun\n"
)


def _write(tmp: Path, text: str, name: str) -> Path:
    path = tmp / name
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def dictcc_file(tmp_path: Path) -> Path:
    return _write(tmp_path, DICTCC_EN_DE, "dictcc-en-de.txt")


@pytest.fixture
def completion_file(tmp_path: Path) -> Path:
    return _write(tmp_path, COMPLETION_EN_DE, "dictcc-completion.txt")


@pytest.fixture
def sqlite_dsn(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'dicts'}"
