import sqlite3
from pathlib import Path
import pytest

from dictcc.DB import make_store
from dictcc.errors import AlreadyImported, DictionaryNotFound, UnsupportedSchemaVersion
from dictcc.loader import load_dictcc_file


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path: Path):
    dsn = "memory://" if request.param == "memory" else f"sqlite:///{tmp_path / 'dicts'}"
    s = make_store(dsn)
    yield s
    s.close()


@pytest.mark.e2e
def test_save_load_roundtrip(store, dictcc_file: Path):
    pair = load_dictcc_file(dictcc_file).pair
    store.save(pair)
    assert store.load("en-de") == pair
    # both directions address the same snapshot
    assert store.load("DE-EN") == pair
    assert store.exists("de-en")
    assert store.available_pairs() == ["de-en"]


@pytest.mark.e2e
def test_already_imported_and_force(store, dictcc_file: Path):
    pair = load_dictcc_file(dictcc_file).pair
    store.save(pair)
    with pytest.raises(AlreadyImported):
        store.save(pair)
    store.save(pair, force=True)
    assert len(store.load("en-de")) == len(pair)


@pytest.mark.e2e
def test_delete(store, dictcc_file: Path):
    store.save(load_dictcc_file(dictcc_file).pair)
    store.delete("de-en")
    assert not store.exists("en-de")
    assert store.available_pairs() == []
    with pytest.raises(DictionaryNotFound):
        store.load("en-de")
    with pytest.raises(DictionaryNotFound):
        store.delete("en-de")


@pytest.mark.e2e
def test_sqlite_schema_version_mismatch(tmp_path: Path, dictcc_file: Path):
    store = make_store(f"sqlite:///{tmp_path / 'dicts'}")
    store.save(load_dictcc_file(dictcc_file).pair)

    conn = sqlite3.connect(store.path_for("en-de"))
    conn.execute("UPDATE meta SET value = '99' WHERE key = 'schema_version'")
    conn.commit()
    conn.close()

    with pytest.raises(UnsupportedSchemaVersion) as ei:
        store.load("en-de")
    assert ei.value.found == "99"


def test_sqlite_file_without_meta(tmp_path: Path):
    store = make_store(f"sqlite:///{tmp_path}")
    conn = sqlite3.connect(tmp_path / "de-en.sqlite")
    conn.execute("CREATE TABLE other (x INTEGER)")
    conn.commit()
    conn.close()
    with pytest.raises(UnsupportedSchemaVersion):
        store.load("en-de")


def test_unknown_dsn():
    with pytest.raises(ValueError):
        make_store("postgres://localhost/db")
