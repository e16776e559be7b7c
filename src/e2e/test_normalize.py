import pytest

from dictcc.normalize import normalize, normalize_query, normalize_text
from dictcc.parser import parse


def test_annotations_are_not_part_of_the_term():
    assert normalize(parse("  Das   Haus {n} [Bau] ")) == "das haus"
    assert normalize(parse("Gebilde {n}")) == normalize(parse("gebilde [Phantasie]"))


def test_only_annotations_gives_empty_term():
    assert normalize(parse("{f} [x]")) == ""


@pytest.mark.parametrize("text", ["  To\tGo  OUT ", "Straße", "a  b c", ""])
def test_normalize_text_is_idempotent(text):
    once = normalize_text(text)
    assert normalize_text(once) == once


def test_casefold():
    assert normalize_text("Straße") == "strasse"


def test_query_is_nfc_composed():
    # "e" + combining acute accent vs precomposed "é"
    assert normalize_query("Cafe\u0301") == "caf\u00e9"
    assert normalize_query("  CAFÉ ") == "café"


@pytest.mark.parametrize("line", [
    "to go",
    "  Figment   of the\tImagination ",
    "Straße",
    "Café au lait",
    "",
])
def test_bracket_free_line_normalizes_like_plain_text(line):
    assert normalize(parse(line)) == normalize_text(line)


def test_terms_and_queries_share_unicode_form():
    # decomposed input yields the same key as its precomposed form
    assert normalize(parse("Cafe\u0301")) == normalize(parse("Caf\u00e9")) == "caf\u00e9"
    assert normalize_text("Cafe\u0301") == normalize_query("Caf\u00e9")
