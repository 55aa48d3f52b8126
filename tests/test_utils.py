"""Tests for file discovery and SET encoding detection."""

import os

import pytest

from affix.utils import collect_files, resolve_codec, sniff_encoding


@pytest.mark.parametrize("name, expected", [
    ("UTF-8", "utf-8"),
    ("ISO8859-1", "iso8859-1"),
    ("ISO8859-2", "iso8859-2"),
    ("KOI8-R", "koi8-r"),
    ("microsoft-cp1251", "cp1251"),
    ("ISCII-DEVANAGARI", None),
    ("", None),
])
def test_resolve_codec(name, expected):
    assert resolve_codec(name) == expected


def test_sniff_encoding_reads_set(tmp_path):
    f = tmp_path / "hu.aff"
    f.write_bytes("# magyar\n  set ISO8859-2\nTRY áő\n".encode("iso8859-2"))
    assert sniff_encoding(str(f)) == "iso8859-2"


def test_sniff_encoding_ignores_commented_set(tmp_path):
    f = tmp_path / "x.aff"
    f.write_text("#SET KOI8-R\nTRY abc\n", encoding="utf-8")
    assert sniff_encoding(str(f)) == "utf-8"


def test_sniff_encoding_unknown_falls_back(tmp_path, caplog):
    f = tmp_path / "x.aff"
    f.write_text("SET ISCII-DEVANAGARI\n", encoding="ascii")
    assert sniff_encoding(str(f), default="latin-1") == "latin-1"
    assert "unsupported SET encoding" in caplog.text


def test_collect_files_single_file(tmp_path):
    f = tmp_path / "only.txt"
    f.write_text("SET UTF-8\n")
    assert collect_files(str(f)) == [str(f)]


def test_collect_files_walks_directories(tmp_path):
    (tmp_path / "a.aff").write_text("")
    (tmp_path / "b.dic").write_text("")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "C.AFF").write_text("")
    found = collect_files(str(tmp_path))
    assert found == sorted([str(tmp_path / "a.aff"), os.path.join(str(sub), "C.AFF")])
    assert collect_files(str(tmp_path), exts=(".dic",)) == [str(tmp_path / "b.dic")]
