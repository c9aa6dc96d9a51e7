"""Tests for file input sources (raw UTF-8, encoding detection, DOCX)."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from unitext_engine.sources import detect_encoding, load_source, read_docx_paragraphs


def test_raw_source_keeps_bytes(tmp_path: Path) -> None:
    path = tmp_path / "a.txt"
    path.write_bytes("Comment ça va?".encode("utf-8"))
    source = load_source(path)
    assert source.data == "Comment ça va?".encode("utf-8")
    assert source.method == "raw"
    assert source.encoding == "utf-8"


def test_raw_source_does_not_repair_invalid_utf8(invalid_utf8_file: Path) -> None:
    """Raw mode leaves validation to the core."""
    source = load_source(invalid_utf8_file)
    assert source.data == b"abc\x80def"


def test_detect_utf8_bom(tmp_path: Path) -> None:
    path = tmp_path / "bom.txt"
    path.write_bytes(b"\xef\xbb\xbfhello")
    source = load_source(path, detect=True)
    assert source.data == b"hello"
    assert source.method == "bom"


def test_detect_utf16_bom(tmp_path: Path) -> None:
    path = tmp_path / "utf16.txt"
    path.write_bytes("привет".encode("utf-16"))
    source = load_source(path, detect=True)
    assert source.data == "привет".encode("utf-8")
    assert source.encoding == "utf-16"


def test_detect_legacy_encoding_transcodes_to_utf8(tmp_path: Path) -> None:
    path = tmp_path / "legacy.txt"
    path.write_bytes("Le café est très bon, merci beaucoup.".encode("cp1252"))
    source = load_source(path, detect=True)
    decoded = source.data.decode("utf-8")
    assert decoded.startswith("Le caf")
    assert source.method in ("charset-normalizer", "cp1252-fallback", "latin-1-fallback")


def test_detect_encoding_bom_only() -> None:
    assert detect_encoding(b"\xef\xbb\xbfabc") == ("utf-8-sig", "bom")
    assert detect_encoding(b"\xff\xfea\x00") == ("utf-16", "bom")


def test_docx_paragraphs(simple_docx: Path) -> None:
    assert read_docx_paragraphs(simple_docx) == ["привет всем", "comment ça va?"]
    source = load_source(simple_docx)
    assert source.method == "docx"
    assert source.data == "привет всем\ncomment ça va?".encode("utf-8")


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_source(tmp_path / "nope.txt")


def test_source_to_dict(tmp_path: Path) -> None:
    path = tmp_path / "a.txt"
    path.write_bytes(b"abc")
    info = load_source(path).to_dict()
    assert info["bytes"] == 3
    assert info["method"] == "raw"
    assert len(info["source_hash"]) == 64


def test_run_logger_receives_messages(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "a.txt"
    path.write_bytes(b"abc")
    log = logging.getLogger("unitext.test.sources")
    with caplog.at_level(logging.INFO, logger="unitext.test.sources"):
        load_source(path, run_logger=log)
    assert any("a.txt" in rec.getMessage() for rec in caplog.records)
