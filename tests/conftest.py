"""Pytest fixtures and helpers shared across all test modules.

Codepoint helpers for readable assertions, and a minimal fixture DOCX
generated programmatically.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest


def cps(text: str) -> list[int]:
    """Codepoints of a Python string."""
    return [ord(ch) for ch in text]


def text_of(codepoints: list[int]) -> str:
    """Python string from codepoints."""
    return "".join(chr(cp) for cp in codepoints)


def make_docx(paragraphs: list[str]) -> bytes:
    """Create a minimal DOCX in memory from a list of paragraph strings.

    Returns the raw bytes of the DOCX file.
    """
    import docx  # python-docx

    doc = docx.Document()
    for para in paragraphs:
        doc.add_paragraph(para)

    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


# Ill-formed UTF-8 inputs, one per failure class
MALFORMED_UTF8 = [
    pytest.param(b"\x80", id="lone-continuation"),
    pytest.param(b"\xc1\x81", id="overlong-2-byte-ascii"),
    pytest.param(b"\xe0\x80\xaf", id="overlong-3-byte"),
    pytest.param(b"\xed\xa0\x80", id="surrogate"),
    pytest.param(b"\xf4\x90\x80\x80", id="above-10ffff"),
    pytest.param(b"\xf8\x88\x80\x80\x80", id="invalid-lead"),
    pytest.param(b"ab\xe2\x82", id="truncated-at-end"),
    pytest.param(b"\xe2\x28\xa1", id="truncated-mid"),
]


@pytest.fixture()
def simple_docx(tmp_path: Path) -> Path:
    """A minimal fixture DOCX with two paragraphs."""
    data = make_docx(["привет всем", "comment ça va?"])
    path = tmp_path / "fixture.docx"
    path.write_bytes(data)
    return path


@pytest.fixture()
def invalid_utf8_file(tmp_path: Path) -> Path:
    """A text file with a lone continuation byte at offset 3."""
    path = tmp_path / "broken.txt"
    path.write_bytes(b"abc\x80def")
    return path
