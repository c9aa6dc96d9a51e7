"""Input sources — load file contents as bytes for the text core.

Three ways in:

- raw (default): the file bytes are handed to the core untouched, so a
  file that is not valid UTF-8 fails with InvalidEncoding.
- detected (--detect-encoding): legacy encodings are transcoded to UTF-8
  first. Detection strategy:
  1. BOM detection (UTF-8 BOM -> utf-8-sig, UTF-16 BOM -> utf-16).
  2. charset-normalizer.
  3. Fallback: cp1252, then latin-1 (logs a warning).
- .docx files: every paragraph (python-docx), joined with "\\n".
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from charset_normalizer import from_bytes

logger = logging.getLogger(__name__)

DOCX_SUFFIXES = frozenset([".docx"])


@dataclass
class SourceText:
    """Bytes ready for the core plus how they were obtained."""

    data: bytes
    path: Path
    encoding: str
    method: str  # raw | bom | charset-normalizer | cp1252-fallback | latin-1-fallback | docx
    source_hash: str

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "encoding": self.encoding,
            "method": self.method,
            "bytes": len(self.data),
            "source_hash": self.source_hash,
        }


def detect_encoding(data: bytes) -> tuple[str, str]:
    """Detect text encoding from BOM or charset-normalizer.

    Only reached with --detect-encoding: legacy files are transcoded to UTF-8
    here so the strict core decoder always sees UTF-8 input.

    Returns (encoding, method) where method is one of:
      'bom', 'charset-normalizer', 'cp1252-fallback', 'latin-1-fallback'.
    """
    # BOM detection
    if data.startswith(b"\xef\xbb\xbf"):
        return ("utf-8-sig", "bom")
    if data.startswith((b"\xff\xfe", b"\xfe\xff")):
        return ("utf-16", "bom")

    best = from_bytes(data).best()
    if best is not None:
        return (str(best.encoding), "charset-normalizer")

    # Fallback: cp1252 first, then latin-1
    try:
        data.decode("cp1252")
        return ("cp1252", "cp1252-fallback")
    except UnicodeDecodeError:
        return ("latin-1", "latin-1-fallback")


def read_docx_paragraphs(path: str | Path) -> list[str]:
    """Return the text of every paragraph of a DOCX file, in order."""
    try:
        import docx  # python-docx
    except ImportError as exc:
        raise ImportError("python-docx is required: pip install python-docx") from exc

    document = docx.Document(str(path))
    return [para.text for para in document.paragraphs]


def load_source(
    path: str | Path,
    detect: bool = False,
    run_logger: Optional[logging.Logger] = None,
) -> SourceText:
    """Read *path* and return its contents as bytes for the text core."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    log = run_logger or logger
    raw_bytes = path.read_bytes()
    source_hash = hashlib.sha256(raw_bytes).hexdigest()

    if path.suffix.lower() in DOCX_SUFFIXES:
        paragraphs = read_docx_paragraphs(path)
        log.info("Read %d paragraphs from %s", len(paragraphs), path.name)
        return SourceText(
            data="\n".join(paragraphs).encode("utf-8"),
            path=path,
            encoding="utf-8",
            method="docx",
            source_hash=source_hash,
        )

    if not detect:
        log.info("Read %d bytes from %s (raw utf-8)", len(raw_bytes), path.name)
        return SourceText(raw_bytes, path, "utf-8", "raw", source_hash)

    encoding, method = detect_encoding(raw_bytes)
    if method in ("cp1252-fallback", "latin-1-fallback"):
        log.warning("Encoding detection fell back to %s for %s", encoding, path.name)

    text = raw_bytes.decode(encoding, errors="replace")
    log.info("Decoded %s as %s (method=%s)", path.name, encoding, method)
    return SourceText(text.encode("utf-8"), path, encoding, method, source_hash)
