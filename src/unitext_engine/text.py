"""UTF-8 text boundary — bytes in, bytes (or a count) out.

Each function decodes its input strictly, applies one transform and
re-encodes the result. A decoding failure raises InvalidEncoding before any
output is produced.
"""

from __future__ import annotations

from typing import Any, Callable

from . import transforms
from .codec import BytesLike, Codepoints, decode, decode_counted, encode
from .normalization import normalize as normalize_codepoints
from .normalization import parse_form


def _apply(data: BytesLike, transform: Callable[[Codepoints], Codepoints]) -> bytes:
    return encode(transform(decode(data)))


def codepoint_count(data: BytesLike) -> int:
    """Number of codepoints in UTF-8 *data*.

        codepoint_count("A ehm…, word.".encode()) #=> 13
    """
    return decode_counted(data).count


def upcase(data: BytesLike) -> bytes:
    """upcase("Sluß".encode()) #=> b"SLUSS" """
    return _apply(data, transforms.upcase)


def downcase(data: BytesLike) -> bytes:
    return _apply(data, transforms.downcase)


def reverse(data: BytesLike) -> bytes:
    return _apply(data, transforms.reverse)


def titleize(data: BytesLike) -> bytes:
    return _apply(data, transforms.titleize)


def normalize(data: BytesLike, form: Any) -> bytes:
    """Normalize UTF-8 *data* to *form* (a NormalizationForm or a tag).

    An unknown form raises InvalidForm before *data* is decoded.
    """
    resolved = parse_form(form)
    return encode(normalize_codepoints(decode(data), resolved))
