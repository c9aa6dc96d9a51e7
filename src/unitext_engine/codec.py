"""UTF-8 codec — bytes <-> codepoint sequences.

Strict decoder following the well-formed byte sequence table of the Unicode
standard (chapter 3, table 3-7). Anything outside that table is rejected with
InvalidEncoding: stray continuation bytes, the lead bytes C0/C1/F5..FF,
overlong forms, surrogates, values above U+10FFFF and truncated sequences.
The encoder always produces the shortest form.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from .errors import InvalidEncoding

Codepoints = list[int]
BytesLike = Union[bytes, bytearray, memoryview]

MAX_CODEPOINT = 0x10FFFF
SURROGATE_MIN = 0xD800
SURROGATE_MAX = 0xDFFF

# Lead bytes whose second byte has a narrower range than 80..BF.
# lead -> (low, high, reason when the second byte is a continuation outside it)
_SECOND_BYTE_RANGE: dict[int, tuple[int, int, str]] = {
    0xE0: (0xA0, 0xBF, "overlong encoding"),
    0xED: (0x80, 0x9F, "surrogate codepoint"),
    0xF0: (0x90, 0xBF, "overlong encoding"),
    0xF4: (0x80, 0x8F, "codepoint above U+10FFFF"),
}


@dataclass(frozen=True)
class Decoded:
    """Result of a decode: the codepoints and their count."""

    codepoints: Codepoints
    count: int


def is_codepoint(value: int) -> bool:
    """True for a Unicode scalar value (no surrogates, <= U+10FFFF)."""
    return 0 <= value <= MAX_CODEPOINT and not SURROGATE_MIN <= value <= SURROGATE_MAX


def _is_continuation(byte: int) -> bool:
    return 0x80 <= byte <= 0xBF


def decode_counted(data: BytesLike) -> Decoded:
    """Decode UTF-8 *data* and count codepoints in the same pass."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected a bytes-like object, got {type(data).__name__}")
    if isinstance(data, memoryview):
        data = data.tobytes()

    out: Codepoints = []
    append = out.append
    n = len(data)
    i = 0

    while i < n:
        lead = data[i]
        if lead < 0x80:
            append(lead)
            i += 1
            continue

        if lead < 0xC0:
            raise InvalidEncoding(f"unexpected continuation byte 0x{lead:02X}", i)
        if lead < 0xC2:
            raise InvalidEncoding("overlong encoding", i)
        if lead < 0xE0:
            size, cp = 2, lead & 0x1F
        elif lead < 0xF0:
            size, cp = 3, lead & 0x0F
        elif lead < 0xF5:
            size, cp = 4, lead & 0x07
        else:
            raise InvalidEncoding(f"invalid lead byte 0x{lead:02X}", i)

        low, high, reason = _SECOND_BYTE_RANGE.get(lead, (0x80, 0xBF, ""))
        for j in range(i + 1, i + size):
            if j >= n:
                raise InvalidEncoding("truncated sequence at end of input", i)
            byte = data[j]
            if not _is_continuation(byte):
                raise InvalidEncoding("truncated sequence", i)
            if j == i + 1 and not low <= byte <= high:
                raise InvalidEncoding(reason, i)
            cp = (cp << 6) | (byte & 0x3F)

        append(cp)
        i += size

    return Decoded(out, len(out))


def decode(data: BytesLike) -> Codepoints:
    """Decode UTF-8 *data* into a list of codepoints.

    Raises InvalidEncoding on the first ill-formed subsequence.
    """
    return decode_counted(data).codepoints


def encode(codepoints: Iterable[int]) -> bytes:
    """Encode codepoints as minimal-length UTF-8."""
    buf = bytearray()
    for cp in codepoints:
        if cp < 0:
            raise ValueError(f"negative codepoint: {cp}")
        if cp < 0x80:
            buf.append(cp)
        elif cp < 0x800:
            buf += bytes((0xC0 | (cp >> 6), 0x80 | (cp & 0x3F)))
        elif cp < 0x10000:
            if SURROGATE_MIN <= cp <= SURROGATE_MAX:
                raise ValueError(f"surrogate is not a codepoint: U+{cp:04X}")
            buf += bytes((
                0xE0 | (cp >> 12),
                0x80 | ((cp >> 6) & 0x3F),
                0x80 | (cp & 0x3F),
            ))
        elif cp <= MAX_CODEPOINT:
            buf += bytes((
                0xF0 | (cp >> 18),
                0x80 | ((cp >> 12) & 0x3F),
                0x80 | ((cp >> 6) & 0x3F),
                0x80 | (cp & 0x3F),
            ))
        else:
            raise ValueError(f"codepoint out of range: 0x{cp:X}")
    return bytes(buf)
