"""String-level facade — the utf8_* functions, operating on ``str``.

Converts host strings to UTF-8 buffers, calls the core, and converts the
result back. Examples:

    utf8_size("A ehm…, word.")              #=> 13
    utf8_upcase("Sluß")                     #=> "SLUSS"
    utf8_downcase("ORGANISÉE")              #=> "organisée"
    utf8_reverse("Comment ça va?")          #=> "?av aç tnemmoC"
    utf8_normalize(chr(101) + chr(769), "kc")  #=> chr(233), "é"
    utf8_titleize("привет всем")            #=> "Привет Всем"

Form selectors for utf8_normalize: "c", "d", "kc", "kd" (also ":kc" or
"NFKC"), or a NormalizationForm. Anything else raises InvalidForm.
"""

from __future__ import annotations

from typing import Any

from . import text as text_ops
from .errors import InvalidEncoding
from .normalization import parse_form


def _to_utf8(value: Any) -> bytes:
    if not isinstance(value, str):
        raise TypeError(f"wrong argument type {type(value).__name__} (expected str)")
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidEncoding(f"string holds a lone surrogate at index {exc.start}") from exc


def _from_utf8(data: bytes) -> str:
    return data.decode("utf-8")


def utf8_size(value: str) -> int:
    """Length of *value* in codepoints."""
    return text_ops.codepoint_count(_to_utf8(value))


def utf8_upcase(value: str) -> str:
    return _from_utf8(text_ops.upcase(_to_utf8(value)))


def utf8_downcase(value: str) -> str:
    return _from_utf8(text_ops.downcase(_to_utf8(value)))


def utf8_reverse(value: str) -> str:
    return _from_utf8(text_ops.reverse(_to_utf8(value)))


def utf8_titleize(value: str) -> str:
    return _from_utf8(text_ops.titleize(_to_utf8(value)))


def utf8_normalize(value: str, form: Any) -> str:
    """Normalized form of *value*. See http://www.unicode.org/reports/tr15/."""
    resolved = parse_form(form)
    return _from_utf8(text_ops.normalize(_to_utf8(value), resolved))
