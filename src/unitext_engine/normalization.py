"""Normalization engine — NFC, NFD, NFKC, NFKD over codepoint sequences.

See https://www.unicode.org/reports/tr15/ for the algorithm:

1. Decompose every codepoint, recursively (canonical mappings only for
   NFD/NFC, compatibility mappings too for NFKD/NFKC).
2. Put combining marks in canonical order: each maximal run of non-zero
   combining class codepoints is stably sorted by class.
3. For NFC/NFKC, recompose left to right. A mark composes with the last
   starter unless a mark of the same or higher class sits between them.
"""

from __future__ import annotations

import enum
from typing import Any, Iterable

from .codec import Codepoints
from .errors import InvalidForm
from .properties import combining_class, compose_pair, full_decomposition


class NormalizationForm(enum.Enum):
    """The four Unicode normalization forms."""

    NFC = ("c", False, True)
    NFD = ("d", False, False)
    NFKC = ("kc", True, True)
    NFKD = ("kd", True, False)

    def __init__(self, tag: str, compatibility: bool, composed: bool) -> None:
        self.tag = tag
        self.compatibility = compatibility
        self.composed = composed


_FORMS_BY_TAG: dict[str, NormalizationForm] = {
    form.tag: form for form in NormalizationForm
}


def parse_form(value: Any) -> NormalizationForm:
    """Resolve an external form selector to a NormalizationForm.

    Accepts the members themselves, the tags ``c``, ``d``, ``kc``, ``kd``
    (optionally written as symbols, ``:kc``) and the names ``NFC`` ...
    ``NFKD``, case-insensitively. Anything else raises InvalidForm.
    """
    if isinstance(value, NormalizationForm):
        return value
    if not isinstance(value, str):
        raise InvalidForm(value)
    key = value.strip().lower()
    if key.startswith(":"):
        key = key[1:]
    if key.startswith("nf"):
        key = key[2:]
    form = _FORMS_BY_TAG.get(key)
    if form is None:
        raise InvalidForm(value)
    return form


def decompose(codepoints: Iterable[int], compatibility: bool = False) -> Codepoints:
    """Fully decompose each codepoint (no reordering)."""
    result: Codepoints = []
    for cp in codepoints:
        result.extend(full_decomposition(cp, compatibility))
    return result


def canonical_order(codepoints: Iterable[int]) -> Codepoints:
    """Return a copy with every run of combining marks sorted by class.

    Starters (class 0) never move. ``sorted`` is stable, so marks of equal
    class keep their relative order.
    """
    result = list(codepoints)
    n = len(result)
    i = 0
    while i < n:
        if combining_class(result[i]) == 0:
            i += 1
            continue
        j = i + 1
        while j < n and combining_class(result[j]) != 0:
            j += 1
        if j - i > 1:
            result[i:j] = sorted(result[i:j], key=combining_class)
        i = j
    return result


def compose(codepoints: Iterable[int]) -> Codepoints:
    """Canonical composition of a decomposed, canonically ordered sequence."""
    result: Codepoints = []
    starter_pos = -1
    last_class = 0

    for cp in codepoints:
        cc = combining_class(cp)
        # Blocked when a retained mark of class >= cc sits after the starter.
        if starter_pos >= 0 and (last_class == 0 or last_class < cc):
            composite = compose_pair(result[starter_pos], cp)
            if composite is not None:
                result[starter_pos] = composite
                continue
        if cc == 0:
            starter_pos = len(result)
        last_class = cc
        result.append(cp)

    return result


def normalize(codepoints: Iterable[int], form: NormalizationForm) -> Codepoints:
    """Normalize *codepoints* to *form*.

    The form is checked before any work is done; a value that is not a
    NormalizationForm raises InvalidForm (use parse_form() for tags).
    """
    if not isinstance(form, NormalizationForm):
        raise InvalidForm(form)

    result = canonical_order(decompose(codepoints, form.compatibility))
    if form.composed:
        result = compose(result)
    return result


def is_normalized(codepoints: Iterable[int], form: NormalizationForm) -> bool:
    """True if normalizing *codepoints* to *form* leaves them unchanged."""
    original = list(codepoints)
    return normalize(original, form) == original
