"""Transform operations over codepoint sequences.

Every function takes an iterable of codepoints and returns a new list; the
input is never modified.

- codepoint_count: number of codepoints (not bytes, not graphemes).
- case_map / upcase / downcase: full, context-free case mapping. One
  codepoint may expand (ß -> SS). No final-sigma rule, no Turkish dotted i.
- reverse: codepoint order reversed. Combining marks end up before their
  base character; grapheme clusters are not preserved.
- titleize: first letter of each word to titlecase, see below.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sized

from .codec import Codepoints
from .properties import (
    is_alpha,
    is_punct,
    is_space,
    lower_mapping,
    title_mapping,
    upper_mapping,
)


class CaseDirection(enum.Enum):
    UPPER = "upper"
    LOWER = "lower"


def codepoint_count(codepoints: Iterable[int]) -> int:
    if isinstance(codepoints, Sized):
        return len(codepoints)
    return sum(1 for _ in codepoints)


def case_map(codepoints: Iterable[int], direction: CaseDirection) -> Codepoints:
    """Map each codepoint to its upper or lower case form, in order."""
    if direction is CaseDirection.UPPER:
        mapping = upper_mapping
    elif direction is CaseDirection.LOWER:
        mapping = lower_mapping
    else:
        raise ValueError(f"Unknown case direction: {direction!r}")

    result: Codepoints = []
    for cp in codepoints:
        result.extend(mapping(cp))
    return result


def upcase(codepoints: Iterable[int]) -> Codepoints:
    return case_map(codepoints, CaseDirection.UPPER)


def downcase(codepoints: Iterable[int]) -> Codepoints:
    return case_map(codepoints, CaseDirection.LOWER)


def reverse(codepoints: Iterable[int]) -> Codepoints:
    return list(codepoints)[::-1]


def titleize(codepoints: Iterable[int]) -> Codepoints:
    """Titlecase the first letter of every word.

    A word starts at the beginning of the text and after any whitespace or
    punctuation. The first letter after a word start is titlecased and
    ends the word start; later letters are kept as they are. Digits,
    symbols and marks neither start nor end a word: "item2nd" -> "Item2nd",
    "2nd" -> "2Nd".
    """
    result: Codepoints = []
    at_word_start = True

    for cp in codepoints:
        if is_alpha(cp):
            if at_word_start:
                cp = title_mapping(cp)
                at_word_start = False
        elif is_space(cp) or is_punct(cp):
            at_word_start = True
        result.append(cp)

    return result
