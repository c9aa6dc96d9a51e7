"""Unicode property tables — classification and mapping lookups.

Thin, read-only layer over the standard ``unicodedata`` database. Per-codepoint
lookups go straight to ``unicodedata`` (or to ``str`` case mapping, which uses
the same data). The one table that ``unicodedata`` does not expose, the
canonical composition pairs, is derived once per process on first use and
then shared behind a ``MappingProxyType``.

Hangul syllables have no entries in the decomposition data; they are handled
arithmetically (Unicode standard, section 3.12).
"""

from __future__ import annotations

import logging
import threading
import time
import unicodedata
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

from .codec import MAX_CODEPOINT, SURROGATE_MAX, SURROGATE_MIN

logger = logging.getLogger(__name__)

# Hangul syllable arithmetic
S_BASE = 0xAC00
L_BASE = 0x1100
V_BASE = 0x1161
T_BASE = 0x11A7
L_COUNT = 19
V_COUNT = 21
T_COUNT = 28
N_COUNT = V_COUNT * T_COUNT  # 588
S_COUNT = L_COUNT * N_COUNT  # 11172

# Controls that count as whitespace alongside the Zs/Zl/Zp categories
_SPACE_CONTROLS = frozenset([0x09, 0x0A, 0x0C, 0x0D])
_SPACE_CATEGORIES = frozenset(["Zs", "Zl", "Zp"])


@dataclass(frozen=True)
class UnicodeTables:
    """Process-wide derived tables. Never mutated after construction."""

    unicode_version: str
    compositions: Mapping[tuple[int, int], int]


_tables: Optional[UnicodeTables] = None
_tables_lock = threading.Lock()


def _build_compositions() -> dict[tuple[int, int], int]:
    """Collect primary composites: (starter, mark) -> composed codepoint.

    A codepoint recomposes only if its canonical decomposition has exactly
    two elements and it survives NFC unchanged, which rules out composition
    exclusions, singletons and non-starter decompositions.
    """
    pairs: dict[tuple[int, int], int] = {}
    for cp in range(MAX_CODEPOINT + 1):
        if SURROGATE_MIN <= cp <= SURROGATE_MAX:
            continue
        raw = unicodedata.decomposition(chr(cp))
        if not raw or raw.startswith("<"):
            continue
        parts = raw.split()
        if len(parts) != 2:
            continue
        if not unicodedata.is_normalized("NFC", chr(cp)):
            continue
        pairs[(int(parts[0], 16), int(parts[1], 16))] = cp
    return pairs


def get_tables() -> UnicodeTables:
    """Return the shared tables, building them on first call."""
    global _tables
    if _tables is not None:
        return _tables
    with _tables_lock:
        if _tables is None:
            started = time.perf_counter()
            compositions = _build_compositions()
            _tables = UnicodeTables(
                unicode_version=unicodedata.unidata_version,
                compositions=MappingProxyType(compositions),
            )
            logger.debug(
                "Built composition table: %d pairs (Unicode %s) in %.3fs",
                len(compositions), unicodedata.unidata_version,
                time.perf_counter() - started,
            )
    return _tables


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def category(cp: int) -> str:
    return unicodedata.category(chr(cp))


def is_alpha(cp: int) -> bool:
    """Letters: general categories Lu, Ll, Lt, Lm, Lo."""
    return category(cp)[0] == "L"


def is_space(cp: int) -> bool:
    """Tab, LF, FF, CR, or a space/line/paragraph separator."""
    return cp in _SPACE_CONTROLS or category(cp) in _SPACE_CATEGORIES


def is_punct(cp: int) -> bool:
    """Punctuation: general categories Pc, Pd, Ps, Pe, Pi, Pf, Po."""
    return category(cp)[0] == "P"


def combining_class(cp: int) -> int:
    return unicodedata.combining(chr(cp))


# ---------------------------------------------------------------------------
# Case mappings
# ---------------------------------------------------------------------------

def upper_mapping(cp: int) -> tuple[int, ...]:
    """Full uppercase mapping of one codepoint, e.g. ß -> (S, S)."""
    return tuple(ord(ch) for ch in chr(cp).upper())


def lower_mapping(cp: int) -> tuple[int, ...]:
    """Full lowercase mapping of one codepoint, without context rules."""
    return tuple(ord(ch) for ch in chr(cp).lower())


def title_mapping(cp: int) -> int:
    """Single-codepoint titlecase mapping; unchanged if there is none."""
    titled = chr(cp).title()
    if len(titled) == 1:
        return ord(titled)
    return cp


# ---------------------------------------------------------------------------
# Decomposition / composition
# ---------------------------------------------------------------------------

def is_hangul_syllable(cp: int) -> bool:
    return S_BASE <= cp < S_BASE + S_COUNT


def decomposition(cp: int, compatibility: bool = False) -> tuple[int, ...]:
    """One level of decomposition; empty tuple if the codepoint has none.

    Compatibility mappings (tagged ``<font>``, ``<compat>``...) are only used
    when *compatibility* is true.
    """
    raw = unicodedata.decomposition(chr(cp))
    if not raw:
        return ()
    if raw.startswith("<"):
        if not compatibility:
            return ()
        raw = raw.split(">", 1)[1]
    return tuple(int(part, 16) for part in raw.split())


def _hangul_decomposition(cp: int) -> tuple[int, ...]:
    index = cp - S_BASE
    lead = L_BASE + index // N_COUNT
    vowel = V_BASE + (index % N_COUNT) // T_COUNT
    trail = T_BASE + index % T_COUNT
    if trail == T_BASE:
        return (lead, vowel)
    return (lead, vowel, trail)


@lru_cache(maxsize=8192)
def full_decomposition(cp: int, compatibility: bool = False) -> tuple[int, ...]:
    """Recursive decomposition of *cp*; ``(cp,)`` if nothing applies."""
    if is_hangul_syllable(cp):
        return _hangul_decomposition(cp)
    parts = decomposition(cp, compatibility)
    if not parts:
        return (cp,)
    result: list[int] = []
    for part in parts:
        result.extend(full_decomposition(part, compatibility))
    return tuple(result)


def compose_pair(first: int, second: int) -> Optional[int]:
    """Primary composite of (first, second), or None."""
    # L + V -> LV
    if L_BASE <= first < L_BASE + L_COUNT and V_BASE <= second < V_BASE + V_COUNT:
        return S_BASE + ((first - L_BASE) * V_COUNT + (second - V_BASE)) * T_COUNT
    # LV + T -> LVT
    if (
        is_hangul_syllable(first)
        and (first - S_BASE) % T_COUNT == 0
        and T_BASE < second < T_BASE + T_COUNT
    ):
        return first + (second - T_BASE)
    return get_tables().compositions.get((first, second))
