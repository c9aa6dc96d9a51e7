"""Tests for length, case mapping, reverse and titleize."""

from __future__ import annotations

import pytest

from tests.conftest import cps, text_of
from unitext_engine.transforms import (
    CaseDirection,
    case_map,
    codepoint_count,
    downcase,
    reverse,
    titleize,
    upcase,
)


def test_codepoint_count() -> None:
    assert codepoint_count(cps("A ehm…, word.")) == 13
    assert codepoint_count([]) == 0
    assert codepoint_count(iter(cps("abc"))) == 3


def test_upcase_expands_sharp_s() -> None:
    assert text_of(upcase(cps("Sluß"))) == "SLUSS"


def test_downcase() -> None:
    assert text_of(downcase(cps("ORGANISÉE"))) == "organisée"


def test_case_map_directions() -> None:
    assert case_map(cps("aB"), CaseDirection.UPPER) == cps("AB")
    assert case_map(cps("aB"), CaseDirection.LOWER) == cps("ab")


def test_case_map_rejects_unknown_direction() -> None:
    with pytest.raises(ValueError):
        case_map(cps("a"), "upper")  # type: ignore[arg-type]


def test_case_mapping_is_context_free() -> None:
    """No Greek final sigma rule: every Σ lowercases to σ."""
    assert text_of(downcase(cps("ΟΔΟΣ"))) == "οδοσ"


def test_downcase_can_expand() -> None:
    """İ lowercases to i + combining dot above (no Turkish tailoring)."""
    assert downcase([0x0130]) == [0x69, 0x0307]


def test_case_map_does_not_modify_input() -> None:
    source = cps("abc")
    upcase(source)
    assert source == cps("abc")


def test_reverse() -> None:
    assert text_of(reverse(cps("Comment ça va?"))) == "?av aç tnemmoC"
    assert reverse([]) == []


def test_reverse_moves_marks_before_base() -> None:
    assert reverse([0x65, 0x0301, 0x61]) == [0x61, 0x0301, 0x65]


@pytest.mark.parametrize("text", ["", "a", "Comment ça va?", "étude", "😀x"])
def test_reverse_is_involution(text: str) -> None:
    assert reverse(reverse(cps(text))) == cps(text)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("привет всем", "Привет Всем"),
        ("hello world", "Hello World"),
        ("hello-world", "Hello-World"),
        ("hELLO", "HELLO"),
        ("  leading space", "  Leading Space"),
        ("don't stop", "Don'T Stop"),
        ("item2nd", "Item2nd"),
        ("2nd place", "2Nd Place"),
        ("$tag", "$Tag"),
        ("ǆemal", "ǅemal"),
        ("", ""),
    ],
)
def test_titleize(text: str, expected: str) -> None:
    assert text_of(titleize(cps(text))) == expected


def test_titleize_keeps_length() -> None:
    """ß has no single-codepoint title form, so it is left as is."""
    assert text_of(titleize(cps("ßtraße"))) == "ßtraße"
