import pytest

from sidebearings import models
from sidebearings.harmonic import (
    estimate_balanced_spacing,
    group_label,
    partial_to_full,
    proof_strings,
    suggest_master_pairs,
)
from sidebearings.models import FullOverride, PartialOverride, SideBearingPair
from sidebearings.settings import SousaGroups
from conftest import rect_glyph


def make_font(glyphs, weight_class=400):
    return models.Font(glyphs, units_per_em=1000, weight_class=weight_class)


@pytest.fixture
def harmonic_font():
    return make_font(
        [
            rect_glyph("H", 30, 500, 0, 700, 30),
            rect_glyph("n", 40, 400, 0, 500, 30),
            rect_glyph("o", 40, 400, 0, 500, 30),
            rect_glyph(".", 20, 50, 0, 50, 20),
            rect_glyph("I", 20, 20, 0, 100, 20),
        ]
    )


@pytest.mark.parametrize(
    "char, expected",
    [
        ("H", 110),  # counter 276 * 0.40
        ("n", 77),  # counter 240 * 0.32
        ("o", 50),  # counter 240 * 0.32 * 0.65
        (".", 14),  # non-letter uses the uppercase rhythm
        ("I", 10),  # floor
    ],
)
def test_estimate(harmonic_font, char, expected):
    assert estimate_balanced_spacing(harmonic_font, char) == expected


def test_heavier_weight_narrows_counter():
    font = make_font([rect_glyph("H", 30, 500, 0, 700, 30)], weight_class=700)
    assert estimate_balanced_spacing(font, "H") == 67


def test_missing_weight_class_uses_regular():
    font = make_font([rect_glyph("H", 30, 500, 0, 700, 30)], weight_class=None)
    assert estimate_balanced_spacing(font, "H") == 110


def test_missing_glyph_gets_default(harmonic_font):
    assert estimate_balanced_spacing(harmonic_font, "Z") == 40


def test_empty_glyph_hits_floor():
    font = make_font([models.Glyph("space", codepoint=0x20, advance_width=250)])
    assert estimate_balanced_spacing(font, " ") == 10


def test_estimate_does_not_touch_font(harmonic_font):
    before = [(g.name, list(g.commands), g.advance_width) for g in harmonic_font]
    for char in "Hno.I":
        estimate_balanced_spacing(harmonic_font, char)
    assert before == [(g.name, list(g.commands), g.advance_width) for g in harmonic_font]


def test_suggest_master_pairs(harmonic_font):
    suggestions = suggest_master_pairs(harmonic_font)
    assert list(suggestions) == ["n", "o", "H", "O"]
    assert suggestions["H"] == SideBearingPair(110, 110)
    assert suggestions["O"] == SideBearingPair(40, 40)


def test_proof_strings():
    assert proof_strings("a") == ["nnann", "ooaoo"]
    assert proof_strings("A") == ["HHAHH", "OOAOO"]
    assert proof_strings("7") == ["nn7nn", "oo7oo"]
    assert proof_strings(".") == ["nn.nn", "oo.oo"]


def test_proof_strings_with_groups():
    groups = SousaGroups()
    lines = proof_strings("k", groups, seed=3)
    assert len(lines) == 3
    left, middle, right = lines[2]
    assert middle == "k"
    assert left in groups.group1 and right in groups.group1
    assert lines == proof_strings("k", groups, seed=3)

    upper = proof_strings("K", groups)[2]
    assert upper[0] in groups.upper_group1 and upper[2] in groups.upper_group1


def test_proof_strings_with_empty_group():
    groups = SousaGroups(group1=[])
    line = proof_strings("k", groups)[2]
    assert line[0] in "no" and line[2] in "no"


def test_group_label():
    groups = SousaGroups()
    assert group_label("b", groups) == "Group 1 (Relational)"
    assert group_label("k", groups) == "Group 2 (Semi)"
    assert group_label("A", groups) == "Upper G3 (Visual)"
    assert group_label("7", groups) == "Ungrouped (Visual Fallback)"


def test_partial_to_full():
    current = SideBearingPair(30, 25)
    assert partial_to_full(PartialOverride(None, 7), current) == FullOverride(30, 7)
    assert partial_to_full(PartialOverride(4, None), current) == FullOverride(4, 25)
    assert partial_to_full(PartialOverride(1, 2), current) == FullOverride(1, 2)


def test_proof_strings_for_digit_use_lowercase_context():
    groups = SousaGroups()
    lines = proof_strings("7", groups, seed=1)
    assert lines[:2] == ["nn7nn", "oo7oo"]
    assert lines[2][0] in groups.group1 and lines[2][2] in groups.group1
