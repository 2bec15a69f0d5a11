from sidebearings import measurements
from sidebearings import models
from sidebearings.models import SideBearingPair
from sidebearings.mutation import apply_with_diacritics, set_side_bearings


def sb(font, char):
    return measurements.char_side_bearings(font, char)


def test_sets_both_sides(canonical_font):
    assert set_side_bearings(canonical_font, "H", 42, 17)
    assert sb(canonical_font, "H") == SideBearingPair(42, 17)


def test_second_identical_call_changes_nothing(canonical_font):
    set_side_bearings(canonical_font, "R", 33, -4)
    glyph = canonical_font.glyph_for_char("R")
    commands, advance = list(glyph.commands), glyph.advance_width
    set_side_bearings(canonical_font, "R", 33, -4)
    assert glyph.commands == commands
    assert glyph.advance_width == advance


def test_lsb_only_preserves_rsb(canonical_font):
    set_side_bearings(canonical_font, "B", 40, 25)
    set_side_bearings(canonical_font, "B", 12, None)
    assert sb(canonical_font, "B") == SideBearingPair(12, 25)


def test_rsb_only_preserves_lsb(canonical_font):
    set_side_bearings(canonical_font, "B", 40, 25)
    set_side_bearings(canonical_font, "B", None, 3)
    assert sb(canonical_font, "B") == SideBearingPair(40, 3)


def test_negative_lsb_is_allowed(canonical_font):
    set_side_bearings(canonical_font, "f", -12, 10)
    assert sb(canonical_font, "f") == SideBearingPair(-12, 10)


def test_advance_never_goes_negative(canonical_font):
    set_side_bearings(canonical_font, "i", 0, -5000)
    assert canonical_font.glyph_for_char("i").advance_width == 0


def test_missing_and_empty_glyphs_are_skipped(canonical_font):
    assert not set_side_bearings(canonical_font, "€", 10, 10)
    assert not set_side_bearings(canonical_font, " ", 10, 10)
    assert canonical_font.glyph_for_char(" ").advance_width == 250


def test_apply_with_diacritics_copies_pair(canonical_font):
    changed = apply_with_diacritics(canonical_font, "E", 21, 22)
    assert changed == 10
    for char in "EÉÈÊËĒĔĖĘĚ":
        assert sb(canonical_font, char) == SideBearingPair(21, 22)


def test_apply_with_diacritics_skips_absent_variants():
    font = models.Font([])
    assert apply_with_diacritics(font, "A", 1, 1) == 0
