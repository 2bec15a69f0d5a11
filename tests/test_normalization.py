import pytest

from sidebearings import measurements
from sidebearings.normalization import normalize


def test_ink_is_flush_to_origin(raw_font):
    normalize(raw_font)
    for glyph in raw_font:
        if glyph.is_space or not glyph.has_outline:
            continue
        b = glyph.bounds()
        assert b.x_min == pytest.approx(0, abs=1e-9), glyph.name
        assert glyph.advance_width == pytest.approx(b.width)
        assert glyph.lsb == 0


def test_side_bearings_are_zero_after_normalization(raw_font):
    normalize(raw_font)
    for char in "HOnoAÁ0.":
        assert measurements.char_side_bearings(raw_font, char).as_tuple() == (0, 0)


def test_space_and_empty_glyphs_keep_their_advance(raw_font):
    normalize(raw_font)
    assert raw_font.glyph_for_char(" ").advance_width == 250
    assert raw_font.glyph_for_char("\u00a0").advance_width == 260


def test_stale_positioning_tables_are_dropped(raw_font):
    normalize(raw_font)
    assert "kern" not in raw_font.tables
    assert "GPOS" not in raw_font.tables
    assert "cmap" in raw_font.tables


def test_normalize_is_stable(raw_font):
    normalize(raw_font)
    snapshot = [(g.name, list(g.commands), g.advance_width) for g in raw_font]
    normalize(raw_font)
    assert snapshot == [(g.name, list(g.commands), g.advance_width) for g in raw_font]


def test_ink_shape_is_unchanged(raw_font):
    before = raw_font.glyph_for_char("W").bounds()
    normalize(raw_font)
    after = raw_font.glyph_for_char("W").bounds()
    assert after.width == before.width
    assert (after.y_min, after.y_max) == (before.y_min, before.y_max)
