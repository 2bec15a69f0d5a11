"""Measurement functions for reading side bearings and visual metrics."""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from . import config
from . import models

Font = models.Font
SideBearingPair = models.SideBearingPair
VisualMetrics = models.VisualMetrics
round_half_up = models.round_half_up

ASCENDER_PROBE_CHARS = config.ASCENDER_PROBE_CHARS
DESCENDER_PROBE_CHARS = config.DESCENDER_PROBE_CHARS


def _ink_bounds(font: Font, char: str) -> Optional[models.BoundingBox]:
    glyph = font.glyph_for_char(char)
    if glyph is None or not glyph.has_outline:
        return None
    return glyph.bounds()


def _probe_extreme(font: Font, chars: Iterable[str], use_max: bool) -> Optional[float]:
    best = None
    for char in chars:
        b = _ink_bounds(font, char)
        if not b:
            continue
        value = b.y_max if use_max else b.y_min
        if best is None or (value > best if use_max else value < best):
            best = value
    return best


def _ink_height(font: Font, char: str) -> int:
    b = _ink_bounds(font, char)
    if not b:
        return 0
    return round_half_up(b.height)


def extract_visual_metrics(font: Font) -> VisualMetrics:
    """Measure ascender/descender/cap-height/x-height from ink.

    Ascender and descender fall back to the container's declared values when
    no probe glyph has ink.
    """
    top = _probe_extreme(font, ASCENDER_PROBE_CHARS, use_max=True)
    bottom = _probe_extreme(font, DESCENDER_PROBE_CHARS, use_max=False)
    return VisualMetrics(
        ascender=round_half_up(top if top is not None else font.ascender),
        descender=round_half_up(bottom if bottom is not None else font.descender),
        cap_height=_ink_height(font, config.CAP_HEIGHT_CHAR),
        x_height=_ink_height(font, config.X_HEIGHT_CHAR),
    )


def char_side_bearings(font: Font, char: str) -> SideBearingPair:
    """Current (lsb, rsb) of a character, rounded to integers.

    A glyph without ink reports lsb 0 and its whole advance as rsb; a missing
    glyph reports (0, 0).
    """
    glyph = font.glyph_for_char(char)
    if glyph is None:
        return SideBearingPair(0, 0)
    b = glyph.bounds() if glyph.has_outline else None
    if b is None:
        return SideBearingPair(0, round_half_up(glyph.advance_width))
    return SideBearingPair(
        round_half_up(b.x_min), round_half_up(glyph.advance_width - b.x_max)
    )


def average_side_bearing(font: Font) -> int:
    """Mean of every lsb and rsb over mapped, non-space glyphs."""
    total = 0.0
    count = 0
    for glyph in font:
        if glyph.codepoint is None or glyph.is_space:
            continue
        b = glyph.bounds() if glyph.has_outline else None
        if b is None:
            total += glyph.advance_width
        else:
            total += b.x_min + (glyph.advance_width - b.x_max)
        count += 1
    if count == 0:
        return 0
    return round_half_up(total / (count * 2))


@dataclass(frozen=True)
class SideBearingChange:
    char: str
    before: SideBearingPair
    after: SideBearingPair

    @property
    def lsb_delta(self) -> int:
        return self.after.lsb - self.before.lsb

    @property
    def rsb_delta(self) -> int:
        return self.after.rsb - self.before.rsb

    @property
    def changed(self) -> bool:
        return self.lsb_delta != 0 or self.rsb_delta != 0


def compare_side_bearings(
    before: Font, after: Font, chars: Iterable[str] = config.LATIN_LETTERS
) -> List[SideBearingChange]:
    """Per-character side bearings of two fonts, for characters both contain."""
    rows: List[SideBearingChange] = []
    for char in chars:
        if before.glyph_for_char(char) is None or after.glyph_for_char(char) is None:
            continue
        rows.append(
            SideBearingChange(
                char, char_side_bearings(before, char), char_side_bearings(after, char)
            )
        )
    return rows


def _visible_chars(font: Font) -> List[Tuple[int, str]]:
    return [(cp, ch) for cp, ch in font.mapped_chars() if ch.strip()]


def extra_glyph_side_bearings(font: Font) -> List[Tuple[str, SideBearingPair]]:
    """Side bearings of mapped visible characters outside A-Z and a-z."""
    letters = set(config.LATIN_LETTERS)
    return [
        (ch, char_side_bearings(font, ch))
        for _, ch in _visible_chars(font)
        if ch not in letters
    ]


def available_characters(font: Font) -> List[str]:
    """A-Z, a-z and 0-9 first, then every other visible character in the font."""
    chars = list(config.LATIN_LETTERS + config.DIGITS)
    seen = set(chars)
    for _, ch in _visible_chars(font):
        if ch not in seen:
            seen.add(ch)
            chars.append(ch)
    return chars
