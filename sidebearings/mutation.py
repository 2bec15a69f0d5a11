"""Glyph mutation primitive shared by both spacing methods."""

import logging
from typing import Optional

from . import models
from . import tables

logger = logging.getLogger(__name__)

Font = models.Font

# Shifts smaller than this are float noise from a previous identical call
_SHIFT_EPSILON = 0.001


def set_side_bearings(
    font: Font, char: str, lsb: Optional[float], rsb: Optional[float]
) -> bool:
    """Set a glyph's LSB and/or RSB in place.

    The outline is translated so its ink starts at ``lsb``; the advance width is
    then reset to the (post-shift) ink right edge plus ``rsb``. A side passed as
    None keeps whatever spacing it already had, so an lsb-only call moves the
    advance along with the ink.

    Returns False when the character has no glyph or the glyph has no ink.
    """
    glyph = font.glyph_for_char(char)
    if glyph is None:
        logger.debug("skip %r: no glyph", char)
        return False
    if not glyph.has_outline:
        logger.debug("skip %r: empty outline", char)
        return False

    bounds = glyph.bounds()
    if bounds is None:
        logger.debug("skip %r: outline has no extent", char)
        return False

    if lsb is not None:
        shift = lsb - bounds.x_min
        if abs(shift) > _SHIFT_EPSILON:
            glyph.translate(shift)
            bounds = glyph.bounds()
            if rsb is None:
                # keep the current rsb: the advance moves with the ink
                glyph.advance_width = max(0, glyph.advance_width + shift)
        glyph.lsb = lsb

    if rsb is not None:
        glyph.advance_width = max(0, bounds.x_max + rsb)

    return True


def apply_with_diacritics(
    font: Font, char: str, lsb: Optional[float], rsb: Optional[float]
) -> int:
    """Set ``char`` and copy the same pair to its accented variants.

    Returns the number of glyphs changed.
    """
    changed = 0
    if set_side_bearings(font, char, lsb, rsb):
        changed += 1
    for variant in tables.diacritics_for(char):
        if set_side_bearings(font, variant, lsb, rsb):
            changed += 1
    return changed
