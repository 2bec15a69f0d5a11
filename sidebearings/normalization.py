"""Metric normalization: ink flush to origin, stale positioning removed."""

import logging
from typing import Optional

from . import config
from . import models

logger = logging.getLogger(__name__)

Font = models.Font


def normalize(font: Font, cfg: Optional[config.SpacingConfig] = None) -> Font:
    """Produce the canonical baseline in place.

    Every inked glyph except space is shifted so its ink starts at x=0 and its
    advance width equals its ink width. Kerning and glyph positioning tables
    are dropped. Glyphs without ink keep their advance.
    """
    cfg = cfg or config.DEFAULT_CONFIG
    shifted = 0
    for glyph in font:
        if glyph.is_space or not glyph.has_outline:
            continue
        b = glyph.bounds()
        if b is None:
            continue
        width = b.width
        if width < 0:
            continue
        if b.x_min != 0:
            glyph.translate(-b.x_min)
            shifted += 1
        glyph.advance_width = width
        glyph.lsb = 0
        glyph.invalidate_bounds()

    stale = font.tables & cfg.stale_tables
    if stale:
        logger.info("dropping stale tables: %s", ", ".join(sorted(stale)))
        font.tables -= stale
    logger.debug("normalized %d glyphs (%d shifted)", len(font), shifted)
    return font
