"""Font I/O helpers: read a font container into the spacing model and back."""

import logging
from io import BytesIO
from pathlib import Path
from typing import Dict, Optional, Union

from fontTools.misc.roundTools import otRound
from fontTools.pens.recordingPen import DecomposingRecordingPen, replayRecording
from fontTools.pens.t2CharStringPen import T2CharStringPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont

from . import models
from . import normalization

logger = logging.getLogger(__name__)

Font = models.Font
Glyph = models.Glyph

Source = Union[str, Path, bytes]


class FontIOError(Exception):
    """The font container could not be parsed or serialized."""


def _read_bytes(source: Source) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    try:
        return Path(source).read_bytes()
    except OSError as e:
        raise FontIOError(f"cannot read {source}: {e}") from e


def _read_ttfont(data: bytes) -> TTFont:
    try:
        return TTFont(BytesIO(data))
    except Exception as e:
        raise FontIOError(f"cannot parse font: {e}") from e


def _get_upm(font: TTFont) -> int:
    return int(font["head"].unitsPerEm)


def _get_best_cmap(font: TTFont) -> Dict[int, str]:
    try:
        cmap = font.getBestCmap()
        if cmap:
            return dict(cmap)
    except Exception:
        logger.debug("getBestCmap failed, merging subtables", exc_info=True)
    # fallback: merge all subtables
    mapping: Dict[int, str] = {}
    if "cmap" in font:
        for st in font["cmap"].tables:
            if getattr(st, "cmap", None):
                mapping.update(st.cmap)
    return mapping


def load_font(source: Source) -> Font:
    """Parse a TTF/OTF/WOFF/WOFF2 file (path or bytes) into a spacing Font.

    Composite glyphs are decomposed so every glyph moves independently.
    """
    data = _read_bytes(source)
    tt = _read_ttfont(data)
    try:
        cmap = _get_best_cmap(tt)
        first_codepoint: Dict[str, int] = {}
        for cp in sorted(cmap):
            first_codepoint.setdefault(cmap[cp], cp)

        glyph_set = tt.getGlyphSet()
        metrics = tt["hmtx"].metrics
        glyphs = []
        for name in tt.getGlyphOrder():
            pen = DecomposingRecordingPen(glyph_set)
            glyph_set[name].draw(pen)
            advance, lsb = metrics.get(name, (0, 0))
            glyphs.append(
                Glyph(
                    name,
                    codepoint=first_codepoint.get(name),
                    commands=pen.value,
                    advance_width=advance,
                    lsb=lsb,
                )
            )

        hhea = tt["hhea"] if "hhea" in tt else None
        os2 = tt["OS/2"] if "OS/2" in tt else None
        font = Font(
            glyphs,
            units_per_em=_get_upm(tt),
            ascender=int(getattr(hhea, "ascent", 0) or 0),
            descender=int(getattr(hhea, "descent", 0) or 0),
            weight_class=int(getattr(os2, "usWeightClass", 0) or 0) or None,
            cmap=cmap,
            tables=[tag for tag in tt.keys() if tag != "GlyphOrder"],
            source_data=data,
        )
    except FontIOError:
        raise
    except Exception as e:
        raise FontIOError(f"cannot read glyphs: {e}") from e
    finally:
        tt.close()
    logger.debug("loaded %d glyphs, upm %s", len(font), font.declared_upm)
    return font


def load_canonical(source: Source) -> Font:
    """Load a font and normalize it into a canonical baseline."""
    return normalization.normalize(load_font(source))


def _hmtx_entry(glyph: Glyph):
    b = glyph.bounds()
    return otRound(glyph.advance_width), otRound(b.x_min) if b else 0


def _write_glyf(tt: TTFont, font: Font) -> None:
    glyf = tt["glyf"]
    hmtx = tt["hmtx"]
    for glyph in font:
        if glyph.name not in glyf:
            continue
        pen = TTGlyphPen(None)
        replayRecording(glyph.commands, pen)
        tt_glyph = pen.glyph()
        lsb = 0
        if tt_glyph.numberOfContours:
            # hmtx lsb must equal the control-box xMin stored in glyf
            tt_glyph.recalcBounds(glyf)
            lsb = tt_glyph.xMin
        glyf[glyph.name] = tt_glyph
        hmtx[glyph.name] = (otRound(glyph.advance_width), lsb)


def _write_cff(tt: TTFont, font: Font) -> None:
    cff = tt["CFF "].cff
    char_strings = cff[cff.fontNames[0]].CharStrings
    hmtx = tt["hmtx"]
    for glyph in font:
        if glyph.name not in char_strings:
            continue
        old = char_strings[glyph.name]
        private = old.private
        width = otRound(glyph.advance_width)
        if width == getattr(private, "defaultWidthX", 0):
            encoded_width = None
        else:
            encoded_width = width - getattr(private, "nominalWidthX", 0)
        pen = T2CharStringPen(encoded_width, None)
        replayRecording(glyph.commands, pen)
        char_strings[glyph.name] = pen.getCharString(
            private=private, globalSubrs=old.globalSubrs
        )
        hmtx[glyph.name] = _hmtx_entry(glyph)


def save_font(font: Font, target: Optional[Union[str, Path]] = None) -> Optional[bytes]:
    """Write the model's outlines and advances back into its source container.

    Tables the model no longer carries (e.g. after normalization) are removed.
    Returns the font bytes when ``target`` is None.
    """
    if font.source_data is None:
        raise FontIOError("font has no source container to write into")
    tt = _read_ttfont(font.source_data)
    orig_flavor = getattr(tt, "flavor", None)
    try:
        if "glyf" in tt:
            _write_glyf(tt, font)
        elif "CFF " in tt:
            _write_cff(tt, font)
        else:
            raise FontIOError("unsupported outline format (need glyf or CFF)")

        for tag in sorted(set(tt.keys()) - font.tables - {"GlyphOrder"}):
            logger.info("removing table %s", tag)
            del tt[tag]

        tt.flavor = orig_flavor
        if target is None:
            buf = BytesIO()
            tt.save(buf)
            return buf.getvalue()
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        tt.save(str(target))
        return None
    except FontIOError:
        raise
    except Exception as e:
        raise FontIOError(f"cannot write font: {e}") from e
    finally:
        tt.close()
