from io import BytesIO

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from sidebearings import config
from sidebearings import models
from sidebearings import tables

UPPER_TOP = 700
LOWER_TOP = 500
ASCENDER_TOP = 720
DESCENDER_BOTTOM = -200


def rect(x0, y0, x1, y1):
    return [
        ("moveTo", ((x0, y0),)),
        ("lineTo", ((x1, y0),)),
        ("lineTo", ((x1, y1),)),
        ("lineTo", ((x0, y1),)),
        ("closePath", ()),
    ]


def ring(x0, y0, x1, y1):
    """All-off-curve quadratic contour whose exact bounds are the given box."""
    return [
        ("qCurveTo", ((x0, y0), (x1, y0), (x1, y1), (x0, y1), None)),
        ("closePath", ()),
    ]


def rect_glyph(char, x0, width, y0, y1, rsb, name=None):
    return models.Glyph(
        name or f"uni{ord(char):04X}",
        codepoint=ord(char),
        commands=rect(x0, y0, x0 + width, y1),
        advance_width=x0 + width + rsb,
        lsb=x0,
    )


def _vertical_extent(char):
    if char in "bdhkl":
        return 0, ASCENDER_TOP
    if char in "gpqy":
        return DESCENDER_BOTTOM, LOWER_TOP
    if char.isupper():
        return 0, UPPER_TOP
    return 0, LOWER_TOP


def _test_glyph(char):
    # Uneven widths and offsets so a rule that ignores ink position shows up
    width = 200 + (ord(char) % 7) * 30
    x0 = 10 + (ord(char) % 5) * 7
    rsb = 15 + (ord(char) % 3) * 11
    base = tables.base_letter(char)
    if base is not None:
        y0, y1 = _vertical_extent(base)
        y1 += 200  # room for the accent
    else:
        y0, y1 = _vertical_extent(char)
    if char == "o":
        return models.Glyph(
            "o",
            codepoint=ord("o"),
            commands=ring(x0, y0, x0 + width, y1),
            advance_width=x0 + width + rsb,
            lsb=x0,
        )
    return rect_glyph(char, x0, width, y0, y1, rsb)


def build_test_font(weight_class=400, tables_present=("kern", "GPOS", "cmap")):
    chars = list(config.LATIN_LETTERS + config.DIGITS + ".,")
    for variants in tables.DIACRITICS.values():
        chars.extend(variants)
    glyphs = [models.Glyph(".notdef", commands=rect(50, 0, 450, 700), advance_width=500)]
    glyphs.append(models.Glyph("space", codepoint=0x20, advance_width=250))
    glyphs.append(models.Glyph("nbspace", codepoint=0xA0, advance_width=260))
    glyphs.extend(_test_glyph(ch) for ch in chars)
    return models.Font(
        glyphs,
        units_per_em=1000,
        ascender=800,
        descender=-200,
        weight_class=weight_class,
        tables=tables_present,
    )


@pytest.fixture
def raw_font():
    return build_test_font()


@pytest.fixture
def canonical_font():
    from sidebearings.normalization import normalize

    return normalize(build_test_font())


# --- Binary TrueType font built with fontTools ---

# name -> (codepoint, x0, width, y1)
BINARY_GLYPHS = {
    "H": (0x48, 30, 500, 700),
    "O": (0x4F, 25, 560, 710),
    "A": (0x41, 5, 600, 700),
    "n": (0x6E, 40, 400, 500),
    "o": (0x6F, 35, 420, 510),
    "x": (0x78, 12, 380, 500),
    "p": (0x70, 44, 410, 500),
    "acutecomb": (0x0301, 200, 120, 900),
}


def build_binary_font(with_kerning=True):
    glyph_order = [".notdef", "space"] + list(BINARY_GLYPHS) + ["Aacute"]
    cmap = {0x20: "space", 0xC1: "Aacute"}
    glyphs = {}
    metrics = {}

    pen = TTGlyphPen(None)
    glyphs[".notdef"] = pen.glyph()
    metrics[".notdef"] = (500, 0)
    glyphs["space"] = TTGlyphPen(None).glyph()
    metrics["space"] = (250, 0)

    for name, (cp, x0, width, y1) in BINARY_GLYPHS.items():
        cmap[cp] = name
        y0 = -200 if name == "p" else (750 if name == "acutecomb" else 0)
        pen = TTGlyphPen(None)
        pen.moveTo((x0, y0))
        pen.lineTo((x0, y1))
        pen.lineTo((x0 + width, y1))
        pen.lineTo((x0 + width, y0))
        pen.closePath()
        glyphs[name] = pen.glyph()
        metrics[name] = (x0 + width + 40, x0)

    pen = TTGlyphPen(glyphs)
    pen.addComponent("A", (1, 0, 0, 1, 0, 0))
    pen.addComponent("acutecomb", (1, 0, 0, 1, 100, 0))
    glyphs["Aacute"] = pen.glyph()
    metrics["Aacute"] = (645, 5)

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(cmap)
    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Spacing Test", "styleName": "Regular"})
    fb.setupOS2(
        sTypoAscender=800,
        sTypoDescender=-200,
        usWinAscent=800,
        usWinDescent=200,
        usWeightClass=400,
    )
    fb.setupPost()
    if with_kerning:
        fb.addOpenTypeFeatures("feature kern { pos H O -20; } kern;")
    buf = BytesIO()
    fb.save(buf)
    return buf.getvalue()


@pytest.fixture
def font_bytes():
    return build_binary_font()


@pytest.fixture
def font_path(tmp_path, font_bytes):
    path = tmp_path / "SpacingTest-Regular.ttf"
    path.write_bytes(font_bytes)
    return path
