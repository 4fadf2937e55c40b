from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.t2CharStringPen import T2CharStringPen
from fontTools.pens.ttGlyphPen import TTGlyphPen

from FontNameCore.core_logging_config import reset_logging
from FontNameCore.core_style_word_dictionary import (
    StyleWordDictionary,
    default_dictionary,
)

GLYPH_ORDER = [".notdef", "A"]


def _draw_box(pen):
    pen.moveTo((50, 0))
    pen.lineTo((50, 700))
    pen.lineTo((550, 700))
    pen.lineTo((550, 0))
    pen.closePath()


def build_font(
    path,
    family="Test Family",
    style="Regular",
    cff=False,
    mac=False,
    fs_selection=0x40,
):
    """Write a minimal but valid TrueType (or CFF) font to ``path``."""
    fb = FontBuilder(1000, isTTF=not cff)
    fb.setupGlyphOrder(GLYPH_ORDER)
    fb.setupCharacterMap({0x41: "A"})
    ps_name = f"{family}-{style}".replace(" ", "")

    if cff:
        charstrings = {}
        for name in GLYPH_ORDER:
            pen = T2CharStringPen(600, None)
            _draw_box(pen)
            charstrings[name] = pen.getCharString()
        fb.setupCFF(
            ps_name,
            {"FullName": f"{family} {style}", "FamilyName": family},
            charstrings,
            {},
        )
    else:
        glyphs = {}
        for name in GLYPH_ORDER:
            pen = TTGlyphPen(None)
            _draw_box(pen)
            glyphs[name] = pen.glyph()
        fb.setupGlyf(glyphs)

    fb.setupHorizontalMetrics({name: (600, 50) for name in GLYPH_ORDER})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable(
        {
            "familyName": family,
            "styleName": style,
            "fullName": f"{family} {style}",
            "psName": ps_name,
        },
        mac=mac,
    )
    fb.setupOS2(
        sTypoAscender=800,
        usWinAscent=800,
        usWinDescent=200,
        fsSelection=fs_selection,
    )
    fb.setupPost()
    fb.font["head"].macStyle = 0
    fb.save(str(path))
    return Path(path)


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def make_font(tmp_path):
    def _make(filename="MyFontBold.ttf", directory=None, **kwargs):
        folder = Path(directory) if directory else tmp_path / "in"
        folder.mkdir(parents=True, exist_ok=True)
        return build_font(folder / filename, **kwargs)

    return _make


@pytest.fixture(scope="session")
def builtin():
    return default_dictionary()


@pytest.fixture
def simple_dictionary():
    return StyleWordDictionary.from_mapping(
        {
            "styleWords": [
                {"text": "Bold", "separate": True, "weight": 700, "fsSelection": 32},
                {"text": "Italic", "separate": True, "fsSelection": 1},
                {"text": "Condensed", "width": 3},
                {"match": "Bd", "replace": "Bold"},
                "Light",
            ],
            "familyWords": ["Pro", "Sans"],
        },
        source="test",
    )
