import pytest

from FontNameCore.core_font_style_dictionaries import (
    DEFAULT_RULES,
    DICTIONARY_VERSION,
    WEIGHT_CLASSES,
    generate_weight_compounds,
    generate_width_classes,
)
from FontNameCore.core_metrics_mapper import FS_BOLD, FS_ITALIC, FS_OBLIQUE
from FontNameCore.core_name_classifier import classify


def test_default_rules_load(builtin):
    assert builtin.source == "<built-in>"
    assert len(builtin.style_words) == len(DEFAULT_RULES["styleWords"])
    assert {rule.text for rule in builtin.family_words} >= {"Pro", "Sans", "Mono"}
    assert DICTIONARY_VERSION


def test_generated_vocabulary():
    compounds = generate_weight_compounds()
    assert set(compounds) <= set(WEIGHT_CLASSES)
    assert "Semibold" in compounds
    widths = generate_width_classes()
    assert widths["Condensed"] == 3
    assert widths["SemiCondensed"] == 4
    assert widths["ExtraCondensed"] == 2
    assert widths["UltraCondensed"] == 1
    assert widths["SemiExpanded"] == 6
    assert widths["UltraExpanded"] == 9


@pytest.mark.parametrize(
    "raw, family, style",
    [
        ("MyFont-Bold", "MyFont", "Bold"),
        ("MyFontBold", "MyFont", "Bold"),
        ("OpenSans-BoldItalic", "OpenSans", "Bold Italic"),
        ("MyriadPro-SemiboldItalic", "MyriadPro", "Semibold Italic"),
        ("Foo-SemiBold", "Foo", "Semibold"),
        ("Foo Semi Bold", "Foo", "Semibold"),
        ("Helvetica Neue Condensed Bold", "Helvetica Neue", "Condensed Bold"),
        ("Foo-SemiCondensed", "Foo", "SemiCondensed"),
        ("Foo-BdIta", "Foo", "Bold Italic"),
        ("Foo_Cn_Lt", "Foo", "Condensed Light"),
        ("Myriad Bold Pro", "Myriad Pro", "Bold"),
        ("Times New Roman", "Times New Roman", ""),
        ("Highlight", "Highlight", ""),
        ("Medieval Sans", "Medieval Sans", ""),
        ("source sans black italic", "Source Sans", "Black Italic"),
        ("FOOBAR-BOLD", "FOOBAR", "Bold"),
    ],
)
def test_builtin_classification(builtin, raw, family, style):
    result = classify(raw, builtin)
    assert (result.family_name, result.style_name) == (family, style)


def test_builtin_metrics(builtin):
    bold_italic = classify("Foo-BoldItalic", builtin).metrics
    assert bold_italic.weight == 700
    assert bold_italic.selection_flags == FS_BOLD | FS_ITALIC

    oblique = classify("Foo Light Oblique", builtin).metrics
    assert oblique.weight == 300
    assert oblique.selection_flags == FS_ITALIC | FS_OBLIQUE

    narrow = classify("Foo ExtraCondensed Medium", builtin).metrics
    assert (narrow.width, narrow.weight) == (2, 500)

    semibold = classify("Foo Semibold", builtin).metrics
    assert semibold.weight == 600
    assert not semibold.selection_flags & FS_BOLD


def test_book_is_recognized_but_not_separated(builtin):
    assert classify("Foo Book", builtin).style_name == "Book"
    assert classify("FooBook", builtin).family_name == "FooBook"
