import pytest

from FontNameCore.core_string_utils import (
    coalesce,
    is_empty,
    join_nonempty,
    normalize_empty,
    normalize_family_words,
    split_camel_case,
    title_case_if_uniform,
    upper_first,
)


def test_empty_helpers():
    assert is_empty(None)
    assert is_empty(" \t")
    assert not is_empty("x")
    assert normalize_empty("  Bold ") == "Bold"
    assert normalize_empty("") is None
    assert coalesce(None, " ", "Regular") == "Regular"
    assert join_nonempty("Myriad", None, "", "Bold") == "Myriad Bold"


@pytest.mark.parametrize(
    "word, expected",
    [("myFont", "MyFont"), ("x", "X"), ("", ""), ("Ärger", "Ärger")],
)
def test_upper_first(word, expected):
    assert upper_first(word) == expected


@pytest.mark.parametrize(
    "word, expected",
    [
        ("italic", "Italic"),
        ("ITALIC", "Italic"),
        ("SemiBold", "SemiBold"),
        ("semiBold", "SemiBold"),
        ("ÉTROIT", "Étroit"),
        ("123", "123"),
    ],
)
def test_title_case_if_uniform(word, expected):
    assert title_case_if_uniform(word) == expected


def test_split_camel_case():
    assert split_camel_case("MyFont") == "My Font"
    assert split_camel_case("DIN Next") == "DIN Next"
    assert split_camel_case("iPhone") == "i Phone"


def test_normalize_family_words():
    assert normalize_family_words(["myriad", "pro"]) == "Myriad Pro"
    assert normalize_family_words(["MyFont"]) == "MyFont"
    assert normalize_family_words(["MyFont"], split_camel=True) == "My Font"
