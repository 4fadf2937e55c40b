import pytest

from FontNameCore.core_font_record_io import (
    FontLoadError,
    FontTableError,
    is_font_file,
    load_font,
    output_filename,
    target_path,
    write_font,
)
from FontNameCore.core_namerecord_matcher import NameRecordMatcher


def names(record, platform="windows"):
    matcher = (
        NameRecordMatcher.windows_english
        if platform == "windows"
        else NameRecordMatcher.mac_english
    )
    table = record.font["name"]
    found = {}
    for name_id in (1, 2, 4, 6, 16, 17):
        name_record = matcher(name_id).find_first(table)
        if name_record is not None:
            found[name_id] = name_record.toUnicode()
    return found


def test_raw_name_sources(make_font):
    with load_font(make_font("MyFontBold.ttf")) as record:
        assert record.source_format == "ttf"
        assert record.raw_name() == ("MyFontBold", "filename")
        assert record.raw_name("full") == ("Test Family Regular", "full")
        assert record.raw_name("postscript") == ("TestFamily-Regular", "postscript")
        assert record.raw_name("family") == ("Test Family Regular", "family")
        with pytest.raises(ValueError):
            record.raw_name("vendor")


def test_raw_name_falls_back_to_filename(make_font):
    with load_font(make_font("Fallback-Bold.ttf")) as record:
        record.font["name"].removeNames(nameID=4)
        assert record.raw_name("full") == ("Fallback-Bold", "filename")


def test_get_name_records_with_wildcards(make_font):
    with load_font(make_font(mac=True)) as record:
        assert len(record.get_name_records(name_id=1)) == 2
        assert len(record.get_name_records(platform_id=3, name_id=1)) == 1
        assert record.has_mac_names()


def test_set_family_ribbi(make_font):
    with load_font(make_font()) as record:
        values = record.set_family("MyFont", "Bold")
        assert values[16] is None
        assert names(record) == {
            1: "MyFont",
            2: "Bold",
            4: "MyFont Bold",
            6: "MyFont-Bold",
        }


def test_set_family_non_ribbi(make_font):
    with load_font(make_font()) as record:
        record.set_family("MyFont", "Semibold Italic")
        assert names(record) == {
            1: "MyFont Semibold",
            2: "Italic",
            4: "MyFont Semibold Italic",
            6: "MyFont-SemiboldItalic",
            16: "MyFont",
            17: "Semibold Italic",
        }


def test_set_family_removes_stale_typographic_names(make_font):
    with load_font(make_font()) as record:
        record.set_family("MyFont", "Light")
        record.set_family("MyFont", "Bold")
        assert 16 not in names(record)
        assert 17 not in names(record)


def test_mac_names_only_when_present(make_font):
    with load_font(make_font("WinOnly.ttf")) as record:
        record.set_family("MyFont", "Bold")
        assert names(record, "mac") == {}

    with load_font(make_font("WithMac.ttf", mac=True)) as record:
        record.set_family("MyFont", "Bold")
        assert names(record, "mac")[1] == "MyFont"


def test_unencodable_mac_names_are_removed(make_font):
    with load_font(make_font(mac=True)) as record:
        record.set_family("Foo 漢", "Bold")
        assert names(record)[1] == "Foo 漢"
        assert 1 not in names(record, "mac")


def test_weight_and_width(make_font):
    with load_font(make_font()) as record:
        record.set_weight(700)
        record.set_width(3)
        assert (record.get_weight(), record.get_width()) == (700, 3)
        with pytest.raises(ValueError):
            record.set_weight(0)
        with pytest.raises(ValueError):
            record.set_width(10)


def test_selection_flags_accumulate(make_font):
    with load_font(make_font(fs_selection=0)) as record:
        record.add_selection_flags(1)
        record.add_selection_flags(2)
        assert record.get_selection_flags() & 3 == 3


def test_bold_italic_clear_regular_and_set_mac_style(make_font):
    with load_font(make_font(fs_selection=0x40)) as record:
        record.add_selection_flags(0x21)
        assert record.get_selection_flags() == 0x21
        assert record.font["head"].macStyle == 0x3


def test_missing_os2_table(make_font):
    with load_font(make_font()) as record:
        del record.font["OS/2"]
        assert record.get_weight() is None
        with pytest.raises(FontTableError) as info:
            record.set_weight(400)
        assert info.value.table == "OS/2"


def test_write_same_format(make_font, tmp_path):
    with load_font(make_font()) as record:
        record.set_family("MyFont", "Bold")
        record.set_weight(700)
        written = write_font(record, tmp_path / "out")
    assert written == tmp_path / "out" / "MyFont-Bold.ttf"
    with load_font(written) as again:
        assert again.get_name(1) == "MyFont"
        assert again.get_weight() == 700


@pytest.mark.parametrize("fmt", ["woff", "woff2", "ttx"])
def test_write_other_formats(make_font, tmp_path, fmt):
    with load_font(make_font()) as record:
        record.set_family("MyFont", "Italic")
        written = write_font(record, tmp_path / "out", fmt)
        assert record.font.flavor is None
    assert written.name == f"MyFont-Italic.{fmt}"
    with load_font(written) as again:
        assert again.source_format == fmt
        assert again.get_name(2) == "Italic"


def test_target_path_matches_written_path(make_font, tmp_path):
    with load_font(make_font()) as record:
        record.set_family("MyFont", "Bold")
        expected = target_path(record, tmp_path, "woff2")
        assert write_font(record, tmp_path, "woff2") == expected


def test_cff_names_follow_name_table(make_font, tmp_path):
    with load_font(make_font("Foo.otf", cff=True)) as record:
        assert record.source_format == "otf"
        record.set_family("MyFont", "Bold")
        cff = record.font["CFF "].cff
        assert cff.fontNames[0] == "MyFont-Bold"
        assert cff.topDictIndex[0].FullName == "MyFont Bold"
        written = write_font(record, tmp_path)
    assert written.suffix == ".otf"
    with load_font(written) as again:
        assert again.font["CFF "].cff.fontNames[0] == "MyFont-Bold"


def test_output_filename_falls_back_to_stem(make_font):
    with load_font(make_font("Odd Name.ttf")) as record:
        record.font["name"].removeNames(nameID=6)
        assert output_filename(record, "ttf") == "OddName.ttf"


def test_load_errors(tmp_path):
    with pytest.raises(FontLoadError):
        load_font(tmp_path / "missing.ttf")

    garbage = tmp_path / "garbage.otf"
    garbage.write_bytes(b"not a font at all")
    with pytest.raises(FontLoadError):
        load_font(garbage)

    bad_xml = tmp_path / "bad.ttx"
    bad_xml.write_text("<ttFont><name>", encoding="utf-8")
    with pytest.raises(FontLoadError):
        load_font(bad_xml)


def test_is_font_file():
    assert is_font_file("a/B.OTF")
    assert is_font_file("x.woff2")
    assert not is_font_file("readme.txt")
