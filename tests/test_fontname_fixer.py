import json

import pytest

from FontNameCore.FontNameFixer import EXIT_CONFIG, EXIT_FAILURES, EXIT_OK, main
from FontNameCore.core_font_record_io import load_font


@pytest.fixture
def out_dir(tmp_path):
    return tmp_path / "out"


def test_fixes_and_groups_by_family(make_font, out_dir):
    make_font("MyFontBold.ttf")
    source = make_font("MyFont-Italic.ttf").parent

    assert main([str(source), "-o", str(out_dir), "-q"]) == EXIT_OK

    bold = out_dir / "MyFont" / "MyFont-Bold.ttf"
    assert sorted(p.name for p in (out_dir / "MyFont").iterdir()) == [
        "MyFont-Bold.ttf",
        "MyFont-Italic.ttf",
    ]
    with load_font(bold) as record:
        assert record.get_name(1) == "MyFont"
        assert record.get_name(2) == "Bold"
        assert record.get_weight() == 700
        assert record.get_selection_flags() & 0x20
        assert not record.get_selection_flags() & 0x40


def test_flat_output_and_format(make_font, out_dir):
    font = make_font("MyFontBold.ttf")
    args = [str(font), "-o", str(out_dir), "--flat", "--format", "woff2", "-q"]
    assert main(args) == EXIT_OK
    assert [p.name for p in out_dir.iterdir()] == ["MyFont-Bold.woff2"]


def test_dry_run_writes_nothing(make_font, out_dir):
    font = make_font("MyFontBold.ttf")
    assert main([str(font), "-o", str(out_dir), "-n"]) == EXIT_OK
    assert not out_dir.exists()


def test_name_source_and_family_override(make_font, out_dir):
    font = make_font("whatever.ttf", family="Acme Sans", style="Italic")
    assert main([str(font), "-o", str(out_dir), "-s", "full", "-q"]) == EXIT_OK
    assert (out_dir / "Acme Sans" / "AcmeSans-Italic.ttf").is_file()

    args = [str(font), "-o", str(out_dir), "-f", "Other", "-s", "full", "-q"]
    assert main(args) == EXIT_OK
    assert (out_dir / "Other" / "Other-Italic.ttf").is_file()


def test_forced_groups_share_a_directory(make_font, out_dir):
    make_font("RoughLoveBold.ttf")
    source = make_font("LoveScriptBold.ttf").parent
    args = [str(source), "-o", str(out_dir), "-g", "RoughLove,LoveScript", "-q"]
    assert main(args) == EXIT_OK
    assert sorted(p.name for p in (out_dir / "RoughLove").iterdir()) == [
        "LoveScript-Bold.ttf",
        "RoughLove-Bold.ttf",
    ]


def test_broken_font_fails_but_batch_continues(make_font, out_dir, tmp_path):
    source = make_font("MyFontBold.ttf").parent
    (source / "Broken.ttf").write_bytes(b"garbage")
    assert main([str(source), "-o", str(out_dir), "-q"]) == EXIT_FAILURES
    assert (out_dir / "MyFont" / "MyFont-Bold.ttf").is_file()


def test_no_fonts_found(tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()
    assert main([str(empty), "-q"]) == EXIT_FAILURES


def test_bad_dictionary_and_pattern(make_font, tmp_path, out_dir):
    font = make_font()
    missing = tmp_path / "missing.json"
    assert main([str(font), "-d", str(missing), "-q"]) == EXIT_CONFIG

    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"styleWords": [{"weight": 700}]}), encoding="utf-8")
    assert main([str(font), "-d", str(bad), "-q"]) == EXIT_CONFIG

    assert main([str(font), "-p", "(only-one-group)", "-q"]) == EXIT_CONFIG
    assert not out_dir.exists()


def test_custom_dictionary_with_defaults(make_font, tmp_path, out_dir):
    rules = tmp_path / "rules.json"
    rules.write_text(
        json.dumps({"styleWords": [{"text": "Swash", "separate": True}]}),
        encoding="utf-8",
    )
    font = make_font("FooSwashBold.ttf")
    args = [str(font), "-d", str(rules), "--merge-defaults", "-o", str(out_dir), "-q"]
    assert main(args) == EXIT_OK
    assert (out_dir / "Foo" / "Foo-SwashBold.ttf").is_file()


def test_names_preview(capsys):
    assert main(["--names", "MyFontBold", "Myriad Pro Bold Italic"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "MyFont" in out
    assert "Myriad" in out


def test_names_preview_reports_failures():
    assert main(["-q", "--names", "__"]) == EXIT_FAILURES


def test_requires_paths_or_names():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2


def test_duplicate_output_names_keep_the_first(make_font, out_dir):
    make_font("MyFontBold.ttf")
    source = make_font("MyFont-Bold.ttf").parent
    assert main([str(source), "-o", str(out_dir), "-q"]) == EXIT_OK
    assert [p.name for p in (out_dir / "MyFont").iterdir()] == ["MyFont-Bold.ttf"]
