import logging
from pathlib import Path

from FontNameCore.core_file_collector import collect_font_files, iter_font_files


def touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


def test_flat_directory_scan(tmp_path):
    touch(tmp_path / "B.otf")
    touch(tmp_path / "a.TTF")
    touch(tmp_path / "notes.txt")
    touch(tmp_path / "sub" / "Deep.woff2")

    found = collect_font_files([tmp_path])
    assert [Path(p).name for p in found] == ["B.otf", "a.TTF"]


def test_recursive_scan_and_dedup(tmp_path):
    touch(tmp_path / "Top.ttf")
    deep = touch(tmp_path / "sub" / "Deep.woff2")

    found = collect_font_files([tmp_path, deep], recursive=True)
    assert len(found) == 2
    assert str(deep.resolve()) in found


def test_exclude_output_directory(tmp_path):
    touch(tmp_path / "Source.ttf")
    touch(tmp_path / "fixed" / "Family" / "Output.ttf")

    found = collect_font_files([tmp_path], recursive=True, exclude=[tmp_path / "fixed"])
    assert [Path(p).name for p in found] == ["Source.ttf"]


def test_explicit_files_and_missing_paths(tmp_path, caplog):
    font = touch(tmp_path / "One.ttx")
    text = touch(tmp_path / "readme.md")

    with caplog.at_level(logging.WARNING):
        found = list(iter_font_files([font, text, tmp_path / "missing"]))
    assert found == [font.resolve()]
    assert "Path not found" in caplog.text


def test_allowed_extensions_override(tmp_path):
    touch(tmp_path / "A.ttf")
    touch(tmp_path / "B.otf")
    found = collect_font_files([tmp_path], allowed_extensions={".OTF"})
    assert [Path(p).name for p in found] == ["B.otf"]
