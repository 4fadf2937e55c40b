#!/usr/bin/env python3
"""
FontRecord: the in-memory font a classification is written back onto.

Wraps a fontTools TTFont and exposes only what the name fixer needs:

- name records (query by platform/encoding/language/nameID, None = any)
- OS/2 usWeightClass, usWidthClass and fsSelection (OR-accumulated)
- set_family(): writes nameIDs 1, 2, 4, 6, 16, 17 via core_name_policies

Usage:
    record = load_font("MyFontBold.otf")
    raw, source = record.raw_name("filename")
    record.set_weight(700)
    record.set_family("MyFont", "Bold")
    write_font(record, "fixed/MyFont")      # -> fixed/MyFont/MyFont-Bold.otf
"""

from __future__ import annotations

import struct
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from xml.parsers.expat import ExpatError

from fontTools.misc.encodingTools import getEncoding
from fontTools.ttLib import TTFont, TTLibError

from FontNameCore.core_logging_config import get_logger
from FontNameCore.core_metrics_mapper import FS_BOLD, FS_ITALIC, FS_REGULAR
from FontNameCore.core_name_policies import (
    NAME_ID_FAMILY,
    NAME_ID_FULL,
    NAME_ID_POSTSCRIPT,
    NAME_ID_SUBFAMILY,
    NAME_ID_TYPO_FAMILY,
    NAME_ID_TYPO_SUBFAMILY,
    build_name_values,
    sanitize_postscript,
    sync_cff_names_binary,
)
from FontNameCore.core_namerecord_matcher import (
    EID_MAC_ROMAN,
    EID_UNICODE_BMP,
    LANG_EN_US_INT,
    LANG_MAC_ENGLISH,
    PID_MAC,
    PID_WIN,
    NameRecordMatcher,
)

logger = get_logger(__name__)

FONT_EXTENSIONS = {".ttf", ".otf", ".woff", ".woff2", ".ttx"}
OUTPUT_FORMATS = ("ttf", "otf", "woff", "woff2", "ttx")
NAME_SOURCES = ("filename", "full", "postscript", "family")

WEIGHT_CLASS_RANGE = (1, 1000)
WIDTH_CLASS_RANGE = (1, 9)

# head.macStyle bits mirrored from fsSelection
_MAC_BOLD = 1 << 0
_MAC_ITALIC = 1 << 1

_PLATFORMS = {
    PID_WIN: (EID_UNICODE_BMP, LANG_EN_US_INT),
    PID_MAC: (EID_MAC_ROMAN, LANG_MAC_ENGLISH),
}


class FontLoadError(OSError):
    """A font file could not be opened or parsed."""


class FontWriteError(OSError):
    """A font could not be written to the output location."""


class FontTableError(LookupError):
    """A table the operation needs is missing from the font."""

    def __init__(self, table: str, path: Optional[Path] = None):
        self.table = table
        self.path = path
        where = f" in {path.name}" if path else ""
        super().__init__(f"'{table}' table missing{where}")


class FontRecord:
    """A loaded font plus where it came from."""

    def __init__(self, font: TTFont, path: Optional[Path] = None):
        self.font = font
        self.path = Path(path) if path else None
        self.source_format = _detect_format(font, self.path)

    def __enter__(self) -> "FontRecord":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self.font.close()

    @property
    def filename(self) -> str:
        return self.path.name if self.path else "<memory>"

    def _table(self, tag: str):
        if tag not in self.font:
            raise FontTableError(tag, self.path)
        return self.font[tag]

    # ---------- name table ----------

    def get_name_records(
        self,
        platform_id: Optional[int] = None,
        encoding_id: Optional[int] = None,
        language_id: Optional[int] = None,
        name_id: Optional[int] = None,
    ) -> List:
        """Name records matching every given criterion; None matches any value."""
        if "name" not in self.font:
            return []
        matcher = NameRecordMatcher.for_binary(
            name_id, platform_id, encoding_id, language_id
        )
        return matcher.find_all(self.font["name"])

    def get_name(self, name_id: int) -> Optional[str]:
        """Windows English string for ``name_id``, else Mac English, else any."""
        if "name" not in self.font:
            return None
        table = self.font["name"]
        record = (
            NameRecordMatcher.windows_english(name_id).find_first(table)
            or NameRecordMatcher.mac_english(name_id).find_first(table)
            or NameRecordMatcher.for_binary(name_id).find_first(table)
        )
        if record is None:
            return None
        return record.toUnicode(errors="replace")

    def has_mac_names(self) -> bool:
        return bool(self.get_name_records(PID_MAC, EID_MAC_ROMAN, LANG_MAC_ENGLISH))

    def raw_name(self, source: str = "filename") -> Tuple[str, str]:
        """The string to classify and the source it actually came from.

        Falls back to the file name stem when the requested records are missing.
        """
        if source not in NAME_SOURCES:
            raise ValueError(f"unknown name source '{source}'")
        value = None
        if source == "full":
            value = self.get_name(NAME_ID_FULL)
        elif source == "postscript":
            value = self.get_name(NAME_ID_POSTSCRIPT)
        elif source == "family":
            family = self.get_name(NAME_ID_TYPO_FAMILY) or self.get_name(NAME_ID_FAMILY)
            style = self.get_name(NAME_ID_TYPO_SUBFAMILY) or self.get_name(
                NAME_ID_SUBFAMILY
            )
            if family:
                value = f"{family} {style}" if style else family
        if value and value.strip():
            return value, source
        if source != "filename":
            logger.debug(f"{self.filename}: no {source} name, using filename")
        stem = self.path.stem if self.path else ""
        return stem, "filename"

    def set_family(self, family_name: str, style_name: str) -> Dict[int, Optional[str]]:
        """Write the classified names into nameIDs 1, 2, 4, 6, 16 and 17.

        Windows English records are always written; Mac English records only when
        the font already has some. Returns the values written (None = removed).
        """
        table = self._table("name")
        values = build_name_values(family_name, style_name)
        platforms = [PID_WIN] + ([PID_MAC] if self.has_mac_names() else [])

        for platform_id in platforms:
            enc_id, lang_id = _PLATFORMS[platform_id]
            encoding = getEncoding(platform_id, enc_id, lang_id)
            for name_id, value in values.items():
                if value is not None and platform_id == PID_MAC:
                    if not _encodable(value, encoding):
                        logger.debug(f"nameID {name_id} not Mac Roman encodable")
                        value = None
                if value is None:
                    table.removeNames(
                        nameID=name_id,
                        platformID=platform_id,
                        platEncID=enc_id,
                        langID=lang_id,
                    )
                    continue
                table.setName(value, name_id, platform_id, enc_id, lang_id)

        sync_cff_names_binary(
            self.font,
            values[NAME_ID_POSTSCRIPT],
            values[NAME_ID_FULL],
            values[NAME_ID_FAMILY],
        )
        logger.debug(f"{self.filename}: wrote names {values}")
        return values

    # ---------- OS/2 metrics ----------

    def get_weight(self) -> Optional[int]:
        os2 = self.font.get("OS/2")
        return None if os2 is None else os2.usWeightClass

    def set_weight(self, weight: int) -> None:
        _check_range("usWeightClass", weight, WEIGHT_CLASS_RANGE)
        self._table("OS/2").usWeightClass = weight

    def get_width(self) -> Optional[int]:
        os2 = self.font.get("OS/2")
        return None if os2 is None else os2.usWidthClass

    def set_width(self, width: int) -> None:
        _check_range("usWidthClass", width, WIDTH_CLASS_RANGE)
        self._table("OS/2").usWidthClass = width

    def get_selection_flags(self) -> int:
        os2 = self.font.get("OS/2")
        return 0 if os2 is None else os2.fsSelection

    def add_selection_flags(self, flags: int) -> None:
        """OR ``flags`` into fsSelection; bold/italic also go into head.macStyle."""
        os2 = self._table("OS/2")
        os2.fsSelection |= flags
        if os2.fsSelection & (FS_BOLD | FS_ITALIC):
            os2.fsSelection &= ~FS_REGULAR
        if "head" in self.font:
            head = self.font["head"]
            if flags & FS_BOLD:
                head.macStyle |= _MAC_BOLD
            if flags & FS_ITALIC:
                head.macStyle |= _MAC_ITALIC


def _check_range(field: str, value: int, bounds: Tuple[int, int]) -> None:
    low, high = bounds
    if not low <= value <= high:
        raise ValueError(f"{field} must be within {low}..{high}, got {value}")


def _encodable(value: str, encoding: Optional[str]) -> bool:
    if encoding is None:
        return False
    try:
        value.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def _detect_format(font: TTFont, path: Optional[Path]) -> str:
    if path is not None and path.suffix.lower() == ".ttx":
        return "ttx"
    if font.flavor in ("woff", "woff2"):
        return font.flavor
    return "otf" if ("CFF " in font or "CFF2" in font) else "ttf"


def is_font_file(path: str | Path) -> bool:
    return Path(path).suffix.lower() in FONT_EXTENSIONS


def load_font(path: str | Path) -> FontRecord:
    """Open a binary font (ttf/otf/woff/woff2) or a .ttx dump."""
    path = Path(path)
    if not path.is_file():
        raise FontLoadError(f"font file not found: {path}")
    try:
        if path.suffix.lower() == ".ttx":
            font = TTFont()
            font.importXML(str(path))
        else:
            font = TTFont(str(path))
        # Decompile the tables we touch so a broken font fails here, not mid-write
        for tag in ("name", "OS/2", "head"):
            if tag in font:
                font[tag]
    except (TTLibError, ExpatError, struct.error, ValueError, KeyError) as exc:
        raise FontLoadError(f"cannot parse {path.name}: {exc}") from exc
    except OSError as exc:
        raise FontLoadError(f"cannot read {path.name}: {exc}") from exc
    logger.debug(f"Loaded {path.name}")
    return FontRecord(font, path)


def output_filename(record: FontRecord, fmt: str) -> str:
    """<PostScriptName>.<ext>, falling back to the source file stem."""
    ps_name = record.get_name(NAME_ID_POSTSCRIPT)
    if not ps_name:
        ps_name = sanitize_postscript(record.path.stem if record.path else "font")
    return f"{ps_name}.{fmt}"


def resolve_format(record: FontRecord, format: Optional[str] = None) -> str:
    """Concrete output format; None or "same" keeps the source format."""
    fmt = (format or "same").lower()
    if fmt == "same":
        fmt = record.source_format
    if fmt not in OUTPUT_FORMATS:
        raise ValueError(f"unsupported output format '{fmt}'")
    return fmt


def target_path(
    record: FontRecord, output_directory: str | Path, format: Optional[str] = None
) -> Path:
    """Where write_font() will put ``record``."""
    fmt = resolve_format(record, format)
    return Path(output_directory) / output_filename(record, fmt)


def write_font(
    record: FontRecord, output_directory: str | Path, format: Optional[str] = None
) -> Path:
    """Save ``record`` into ``output_directory``; returns the written path.

    ``format`` is one of ttf/otf/woff/woff2/ttx; None or "same" keeps the source
    format. ttf/otf only choose the extension, outlines are never converted.
    """
    fmt = resolve_format(record, format)
    directory = Path(output_directory)
    target = directory / output_filename(record, fmt)
    font = record.font
    original_flavor = font.flavor
    try:
        directory.mkdir(parents=True, exist_ok=True)
        if fmt == "ttx":
            font.saveXML(str(target))
        else:
            font.flavor = fmt if fmt in ("woff", "woff2") else None
            font.save(str(target))
    except TTLibError as exc:
        raise FontWriteError(f"cannot write {target.name}: {exc}") from exc
    except OSError as exc:
        raise FontWriteError(f"cannot write {target}: {exc}") from exc
    finally:
        font.flavor = original_flavor
    logger.debug(f"Wrote {target}")
    return target


__all__ = [
    "FONT_EXTENSIONS",
    "OUTPUT_FORMATS",
    "NAME_SOURCES",
    "FontLoadError",
    "FontWriteError",
    "FontTableError",
    "FontRecord",
    "is_font_file",
    "load_font",
    "output_filename",
    "resolve_format",
    "target_path",
    "write_font",
]
