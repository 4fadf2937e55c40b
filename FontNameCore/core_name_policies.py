"""
Centralized ID policy helpers for constructing NameID values from a classified
(family, style) pair.

Scope:
- ID1 (Family), ID2 (Subfamily), ID4 (Full), ID6 (PostScript), ID16/ID17
  (Typographic Family/Subfamily)
- RIBBI split: a style outside Regular/Italic/Bold/Bold Italic keeps only its
  RIBBI part in ID2 and moves the rest into ID1; ID16/ID17 carry the full pair
- CFF font name sync for OpenType-CFF fonts

Examples:
>>> split_ribbi("Semibold Italic")
('Semibold', 'Italic')
>>> build_name_values("Myriad Pro", "Bold")[1]
'Myriad Pro'
>>> build_name_values("Myriad Pro", "Condensed Bold")[6]
'MyriadPro-CondensedBold'
"""

from __future__ import annotations

import re
import unicodedata
from typing import Any, Dict, Optional, Tuple

from FontNameCore.core_logging_config import get_logger
from FontNameCore.core_string_utils import join_nonempty, normalize_empty

logger = get_logger(__name__)

NAME_ID_FAMILY = 1
NAME_ID_SUBFAMILY = 2
NAME_ID_FULL = 4
NAME_ID_POSTSCRIPT = 6
NAME_ID_TYPO_FAMILY = 16
NAME_ID_TYPO_SUBFAMILY = 17

# PostScript names are limited to 63 printable ASCII characters
POSTSCRIPT_MAX_LENGTH = 63

RE_REGULAR = re.compile(r"\b(Regular|Roman)\b", re.I)

def normalize_nfc(value: str | None) -> str | None:
    """Return Unicode NFC-normalized string; pass through None."""
    if value is None:
        return None
    return unicodedata.normalize("NFC", str(value))


def _strip_token(pattern: "re.Pattern[str]", text: str) -> str:
    return " ".join(pattern.sub("", text).split())


def split_ribbi(style: str | None) -> Tuple[str, str]:
    """Split a style name into (non-RIBBI remainder, ID2 subfamily)."""
    words = (style or "").split()
    lowered = [w.lower() for w in words]
    is_bold = "bold" in lowered
    is_italic = "italic" in lowered
    remainder = [w for w in words if w.lower() not in {"bold", "italic", "regular"}]
    return " ".join(remainder), map_metrics_to_id2_subfamily(
        is_bold=is_bold, is_italic=is_italic
    )


def is_ribbi_style(style: str | None) -> bool:
    remainder, _ = split_ribbi(style)
    return not remainder


def map_metrics_to_id2_subfamily(*, is_bold: bool, is_italic: bool) -> str:
    """Map boolean metrics to one of the allowed ID2 subfamilies."""
    if is_bold and is_italic:
        return "Bold Italic"
    if is_bold:
        return "Bold"
    if is_italic:
        return "Italic"
    return "Regular"


def build_id1(family: str, style: str | None) -> str:
    """Construct ID1 (Family): family plus the non-RIBBI part of the style."""
    remainder, _ = split_ribbi(style)
    return join_nonempty(family, remainder)


def build_id2(style: str | None) -> str:
    return split_ribbi(style)[1]


def build_id4(family: str, style: str | None) -> str:
    """Construct ID4 (Full). Regular/Roman is omitted."""
    style_eff = _strip_token(RE_REGULAR, style or "")
    return join_nonempty(family, style_eff)


def sanitize_postscript(name: str) -> str:
    """Sanitize PostScript-like names; keep '-', '_', '.', '?', '!', '&'; remove spaces; replace others with '-'."""
    name = name.replace(" ", "")
    return re.sub(r"[^A-Za-z0-9\-\._\?\!\&]", "-", name)


def build_id6(family: str, style: str | None) -> str:
    """Construct ID6 (PostScript): Family-Style, spaces removed, ASCII only."""
    family_ps = sanitize_postscript(_ascii_fold(family))
    style_ps = sanitize_postscript(_ascii_fold(normalize_empty(style) or "Regular"))
    return f"{family_ps}-{style_ps}"[:POSTSCRIPT_MAX_LENGTH]


def _ascii_fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return decomposed.encode("ascii", errors="ignore").decode("ascii")


def build_id16(family: str) -> str:
    """Construct ID16 (Typographic Family)."""
    return family


def build_id17(style: str | None) -> str:
    """Construct ID17 (Typographic Subfamily). Fallback to "Regular" if empty."""
    return normalize_empty(style) or "Regular"


def build_name_values(family: str, style: str | None) -> Dict[int, Optional[str]]:
    """All nameID values for a classified font.

    A None value means the record should be removed (ID16/ID17 for RIBBI styles,
    where ID1/ID2 already carry the whole name).
    """
    family = normalize_nfc(family) or ""
    style = normalize_nfc(normalize_empty(style))
    ribbi = is_ribbi_style(style)
    return {
        NAME_ID_FAMILY: build_id1(family, style),
        NAME_ID_SUBFAMILY: build_id2(style),
        NAME_ID_FULL: build_id4(family, style) or family,
        NAME_ID_POSTSCRIPT: build_id6(family, style),
        NAME_ID_TYPO_FAMILY: None if ribbi else build_id16(family),
        NAME_ID_TYPO_SUBFAMILY: None if ribbi else build_id17(style),
    }


# ---------- CFF helpers ----------


def has_cff_table(font: Any) -> bool:
    return "CFF " in font


def _update_cff_topdict_field(top, field_name: str, value: str | None) -> bool:
    """Update a single CFF TopDict field if different."""
    if not value or getattr(top, field_name, None) == value:
        return False
    setattr(top, field_name, value)
    return True


def sync_cff_names_binary(
    font: Any, ps_name: str | None, full_name: str | None, family_name: str | None
) -> bool:
    """Sync the CFF font name and TopDict FullName/FamilyName with the name table."""
    if not has_cff_table(font):
        return False
    cff = font["CFF "].cff
    changed = False
    for top in cff.topDictIndex:
        changed |= _update_cff_topdict_field(top, "FullName", full_name)
        changed |= _update_cff_topdict_field(top, "FamilyName", family_name)
    if ps_name and cff.fontNames and cff.fontNames[0] != ps_name:
        cff.fontNames = [ps_name] + list(cff.fontNames[1:])
        changed = True
    if changed:
        logger.debug(f"Synced CFF names: FontName={ps_name} FullName={full_name}")
    return changed


__all__ = [
    "NAME_ID_FAMILY",
    "NAME_ID_SUBFAMILY",
    "NAME_ID_FULL",
    "NAME_ID_POSTSCRIPT",
    "NAME_ID_TYPO_FAMILY",
    "NAME_ID_TYPO_SUBFAMILY",
    "normalize_nfc",
    "split_ribbi",
    "is_ribbi_style",
    "map_metrics_to_id2_subfamily",
    "build_id1",
    "build_id2",
    "build_id4",
    "build_id6",
    "build_id16",
    "build_id17",
    "sanitize_postscript",
    "build_name_values",
    "has_cff_table",
    "sync_cff_names_binary",
]
