#!/usr/bin/env python3
"""
Core Font Sorting Utilities

Groups classified fonts by their resulting family name once a batch has been
classified, so the fixer can decide the output directory layout. Supports forced
group merging for families the dictionary splits apart ("Rough Love" and
"Love Script" shipped as one package).

Usage:
    from FontNameCore.core_font_sorter import FontSorter, font_info_from_result

    font_infos = [font_info_from_result(path, result) for path, result in done]
    families = FontSorter(font_infos).group_by_family()

    # Force specific families to share one group (named after the first listed)
    forced_groups = [["Rough Love", "Love Script"]]
    families = FontSorter(font_infos).group_by_family(forced_groups=forced_groups)
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from FontNameCore.core_metrics_mapper import FS_ITALIC, FS_OBLIQUE
from FontNameCore.core_name_classifier import ClassificationResult

_UNSAFE_DIR_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]+')


@dataclass
class FontInfo:
    """Classified font information for sorting and grouping."""

    path: str
    family_name: str
    style_name: str = ""
    weight: Optional[int] = None
    width: Optional[int] = None
    selection_flags: int = 0

    def __post_init__(self):
        """Normalize family name after initialization."""
        if isinstance(self.family_name, str) and self.family_name.strip():
            self.family_name = unicodedata.normalize("NFC", self.family_name.strip())
        else:
            self.family_name = "Unknown"

    @property
    def is_slanted(self) -> bool:
        return bool(self.selection_flags & (FS_ITALIC | FS_OBLIQUE))

    @property
    def sort_key(self):
        """Width, then weight, then upright before slanted (Regular weight 400)."""
        return (
            self.width if self.width is not None else 5,
            self.weight if self.weight is not None else 400,
            self.is_slanted,
            self.style_name,
            self.path,
        )


def font_info_from_result(path: str, result: ClassificationResult) -> FontInfo:
    return FontInfo(
        path=str(path),
        family_name=result.family_name,
        style_name=result.style_name,
        weight=result.metrics.weight,
        width=result.metrics.width,
        selection_flags=result.metrics.selection_flags,
    )


def family_directory_name(family_name: str) -> str:
    """Directory name for a family group; path separators and reserved chars become '-'.

    Examples:
        >>> family_directory_name("AC/DC Sans")
        'AC-DC Sans'
        >>> family_directory_name("..")
        'Unknown'
    """
    name = _UNSAFE_DIR_CHARS.sub("-", family_name).strip(" .")
    return name or "Unknown"


class FontSorter:
    """Font grouping utilities over a finished batch."""

    def __init__(self, font_infos: List[FontInfo]):
        """Initialize with a list of FontInfo objects."""
        self.font_infos = font_infos

    def group_by_family(
        self, forced_groups: Optional[List[List[str]]] = None
    ) -> Dict[str, List[FontInfo]]:
        """Group fonts by family name; styles inside a group are ordered by sort_key."""
        families: Dict[str, List[FontInfo]] = {}
        for font_info in self.font_infos:
            families.setdefault(font_info.family_name, []).append(font_info)

        if forced_groups:
            families = self.apply_forced_groups(families, forced_groups)

        return {
            name: sorted(fonts, key=lambda f: f.sort_key)
            for name, fonts in sorted(families.items(), key=lambda x: x[0].lower())
        }

    def _build_forced_mapping(
        self, forced_groups: List[List[str]], existing_families: Set[str]
    ) -> Dict[str, str]:
        """Build mapping from family names to their forced group names."""
        family_to_forced: Dict[str, str] = {}

        for forced_group in forced_groups:
            available = [f for f in forced_group if f in existing_families]

            if len(available) >= 2:
                group_name = available[0]
                for family_name in available:
                    family_to_forced[family_name] = group_name

        return family_to_forced

    def apply_forced_groups(
        self, groups: Dict[str, List[FontInfo]], forced_groups: List[List[str]]
    ) -> Dict[str, List[FontInfo]]:
        """Apply forced groupings to existing groups."""
        if not forced_groups:
            return groups

        family_to_forced = self._build_forced_mapping(forced_groups, set(groups.keys()))
        new_groups: Dict[str, List[FontInfo]] = {}

        for group_name, fonts in groups.items():
            target_group = family_to_forced.get(group_name, group_name)
            new_groups.setdefault(target_group, []).extend(fonts)

        return new_groups

    def get_grouping_summary(self, groups: Dict[str, List[FontInfo]]) -> Dict[str, Any]:
        """Get summary information about font groupings."""
        num_groups = len(groups)
        group_sizes = [len(fonts) for fonts in groups.values()]

        return {
            "total_fonts": len(self.font_infos),
            "num_groups": num_groups,
            "largest_group": max(group_sizes, default=0),
            "merged_groups": sorted(
                name
                for name, fonts in groups.items()
                if len({f.family_name for f in fonts}) > 1
            ),
        }


def parse_forced_groups(values: Optional[List[str]]) -> List[List[str]]:
    """Turn CLI values like "Rough Love,Love Script" into forced group lists."""
    groups = []
    for value in values or []:
        members = [part.strip() for part in value.split(",") if part.strip()]
        if len(members) >= 2:
            groups.append(members)
    return groups


__all__ = [
    "FontInfo",
    "FontSorter",
    "family_directory_name",
    "font_info_from_result",
    "parse_forced_groups",
]
