#!/usr/bin/env python3
"""
Criteria-based matching for name records in binary (fontTools) fonts.

Any criterion left as None matches every value, so the same matcher serves
"all records for nameID 1" and "the Windows English record for nameID 1".

Usage:
    from FontNameCore.core_namerecord_matcher import NameRecordMatcher

    matcher = NameRecordMatcher.for_binary(name_id=1, platform_id=3)
    for record in matcher.iter_matches(font["name"]):
        process(record)

    # Windows English only
    record = NameRecordMatcher.windows_english(4).find_first(font["name"])
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List, Optional

from FontNameCore.core_logging_config import get_logger

logger = get_logger(__name__)

# Platform/encoding constants
PID_MAC = 1
PID_WIN = 3
EID_MAC_ROMAN = 0
EID_UNICODE_BMP = 1
LANG_MAC_ENGLISH = 0
LANG_EN_US_INT = 0x0409


def _parse_lang_id(lang_id: int | str | None) -> Optional[int]:
    if lang_id is None or isinstance(lang_id, int):
        return lang_id
    try:
        return int(lang_id, 16) if lang_id.lower().startswith("0x") else int(lang_id)
    except ValueError:
        logger.warning(f"Invalid lang_id string '{lang_id}', matching any language")
        return None


@dataclass(frozen=True)
class NameRecordCriteria:
    """
    Immutable criteria for matching name records.

    Examples:
        >>> NameRecordCriteria.create(1, lang_id="0x409").lang_id
        1033
        >>> str(NameRecordCriteria.create(name_id=4))
        'nameID=4, platformID=*, platEncID=*, langID=*'
    """

    name_id: Optional[int] = None
    platform_id: Optional[int] = None
    plat_enc_id: Optional[int] = None
    lang_id: Optional[int] = None

    @classmethod
    def create(
        cls,
        name_id: Optional[int] = None,
        platform_id: Optional[int] = None,
        plat_enc_id: Optional[int] = None,
        lang_id: int | str | None = None,
    ) -> "NameRecordCriteria":
        """Create criteria from flexible input; lang_id may be an int or "0x409"."""
        return cls(
            name_id=None if name_id is None else int(name_id),
            platform_id=None if platform_id is None else int(platform_id),
            plat_enc_id=None if plat_enc_id is None else int(plat_enc_id),
            lang_id=_parse_lang_id(lang_id),
        )

    def __str__(self) -> str:
        def show(value: Optional[int], hexed: bool = False) -> str:
            if value is None:
                return "*"
            return f"0x{value:x}" if hexed else str(value)

        return (
            f"nameID={show(self.name_id)}, "
            f"platformID={show(self.platform_id)}, "
            f"platEncID={show(self.plat_enc_id)}, "
            f"langID={show(self.lang_id, hexed=True)}"
        )


class NameRecordMatcher:
    """Match fontTools NameRecord objects against a NameRecordCriteria."""

    def __init__(self, criteria: NameRecordCriteria):
        self.criteria = criteria

    @classmethod
    def for_binary(
        cls,
        name_id: Optional[int] = None,
        platform_id: Optional[int] = None,
        plat_enc_id: Optional[int] = None,
        lang_id: int | str | None = None,
    ) -> "NameRecordMatcher":
        """
        Create a matcher; unset arguments are wildcards.

        Examples:
            >>> NameRecordMatcher.for_binary(1, lang_id=0x0409).criteria.lang_id
            1033
        """
        return cls(NameRecordCriteria.create(name_id, platform_id, plat_enc_id, lang_id))

    @classmethod
    def windows_english(cls, name_id: Optional[int] = None) -> "NameRecordMatcher":
        return cls.for_binary(name_id, PID_WIN, EID_UNICODE_BMP, LANG_EN_US_INT)

    @classmethod
    def mac_english(cls, name_id: Optional[int] = None) -> "NameRecordMatcher":
        return cls.for_binary(name_id, PID_MAC, EID_MAC_ROMAN, LANG_MAC_ENGLISH)

    def matches(self, record: Any) -> bool:
        """Check if a binary name record matches every set criterion."""
        c = self.criteria
        for wanted, attr in (
            (c.name_id, "nameID"),
            (c.platform_id, "platformID"),
            (c.plat_enc_id, "platEncID"),
            (c.lang_id, "langID"),
        ):
            if wanted is not None and getattr(record, attr, None) != wanted:
                return False
        return True

    def iter_matches(self, name_table: Any) -> Iterator[Any]:
        """Iterate over matching records of a fontTools ``name`` table."""
        for record in getattr(name_table, "names", []):
            if self.matches(record):
                yield record

    def find_all(self, name_table: Any) -> List[Any]:
        return list(self.iter_matches(name_table))

    def find_first(self, name_table: Any) -> Optional[Any]:
        for record in self.iter_matches(name_table):
            return record
        return None

    def count_matches(self, name_table: Any) -> int:
        return sum(1 for _ in self.iter_matches(name_table))


def find_namerecord_binary(
    name_table: Any,
    name_id: int,
    pid: int = PID_WIN,
    eid: int = EID_UNICODE_BMP,
    lang: int = LANG_EN_US_INT,
) -> Optional[Any]:
    """
    Find first matching binary namerecord (Windows English by default).

    Examples:
        >>> record = find_namerecord_binary(font["name"], 1)
    """
    return NameRecordMatcher.for_binary(name_id, pid, eid, lang).find_first(name_table)


__all__ = [
    "NameRecordCriteria",
    "NameRecordMatcher",
    "find_namerecord_binary",
    "PID_MAC",
    "PID_WIN",
    "EID_MAC_ROMAN",
    "EID_UNICODE_BMP",
    "LANG_MAC_ENGLISH",
    "LANG_EN_US_INT",
]
