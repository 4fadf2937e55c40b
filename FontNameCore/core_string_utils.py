#!/usr/bin/env python3
"""
Standardized string handling and capitalization utilities for font names.

Philosophy:
- None means "no value was provided"
- Empty string means "value was provided but empty"
- Whitespace-only strings are treated as empty
- Capitalization helpers only touch case, never spacing or spelling

Usage:
    from FontNameCore.core_string_utils import normalize_empty, upper_first

    family = normalize_empty(user_input)  # "" -> None
    style = title_case_if_uniform("ITALIC")  # -> "Italic"
"""

from typing import Iterable, List, Optional


def is_empty(value: Optional[str]) -> bool:
    """
    Check if string is None, empty, or whitespace-only.

    Examples:
        >>> is_empty(None)
        True
        >>> is_empty("   ")
        True
        >>> is_empty("  content  ")
        False
    """
    return not value or not str(value).strip()


def normalize_empty(value: Optional[str]) -> Optional[str]:
    """
    Convert empty/whitespace strings to None, strip meaningful content.

    Examples:
        >>> normalize_empty("   ") is None
        True
        >>> normalize_empty("  content  ")
        'content'
    """
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped if stripped else None


def coalesce(*values: Optional[str]) -> Optional[str]:
    """
    Return first non-empty value.

    Use this for fallback chains (e.g., ID16 -> ID1 -> filename).

    Examples:
        >>> coalesce(None, "", "first")
        'first'
        >>> coalesce(None, "", "  ") is None
        True
    """
    for value in values:
        if not is_empty(value):
            return normalize_empty(value)
    return None


def join_nonempty(*parts: Optional[str], separator: str = " ") -> str:
    """
    Join only non-empty parts with separator.

    Examples:
        >>> join_nonempty("Font", None, "Bold")
        'Font Bold'
        >>> join_nonempty(None, "", separator="-")
        ''
    """
    cleaned = [normalize_empty(p) for p in parts]
    return separator.join(p for p in cleaned if p is not None)


# ------------------------------------------------------------------------------------------------
# Capitalization
# ------------------------------------------------------------------------------------------------


def upper_first(word: str) -> str:
    """
    Capitalize only the first character, preserving the rest.

    Examples:
        >>> upper_first("myFont")
        'MyFont'
        >>> upper_first("")
        ''
    """
    if not word:
        return word
    return word[0].upper() + word[1:]


def _is_case_uniform(word: str) -> bool:
    cased = [c for c in word if c.isupper() or c.islower()]
    if not cased:
        return False
    return all(c.islower() for c in cased) or all(c.isupper() for c in cased)


def title_case_if_uniform(word: str) -> str:
    """
    Title-case a word whose letters are all lowercase or all uppercase.

    Mixed-case words only get their first character raised, so "SemiBold"
    survives while "SEMIBOLD" and "semibold" both become "Semibold".

    Examples:
        >>> title_case_if_uniform("italic")
        'Italic'
        >>> title_case_if_uniform("BOLD")
        'Bold'
        >>> title_case_if_uniform("semiBold")
        'SemiBold'
        >>> title_case_if_uniform("2nd")
        '2nd'
    """
    if _is_case_uniform(word):
        return word.capitalize()
    return upper_first(word)


def split_camel_case(text: str) -> str:
    """
    Insert a space wherever a lowercase letter is directly followed by an
    uppercase or titlecase letter.

    Examples:
        >>> split_camel_case("MyFont Pro")
        'My Font Pro'
        >>> split_camel_case("KWAK Grotesk")
        'KWAK Grotesk'
    """
    out: List[str] = []
    for i, char in enumerate(text):
        if i and text[i - 1].islower() and (char.isupper() or char.istitle()):
            out.append(" ")
        out.append(char)
    return "".join(out)


def normalize_family_words(words: Iterable[str], split_camel: bool = False) -> str:
    """Join family tokens with upper_first applied per word."""
    family = " ".join(upper_first(w) for w in words if w)
    if split_camel:
        family = split_camel_case(family)
    return family
