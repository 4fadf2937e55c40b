#!/usr/bin/env python3
"""
core_style_word_dictionary: Immutable style-word / family-word rule collections.

A dictionary is loaded once per batch run and then passed explicitly into the
classifier. Every entry is coerced to the same rule shape at load time, so the
rest of the pipeline never branches on "bare string vs. structured entry".

Rule-file format (JSON):

    {
        "styleWords": [
            "Bold",
            {"text": "Italic", "fsSelection": 1, "onlyLast": 2},
            {"match": "Ital|Ita", "replace": "Italic"},
            {"text": "Bold", "separate": true, "weight": 700}
        ],
        "familyWords": ["Pro", "Sans"]
    }

Usage:
    from FontNameCore.core_style_word_dictionary import load_dictionary

    dictionary = load_dictionary("rules.json")
    for rule in dictionary.style_words:
        print(rule.text, rule.weight)
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from FontNameCore.core_logging_config import get_logger

logger = get_logger(__name__)

WEIGHT_RANGE = (1, 1000)
WIDTH_RANGE = (1, 9)

# Rule-file key -> dataclass field. Both spellings are accepted.
_STYLE_RULE_KEYS: Dict[str, str] = {
    "text": "text",
    "match": "match",
    "replace": "replace",
    "separate": "separate",
    "caseSensitive": "case_sensitive",
    "case_sensitive": "case_sensitive",
    "onlyLast": "only_last",
    "only_last": "only_last",
    "notFirst": "not_first",
    "not_first": "not_first",
    "weight": "weight",
    "width": "width",
    "fsSelection": "fs_selection",
    "fs_selection": "fs_selection",
}

_FAMILY_RULE_KEYS: Dict[str, str] = {
    "text": "text",
    "caseSensitive": "case_sensitive",
    "case_sensitive": "case_sensitive",
}

_STR_FIELDS = {"text", "match", "replace"}
_BOOL_FIELDS = {"separate", "case_sensitive"}
_INT_FIELDS = {"only_last", "not_first", "weight", "width", "fs_selection"}


class DictionaryLoadError(ValueError):
    """Raised when a rule file or rule entry cannot be turned into a dictionary."""

    def __init__(self, message: str, source: Optional[str] = None, entry: Any = None):
        self.source = source
        self.entry = entry
        detail = message
        if source:
            detail = f"{source}: {detail}"
        if entry is not None:
            detail = f"{detail} (entry: {entry!r})"
        super().__init__(detail)


@dataclass(frozen=True)
class StyleWordRule:
    """One style-word entry. Field presence, not type, drives behavior."""

    text: str = ""
    match: Optional[str] = None
    replace: Optional[str] = None
    separate: bool = False
    case_sensitive: bool = False
    only_last: Optional[int] = None
    not_first: Optional[int] = None
    weight: Optional[int] = None
    width: Optional[int] = None
    fs_selection: Optional[int] = None
    recognition_pattern: "re.Pattern[str]" = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self):
        source = self.match if self.match is not None else re.escape(self.text)
        flags = 0 if self.case_sensitive else re.IGNORECASE
        object.__setattr__(
            self, "recognition_pattern", re.compile(f"(?:{source})", flags)
        )

    @property
    def label(self) -> str:
        """Short human-readable name for logs and error reports."""
        return self.text or self.replace or f"/{self.match}/"

    @property
    def canonical(self) -> Optional[str]:
        """Display form a recognized token is rewritten to, if any."""
        return self.text or self.replace or None

    @property
    def has_metrics(self) -> bool:
        return (
            self.weight is not None
            or self.width is not None
            or self.fs_selection is not None
        )

    def is_applicable(self, index: int, token_count: int) -> bool:
        """Positional filter: may this rule classify the token at ``index``?"""
        if self.only_last is not None and (token_count - index) > self.only_last:
            return False
        if self.not_first is not None and index <= self.not_first:
            return False
        return True

    def matches(self, token: str) -> bool:
        """Recognition test: regex full match, or text equality (case per rule)."""
        if self.match is not None and self.recognition_pattern.fullmatch(token):
            return True
        if not self.text:
            return False
        if self.case_sensitive:
            return token == self.text
        return token.casefold() == self.text.casefold()


@dataclass(frozen=True)
class FamilyWordRule:
    """A word reclaimed into the family name when it trails a style run."""

    text: str
    case_sensitive: bool = False

    def matches(self, token: str) -> bool:
        if self.case_sensitive:
            return token == self.text
        return token.casefold() == self.text.casefold()


@dataclass(frozen=True)
class StyleWordDictionary:
    """Read-only handle passed into every classification."""

    style_words: Tuple[StyleWordRule, ...] = ()
    family_words: Tuple[FamilyWordRule, ...] = ()
    source: str = "<memory>"

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], source: str = "<memory>"
    ) -> "StyleWordDictionary":
        if not isinstance(data, Mapping):
            raise DictionaryLoadError(
                "top level must be an object with styleWords/familyWords", source
            )
        unknown = set(data) - {
            "styleWords",
            "style_words",
            "familyWords",
            "family_words",
        }
        if unknown:
            raise DictionaryLoadError(
                f"unknown top-level keys: {', '.join(sorted(unknown))}", source
            )
        style_entries = _entry_list(data, "styleWords", "style_words", source)
        family_entries = _entry_list(data, "familyWords", "family_words", source)
        dictionary = cls(
            style_words=tuple(coerce_style_rule(e, source) for e in style_entries),
            family_words=tuple(coerce_family_rule(e, source) for e in family_entries),
            source=source,
        )
        logger.debug(
            f"Loaded dictionary '{source}': {len(dictionary.style_words)} style words, "
            f"{len(dictionary.family_words)} family words"
        )
        return dictionary

    @property
    def replace_rules(self) -> Tuple[StyleWordRule, ...]:
        return tuple(r for r in self.style_words if r.replace is not None)

    @property
    def separate_rules(self) -> Tuple[StyleWordRule, ...]:
        return tuple(
            r for r in self.style_words if r.separate and r.replace is None
        )

    def merged_with(self, other: "StyleWordDictionary") -> "StyleWordDictionary":
        """Return a new dictionary with ``other``'s rules appended after ours."""
        return StyleWordDictionary(
            style_words=self.style_words + other.style_words,
            family_words=self.family_words + other.family_words,
            source=f"{self.source}+{other.source}",
        )


def _entry_list(
    data: Mapping[str, Any], key: str, alias: str, source: str
) -> Iterable[Any]:
    entries = data.get(key, data.get(alias, []))
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise DictionaryLoadError(f"'{key}' must be a list", source)
    return entries


def _coerce_fields(
    entry: Mapping[str, Any], keys: Dict[str, str], source: str
) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {}
    for key, value in entry.items():
        name = keys.get(key)
        if name is None:
            raise DictionaryLoadError(f"unknown rule field '{key}'", source, entry)
        if value is None:
            continue
        if name in _STR_FIELDS and not isinstance(value, str):
            raise DictionaryLoadError(f"'{key}' must be a string", source, entry)
        if name in _BOOL_FIELDS and not isinstance(value, bool):
            raise DictionaryLoadError(f"'{key}' must be true/false", source, entry)
        if name in _INT_FIELDS and (
            isinstance(value, bool) or not isinstance(value, int)
        ):
            raise DictionaryLoadError(f"'{key}' must be an integer", source, entry)
        kwargs[name] = value
    return kwargs


def _check_range(
    kwargs: Dict[str, Any], name: str, bounds: Tuple[int, int], source: str, entry
) -> None:
    value = kwargs.get(name)
    if value is None:
        return
    low, high = bounds
    if not low <= value <= high:
        raise DictionaryLoadError(
            f"'{name}' must be within {low}..{high}", source, entry
        )


def coerce_style_rule(entry: Any, source: str = "<memory>") -> StyleWordRule:
    """Turn a bare string or a structured record into a StyleWordRule."""
    if isinstance(entry, StyleWordRule):
        return entry
    if isinstance(entry, str):
        if not entry.strip():
            raise DictionaryLoadError("empty style word", source, entry)
        return StyleWordRule(text=entry)
    if not isinstance(entry, Mapping):
        raise DictionaryLoadError("style word must be a string or object", source, entry)

    kwargs = _coerce_fields(entry, _STYLE_RULE_KEYS, source)
    if not kwargs.get("text") and not kwargs.get("match"):
        raise DictionaryLoadError("rule needs 'text' or 'match'", source, entry)
    for name in ("only_last", "not_first", "fs_selection"):
        if kwargs.get(name) is not None and kwargs[name] < 0:
            raise DictionaryLoadError(f"'{name}' must not be negative", source, entry)
    _check_range(kwargs, "weight", WEIGHT_RANGE, source, entry)
    _check_range(kwargs, "width", WIDTH_RANGE, source, entry)

    try:
        rule = StyleWordRule(**kwargs)
    except re.error as exc:
        raise DictionaryLoadError(
            f"invalid 'match' pattern: {exc}", source, entry
        ) from exc
    if rule.recognition_pattern.fullmatch(""):
        raise DictionaryLoadError("rule must not match an empty string", source, entry)
    return rule


def coerce_family_rule(entry: Any, source: str = "<memory>") -> FamilyWordRule:
    """Turn a bare string or a {text: ...} record into a FamilyWordRule."""
    if isinstance(entry, FamilyWordRule):
        return entry
    if isinstance(entry, str):
        if not entry.strip():
            raise DictionaryLoadError("empty family word", source, entry)
        return FamilyWordRule(text=entry)
    if not isinstance(entry, Mapping):
        raise DictionaryLoadError(
            "family word must be a string or object", source, entry
        )
    kwargs = _coerce_fields(entry, _FAMILY_RULE_KEYS, source)
    if not kwargs.get("text"):
        raise DictionaryLoadError("family word needs 'text'", source, entry)
    return FamilyWordRule(**kwargs)


def load_dictionary(path: str | Path) -> StyleWordDictionary:
    """Load a JSON rule file. Any problem is fatal: no partial dictionary is returned."""
    path = Path(path).expanduser()
    source = str(path)
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError as exc:
        raise DictionaryLoadError("rule file not found", source) from exc
    except json.JSONDecodeError as exc:
        raise DictionaryLoadError(f"invalid JSON: {exc}", source) from exc
    except OSError as exc:
        raise DictionaryLoadError(f"cannot read rule file: {exc}", source) from exc
    return StyleWordDictionary.from_mapping(data, source=source)


def default_dictionary() -> StyleWordDictionary:
    """Return the built-in rule set from core_font_style_dictionaries."""
    from FontNameCore.core_font_style_dictionaries import DEFAULT_RULES

    return StyleWordDictionary.from_mapping(DEFAULT_RULES, source="<built-in>")


__all__ = [
    "DictionaryLoadError",
    "StyleWordRule",
    "FamilyWordRule",
    "StyleWordDictionary",
    "coerce_style_rule",
    "coerce_family_rule",
    "load_dictionary",
    "default_dictionary",
]
