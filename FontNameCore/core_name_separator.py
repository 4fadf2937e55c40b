#!/usr/bin/env python3
"""
core_name_separator: Insert word-boundary markers around dictionary words and tokenize.

Two passes run over the raw name:

1. Replacement rules (``replace`` set) rewrite spelling variants to their canonical
   form and wrap the result in boundary markers. All replacement rules are combined
   into one alternation, so at any position the first rule in dictionary order wins.
   Matching here is case-sensitive regardless of ``caseSensitive``.
2. Separation rules (``separate`` set, no ``replace``) wrap the matched text itself in
   boundary markers, honoring each rule's ``caseSensitive`` flag. Text already
   rewritten by a replacement rule is not searched again ("SemiCondensed" keeps its
   "Condensed").

A match immediately followed by a lowercase letter is rejected, so "Bold" is split
out of "MyFontBold" but not out of "Boldface". With ``protect_beginning`` a match at
the very start of the string is left alone; without it, a match at the start is
accepted even when a lowercase letter follows.

Examples:
>>> from FontNameCore.core_style_word_dictionary import StyleWordRule
>>> separate("MyFontBold", [StyleWordRule(text="Bold", separate=True)])
'MyFont|Bold|'
>>> tokenize("MyFont|Bold|")
['MyFont', 'Bold']
>>> tokenize("Open-Sans_Semibold  Italic")
['Open', 'Sans', 'Semibold', 'Italic']
"""

from __future__ import annotations

import re
import sys
from functools import lru_cache
from typing import Iterable, List, Optional, Sequence, Tuple

from FontNameCore.core_logging_config import get_logger
from FontNameCore.core_style_word_dictionary import StyleWordRule

logger = get_logger(__name__)

BOUNDARY_MARKER = "|"


def _lowercase_class() -> str:
    """Character-class body covering every code point for which str.islower() holds."""
    ranges: List[List[int]] = []
    for code in range(sys.maxunicode + 1):
        if not chr(code).islower():
            continue
        if ranges and ranges[-1][1] == code - 1:
            ranges[-1][1] = code
        else:
            ranges.append([code, code])
    parts = []
    for low, high in ranges:
        parts.append(re.escape(chr(low)))
        if high != low:
            parts.append("-" + re.escape(chr(high)))
    return "".join(parts)


# Lowercase letters (any script) veto a boundary when they directly follow a match
_NOT_BEFORE_LOWERCASE = f"(?![{_lowercase_class()}])"

# Hyphen-minus, Unicode dashes, underscore, the boundary marker and whitespace
_SEPARATOR_RUN = re.compile(r"[\s\-‐-―_" + re.escape(BOUNDARY_MARKER) + r"]+")


def _rule_source(rule: StyleWordRule) -> str:
    return rule.match if rule.match is not None else re.escape(rule.text)


def _alternation(
    rules: Sequence[StyleWordRule], protect_beginning: bool, honor_case: bool
) -> str:
    parts: List[str] = []
    for i, rule in enumerate(rules):
        source = _rule_source(rule)
        if honor_case and not rule.case_sensitive:
            source = f"(?i:{source})"
        else:
            source = f"(?:{source})"
        if not protect_beginning:
            parts.append(rf"\A(?P<_s{i}>{source})")
        parts.append(f"(?P<_r{i}>{source}){_NOT_BEFORE_LOWERCASE}")
    return "|".join(parts)


@lru_cache(maxsize=64)
def _compile(
    rules: Tuple[StyleWordRule, ...], protect_beginning: bool, honor_case: bool
) -> "re.Pattern[str]":
    return re.compile(_alternation(rules, protect_beginning, honor_case))


def _rule_index(match: "re.Match[str]") -> int:
    return int(match.lastgroup[2:])


Span = Tuple[int, int, str]


def _find_words(
    name: str,
    rules: Tuple[StyleWordRule, ...],
    protect_beginning: bool,
    honor_case: bool,
    use_replacement: bool,
    start: int = 0,
    end: Optional[int] = None,
) -> List[Span]:
    """(start, end, word) for every accepted match inside ``name[start:end]``."""
    if not rules:
        return []
    pattern = _compile(rules, protect_beginning, honor_case)
    end = len(name) if end is None else end

    spans: List[Span] = []
    for match in pattern.finditer(name, start, end):
        if match.start() == 0 and protect_beginning:
            continue
        rule = rules[_rule_index(match)]
        word = rule.replace if use_replacement else match.group(0)
        logger.debug(f"Boundary around '{match.group(0)}' -> '{word}' ({rule.label})")
        spans.append((match.start(), match.end(), word))
    return spans


def _insert_markers(name: str, spans: List[Span]) -> str:
    out: List[str] = []
    cursor = 0
    for start, end, word in sorted(spans):
        out.append(name[cursor:start])
        out.append(f"{BOUNDARY_MARKER}{word}{BOUNDARY_MARKER}")
        cursor = end
    out.append(name[cursor:])
    return "".join(out)


def separate(
    raw_name: str,
    rules: Iterable[StyleWordRule],
    protect_beginning: bool = True,
) -> str:
    """Return ``raw_name`` with boundary markers around every recognized word.

    Rules with ``replace`` are applied first (first rule wins at each position),
    then rules with ``separate`` on the text between the replaced words. Other rules
    are ignored. Never fails: no match means the name comes back unchanged.
    """
    rules = tuple(rules)
    replace_rules = tuple(r for r in rules if r.replace is not None)
    separate_rules = tuple(r for r in rules if r.separate and r.replace is None)

    replaced = _find_words(
        raw_name,
        replace_rules,
        protect_beginning,
        honor_case=False,
        use_replacement=True,
    )
    spans = list(replaced)
    cursor = 0
    for start, end, _ in replaced + [(len(raw_name), len(raw_name), "")]:
        spans.extend(
            _find_words(
                raw_name,
                separate_rules,
                protect_beginning,
                honor_case=True,
                use_replacement=False,
                start=cursor,
                end=start,
            )
        )
        cursor = end
    return _insert_markers(raw_name, spans)


def tokenize(marked_name: Optional[str]) -> List[str]:
    """Split a marked name on dashes, underscores, markers and whitespace."""
    if not marked_name:
        return []
    return [token for token in _SEPARATOR_RUN.split(marked_name) if token]


def tokenize_style_group(value: Optional[str]) -> List[str]:
    """Split a match-pattern style group on underscores and whitespace only."""
    if not value:
        return []
    return [token for token in re.split(r"[\s_]+", value) if token]


__all__ = [
    "BOUNDARY_MARKER",
    "separate",
    "tokenize",
    "tokenize_style_group",
]
