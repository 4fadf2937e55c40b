#!/usr/bin/env python3
"""
core_boundary_classifier: Find where the family name ends and the style run begins.

Fonts name their styles as trailing modifiers ("Bold Italic"), never as infixes, so a
style run has to reach the last token. The scan starts at index 1 (a family name is
never empty) and keeps track of the current candidate run:

- a style word after a non-style word starts a new run;
- a family word ("Pro", "Sans") right after a style word is reclaimed into the
  family name and does not break the run;
- any other non-style word cancels the run, and a later style word starts a
  fresh one ("Foo Bold X Italic" splits as "Foo Bold X" / "Italic").

Examples:
>>> from FontNameCore.core_style_word_dictionary import StyleWordDictionary
>>> d = StyleWordDictionary.from_mapping(
...     {"styleWords": ["Bold", "Italic"], "familyWords": ["Pro"]})
>>> find_boundary(["Myriad", "Bold", "Pro", "Italic"], d.style_words, d.family_words)
BoundaryResult(first_style_index=1, reclaimed_indices=(2,))
>>> find_boundary(["Foo", "Bold", "Ornaments"], d.style_words, d.family_words)
BoundaryResult(first_style_index=-1, reclaimed_indices=())
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from FontNameCore.core_logging_config import get_logger
from FontNameCore.core_style_word_dictionary import FamilyWordRule, StyleWordRule

logger = get_logger(__name__)

NO_BOUNDARY = -1


@dataclass(frozen=True)
class BoundaryResult:
    """Split point plus the indices of family words pulled out of the style run."""

    first_style_index: int = NO_BOUNDARY
    reclaimed_indices: Tuple[int, ...] = ()

    @property
    def has_style(self) -> bool:
        return self.first_style_index != NO_BOUNDARY

    def partition(self, tokens: Sequence[str]) -> Tuple[List[str], List[str]]:
        """Split ``tokens`` into (family tokens, style tokens)."""
        if not self.has_style:
            return list(tokens), []
        start = self.first_style_index
        reclaimed = set(self.reclaimed_indices)
        family = list(tokens[:start]) + [tokens[i] for i in self.reclaimed_indices]
        style = [t for i, t in enumerate(tokens[start:], start) if i not in reclaimed]
        return family, style

    def style_indices(self, token_count: int) -> List[int]:
        """Indices of the style tokens, in the order partition() returns them."""
        if not self.has_style:
            return []
        reclaimed = set(self.reclaimed_indices)
        return [
            i for i in range(self.first_style_index, token_count) if i not in reclaimed
        ]


def applicable_rules(
    rules: Sequence[StyleWordRule], index: int, token_count: int
) -> List[StyleWordRule]:
    """Rules allowed to classify the token at ``index`` (onlyLast / notFirst)."""
    return [rule for rule in rules if rule.is_applicable(index, token_count)]


def is_style_word(
    token: str, rules: Sequence[StyleWordRule], index: int, token_count: int
) -> bool:
    return any(rule.matches(token) for rule in applicable_rules(rules, index, token_count))


def is_family_word(token: str, rules: Sequence[FamilyWordRule]) -> bool:
    return any(rule.matches(token) for rule in rules)


def find_boundary(
    tokens: Sequence[str],
    style_rules: Sequence[StyleWordRule],
    family_rules: Sequence[FamilyWordRule],
) -> BoundaryResult:
    """Single left-to-right pass over ``tokens`` starting at index 1."""
    token_count = len(tokens)
    previous_is_style = False
    first_style_index = NO_BOUNDARY
    reclaimed: List[int] = []

    for i in range(1, token_count):
        token = tokens[i]
        current_is_style = is_style_word(token, style_rules, i, token_count)

        if current_is_style and not previous_is_style:
            first_style_index = i
            reclaimed = []
        elif not current_is_style:
            if previous_is_style and is_family_word(token, family_rules):
                reclaimed.append(i)
                logger.debug(f"Reclaimed family word '{token}' at index {i}")
                # A reclaimed word keeps the run alive for the next token
                continue
            if first_style_index != NO_BOUNDARY:
                logger.debug(f"Style run cancelled by '{token}' at index {i}")
            first_style_index = NO_BOUNDARY
            reclaimed = []

        previous_is_style = current_is_style

    if first_style_index == NO_BOUNDARY:
        reclaimed = []
    result = BoundaryResult(first_style_index, tuple(reclaimed))
    logger.debug(f"Boundary for {list(tokens)}: {result}")
    return result


__all__ = [
    "NO_BOUNDARY",
    "BoundaryResult",
    "applicable_rules",
    "is_style_word",
    "is_family_word",
    "find_boundary",
]
