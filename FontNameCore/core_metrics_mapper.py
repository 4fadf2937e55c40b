#!/usr/bin/env python3
"""
core_metrics_mapper: Map recognized style words onto weight, width and fsSelection.

The mapper writes through a small duck-typed protocol shared by StyleMetrics and the
fontTools-backed FontRecord:

    set_weight(int)            usWeightClass, later words overwrite earlier ones
    set_width(int)             usWidthClass, later words overwrite earlier ones
    add_selection_flags(int)   fsSelection, OR-accumulated

Usage:
    metrics = StyleMetrics()
    tokens = apply_metrics(["bold", "ITALIC"], dictionary.style_words, metrics)
    # tokens == ["Bold", "Italic"], metrics.weight == 700, metrics.selection_flags == 0x21
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from FontNameCore.core_logging_config import get_logger
from FontNameCore.core_style_word_dictionary import StyleWordRule

logger = get_logger(__name__)

# OS/2 fsSelection bits
FS_ITALIC = 1 << 0
FS_BOLD = 1 << 5
FS_REGULAR = 1 << 6
FS_OBLIQUE = 1 << 9


@dataclass
class StyleMetrics:
    """In-memory metrics target; mirrors the FontRecord setter protocol."""

    weight: Optional[int] = None
    width: Optional[int] = None
    selection_flags: int = 0

    def set_weight(self, weight: int) -> None:
        self.weight = weight

    def set_width(self, width: int) -> None:
        self.width = width

    def add_selection_flags(self, flags: int) -> None:
        self.selection_flags |= flags

    @property
    def is_empty(self) -> bool:
        return self.weight is None and self.width is None and not self.selection_flags

    def apply_to(self, target) -> None:
        """Replay these metrics onto another target (e.g. a FontRecord)."""
        if self.weight is not None:
            target.set_weight(self.weight)
        if self.width is not None:
            target.set_width(self.width)
        if self.selection_flags:
            target.add_selection_flags(self.selection_flags)


def matching_rules(token: str, rules: Sequence[StyleWordRule]) -> List[StyleWordRule]:
    """Every rule that recognizes ``token``, in dictionary order."""
    return [rule for rule in rules if rule.matches(token)]


def find_rule(token: str, rules: Sequence[StyleWordRule]) -> Optional[StyleWordRule]:
    """First rule in dictionary order that recognizes ``token``."""
    for rule in rules:
        if rule.matches(token):
            return rule
    return None


def apply_metrics(
    style_tokens: Sequence[str],
    rules: Sequence[StyleWordRule],
    metrics,
    positions: Optional[Sequence[int]] = None,
    token_count: Optional[int] = None,
) -> List[str]:
    """Rewrite recognized tokens to canonical text and push their metrics to ``metrics``.

    ``positions`` are the tokens' indices in the full name of ``token_count`` tokens;
    when given, only rules allowed at that index (onlyLast / notFirst) are consulted.
    The canonical text comes from the first recognizing rule and the metrics from the
    first recognizing rule that carries any. Unrecognized tokens pass through
    untouched.
    """
    if positions is not None:
        if len(positions) != len(style_tokens):
            raise ValueError("positions must line up with style_tokens")
        if token_count is None:
            # A style run always reaches the last token
            token_count = max(positions, default=-1) + 1
    updated: List[str] = []
    for n, token in enumerate(style_tokens):
        candidates = rules
        if positions is not None:
            candidates = [r for r in rules if r.is_applicable(positions[n], token_count)]
        matched = matching_rules(token, candidates)
        if not matched:
            updated.append(token)
            continue

        updated.append(matched[0].canonical or token)
        rule = next((r for r in matched if r.has_metrics), None)
        if rule is None:
            continue
        if rule.weight is not None:
            metrics.set_weight(rule.weight)
        if rule.width is not None:
            metrics.set_width(rule.width)
        if rule.fs_selection is not None:
            metrics.add_selection_flags(rule.fs_selection)
        logger.debug(
            f"'{token}' via {rule.label}: weight={rule.weight} "
            f"width={rule.width} fsSelection={rule.fs_selection}"
        )
    return updated


__all__ = [
    "FS_ITALIC",
    "FS_BOLD",
    "FS_REGULAR",
    "FS_OBLIQUE",
    "StyleMetrics",
    "matching_rules",
    "find_rule",
    "apply_metrics",
]
