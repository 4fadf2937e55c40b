#!/usr/bin/env python3
"""
core_name_classifier: Raw font name -> (family name, style name, style metrics).

Pipeline (default path):

    separate() -> tokenize() -> find_boundary() -> apply_metrics() + case normalization

With ``ClassifyOptions.match_pattern`` the dictionary-driven split is bypassed: group 1
of the pattern is the family name verbatim and group 2 is split on underscores and
whitespace into style words, which still go through metrics mapping.

classify() has no I/O and never touches shared state, so a batch driver can call it
for every font independently (the dictionary is the only shared input and it is
immutable).

Examples:
>>> from FontNameCore.core_style_word_dictionary import StyleWordDictionary
>>> d = StyleWordDictionary.from_mapping({"styleWords": [
...     {"text": "Bold", "separate": True, "weight": 700}]})
>>> r = classify("MyFontBold", d)
>>> (r.family_name, r.style_name, r.metrics.weight)
('MyFont', 'Bold', 700)
>>> classify("myfont-italic", StyleWordDictionary.from_mapping(
...     {"styleWords": ["italic"]})).full_name
'Myfont Italic'
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from FontNameCore.core_boundary_classifier import find_boundary
from FontNameCore.core_logging_config import get_logger
from FontNameCore.core_metrics_mapper import StyleMetrics, apply_metrics
from FontNameCore.core_name_separator import separate, tokenize, tokenize_style_group
from FontNameCore.core_string_utils import (
    join_nonempty,
    normalize_empty,
    normalize_family_words,
    title_case_if_uniform,
)
from FontNameCore.core_style_word_dictionary import StyleWordDictionary

logger = get_logger(__name__)

PatternLike = Union[str, "re.Pattern[str]"]


class NameClassificationError(ValueError):
    """Base class for per-name failures; carries the raw name for reporting."""

    def __init__(self, message: str, raw_name: str, rule: Optional[str] = None):
        self.raw_name = raw_name
        self.rule = rule
        detail = f"{message} [name: {raw_name!r}"
        if rule:
            detail += f", rule: {rule}"
        super().__init__(detail + "]")


class PatternError(NameClassificationError):
    """A custom match pattern is invalid, does not match, or has fewer than 2 groups."""


class EmptyNameError(NameClassificationError):
    """Nothing is left to classify once separators are removed."""


@dataclass(frozen=True)
class ClassifyOptions:
    match_pattern: Optional[PatternLike] = None
    protect_beginning: bool = True
    family_override: Optional[str] = None
    split_family_camel_case: bool = False


@dataclass(frozen=True)
class ClassificationResult:
    raw_name: str
    family_name: str
    style_name: str
    metrics: StyleMetrics = field(default_factory=StyleMetrics)
    family_tokens: Tuple[str, ...] = ()
    style_tokens: Tuple[str, ...] = ()

    @property
    def has_style(self) -> bool:
        return bool(self.style_name)

    @property
    def style_or_regular(self) -> str:
        return self.style_name or "Regular"

    @property
    def full_name(self) -> str:
        return join_nonempty(self.family_name, self.style_name)


DEFAULT_OPTIONS = ClassifyOptions()


def compile_match_pattern(pattern: PatternLike) -> "re.Pattern[str]":
    """Compile and sanity-check a match pattern once, before a batch starts."""
    if isinstance(pattern, re.Pattern):
        compiled = pattern
    else:
        try:
            compiled = re.compile(pattern)
        except re.error as exc:
            raise PatternError(
                f"invalid match pattern: {exc}", raw_name="", rule=str(pattern)
            ) from exc
    if compiled.groups < 2:
        raise PatternError(
            f"match pattern needs at least 2 capture groups, has {compiled.groups}",
            raw_name="",
            rule=compiled.pattern,
        )
    return compiled


def _finish_style(
    style_tokens, dictionary: StyleWordDictionary, positions, token_count: int
) -> Tuple[Tuple[str, ...], StyleMetrics]:
    metrics = StyleMetrics()
    mapped = apply_metrics(
        style_tokens, dictionary.style_words, metrics, positions, token_count
    )
    return tuple(title_case_if_uniform(token) for token in mapped), metrics


def _classify_with_pattern(
    raw_name: str, dictionary: StyleWordDictionary, options: ClassifyOptions
) -> ClassificationResult:
    pattern = compile_match_pattern(options.match_pattern)
    match = pattern.search(raw_name)
    if match is None:
        raise PatternError("match pattern did not match", raw_name, pattern.pattern)
    groups = match.groups()
    if len(groups) < 2:
        raise PatternError(
            f"match pattern produced {len(groups)} group(s), need 2",
            raw_name,
            pattern.pattern,
        )

    family = groups[0] or ""
    # The family group counts as the single token in front of the style words
    words = tokenize_style_group(groups[1])
    style_tokens, metrics = _finish_style(
        words, dictionary, range(1, len(words) + 1), len(words) + 1
    )
    family = normalize_empty(options.family_override) or family
    if not family:
        raise EmptyNameError("match pattern yielded an empty family", raw_name)

    logger.debug(f"Pattern split '{raw_name}' -> '{family}' / {list(style_tokens)}")
    return ClassificationResult(
        raw_name=raw_name,
        family_name=family,
        style_name=" ".join(style_tokens),
        metrics=metrics,
        family_tokens=(family,),
        style_tokens=style_tokens,
    )


def classify(
    raw_name: str,
    dictionary: StyleWordDictionary,
    options: Optional[ClassifyOptions] = None,
) -> ClassificationResult:
    """Classify one raw name against ``dictionary``.

    Raises:
        PatternError: the match pattern is unusable for this name
        EmptyNameError: the name has no tokens
    """
    options = options or DEFAULT_OPTIONS
    raw_name = raw_name or ""

    if options.match_pattern is not None:
        return _classify_with_pattern(raw_name, dictionary, options)

    marked = separate(raw_name, dictionary.style_words, options.protect_beginning)
    tokens = tokenize(marked)
    if not tokens:
        raise EmptyNameError("name has no words", raw_name)
    logger.debug(f"Tokens for '{raw_name}': {tokens}")

    boundary = find_boundary(tokens, dictionary.style_words, dictionary.family_words)
    family_tokens, style_tokens = boundary.partition(tokens)
    style, metrics = _finish_style(
        style_tokens, dictionary, boundary.style_indices(len(tokens)), len(tokens)
    )

    family = normalize_family_words(
        family_tokens, split_camel=options.split_family_camel_case
    )
    override = normalize_empty(options.family_override)
    if override:
        family = override

    return ClassificationResult(
        raw_name=raw_name,
        family_name=family,
        style_name=" ".join(style),
        metrics=metrics,
        family_tokens=tuple(family_tokens),
        style_tokens=style,
    )


def classify_names(
    raw_names: Iterable[str],
    dictionary: StyleWordDictionary,
    options: Optional[ClassifyOptions] = None,
) -> List[Tuple[str, Optional[ClassificationResult], Optional[NameClassificationError]]]:
    """Classify several names, collecting per-name failures instead of raising."""
    outcomes = []
    for raw_name in raw_names:
        try:
            outcomes.append((raw_name, classify(raw_name, dictionary, options), None))
        except NameClassificationError as exc:
            logger.debug(f"Could not classify '{raw_name}': {exc}")
            outcomes.append((raw_name, None, exc))
    return outcomes


__all__ = [
    "NameClassificationError",
    "PatternError",
    "EmptyNameError",
    "ClassifyOptions",
    "ClassificationResult",
    "compile_match_pattern",
    "classify",
    "classify_names",
]
