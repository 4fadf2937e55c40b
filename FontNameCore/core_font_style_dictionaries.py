#!/usr/bin/env python3
"""
Built-in style-word dictionary.

The rule set is plain data in the rule-file shape and goes through the same coercion
as a user-supplied JSON file (see core_style_word_dictionary.default_dictionary).

Philosophy: a small vocabulary for deterministic outcomes. Variations (Semi/Extra
compounds, CamelCase vs. Titlecase spellings) are generated rather than listed.

Rules come in three groups, in this order:

1. Recognition rules: one per canonical word, case-insensitive, carrying metrics.
   They come first so the metrics mapper always finds them before any other rule.
2. Replace rules: compound and abbreviation spellings rewritten to the canonical
   word before tokenization ("SemiBold", "Semi-Bold" -> "Semibold", "Bd" -> "Bold").
3. Separate rules: case-sensitive, so "Highlight" is never split into "High Light".
"""

from typing import Any, Dict, List, Tuple

# ================================================================================================
# 1. WEIGHTS (usWeightClass)
# ================================================================================================

WEIGHT_CLASSES: Dict[str, int] = {
    "Hairline": 100,
    "Thin": 100,
    "Extralight": 200,
    "Ultralight": 200,
    "Light": 300,
    "Semilight": 350,
    "Book": 400,
    "Regular": 400,
    "Normal": 400,
    "Medium": 500,
    "Demibold": 600,
    "Semibold": 600,
    "Bold": 700,
    "Extrabold": 800,
    "Ultrabold": 800,
    "Black": 900,
    "Heavy": 900,
    "Extrablack": 950,
    "Ultrablack": 950,
}

# Modifier + base weight; the canonical spelling lowercases the base ("Semibold")
WEIGHT_MODIFIERS = {"Semi", "Demi", "Extra", "Ultra"}
WEIGHT_COMPOUND_BASES = {"Light", "Bold", "Black", "Heavy", "Thin"}


# ================================================================================================
# 2. WIDTHS (usWidthClass)
# ================================================================================================

WIDTH_BASES: Dict[str, int] = {
    "Condensed": 3,
    "Compressed": 3,
    "Narrow": 3,
    "Expanded": 7,
    "Extended": 7,
    "Wide": 7,
}

# Offset from the base class; sign follows the base (narrower or wider than normal)
WIDTH_MODIFIERS: Dict[str, int] = {"Semi": -1, "Extra": 1, "Ultra": 2}


# ================================================================================================
# 3. SLOPES (fsSelection)
# ================================================================================================

FS_SELECTION_ITALIC = 1 << 0
FS_SELECTION_BOLD = 1 << 5
FS_SELECTION_OBLIQUE = 1 << 9

SLOPES: Dict[str, int] = {
    "Italic": FS_SELECTION_ITALIC,
    "Oblique": FS_SELECTION_ITALIC | FS_SELECTION_OBLIQUE,
}

# Weight words that also set a style-linking bit
WEIGHT_FLAGS: Dict[str, int] = {"Bold": FS_SELECTION_BOLD}


# ================================================================================================
# 4. ABBREVIATIONS
# ================================================================================================
# Case-sensitive; rejected when a lowercase letter follows ("Medieval" keeps its "Med")

ABBREVIATIONS: List[Tuple[str, str]] = [
    ("XBd|XBold", "Extrabold"),
    ("SmBd|SemiBd", "Semibold"),
    ("Bd", "Bold"),
    ("Blk", "Black"),
    ("Hv", "Heavy"),
    ("Lt", "Light"),
    ("Med", "Medium"),
    ("Rg|Reg", "Regular"),
    ("Ital|Ita", "Italic"),
    ("Obl", "Oblique"),
    ("Cond|Cn", "Condensed"),
    ("Exp", "Expanded"),
]

# Words never split out of the middle of a name
NO_SEPARATE = {"Book", "Normal"}


# ================================================================================================
# 5. FAMILY WORDS
# ================================================================================================
# Reclaimed into the family name when they trail a style word ("Myriad Bold Pro")

FAMILY_WORDS = [
    "Pro",
    "Std",
    "Sans",
    "Serif",
    "Slab",
    "Mono",
    "Text",
    "Display",
    "Caption",
    "Subhead",
    "Headline",
    "Title",
    "Poster",
    "Deck",
    "Micro",
    "Banner",
    "Round",
    "Rounded",
]


# ================================================================================================
# 6. RULE GENERATION
# ================================================================================================


def _either_case(letter: str) -> str:
    return f"[{letter.upper()}{letter.lower()}]"


def generate_weight_compounds() -> Dict[str, str]:
    """Canonical compound weight -> case-sensitive pattern for its spellings.

    "Semibold" covers SemiBold, Semibold, Semi-Bold and "Semi Bold".
    """
    compounds = {}
    for mod in sorted(WEIGHT_MODIFIERS):
        for base in sorted(WEIGHT_COMPOUND_BASES):
            canonical = f"{mod}{base.lower()}"
            if canonical not in WEIGHT_CLASSES:
                continue
            compounds[canonical] = (
                f"{mod}[- ]?{_either_case(base[0])}{base[1:]}"
            )
    return compounds


def generate_width_classes() -> Dict[str, int]:
    """Base and modifier width terms mapped onto usWidthClass 1..9."""
    widths = dict(WIDTH_BASES)
    for base, width in WIDTH_BASES.items():
        direction = -1 if width < 5 else 1
        for mod, offset in WIDTH_MODIFIERS.items():
            widths[f"{mod}{base}"] = min(9, max(1, width + direction * offset))
    return widths


def generate_width_compounds() -> Dict[str, str]:
    compounds = {}
    for base in WIDTH_BASES:
        for mod in WIDTH_MODIFIERS:
            compounds[f"{mod}{base}"] = f"{mod}[- ]?{_either_case(base[0])}{base[1:]}"
    return compounds


def build_default_rules() -> Dict[str, List[Any]]:
    """Assemble the built-in dictionary in rule-file shape."""
    widths = generate_width_classes()
    weight_compounds = generate_weight_compounds()
    width_compounds = generate_width_compounds()

    recognition: List[Dict[str, Any]] = []
    for word, weight in WEIGHT_CLASSES.items():
        entry: Dict[str, Any] = {"text": word, "weight": weight}
        if word in WEIGHT_FLAGS:
            entry["fsSelection"] = WEIGHT_FLAGS[word]
        recognition.append(entry)
    for word, width in widths.items():
        recognition.append({"text": word, "width": width})
    for word, flags in SLOPES.items():
        recognition.append({"text": word, "fsSelection": flags})

    replace: List[Dict[str, Any]] = []
    for canonical, pattern in {**weight_compounds, **width_compounds}.items():
        replace.append({"match": pattern, "replace": canonical, "caseSensitive": True})
    for pattern, canonical in ABBREVIATIONS:
        replace.append({"match": pattern, "replace": canonical, "caseSensitive": True})

    simple = [
        word
        for word in list(WEIGHT_CLASSES) + list(WIDTH_BASES) + list(SLOPES)
        if word not in NO_SEPARATE and word not in weight_compounds
    ]
    separate: List[Dict[str, Any]] = [
        {"match": f"{word}|{word.upper()}", "separate": True, "caseSensitive": True}
        for word in simple
    ]

    return {
        "styleWords": recognition + replace + separate,
        "familyWords": list(FAMILY_WORDS),
    }


DEFAULT_RULES = build_default_rules()


# ================================================================================================
# MODULE INFO
# ================================================================================================

DICTIONARY_VERSION = "2.0.0"

if __name__ == "__main__":
    print(f"Font Style Dictionaries v{DICTIONARY_VERSION}")
    print(f"\nWeight words: {len(WEIGHT_CLASSES)}")
    print(f"Width words: {len(generate_width_classes())}")
    print(f"Abbreviations: {len(ABBREVIATIONS)}")
    print(f"Family words: {len(FAMILY_WORDS)}")
    print(f"Total style rules: {len(DEFAULT_RULES['styleWords'])}")
