"""
Ingredient phrase tokenization.

Turns free-text ingredient phrases into sets of significant, singular word
stems so that "2 slices of whole wheat bread" and "whole wheat bread" compare
equal.

Examples:
    tokenize("2 slices of whole wheat bread") -> {"whole", "wheat", "bread"}
    tokenize("1/2 cup mixed berries")         -> {"mixed", "berry"}
    tokenize("3 tbsp")                        -> set()
"""

import re
from typing import FrozenSet

# Units of measure and filler words that never identify an ingredient
STOP_WORDS: FrozenSet[str] = frozenset({
    "a", "an", "and", "clove", "cloves", "cup", "cups", "for", "g", "in", "kg",
    "l", "lb", "lbs", "ml", "of", "on", "or", "oz", "slice", "slices", "tbsp",
    "the", "tsp", "with",
})

# Fractions first so "2/3" is removed whole, then bare numbers and punctuation
_STRIP_PATTERN = re.compile(r"\d+/\d+|\d+|[.,()\-]")


def singularize(word: str) -> str:
    """Reduce a plural word with a small suffix-rule cascade."""
    if word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith("oes"):
        return word[:-2]
    if word.endswith("s") and not word.endswith("ss") and len(word) > 2:
        return word[:-1]
    return word


def tokenize(text: str) -> FrozenSet[str]:
    """
    Convert an ingredient phrase into its set of significant tokens.

    Args:
        text: Free-text phrase (e.g., "2 cups all-purpose flour")

    Returns:
        Frozen set of singular tokens. Empty when the phrase held only
        numbers, units or filler words; callers treat that as "matches
        nothing".
    """
    cleaned = _STRIP_PATTERN.sub(" ", (text or "").lower())
    words = [w for w in cleaned.split() if w not in STOP_WORDS]
    return frozenset(singularize(w) for w in words)
