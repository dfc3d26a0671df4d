"""
Ingredient matching between pantry phrases and recipe phrases.
"""

from typing import AbstractSet


def matches(pantry_tokens: AbstractSet[str], ingredient_tokens: AbstractSet[str]) -> bool:
    """
    Decide whether two token sets name the same ingredient.

    The smaller set must be contained in the larger one, in either
    direction: pantry "flour" matches recipe "all-purpose flour", and pantry
    "whole wheat bread" matches recipe "bread". "whole wheat flour" and
    "all-purpose flour" do not match.

    Args:
        pantry_tokens: Tokens of a pantry item name
        ingredient_tokens: Tokens of a recipe ingredient name

    Returns:
        True if the sets match. Always False if either set is empty.
    """
    if not pantry_tokens or not ingredient_tokens:
        return False

    if len(pantry_tokens) <= len(ingredient_tokens):
        smaller, larger = pantry_tokens, ingredient_tokens
    else:
        smaller, larger = ingredient_tokens, pantry_tokens

    return all(token in larger for token in smaller)
