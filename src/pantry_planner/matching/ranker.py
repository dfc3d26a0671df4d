"""
Pantry-based recipe ranking.

Scores each recipe by how many of its ingredients are covered by the pantry
and orders the results for the "recipes from my pantry" view.
"""

import logging
from dataclasses import dataclass
from typing import AbstractSet, Iterable, List, Optional, Sequence

from pantry_planner.data.models import PantryItem, Recipe, UserPreferences
from pantry_planner.matching.filters import filter_by_goal, filter_by_max_minutes, filter_catalog
from pantry_planner.matching.matcher import matches
from pantry_planner.matching.tokenizer import tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankedRecipe:
    """A recipe paired with its pantry match count."""
    recipe: Recipe
    match_count: int

    @property
    def coverage(self) -> float:
        """Fraction of the recipe's ingredients covered by the pantry."""
        total = len(self.recipe.ingredients)
        return self.match_count / total if total else 0.0

    def __str__(self) -> str:
        return f"{self.recipe.name} ({self.match_count}/{len(self.recipe.ingredients)} ingredients)"


def count_matches(recipe: Recipe, pantry_token_sets: Sequence[AbstractSet[str]]) -> int:
    """Number of recipe ingredients matched by at least one pantry item."""
    count = 0
    for ingredient in recipe.ingredients:
        ingredient_tokens = tokenize(ingredient.name)
        if not ingredient_tokens:
            continue
        for pantry_tokens in pantry_token_sets:
            if matches(pantry_tokens, ingredient_tokens):
                count += 1
                break  # An ingredient counts once however many items match it
    return count


def rank_by_pantry(
    candidates: Iterable[Recipe],
    pantry_token_sets: Sequence[AbstractSet[str]],
) -> List[RankedRecipe]:
    """
    Rank recipes by pantry coverage.

    Args:
        candidates: Recipes to score
        pantry_token_sets: Token sets of pantry item names (empty sets ignored)

    Returns:
        RankedRecipe list without zero-match recipes, sorted by match count
        then coverage ratio, both descending. Full ties keep input order.
    """
    pantry_token_sets = [tokens for tokens in pantry_token_sets if tokens]

    ranked = []
    for recipe in candidates:
        match_count = count_matches(recipe, pantry_token_sets)
        if match_count > 0:
            ranked.append(RankedRecipe(recipe=recipe, match_count=match_count))

    ranked.sort(key=lambda r: (-r.match_count, -r.coverage))
    logger.debug(f"[RANK] {len(ranked)} recipes use at least one pantry item")
    return ranked


def suggest_from_pantry(
    catalog: Iterable[Recipe],
    pantry_items: Iterable[PantryItem],
    prefs: Optional[UserPreferences] = None,
    max_minutes: Optional[int] = None,
) -> List[RankedRecipe]:
    """
    Recipes the user can make from their pantry.

    Applies the preference filter and the health-goal filter, ranks by pantry
    coverage, then applies an optional total-time cap (the "under 30 /
    under 60 min" toggle).
    """
    pantry_token_sets = [tokenize(item.name) for item in pantry_items]
    candidates = filter_catalog(catalog, prefs)
    if prefs is not None and prefs.goal is not None:
        candidates = filter_by_goal(candidates, prefs.goal)
    ranked = rank_by_pantry(candidates, pantry_token_sets)

    if max_minutes is not None:
        allowed = {r.id for r in filter_by_max_minutes((rr.recipe for rr in ranked), max_minutes)}
        ranked = [rr for rr in ranked if rr.recipe.id in allowed]

    logger.info(f"[RANK] {len(ranked)} pantry suggestions (max_minutes={max_minutes})")
    return ranked
