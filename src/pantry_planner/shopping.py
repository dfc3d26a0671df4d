"""
Shopping list generation from a week plan.
"""

import logging
from typing import Dict, Iterable, List, Optional

from pantry_planner.data.models import Ingredient, PantryItem, WeekPlan
from pantry_planner.matching.matcher import matches
from pantry_planner.matching.tokenizer import tokenize

logger = logging.getLogger(__name__)


def build_shopping_list(
    plan: WeekPlan,
    pantry_items: Optional[Iterable[PantryItem]] = None,
) -> Dict[str, List[Ingredient]]:
    """
    Collect the ingredients a plan needs, grouped by category.

    Ingredients are unique by name (first occurrence in plan order wins).
    Ingredients matched by a pantry item are left off.

    Args:
        plan: Week plan to shop for
        pantry_items: Items already on hand

    Returns:
        Dict mapping category name to ingredients, categories in sorted order
        Example: {"Dairy": [Ingredient(...)], "Produce": [...]}
    """
    pantry_token_sets = [t for t in (tokenize(p.name) for p in pantry_items or []) if t]

    unique: Dict[str, Ingredient] = {}
    for recipe in plan.recipes():
        for ingredient in recipe.ingredients:
            unique.setdefault(ingredient.name, ingredient)

    by_category: Dict[str, List[Ingredient]] = {}
    skipped = 0
    for ingredient in unique.values():
        tokens = tokenize(ingredient.name)
        if any(matches(p, tokens) for p in pantry_token_sets):
            skipped += 1
            continue
        by_category.setdefault(ingredient.category.value, []).append(ingredient)

    logger.info(f"[SHOPPING] {len(unique) - skipped} items to buy, {skipped} covered by pantry")
    return {category: by_category[category] for category in sorted(by_category)}
