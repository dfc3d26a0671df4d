"""
Preference filtering for the recipe catalog.

All filters preserve catalog order and never mutate recipes. Unset
preference fields are pass-throughs.
"""

import logging
import re
from typing import Iterable, List, Optional

from pantry_planner.data.models import Goal, Recipe, UserPreferences

logger = logging.getLogger(__name__)

_HOURS_PATTERN = re.compile(r"(\d+)\s*(?:hr|hour)")
_MINUTES_PATTERN = re.compile(r"(\d+)\s*min")

# Goal thresholds (per serving)
LOW_CALORIE_MAX = 450
HIGH_PROTEIN_MIN = 30


def parse_duration(text: Optional[str]) -> int:
    """
    Parse a duration string into minutes.

    Examples:
        parse_duration("1 hr 15 min") -> 75
        parse_duration("20 min")      -> 20
        parse_duration("6 hr")        -> 360
        parse_duration("")            -> 0
    """
    if not text:
        return 0
    minutes = 0
    hour_match = _HOURS_PATTERN.search(text)
    min_match = _MINUTES_PATTERN.search(text)
    if hour_match:
        minutes += int(hour_match.group(1)) * 60
    if min_match:
        minutes += int(min_match.group(1))
    return minutes


def total_minutes(recipe: Recipe) -> int:
    """Prep time plus cook time, in minutes."""
    return parse_duration(recipe.prep_time) + parse_duration(recipe.cook_time)


def matches_preferences(recipe: Recipe, prefs: UserPreferences) -> bool:
    """Check one recipe against diet, cuisine and max-time preferences."""
    if prefs.diet and recipe.diet_category not in prefs.diet:
        return False

    if not prefs.any_cuisine:
        wanted = {c.casefold() for c in prefs.cuisine}
        if (recipe.cuisine or "").casefold() not in wanted:
            return False

    if prefs.cook_time_max is not None and total_minutes(recipe) > prefs.cook_time_max:
        return False

    return True


def filter_catalog(catalog: Iterable[Recipe], prefs: Optional[UserPreferences]) -> List[Recipe]:
    """
    Narrow a catalog to the recipes satisfying the user's preferences.

    Args:
        catalog: Recipes in catalog order
        prefs: User preferences, or None if onboarding has not happened

    Returns:
        New list of matching recipes in catalog order
    """
    recipes = list(catalog)
    if prefs is None:
        return recipes

    filtered = [r for r in recipes if matches_preferences(r, prefs)]
    logger.info(
        f"[FILTER] {len(filtered)}/{len(recipes)} recipes match "
        f"diet={sorted(d.value for d in prefs.diet)} cuisine={sorted(prefs.cuisine)} "
        f"max_time={prefs.cook_time_max}"
    )
    return filtered


def filter_by_max_minutes(recipes: Iterable[Recipe], max_minutes: Optional[int]) -> List[Recipe]:
    """Keep recipes whose total time is at most max_minutes (None keeps all)."""
    if max_minutes is None:
        return list(recipes)
    return [r for r in recipes if total_minutes(r) <= max_minutes]


def filter_by_goal(recipes: Iterable[Recipe], goal: Optional[Goal]) -> List[Recipe]:
    """
    Keep recipes suited to a health goal.

    - loss: under LOW_CALORIE_MAX calories
    - protein: over HIGH_PROTEIN_MIN grams of protein
    - maintain / None: everything
    """
    if goal == Goal.LOSS:
        return [r for r in recipes if r.nutrition.calories < LOW_CALORIE_MAX]
    if goal == Goal.PROTEIN:
        return [r for r in recipes if r.nutrition.protein > HIGH_PROTEIN_MIN]
    return list(recipes)
