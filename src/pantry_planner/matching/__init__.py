"""
Ingredient matching, ranking and preference filtering.
"""

from pantry_planner.matching.tokenizer import tokenize, singularize, STOP_WORDS
from pantry_planner.matching.matcher import matches
from pantry_planner.matching.filters import (
    filter_catalog,
    filter_by_goal,
    filter_by_max_minutes,
    parse_duration,
    total_minutes,
)
from pantry_planner.matching.ranker import (
    RankedRecipe,
    rank_by_pantry,
    suggest_from_pantry,
)

__all__ = [
    "tokenize",
    "singularize",
    "STOP_WORDS",
    "matches",
    "filter_catalog",
    "filter_by_goal",
    "filter_by_max_minutes",
    "parse_duration",
    "total_minutes",
    "RankedRecipe",
    "rank_by_pantry",
    "suggest_from_pantry",
]
