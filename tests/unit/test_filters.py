"""
Unit tests for preference filtering and duration parsing.
"""

import pytest

from pantry_planner.data.models import DietCategory, Goal, UserPreferences
from pantry_planner.matching.filters import (
    filter_by_goal,
    filter_by_max_minutes,
    filter_catalog,
    parse_duration,
    total_minutes,
)


class TestParseDuration:
    """Tests for parse_duration()."""

    @pytest.mark.parametrize("text,expected", [
        ("1 hr 15 min", 75),
        ("20 min", 20),
        ("6 hr", 360),
        ("2 hours", 120),
        ("1hr 5min", 65),
        ("", 0),
        (None, 0),
        ("overnight", 0),
    ])
    def test_parse(self, text, expected):
        assert parse_duration(text) == expected

    def test_total_minutes(self, make_recipe):
        recipe = make_recipe(1, prep_time="15 min", cook_time="1 hr")
        assert total_minutes(recipe) == 75


class TestFilterCatalog:
    """Tests for filter_catalog()."""

    def test_no_preferences_passes_everything(self, pool):
        result = filter_catalog(pool, None)
        assert result == pool
        assert result is not pool

    def test_empty_preferences_passes_everything(self, pool):
        assert filter_catalog(pool, UserPreferences()) == pool

    def test_vegan_only_keeps_order(self, make_recipe):
        """3 vegan among 13 recipes -> exactly those 3, in catalog order."""
        catalog = [make_recipe(i, diet="non-veg") for i in range(1, 11)]
        catalog.insert(2, make_recipe(100, diet="vegan"))
        catalog.insert(7, make_recipe(101, diet="vegan"))
        catalog.append(make_recipe(102, diet="vegan"))

        prefs = UserPreferences(diet=frozenset({DietCategory.VEGAN}))
        result = filter_catalog(catalog, prefs)

        assert [r.id for r in result] == [100, 101, 102]

    def test_diet_is_strict_membership(self, make_recipe):
        """Vegetarian preference does not implicitly admit vegan recipes."""
        catalog = [make_recipe(1, diet="vegan"), make_recipe(2, diet="vegetarian")]
        prefs = UserPreferences(diet=frozenset({DietCategory.VEGETARIAN}))
        assert [r.id for r in filter_catalog(catalog, prefs)] == [2]

    def test_cuisine_filter(self, make_recipe):
        catalog = [
            make_recipe(1, cuisine="Italian"),
            make_recipe(2, cuisine="Mexican"),
            make_recipe(3, cuisine="Indian"),
        ]
        prefs = UserPreferences(cuisine=frozenset({"mexican", "Indian"}))
        assert [r.id for r in filter_catalog(catalog, prefs)] == [2, 3]

    def test_any_cuisine_sentinel(self, make_recipe):
        catalog = [make_recipe(1, cuisine="Italian"), make_recipe(2, cuisine="Thai")]
        prefs = UserPreferences(cuisine=frozenset({"Any", "Italian"}))
        assert len(filter_catalog(catalog, prefs)) == 2

    def test_max_time(self, make_recipe):
        catalog = [
            make_recipe(1, prep_time="10 min", cook_time="20 min"),   # 30
            make_recipe(2, prep_time="10 min", cook_time="21 min"),   # 31
            make_recipe(3, prep_time="", cook_time="1 hr 15 min"),    # 75
        ]
        prefs = UserPreferences(cook_time_max=30)
        assert [r.id for r in filter_catalog(catalog, prefs)] == [1]

    def test_rules_are_conjunctive(self, make_recipe):
        catalog = [
            make_recipe(1, diet="vegan", cuisine="Italian", cook_time="10 min"),
            make_recipe(2, diet="vegan", cuisine="Mexican", cook_time="10 min"),
            make_recipe(3, diet="non-veg", cuisine="Italian", cook_time="10 min"),
            make_recipe(4, diet="vegan", cuisine="Italian", cook_time="2 hr"),
        ]
        prefs = UserPreferences(
            diet=frozenset({DietCategory.VEGAN}),
            cuisine=frozenset({"Italian"}),
            cook_time_max=60,
        )
        assert [r.id for r in filter_catalog(catalog, prefs)] == [1]

    def test_bundled_catalog_vegan(self, catalog):
        prefs = UserPreferences(diet=frozenset({DietCategory.VEGAN}))
        result = filter_catalog(catalog, prefs)
        assert result
        assert all(r.diet_category == DietCategory.VEGAN for r in result)


class TestGoalAndTimeFilters:
    """Tests for filter_by_goal() and filter_by_max_minutes()."""

    def test_loss_goal_keeps_low_calorie(self, make_recipe):
        recipes = [make_recipe(1, calories=449), make_recipe(2, calories=450)]
        assert [r.id for r in filter_by_goal(recipes, Goal.LOSS)] == [1]

    def test_protein_goal_keeps_high_protein(self, make_recipe):
        recipes = [make_recipe(1, protein=30), make_recipe(2, protein=31)]
        assert [r.id for r in filter_by_goal(recipes, Goal.PROTEIN)] == [2]

    @pytest.mark.parametrize("goal", [Goal.MAINTAIN, None])
    def test_other_goals_pass_through(self, pool, goal):
        assert filter_by_goal(pool, goal) == pool

    def test_max_minutes(self, make_recipe):
        recipes = [make_recipe(1, cook_time="20 min"), make_recipe(2, cook_time="1 hr")]
        assert [r.id for r in filter_by_max_minutes(recipes, 30)] == [1]
        assert len(filter_by_max_minutes(recipes, None)) == 2
