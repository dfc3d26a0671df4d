"""
Pytest configuration and shared fixtures.

Fixtures are reusable test setup that can be injected into tests.
"""

import pytest

from pantry_planner.data.catalog import load_catalog
from pantry_planner.data.models import (
    DietCategory,
    Ingredient,
    IngredientCategory,
    Nutrition,
    PantryItem,
    Recipe,
    WeekPlan,
)


@pytest.fixture
def make_recipe():
    """
    Factory for small test recipes.

    Usage in tests:
        def test_something(make_recipe):
            r = make_recipe(1, ["flour", "eggs"], diet="vegan")
    """
    def _make(
        recipe_id,
        ingredients=("salt",),
        name=None,
        diet="vegetarian",
        cuisine="Italian",
        prep_time="10 min",
        cook_time="20 min",
        calories=400,
        protein=20,
    ):
        return Recipe(
            id=recipe_id,
            name=name or f"Recipe {recipe_id}",
            diet_category=DietCategory(diet),
            cuisine=cuisine,
            ingredients=tuple(
                Ingredient(name=i, category=IngredientCategory.PANTRY_STAPLES) for i in ingredients
            ),
            prep_time=prep_time,
            cook_time=cook_time,
            nutrition=Nutrition(calories=calories, protein=protein, carbs=40, fat=10),
        )
    return _make


@pytest.fixture
def pool(make_recipe):
    """Twelve recipes with ids 1..12 (enough for a weekly plan)."""
    return [make_recipe(i) for i in range(1, 13)]


@pytest.fixture
def empty_plan():
    return WeekPlan.empty()


@pytest.fixture
def catalog():
    """The bundled sample catalog."""
    return load_catalog()


@pytest.fixture
def pantry_items():
    """Sample pantry for testing."""
    return [
        PantryItem(id="1", name="2 cups whole wheat flour"),
        PantryItem(id="2", name="1 tbsp olive oil"),
        PantryItem(id="3", name="garlic"),
        PantryItem(id="4", name="tomatoes"),
        PantryItem(id="5", name="eggs"),
    ]
