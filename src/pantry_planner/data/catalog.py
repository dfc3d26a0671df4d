"""
Recipe catalog loading.

The catalog is a read-only list of Recipe objects loaded once at startup
from a JSON array in the camelCase shape of Recipe.to_dict().
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from pantry_planner.data.models import Recipe

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "recipes.json"


class CatalogError(Exception):
    """Raised when the recipe catalog cannot be loaded."""
    pass


class RecipeCatalog:
    """Ordered, read-only collection of recipes with lookup by id."""

    def __init__(self, recipes: List[Recipe]):
        self._recipes = list(recipes)
        self._by_id: Dict[int, Recipe] = {}
        for recipe in self._recipes:
            if recipe.id in self._by_id:
                raise CatalogError(f"Duplicate recipe id {recipe.id} ({recipe.name})")
            self._by_id[recipe.id] = recipe

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self._recipes)

    def __len__(self) -> int:
        return len(self._recipes)

    def get(self, recipe_id: int) -> Optional[Recipe]:
        return self._by_id.get(recipe_id)

    @property
    def recipes(self) -> List[Recipe]:
        return list(self._recipes)


def load_catalog(path: Optional[Union[str, Path]] = None) -> RecipeCatalog:
    """
    Load the recipe catalog from a JSON file.

    Args:
        path: JSON file path (defaults to the bundled sample catalog)

    Returns:
        RecipeCatalog in file order

    Raises:
        CatalogError: If the file is missing, unparseable, or has duplicate ids
    """
    path = Path(path) if path else DEFAULT_CATALOG_PATH

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise CatalogError(f"Catalog file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog file is not valid JSON: {path}: {e}") from e

    if not isinstance(raw, list):
        raise CatalogError(f"Catalog must be a JSON array, got {type(raw).__name__}")

    try:
        recipes = [Recipe.from_dict(item) for item in raw]
    except (KeyError, ValueError, TypeError) as e:
        raise CatalogError(f"Invalid recipe entry in {path}: {e}") from e

    catalog = RecipeCatalog(recipes)
    logger.info(f"[CATALOG] Loaded {len(catalog)} recipes from {path}")
    return catalog
