"""
Data models for the Pantry Planner.

These models define the core entities used throughout the system:
- Recipe: Static catalog recipes with categorized ingredients
- PantryItem: Free-text items the user has on hand
- UserPreferences: Onboarding choices (diet, cuisine, time, goal)
- WeekPlan: 7 days x 3 meal slots of recipe references
- SavedPlan: Named snapshot of a WeekPlan
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple


class IngredientCategory(str, Enum):
    """Shopping category of an ingredient."""
    PRODUCE = "Produce"
    PROTEIN = "Protein"
    DAIRY = "Dairy"
    PANTRY_STAPLES = "Pantry Staples"
    SPICES = "Spices"
    BAKERY = "Bakery"


class DietCategory(str, Enum):
    """Dietary category a recipe belongs to."""
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    NON_VEG = "non-veg"


class Goal(str, Enum):
    """Health goal chosen at onboarding."""
    LOSS = "loss"
    MAINTAIN = "maintain"
    PROTEIN = "protein"


class Day(str, Enum):
    """Days of a plan week, in plan order."""
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def parse(cls, text: str) -> "Day":
        """Parse a day name case-insensitively ("monday", "Mon", "MONDAY").

        Raises:
            ValueError: If text is not a recognizable day name
        """
        key = (text or "").strip().lower()
        for day in cls:
            name = day.value.lower()
            if key == name or (len(key) >= 3 and name.startswith(key)):
                return day
        raise ValueError(f"Unknown day: {text!r}")


class MealType(str, Enum):
    """Meal slots within a day, in plan order."""
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


@dataclass(frozen=True)
class Ingredient:
    """A catalog ingredient: free-text name plus shopping category."""
    name: str
    category: IngredientCategory
    cuisines: FrozenSet[str] = frozenset()

    def to_dict(self) -> Dict:
        data = {"name": self.name, "category": self.category.value}
        if self.cuisines:
            data["cuisines"] = sorted(self.cuisines)
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "Ingredient":
        return cls(
            name=data["name"],
            category=IngredientCategory(data["category"]),
            cuisines=frozenset(data.get("cuisines") or ()),
        )


@dataclass(frozen=True)
class Nutrition:
    """Nutrition information per serving, as given by the catalog."""
    calories: int = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0

    def __str__(self) -> str:
        return f"{self.calories} cal, {self.protein}g protein, {self.carbs}g carbs, {self.fat}g fat"


@dataclass(frozen=True)
class Recipe:
    """Recipe from the static catalog.

    Recipes are shared by reference: the same instance may sit in many plans
    and slots, so it is never mutated after loading.
    """

    id: int
    name: str
    diet_category: DietCategory
    cuisine: str
    ingredients: Tuple[Ingredient, ...]
    prep_time: str = ""  # "15 min", "1 hr 10 min"
    cook_time: str = ""
    nutrition: Nutrition = field(default_factory=Nutrition)
    instructions: Tuple[str, ...] = ()
    servings: int = 1
    image_url: str = ""

    def __str__(self) -> str:
        return f"{self.name} [{self.diet_category.value}, {self.cuisine}]"

    def to_dict(self) -> Dict:
        """Convert to the catalog's JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.diet_category.value,
            "cuisine": self.cuisine,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "instructions": list(self.instructions),
            "prepTime": self.prep_time,
            "cookTime": self.cook_time,
            "servings": self.servings,
            "imageUrl": self.image_url,
            "nutrition": {
                "calories": self.nutrition.calories,
                "protein": self.nutrition.protein,
                "carbs": self.nutrition.carbs,
                "fat": self.nutrition.fat,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Recipe":
        """Create Recipe from the catalog's JSON shape."""
        nutrition = data.get("nutrition") or {}
        return cls(
            id=int(data["id"]),
            name=data["name"],
            diet_category=DietCategory(data["category"]),
            cuisine=data.get("cuisine", ""),
            ingredients=tuple(Ingredient.from_dict(i) for i in data.get("ingredients", [])),
            prep_time=data.get("prepTime", ""),
            cook_time=data.get("cookTime", ""),
            nutrition=Nutrition(**nutrition),
            instructions=tuple(data.get("instructions", [])),
            servings=data.get("servings", 1),
            image_url=data.get("imageUrl", ""),
        )


@dataclass(frozen=True)
class PantryItem:
    """Something the user has on hand, entered as free text."""
    id: str
    name: str
    category: Optional[IngredientCategory] = None

    def to_dict(self) -> Dict:
        data = {"id": self.id, "name": self.name}
        if self.category is not None:
            data["category"] = self.category.value
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "PantryItem":
        category = data.get("category")
        return cls(
            id=str(data["id"]),
            name=data["name"],
            category=IngredientCategory(category) if category else None,
        )


ANY_CUISINE = "Any"


@dataclass(frozen=True)
class UserPreferences:
    """Preferences captured at onboarding.

    Each field has an explicit "unset" value: an empty set for diet and
    cuisine, None for cook_time_max and goal. A cuisine set containing
    ANY_CUISINE is also unconstrained.
    """

    diet: FrozenSet[DietCategory] = frozenset()
    cuisine: FrozenSet[str] = frozenset()
    cook_time_max: Optional[int] = None
    goal: Optional[Goal] = None

    @property
    def any_cuisine(self) -> bool:
        return not self.cuisine or ANY_CUISINE in self.cuisine

    def to_dict(self) -> Dict:
        return {
            "diet": sorted(d.value for d in self.diet),
            "cuisine": sorted(self.cuisine),
            "cookTime": str(self.cook_time_max) if self.cook_time_max is not None else None,
            "goal": self.goal.value if self.goal else None,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> Optional["UserPreferences"]:
        """
        Create UserPreferences from onboarding JSON.

        Accepts older payloads where diet is a single string and cookTime is
        a string such as "30". Returns None when data is None.
        """
        if data is None:
            return None

        diet = data.get("diet") or []
        if isinstance(diet, str):
            diet = [diet]

        cook_time = data.get("cookTime", data.get("cook_time_max"))
        goal = data.get("goal")

        return cls(
            diet=frozenset(DietCategory(d) for d in diet),
            cuisine=frozenset(data.get("cuisine") or []),
            cook_time_max=int(cook_time) if cook_time not in (None, "") else None,
            goal=Goal(goal) if goal else None,
        )


@dataclass
class DayPlan:
    """One day of a plan: three meal slots of recipe references."""

    day: Day
    meals: Dict[MealType, List[Optional[Recipe]]] = field(
        default_factory=lambda: {meal: [] for meal in MealType}
    )

    def slot(self, meal: MealType) -> List[Optional[Recipe]]:
        return self.meals.setdefault(meal, [])

    def to_dict(self) -> Dict:
        data = {"day": self.day.value}
        for meal in MealType:
            data[meal.value] = {
                "recipes": [r.to_dict() for r in self.slot(meal) if r is not None]
            }
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "DayPlan":
        day_plan = cls(day=Day.parse(data["day"]))
        for meal in MealType:
            entry = data.get(meal.value) or {}
            recipes = entry.get("recipes")
            # Older saved plans hold a single {"recipe": {...}|null}
            if recipes is None:
                recipes = [entry["recipe"]] if entry.get("recipe") else []
            day_plan.meals[meal] = [Recipe.from_dict(r) for r in recipes]
        return day_plan


@dataclass
class WeekPlan:
    """Monday..Sunday plan addressed by (Day, MealType).

    A draft plan (from the proposal collaborator) may hold None entries for
    references that did not resolve; assembled plans never do.
    """

    days: List[DayPlan]

    def __post_init__(self):
        if [d.day for d in self.days] != list(Day):
            raise ValueError("WeekPlan requires exactly one DayPlan per day, Monday to Sunday")

    @classmethod
    def empty(cls) -> "WeekPlan":
        return cls(days=[DayPlan(day=day) for day in Day])

    def day(self, day: Day) -> DayPlan:
        return self.days[list(Day).index(day)]

    def slot(self, day: Day, meal: MealType) -> List[Optional[Recipe]]:
        return self.day(day).slot(meal)

    def iter_slots(self) -> Iterator[Tuple[Day, MealType, List[Optional[Recipe]]]]:
        """Yield (day, meal, recipes) in plan order: days, then breakfast/lunch/dinner."""
        for day_plan in self.days:
            for meal in MealType:
                yield day_plan.day, meal, day_plan.slot(meal)

    def recipes(self) -> List[Recipe]:
        """All resolved recipe references in plan order."""
        return [r for _, _, slot in self.iter_slots() for r in slot if r is not None]

    def recipe_ids(self) -> List[int]:
        return [r.id for r in self.recipes()]

    def copy(self) -> "WeekPlan":
        """Shallow copy: new slot lists, same Recipe instances."""
        return WeekPlan(days=[
            DayPlan(day=d.day, meals={meal: list(d.slot(meal)) for meal in MealType})
            for d in self.days
        ])

    def with_recipe(self, day: Day, meal: MealType, recipe: Recipe) -> "WeekPlan":
        """Return a new plan whose (day, meal) slot holds only `recipe`."""
        plan = self.copy()
        plan.day(day).meals[meal] = [recipe]
        return plan

    def without_slot(self, day: Day, meal: MealType) -> "WeekPlan":
        """Return a new plan with the (day, meal) slot cleared."""
        plan = self.copy()
        plan.day(day).meals[meal] = []
        return plan

    def get_summary(self) -> str:
        filled = sum(1 for _, _, slot in self.iter_slots() if any(r is not None for r in slot))
        return f"Week plan: {len(self.recipes())} dishes across {filled}/21 meal slots"

    def __str__(self) -> str:
        return self.get_summary()

    def to_dict(self) -> List[Dict]:
        """Convert to the flat JSON array the app persists."""
        return [d.to_dict() for d in self.days]

    @classmethod
    def from_dict(cls, data: List[Dict]) -> "WeekPlan":
        by_day = {d.day: d for d in (DayPlan.from_dict(item) for item in data)}
        return cls(days=[by_day.get(day) or DayPlan(day=day) for day in Day])


@dataclass
class SavedPlan:
    """A named snapshot of a WeekPlan."""

    id: str
    name: str
    plan: WeekPlan

    def to_dict(self) -> Dict:
        return {"id": self.id, "name": self.name, "plan": self.plan.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict) -> "SavedPlan":
        return cls(id=data["id"], name=data["name"], plan=WeekPlan.from_dict(data["plan"]))
