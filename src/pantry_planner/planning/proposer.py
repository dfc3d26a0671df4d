"""
Client for the external plan-proposal service.

Sends the user's preferences, pantry and candidate recipes to an LLM and
turns its JSON answer into a draft WeekPlan. The draft is not trusted: it may
repeat recipes or name ids that are not candidates. Repeats are fixed by the
assembler; unknown ids become None here and are dropped there.

Expected response (JSON array, one entry per day):
    [
      {"day": "Monday", "breakfast_recipe_ids": [3], "lunch_recipe_ids": [5],
       "dinner_recipe_ids": [10, 12]},
      ...
    ]
"""

import asyncio
import functools
import json
import logging
import time
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from pantry_planner.config import DAYS_PER_PLAN, DEFAULT_MAX_TOKENS, DEFAULT_MODEL
from pantry_planner.data.models import Day, MealType, PantryItem, Recipe, UserPreferences, WeekPlan
from pantry_planner.llm_provider import LLMProvider
from pantry_planner.planning.errors import MalformedProposal

logger = logging.getLogger(__name__)

NO_DISH_ID = 0

SYSTEM_PROMPT = "You are a meal planning assistant. You only answer with JSON."


class DraftDayEntry(BaseModel):
    """One day of a proposal, as returned by the LLM."""

    model_config = ConfigDict(extra="ignore")

    day: Optional[str] = None
    breakfast_recipe_ids: List[int] = Field(default_factory=list)
    lunch_recipe_ids: List[int] = Field(default_factory=list)
    dinner_recipe_ids: List[int] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def accept_single_ids(cls, data: Any) -> Any:
        """Accept `<meal>_recipe_id: int` and null lists as well as id lists."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for meal in MealType:
            plural = f"{meal.value}_recipe_ids"
            single = f"{meal.value}_recipe_id"
            if plural not in data and single in data:
                value = data.pop(single)
                data[plural] = [] if value is None else [value]
            if data.get(plural) is None:
                data[plural] = []
        return data

    @field_validator("day")
    @classmethod
    def validate_day(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            Day.parse(v)
        return v

    def ids_for(self, meal: MealType) -> List[int]:
        return getattr(self, f"{meal.value}_recipe_ids")


def build_proposal_request(
    prefs: Optional[UserPreferences],
    pantry_items: Iterable[PantryItem],
    candidates: Sequence[Recipe],
) -> Dict[str, Any]:
    """Build the request payload sent to the proposal service."""
    return {
        "preferences": prefs.to_dict() if prefs else None,
        "pantryItemNames": [item.name for item in pantry_items],
        "candidateRecipes": [
            {
                "id": r.id,
                "name": r.name,
                "category": r.diet_category.value,
                "cuisine": r.cuisine,
                "prepTime": r.prep_time,
                "cookTime": r.cook_time,
                "calories": r.nutrition.calories,
                "protein": r.nutrition.protein,
                "ingredients": [i.name.split(",")[0] for i in r.ingredients],
            }
            for r in candidates
        ],
    }


def build_prompt(request: Dict[str, Any]) -> str:
    prefs = request["preferences"] or {}
    pantry = ", ".join(request["pantryItemNames"]) or "(empty)"
    days = ", ".join(d.value for d in Day)

    return f"""Create a 7-day meal plan ({days}) for a user with these preferences:
- Diet: {", ".join(prefs.get("diet") or []) or "any"}
- Cuisine: {", ".join(prefs.get("cuisine") or []) or "any"}
- Max cooking time per meal: {prefs.get("cookTime") or "any"} minutes
- Health goal: {prefs.get("goal") or "any"}

The user has these ingredients in their pantry: {pantry}.
Prioritize recipes that use these ingredients.

Choose ONLY from these recipes:
{json.dumps(request["candidateRecipes"])}

RESPONSE FORMAT (JSON array, exactly 7 entries, one per day in order):
[
  {{"day": "Monday", "breakfast_recipe_ids": [<id>], "lunch_recipe_ids": [<id>], "dinner_recipe_ids": [<id>]}},
  ...
]

RULES:
1. Recipe IDs must come from the list above
2. Do not use the same recipe twice in the week
3. Use an empty list (or 0) for a meal with no dish
4. Return ONLY the JSON array, no explanation"""


def _load_json_array(content: str) -> Any:
    """
    Load the JSON value of an LLM answer, tolerating markdown fences and prose.

    The whole (fence-stripped) text is parsed first so a top-level object is
    reported as such. Bracket slicing is only a fallback for prose around an
    array, and never cuts an array out of an enclosing object.
    """
    content = content.strip()
    if "```" in content:
        content = content.split("```")[1]
        if content.startswith("json"):
            content = content[4:]
    content = content.strip()

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        first_error = e

    start_idx = content.find("[")
    end_idx = content.rfind("]")
    object_idx = content.find("{")
    if start_idx == -1 or end_idx < start_idx or -1 < object_idx < start_idx:
        raise MalformedProposal(f"Proposal is not valid JSON: {first_error}") from first_error
    try:
        return json.loads(content[start_idx:end_idx + 1])
    except json.JSONDecodeError as e:
        raise MalformedProposal(f"Proposal is not valid JSON: {e}") from e


def resolve_days(entries: Sequence[DraftDayEntry]) -> List[Day]:
    """
    Day each entry applies to: its named day, or the day at its position.

    Raises:
        MalformedProposal: If two entries land on the same day
    """
    days = list(Day)
    resolved = [
        Day.parse(entry.day) if entry.day is not None else days[position]
        for position, entry in enumerate(entries)
    ]
    seen = set()
    for day in resolved:
        if day in seen:
            raise MalformedProposal(f"Proposal has more than one entry for {day.value}")
        seen.add(day)
    return resolved


def parse_proposal(content: str) -> List[DraftDayEntry]:
    """
    Parse and validate a proposal response.

    Returned entries always carry their day name; unnamed entries get the day
    at their position.

    Raises:
        MalformedProposal: If the text is not a JSON array of valid day
            entries, has more than 7 entries, or gives a day twice
    """
    raw = _load_json_array(content)

    if not isinstance(raw, list):
        raise MalformedProposal(f"Proposal must be a JSON array, got {type(raw).__name__}")
    if len(raw) > DAYS_PER_PLAN:
        raise MalformedProposal(f"Proposal has {len(raw)} days, expected at most {DAYS_PER_PLAN}")

    try:
        entries = [DraftDayEntry.model_validate(item) for item in raw]
    except ValidationError as e:
        raise MalformedProposal(f"Proposal entry failed validation: {e}") from e

    days = resolve_days(entries)
    return [entry.model_copy(update={"day": day.value}) for entry, day in zip(entries, days)]


def build_draft(entries: Sequence[DraftDayEntry], candidates: Sequence[Recipe]) -> WeekPlan:
    """
    Resolve proposal entries into a draft WeekPlan.

    Entries without a day name take the day at their position. Id 0 means no
    dish and is skipped; ids outside `candidates` become None.
    """
    by_id = {r.id: r for r in candidates}
    draft = WeekPlan.empty()

    for entry, day in zip(entries, resolve_days(entries)):
        for meal in MealType:
            slot = draft.slot(day, meal)
            for recipe_id in entry.ids_for(meal):
                if recipe_id == NO_DISH_ID:
                    continue
                recipe = by_id.get(recipe_id)
                if recipe is None:
                    logger.warning(f"[PROPOSAL] {day.value} {meal.value}: unknown recipe id {recipe_id}, dropping")
                slot.append(recipe)

    return draft


class PlanProposer:
    """Requests draft plans from the proposal LLM."""

    def __init__(
        self,
        provider: LLMProvider,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        self.provider = provider
        self.model = model
        self.max_tokens = max_tokens

    async def propose(
        self,
        prefs: Optional[UserPreferences],
        pantry_items: Iterable[PantryItem],
        candidates: Sequence[Recipe],
    ) -> WeekPlan:
        """
        Ask the proposal service for a draft plan over `candidates`.

        Makes exactly one LLM call. Provider errors propagate unchanged.

        Raises:
            MalformedProposal: If the response cannot be parsed or validated
        """
        request = build_proposal_request(prefs, pantry_items, candidates)
        prompt = build_prompt(request)

        logger.info(f"[PROPOSAL] Model: {self.model}, {len(candidates)} candidates, prompt={len(prompt)} chars")

        llm_start = time.time()
        loop = asyncio.get_running_loop()
        content = await loop.run_in_executor(
            None,
            functools.partial(
                self.provider.complete,
                prompt,
                system=SYSTEM_PROMPT,
                model=self.model,
                max_tokens=self.max_tokens,
            ),
        )
        logger.info(f"[PROPOSAL] LLM call completed in {time.time() - llm_start:.3f}s")

        entries = parse_proposal(content)
        return build_draft(entries, candidates)
