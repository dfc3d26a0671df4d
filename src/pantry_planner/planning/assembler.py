"""
Plan assembly: repairs a draft week plan so no recipe repeats.

The draft comes from an external proposal and is not trusted to honour the
no-repeat rule. This pass is the only place that rule is enforced.

Walk order is fixed (Monday..Sunday, then breakfast/lunch/dinner, then draft
order within a slot), so the same draft and pool always give the same plan.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from pantry_planner.config import MIN_POOL_SIZE
from pantry_planner.data.models import DayPlan, MealType, Recipe, WeekPlan
from pantry_planner.planning.errors import InsufficientPool

logger = logging.getLogger(__name__)


@dataclass
class _AssemblyState:
    """Working state for one assemble() call."""
    pool: List[Recipe]
    used: Set[int] = field(default_factory=set)
    replaced: int = 0
    dropped: int = 0

    def take_replacement(self) -> Optional[Recipe]:
        """Remove and return the first pool recipe not yet used."""
        for idx, candidate in enumerate(self.pool):
            if candidate.id not in self.used:
                return self.pool.pop(idx)
        return None


def check_pool(available_pool: Sequence[Recipe], required: int = MIN_POOL_SIZE) -> None:
    """Raise InsufficientPool if the pool cannot support a weekly plan."""
    if len(available_pool) < required:
        raise InsufficientPool(available=len(available_pool), required=required)


def _assemble_slot(draft_slot: Sequence[Optional[Recipe]], state: _AssemblyState) -> List[Recipe]:
    output = []
    for recipe in draft_slot:
        if recipe is None:
            state.dropped += 1
            continue

        if recipe.id not in state.used:
            output.append(recipe)
            state.used.add(recipe.id)
            continue

        replacement = state.take_replacement()
        if replacement is None:
            logger.info(f"[ASSEMBLE] Pool exhausted, dropping repeat of {recipe.name} (id={recipe.id})")
            state.dropped += 1
            continue

        logger.info(f"[ASSEMBLE] Repeat of {recipe.name} (id={recipe.id}) replaced by {replacement.name} (id={replacement.id})")
        output.append(replacement)
        state.used.add(replacement.id)
        state.replaced += 1
    return output


def assemble(draft: WeekPlan, available_pool: Sequence[Recipe]) -> WeekPlan:
    """
    Build the final week plan from a draft, with no recipe used twice.

    Args:
        draft: Draft plan; slots may contain None for unresolved references
        available_pool: Recipes matching the user's preferences, in catalog
            order; used as the substitution source for repeats

    Returns:
        New WeekPlan. A slot may end up with fewer dishes than the draft if
        references were unresolved or the pool ran out of unused recipes.

    Raises:
        InsufficientPool: If available_pool has fewer than MIN_POOL_SIZE recipes
    """
    check_pool(available_pool)

    state = _AssemblyState(pool=list(available_pool))
    days = []
    for draft_day in draft.days:
        day_plan = DayPlan(day=draft_day.day)
        for meal in MealType:
            day_plan.meals[meal] = _assemble_slot(draft_day.slot(meal), state)
        days.append(day_plan)

    plan = WeekPlan(days=days)
    logger.info(
        f"[ASSEMBLE] {len(state.used)} unique dishes, "
        f"{state.replaced} repeats replaced, {state.dropped} references dropped"
    )
    return plan
