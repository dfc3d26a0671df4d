"""
One-tap weekly planning.

Flow: preference filter -> pool size check -> proposal (awaited once) ->
assembly.
"""

import logging
from typing import Iterable, Optional

from pantry_planner.data.models import PantryItem, Recipe, UserPreferences, WeekPlan
from pantry_planner.matching.filters import filter_catalog
from pantry_planner.planning.assembler import assemble, check_pool
from pantry_planner.planning.proposer import PlanProposer

logger = logging.getLogger(__name__)


async def auto_plan(
    catalog: Iterable[Recipe],
    prefs: Optional[UserPreferences],
    pantry_items: Iterable[PantryItem],
    proposer: PlanProposer,
) -> WeekPlan:
    """
    Generate a week plan for the user.

    Args:
        catalog: Full recipe catalog
        prefs: User preferences, or None for no constraints
        pantry_items: Items the user has on hand (sent as a hint to the proposer)
        proposer: Proposal client

    Returns:
        Assembled WeekPlan with no repeated recipe

    Raises:
        InsufficientPool: If fewer than MIN_POOL_SIZE recipes match the
            preferences; the proposer is not called
        MalformedProposal: If the proposal cannot be used
    """
    pool = filter_catalog(catalog, prefs)
    check_pool(pool)

    pantry_items = list(pantry_items)
    logger.info(f"[AUTO-PLAN] Requesting proposal: pool={len(pool)}, pantry={len(pantry_items)}")
    draft = await proposer.propose(prefs, pantry_items, pool)

    plan = assemble(draft, pool)
    logger.info(f"[AUTO-PLAN] {plan.get_summary()}")
    return plan
