"""
Unit tests for plan assembly (no-repeat repair pass).
"""

from collections import Counter

import pytest

from pantry_planner.data.models import Day, MealType, WeekPlan
from pantry_planner.planning.assembler import assemble, check_pool
from pantry_planner.planning.errors import InsufficientPool


def _by_id(recipes):
    return {r.id: r for r in recipes}


def _ids(plan, day, meal):
    return [r.id for r in plan.slot(day, meal)]


class TestAssemble:
    """Tests for assemble()."""

    def test_repeat_replaced_from_pool(self, make_recipe):
        """Id 7 on Monday breakfast and Wednesday lunch; id 12 takes Wednesday lunch."""
        recipes = _by_id([make_recipe(i) for i in (7, 12)])
        pool = [recipes[7], recipes[12]] + [make_recipe(i) for i in range(100, 105)]

        draft = WeekPlan.empty()
        draft.slot(Day.MONDAY, MealType.BREAKFAST).append(recipes[7])
        draft.slot(Day.WEDNESDAY, MealType.LUNCH).append(recipes[7])

        plan = assemble(draft, pool)

        assert _ids(plan, Day.MONDAY, MealType.BREAKFAST) == [7]
        assert _ids(plan, Day.WEDNESDAY, MealType.LUNCH) == [12]

    def test_first_unused_pool_recipe_is_chosen(self, pool):
        """Pool scan skips recipes already placed earlier in the week."""
        draft = WeekPlan.empty()
        draft.slot(Day.MONDAY, MealType.BREAKFAST).append(pool[0])
        draft.slot(Day.MONDAY, MealType.LUNCH).append(pool[1])
        draft.slot(Day.MONDAY, MealType.DINNER).append(pool[0])

        plan = assemble(draft, pool)

        assert _ids(plan, Day.MONDAY, MealType.DINNER) == [pool[2].id]

    def test_no_repeats_across_week(self, pool):
        """Every slot proposing the same recipe still yields unique ids."""
        draft = WeekPlan.empty()
        for _, _, slot in draft.iter_slots():
            slot.extend([pool[0], pool[1]])

        plan = assemble(draft, pool)

        counts = Counter(plan.recipe_ids())
        assert all(c == 1 for c in counts.values())
        assert set(counts) == {r.id for r in pool}

    def test_pool_exhaustion_drops_repeats(self, pool):
        """Once every pool recipe is used, further repeats are dropped."""
        draft = WeekPlan.empty()
        for _, _, slot in draft.iter_slots():
            slot.append(pool[0])

        plan = assemble(draft, pool)

        assert len(plan.recipe_ids()) == len(pool)
        # 12 recipes fill the first 12 slots (4 days); the rest are empty
        assert _ids(plan, Day.THURSDAY, MealType.DINNER) == [pool[11].id]
        assert _ids(plan, Day.FRIDAY, MealType.BREAKFAST) == []

    def test_unresolved_references_dropped_not_replaced(self, pool):
        draft = WeekPlan.empty()
        draft.slot(Day.TUESDAY, MealType.LUNCH).extend([None, pool[3], None])

        plan = assemble(draft, pool)

        assert _ids(plan, Day.TUESDAY, MealType.LUNCH) == [pool[3].id]
        assert plan.recipe_ids() == [pool[3].id]

    def test_slot_order_preserved(self, pool):
        draft = WeekPlan.empty()
        draft.slot(Day.SUNDAY, MealType.DINNER).extend([pool[5], pool[2], pool[9]])

        plan = assemble(draft, pool)

        assert _ids(plan, Day.SUNDAY, MealType.DINNER) == [pool[5].id, pool[2].id, pool[9].id]

    def test_deterministic(self, pool):
        draft = WeekPlan.empty()
        for i, (_, _, slot) in enumerate(draft.iter_slots()):
            slot.append(pool[i % 3])

        assert assemble(draft, pool).to_dict() == assemble(draft, pool).to_dict()

    def test_inputs_not_mutated(self, pool):
        draft = WeekPlan.empty()
        draft.slot(Day.MONDAY, MealType.BREAKFAST).extend([pool[0], pool[0]])
        pool_before = list(pool)

        assemble(draft, pool)

        assert pool == pool_before
        assert _ids(draft, Day.MONDAY, MealType.BREAKFAST) == [pool[0].id, pool[0].id]

    def test_insufficient_pool(self, make_recipe):
        small_pool = [make_recipe(i) for i in range(5)]
        with pytest.raises(InsufficientPool) as exc:
            assemble(WeekPlan.empty(), small_pool)
        assert exc.value.available == 5
        assert exc.value.required == 7


class TestCheckPool:
    """Tests for check_pool()."""

    def test_seven_is_enough(self, make_recipe):
        check_pool([make_recipe(i) for i in range(7)])

    def test_six_is_not(self, make_recipe):
        with pytest.raises(InsufficientPool):
            check_pool([make_recipe(i) for i in range(6)])
