#!/usr/bin/env python3
"""
Command-line entry point for the Pantry Planner.

Commands:
    recipes  Rank catalog recipes by what is in the pantry
    plan     Generate a week plan (optionally with a shopping list)
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from pantry_planner.config import Settings
from pantry_planner.data.catalog import CatalogError, load_catalog
from pantry_planner.data.models import (
    ANY_CUISINE,
    DietCategory,
    Goal,
    PantryItem,
    UserPreferences,
    WeekPlan,
)
from pantry_planner.llm_provider import get_llm_provider
from pantry_planner.matching.ranker import suggest_from_pantry
from pantry_planner.planning import PlanningError, PlanProposer, auto_plan
from pantry_planner.shopping import build_shopping_list

logger = logging.getLogger(__name__)


def _pantry_from_args(names: List[str]) -> List[PantryItem]:
    return [PantryItem(id=str(i), name=name) for i, name in enumerate(names, 1)]


def _prefs_from_args(args: argparse.Namespace) -> Optional[UserPreferences]:
    if not (args.diet or args.cuisine or args.max_time is not None or args.goal):
        return None
    return UserPreferences(
        diet=frozenset(DietCategory(d) for d in args.diet or []),
        cuisine=frozenset(args.cuisine or []),
        cook_time_max=args.max_time,
        goal=Goal(args.goal) if args.goal else None,
    )


def format_week_plan(plan: WeekPlan) -> str:
    lines = []
    for day_plan in plan.days:
        lines.append(f"\n{day_plan.day.value}")
        for meal, recipes in day_plan.meals.items():
            names = ", ".join(r.name for r in recipes if r is not None) or "-"
            lines.append(f"  {meal.value.title():<10} {names}")
    return "\n".join(lines)


def cmd_recipes(args: argparse.Namespace, settings: Settings) -> int:
    catalog = load_catalog(args.catalog or settings.catalog_path)
    ranked = suggest_from_pantry(
        catalog,
        _pantry_from_args(args.pantry),
        prefs=_prefs_from_args(args),
        max_minutes=args.under,
    )
    if not ranked:
        print("No recipes use anything in your pantry.")
        return 0
    for rr in ranked:
        print(f"{rr.match_count:>2} matched ({rr.coverage:.0%})  {rr.recipe.name}")
    return 0


def cmd_plan(args: argparse.Namespace, settings: Settings) -> int:
    catalog = load_catalog(args.catalog or settings.catalog_path)
    pantry = _pantry_from_args(args.pantry)
    proposer = PlanProposer(
        get_llm_provider(settings),
        model=settings.model,
        max_tokens=settings.max_tokens,
    )

    try:
        plan = asyncio.run(auto_plan(catalog, _prefs_from_args(args), pantry, proposer))
    except PlanningError as e:
        print(f"❌ Planning failed: {e}")
        return 1

    print(format_week_plan(plan))
    print(f"\n✓ {plan.get_summary()}")

    if args.shopping_list:
        print("\nShopping list")
        for category, items in build_shopping_list(plan, pantry).items():
            print(f"  {category}")
            for item in items:
                print(f"    [ ] {item.name}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pantry Planner")
    parser.add_argument(
        "--catalog",
        type=str,
        help="Recipe catalog JSON (default: bundled sample catalog)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser):
        p.add_argument("--pantry", nargs="*", default=[], help="Pantry item names")
        p.add_argument("--diet", nargs="*", choices=[d.value for d in DietCategory])
        p.add_argument("--cuisine", nargs="*", help=f"Cuisines ('{ANY_CUISINE}' for no constraint)")
        p.add_argument("--max-time", type=int, help="Max total minutes per recipe")
        p.add_argument("--goal", choices=[g.value for g in Goal])

    recipes = sub.add_parser("recipes", help="Rank recipes by pantry coverage")
    add_common(recipes)
    recipes.add_argument("--under", type=int, choices=[30, 60], help="Only recipes under N minutes")

    plan = sub.add_parser("plan", help="Generate a weekly meal plan")
    add_common(plan)
    plan.add_argument("--shopping-list", action="store_true", help="Also print a shopping list")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    args = build_parser().parse_args(argv)

    try:
        if args.command == "recipes":
            return cmd_recipes(args, settings)
        return cmd_plan(args, settings)
    except CatalogError as e:
        print(f"❌ Error: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
