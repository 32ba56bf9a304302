from datetime import datetime
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from mealflow.core.constant import INFO_EMPTY_WEEKLY_PLAN, INFO_NO_WEEKLY_PLAN
from mealflow.models.planner import PlannerEntry, WeeklyPlan
from mealflow.models.recipe import Recipe, RecipeIngredient
from mealflow.schemas.grocery import GroceryItem, GroceryListResponse
from mealflow.utils.week import get_week_bounds


def aggregate_ingredients(
    entries: Iterable[PlannerEntry],
) -> tuple[dict[str, list[GroceryItem]], int]:
    """
    Sum ingredient quantities over every planner entry and group them by category.

    Quantities are keyed by the exact ingredient name. Units are not
    converted: the ingredient's own unit is reported and numbers are
    added as they are. Categories and the items inside them keep the
    order in which they were first seen.

    Returns the grouped mapping and the number of distinct ingredients.
    """
    totals: dict[str, GroceryItem] = {}
    for entry in entries:
        for recipe_ingredient in entry.recipe.recipe_ingredients:
            ingredient = recipe_ingredient.ingredient
            item = totals.get(ingredient.name)
            if item is None:
                totals[ingredient.name] = GroceryItem(
                    name=ingredient.name,
                    category=ingredient.category,
                    unit=ingredient.unit,
                    quantity=recipe_ingredient.quantity,
                )
            else:
                item.quantity += recipe_ingredient.quantity

    grouped: dict[str, list[GroceryItem]] = {}
    for item in totals.values():
        grouped.setdefault(item.category, []).append(item)

    return grouped, len(totals)


async def find_weekly_plan(
    db: AsyncSession,
    user_id: int,
    reference: datetime,
) -> WeeklyPlan | None:
    """Plan of the week containing ``reference`` with entries, recipes and ingredients loaded."""
    week_start, week_end = get_week_bounds(reference)
    stmt = (
        select(WeeklyPlan)
        .options(
            selectinload(WeeklyPlan.planner_entries)
            .selectinload(PlannerEntry.recipe)
            .selectinload(Recipe.recipe_ingredients)
            .selectinload(RecipeIngredient.ingredient)
        )
        .where(
            WeeklyPlan.user_id == user_id,
            WeeklyPlan.week_start.between(week_start, week_end),
        )
        .order_by(WeeklyPlan.id)
        .limit(1)
    )
    res = await db.execute(stmt)
    return res.scalars().first()


async def get_grocery_list(
    db: AsyncSession,
    user_id: int,
    reference: datetime,
) -> GroceryListResponse:
    """
    Build the shopping list for the week containing ``reference``.

    Read only: a missing plan is reported, never created.
    """
    plan = await find_weekly_plan(db, user_id, reference)
    if plan is None:
        return GroceryListResponse(grocery_list=[], message=INFO_NO_WEEKLY_PLAN)

    # ordered by id so first-seen order follows insertion order
    entries = sorted(plan.planner_entries, key=lambda e: e.id)
    if not entries:
        return GroceryListResponse(grocery_list=[], message=INFO_EMPTY_WEEKLY_PLAN)

    grouped, total_items = aggregate_ingredients(entries)
    return GroceryListResponse(
        grocery_list=grouped,
        total_items=total_items,
        week_start=plan.week_start,
        week_end=plan.week_end,
    )
