from datetime import datetime
from typing import Optional

from fastapi import HTTPException, status
from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from mealflow.core.constant import FAIL_VALIDATION_MATCHED_PLANNER_ENTRY, FAIL_VALIDATION_MATCHED_RECIPE
from mealflow.models.planner import MEAL_TYPE_ORDER, PlannerEntry, WeeklyPlan
from mealflow.models.recipe import Recipe, RecipeIngredient
from mealflow.schemas.planner import PlannerEntryCreate, PlannerEntryUpdate
from mealflow.utils.week import get_week_bounds


def _entry_load_options() -> list:
    return [
        selectinload(PlannerEntry.recipe)
        .selectinload(Recipe.recipe_ingredients)
        .selectinload(RecipeIngredient.ingredient),
    ]


def sort_entries(entries: list[PlannerEntry]) -> list[PlannerEntry]:
    """Order entries by day, then Breakfast, Lunch, Dinner, Snack, then insertion."""
    return sorted(entries, key=lambda e: (e.day_of_week, MEAL_TYPE_ORDER[e.meal_type], e.id))


async def validate_recipe_exists(db: AsyncSession, recipe_id: int) -> None:
    """404 when there is no recipe with this id."""
    q = select(Recipe.id).where(Recipe.id == recipe_id)
    if (await db.execute(q)).scalar_one_or_none() is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=FAIL_VALIDATION_MATCHED_RECIPE,
        )


async def _find_plan(
    db: AsyncSession,
    user_id: int,
    week_start: datetime,
    week_end: datetime,
    with_entries: bool,
) -> Optional[WeeklyPlan]:
    stmt = select(WeeklyPlan).where(
        WeeklyPlan.user_id == user_id,
        WeeklyPlan.week_start.between(week_start, week_end),
    )
    if with_entries:
        stmt = stmt.options(
            selectinload(WeeklyPlan.planner_entries).options(*_entry_load_options())
        ).execution_options(populate_existing=True)
    res = await db.execute(stmt.order_by(WeeklyPlan.id).limit(1))
    return res.scalars().first()


async def get_or_create_weekly_plan(
    db: AsyncSession,
    user_id: int,
    reference: datetime,
    with_entries: bool = False,
) -> WeeklyPlan:
    """
    Plan of the week containing ``reference``, created when missing.

    (user_id, week_start) is unique in the store, so of two concurrent
    first accesses one insert fails; that one rolls back and reads the
    plan the other created.
    """
    week_start, week_end = get_week_bounds(reference)
    plan = await _find_plan(db, user_id, week_start, week_end, with_entries)
    if plan is not None:
        return plan

    plan = WeeklyPlan(user_id=user_id, week_start=week_start, week_end=week_end)
    db.add(plan)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        existing = await _find_plan(db, user_id, week_start, week_end, with_entries)
        if existing is None:
            # not the (user_id, week_start) race, e.g. the user row is gone
            raise
        logger.warning(f"Weekly plan for user id={user_id} created concurrently, reusing it")
        return existing

    logger.info(f"Created weekly plan id={plan.id} for user id={user_id} ({week_start:%Y-%m-%d})")
    return await _find_plan(db, user_id, week_start, week_end, with_entries)


async def get_entry_by_id(db: AsyncSession, entry_id: int) -> Optional[PlannerEntry]:
    """Entry with its plan (for the owner check) and recipe loaded."""
    stmt = (
        select(PlannerEntry)
        .options(selectinload(PlannerEntry.weekly_plan), *_entry_load_options())
        .where(PlannerEntry.id == entry_id)
        .execution_options(populate_existing=True)
    )
    return (await db.execute(stmt)).scalar_one_or_none()


async def _reload_entry(db: AsyncSession, entry_id: int) -> PlannerEntry:
    entry = await get_entry_by_id(db, entry_id)
    if entry is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, FAIL_VALIDATION_MATCHED_PLANNER_ENTRY)
    return entry


async def create_planner_entry(
    db: AsyncSession,
    user_id: int,
    payload: PlannerEntryCreate,
    reference: datetime,
) -> PlannerEntry:
    """
    Put a recipe into a (day, meal) slot of the current week's plan.

    Slots may hold several recipes.
    """
    await validate_recipe_exists(db, payload.recipe_id)
    plan = await get_or_create_weekly_plan(db, user_id, reference)

    entry = PlannerEntry(
        weekly_plan_id=plan.id,
        recipe_id=payload.recipe_id,
        day_of_week=payload.day_of_week,
        meal_type=payload.meal_type,
    )
    db.add(entry)
    await db.commit()

    return await _reload_entry(db, entry.id)


async def update_planner_entry(
    db: AsyncSession,
    entry: PlannerEntry,
    data: PlannerEntryUpdate,
) -> PlannerEntry:
    """Move an entry to another day and/or meal."""
    if data.day_of_week is not None:
        entry.day_of_week = data.day_of_week
    if data.meal_type is not None:
        entry.meal_type = data.meal_type
    await db.commit()

    return await _reload_entry(db, entry.id)


async def delete_planner_entry(db: AsyncSession, entry: PlannerEntry) -> None:
    await db.delete(entry)
    await db.commit()
