from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from mealflow.api.dependencies.auth import get_current_user, get_path_user
from mealflow.api.dependencies.database import get_session
from mealflow.api.dependencies.planner import get_reference_time, get_user_planner_entry
from mealflow.core.constant import (
    SUCCESS_ADD_PLANNER_ENTRY,
    SUCCESS_DELETE_PLANNER_ENTRY,
    SUCCESS_UPDATE_PLANNER_ENTRY,
)
from mealflow.models.planner import PlannerEntry
from mealflow.schemas.common import MessageResponse
from mealflow.schemas.planner import (
    PlannerEntryCreate,
    PlannerEntryOut,
    PlannerEntryResponse,
    PlannerEntryUpdate,
    WeeklyPlanOut,
    WeeklyPlanResponse,
)
from mealflow.schemas.user import UserFromDB
from mealflow.services.planner import (
    create_planner_entry,
    delete_planner_entry,
    get_or_create_weekly_plan,
    sort_entries,
    update_planner_entry,
)

router = APIRouter()


@router.get("/weekly/{user_id}", response_model=WeeklyPlanResponse, status_code=status.HTTP_200_OK)
async def get_weekly_plan(
    user: Annotated[UserFromDB, Depends(get_path_user)],
    reference: datetime = Depends(get_reference_time),
    db: AsyncSession = Depends(get_session),
):
    """
    Current week's plan of the user; created empty on first access.

    **Path parameters**:
        - user_id (int): must be the caller

    **Successful response (200)**:
        - weeklyPlan with weekStart, weekEnd and plannerEntries ordered by
          day, then Breakfast, Lunch, Dinner, Snack
    **Errors**:
        - 403 for another user's plan
    """
    plan = await get_or_create_weekly_plan(db, user.id, reference, with_entries=True)
    return WeeklyPlanResponse(
        weekly_plan=WeeklyPlanOut(
            id=plan.id,
            user_id=plan.user_id,
            week_start=plan.week_start,
            week_end=plan.week_end,
            planner_entries=[PlannerEntryOut.model_validate(e) for e in sort_entries(plan.planner_entries)],
        )
    )


@router.post("/entry", response_model=PlannerEntryResponse, status_code=status.HTTP_201_CREATED)
async def add_entry(
    payload: PlannerEntryCreate,
    user: Annotated[UserFromDB, Depends(get_current_user)],
    reference: datetime = Depends(get_reference_time),
    db: AsyncSession = Depends(get_session),
):
    """
    Adds a recipe to a slot of the current week.

    **Request body**:
        - recipeId (int)
        - dayOfWeek (int): 0 (Monday) .. 6 (Sunday)
        - mealType: Breakfast | Lunch | Dinner | Snack

    **Errors**:
        - 400 on invalid day or meal type
        - 404 when the recipe does not exist
    """
    entry = await create_planner_entry(db, user.id, payload, reference)
    return PlannerEntryResponse(
        message=SUCCESS_ADD_PLANNER_ENTRY,
        planner_entry=PlannerEntryOut.model_validate(entry),
    )


@router.put("/entry/{entry_id}", response_model=PlannerEntryResponse, status_code=status.HTTP_200_OK)
async def update_entry(
    payload: PlannerEntryUpdate,
    entry: PlannerEntry = Depends(get_user_planner_entry),
    db: AsyncSession = Depends(get_session),
):
    """
    Moves an entry to another day and/or meal.

    **Errors**:
        - 403 when the entry belongs to someone else
        - 404 when the entry does not exist
    """
    updated = await update_planner_entry(db, entry, payload)
    return PlannerEntryResponse(
        message=SUCCESS_UPDATE_PLANNER_ENTRY,
        planner_entry=PlannerEntryOut.model_validate(updated),
    )


@router.delete("/entry/{entry_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
async def remove_entry(
    entry: PlannerEntry = Depends(get_user_planner_entry),
    db: AsyncSession = Depends(get_session),
):
    await delete_planner_entry(db, entry)
    return MessageResponse(message=SUCCESS_DELETE_PLANNER_ENTRY)
