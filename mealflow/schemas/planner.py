from datetime import datetime
from typing import List, Optional

from pydantic import Field

from mealflow.models.planner import MealTypeEnum
from mealflow.schemas.common import RWSchema
from mealflow.schemas.recipe import RecipeBriefOut


class PlannerEntryCreate(RWSchema):
    recipe_id: int
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Monday ... 6 = Sunday")
    meal_type: MealTypeEnum


class PlannerEntryUpdate(RWSchema):
    day_of_week: Optional[int] = Field(None, ge=0, le=6)
    meal_type: Optional[MealTypeEnum] = None


class PlannerEntryOut(RWSchema):
    id: int
    weekly_plan_id: int
    recipe_id: int
    day_of_week: int
    meal_type: MealTypeEnum
    created_at: datetime
    recipe: RecipeBriefOut


class WeeklyPlanOut(RWSchema):
    id: int
    user_id: int
    week_start: datetime
    week_end: datetime
    planner_entries: List[PlannerEntryOut]


class WeeklyPlanResponse(RWSchema):
    weekly_plan: WeeklyPlanOut


class PlannerEntryResponse(RWSchema):
    message: str
    planner_entry: PlannerEntryOut
