from datetime import datetime
from enum import Enum

from sqlalchemy import (
    CheckConstraint, Column, DateTime, Enum as SAEnum, ForeignKey, Integer, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from mealflow.models.rwmodel import RWModel as Base


class MealTypeEnum(str, Enum):
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"


MEAL_TYPE_ORDER = {meal_type: index for index, meal_type in enumerate(MealTypeEnum)}


class WeeklyPlan(Base):
    __tablename__ = "weekly_plans"
    __table_args__ = (
        UniqueConstraint("user_id", "week_start", name="uq_weekly_plan_user_week"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    week_start = Column(DateTime, nullable=False, index=True)
    week_end = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    user = relationship("User", back_populates="weekly_plans")
    planner_entries = relationship(
        "PlannerEntry", back_populates="weekly_plan", cascade="all, delete-orphan", passive_deletes=True
    )


class PlannerEntry(Base):
    __tablename__ = "planner_entries"
    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_planner_entry_day_of_week"),
    )

    id = Column(Integer, primary_key=True, index=True)
    weekly_plan_id = Column(Integer, ForeignKey("weekly_plans.id", ondelete="CASCADE"), nullable=False, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False)
    day_of_week = Column(Integer, nullable=False)
    meal_type = Column(
        SAEnum(MealTypeEnum, name="mealtypeenum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    weekly_plan = relationship("WeeklyPlan", back_populates="planner_entries")
    recipe = relationship("Recipe", back_populates="planner_entries")
