from datetime import datetime

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from mealflow.api.dependencies.auth import get_current_user
from mealflow.api.dependencies.database import get_session
from mealflow.core.constant import FAIL_VALIDATION_MATCHED_PLANNER_ENTRY
from mealflow.core.permissions import ensure_owner
from mealflow.models.planner import PlannerEntry
from mealflow.schemas.user import UserFromDB
from mealflow.services.planner import get_entry_by_id


def get_reference_time() -> datetime:
    """The instant that decides which week is "current" (server local time)."""
    return datetime.now()


async def get_user_planner_entry(
    entry_id: int,
    db: AsyncSession = Depends(get_session),
    user: UserFromDB = Depends(get_current_user),
) -> PlannerEntry:
    entry = await get_entry_by_id(db, entry_id)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=FAIL_VALIDATION_MATCHED_PLANNER_ENTRY,
        )
    ensure_owner(entry.weekly_plan.user_id, user)
    return entry
