from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from mealflow.api.dependencies.auth import get_path_user
from mealflow.api.dependencies.database import get_session
from mealflow.api.dependencies.planner import get_reference_time
from mealflow.schemas.grocery import GroceryListResponse
from mealflow.schemas.user import UserFromDB
from mealflow.services.grocery import get_grocery_list

router = APIRouter()


@router.get(
    "/{user_id}",
    response_model=GroceryListResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Shopping list for the current week",
)
async def grocery_list(
    user: Annotated[UserFromDB, Depends(get_path_user)],
    reference: datetime = Depends(get_reference_time),
    db: AsyncSession = Depends(get_session),
) -> GroceryListResponse:
    """
    Sums the ingredients of every recipe planned this week, grouped by category.

    Quantities of the same ingredient are added without unit conversion.
    When there is no plan (or it is empty) `groceryList` is `[]` and `message`
    says which case it is; no plan is created.
    """
    return await get_grocery_list(db, user.id, reference)
