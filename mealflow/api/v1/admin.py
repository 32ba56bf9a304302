from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from mealflow.api.dependencies.auth import get_current_admin
from mealflow.api.dependencies.database import get_session
from mealflow.core.constant import (
    FAIL_SELF_DELETE,
    FAIL_VALIDATION_MATCHED_USER_ID,
    SUCCESS_DELETE_USER,
)
from mealflow.schemas.admin import AdminStats, AdminUserList
from mealflow.schemas.user import UserDeleteResponse, UserFromDB
from mealflow.services.admin import get_stats, get_users_with_recipe_counts
from mealflow.services.users import delete_user_service

router = APIRouter()


@router.get("/stats", response_model=AdminStats, status_code=status.HTTP_200_OK)
async def stats(
    admin: Annotated[UserFromDB, Depends(get_current_admin)],
    db: AsyncSession = Depends(get_session),
) -> AdminStats:
    return await get_stats(db)


@router.get("/users", response_model=AdminUserList, status_code=status.HTTP_200_OK)
async def list_users(
    admin: Annotated[UserFromDB, Depends(get_current_admin)],
    db: AsyncSession = Depends(get_session),
) -> AdminUserList:
    return AdminUserList(users=await get_users_with_recipe_counts(db))


@router.delete("/users/{user_id}", response_model=UserDeleteResponse, status_code=status.HTTP_200_OK)
async def delete_user(
    user_id: int,
    admin: Annotated[UserFromDB, Depends(get_current_admin)],
    db: AsyncSession = Depends(get_session),
) -> UserDeleteResponse:
    """
    Deletes any account except the caller's own; the user's recipes,
    weekly plans and favorites are removed with it.

    **Errors**:
        - 400 when deleting yourself
        - 404 when the user does not exist
    """
    if user_id == admin.id:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, FAIL_SELF_DELETE)

    if not await delete_user_service(db, user_id):
        raise HTTPException(status.HTTP_404_NOT_FOUND, FAIL_VALIDATION_MATCHED_USER_ID)
    return UserDeleteResponse(message=SUCCESS_DELETE_USER)
