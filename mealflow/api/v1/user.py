from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from mealflow.api.dependencies.auth import get_path_user
from mealflow.api.dependencies.database import get_session
from mealflow.core.constant import (
    FAIL_WRONG_PASSWORD,
    SUCCESS_CHANGE_PASSWORD,
    SUCCESS_UPDATE_PROFILE,
)
from mealflow.schemas.common import MessageResponse
from mealflow.schemas.user import (
    UserFromDB,
    UserInUpdate,
    UserPasswordChange,
    UserProfileResponse,
    UserUpdateResponse,
)
from mealflow.services.users import (
    change_user_password,
    get_user_profile,
    update_user_service,
)

router = APIRouter()


@router.get("/{user_id}", response_model=UserProfileResponse, status_code=status.HTTP_200_OK)
async def get_profile(
    user: Annotated[UserFromDB, Depends(get_path_user)],
    db: AsyncSession = Depends(get_session),
) -> UserProfileResponse:
    """
    Own profile with recipe, favorite and weekly plan counts.

    **Errors**:
        - 403 for another user's profile
        - 404 when the account no longer exists
    """
    return UserProfileResponse(user=await get_user_profile(db, user.id))


@router.put("/{user_id}", response_model=UserUpdateResponse, status_code=status.HTTP_200_OK)
async def update_profile(
    user_update: UserInUpdate,
    user: Annotated[UserFromDB, Depends(get_path_user)],
    db: AsyncSession = Depends(get_session),
) -> UserUpdateResponse:
    updated = await update_user_service(db, user.id, user_update)
    return UserUpdateResponse(message=SUCCESS_UPDATE_PROFILE, user=updated)


@router.post("/{user_id}/change-password", response_model=MessageResponse, status_code=status.HTTP_200_OK)
async def change_password(
    payload: UserPasswordChange,
    user: Annotated[UserFromDB, Depends(get_path_user)],
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    """
    Change the password of the current user.

    :param payload: current and new password.
    """
    success = await change_user_password(
        db=db,
        user_id=user.id,
        current_password=payload.current_password,
        new_password=payload.new_password,
    )

    if not success:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=FAIL_WRONG_PASSWORD,
        )

    return MessageResponse(message=SUCCESS_CHANGE_PASSWORD)
