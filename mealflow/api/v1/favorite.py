from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from mealflow.api.dependencies.auth import get_current_user, get_path_user
from mealflow.api.dependencies.database import get_session
from mealflow.core.constant import SUCCESS_ADD_FAVORITE, SUCCESS_DELETE_FAVORITE
from mealflow.schemas.common import MessageResponse
from mealflow.schemas.favorite import FavoriteCreate, FavoriteListResponse, FavoriteResponse
from mealflow.schemas.user import UserFromDB
from mealflow.services.favorite import (
    add_favorite,
    get_favorites_for_user,
    remove_favorite,
    remove_favorite_by_recipe,
)

router = APIRouter()


@router.get("/{user_id}", response_model=FavoriteListResponse, status_code=status.HTTP_200_OK)
async def list_favorites(
    user: Annotated[UserFromDB, Depends(get_path_user)],
    db: AsyncSession = Depends(get_session),
):
    return FavoriteListResponse(favorites=await get_favorites_for_user(db, user.id))


@router.post("", response_model=FavoriteResponse, status_code=status.HTTP_201_CREATED)
async def favorite_recipe(
    payload: FavoriteCreate,
    current_user: Annotated[UserFromDB, Depends(get_current_user)],
    db: AsyncSession = Depends(get_session),
):
    favorite = await add_favorite(db, current_user.id, payload.recipe_id)
    return FavoriteResponse(message=SUCCESS_ADD_FAVORITE, favorite=favorite)


@router.delete("/recipe/{recipe_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
async def unfavorite_recipe(
    recipe_id: int,
    current_user: Annotated[UserFromDB, Depends(get_current_user)],
    db: AsyncSession = Depends(get_session),
):
    await remove_favorite_by_recipe(db, current_user.id, recipe_id)
    return MessageResponse(message=SUCCESS_DELETE_FAVORITE)


@router.delete("/{favorite_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
async def delete_favorite(
    favorite_id: int,
    current_user: Annotated[UserFromDB, Depends(get_current_user)],
    db: AsyncSession = Depends(get_session),
):
    await remove_favorite(db, favorite_id, current_user)
    return MessageResponse(message=SUCCESS_DELETE_FAVORITE)
