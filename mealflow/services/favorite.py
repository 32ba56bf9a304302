from typing import List

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from mealflow.core.constant import (
    FAIL_ALREADY_FAVORITE,
    FAIL_VALIDATION_MATCHED_FAVORITE,
)
from mealflow.core.permissions import ensure_owner
from mealflow.models.favorite import Favorite
from mealflow.schemas.favorite import FavoriteOut
from mealflow.schemas.user import UserFromDB
from mealflow.services.planner import validate_recipe_exists
from mealflow.services.recipe import recipe_load_options


def _favorite_query():
    return (
        select(Favorite)
        .options(selectinload(Favorite.recipe).options(*recipe_load_options()))
        .execution_options(populate_existing=True)
    )


async def get_favorites_for_user(db: AsyncSession, user_id: int) -> List[FavoriteOut]:
    """Favorites of a user, newest first."""
    stmt = _favorite_query().where(Favorite.user_id == user_id).order_by(
        Favorite.created_at.desc(), Favorite.id.desc()
    )
    res = await db.execute(stmt)
    return [FavoriteOut.model_validate(f) for f in res.scalars().all()]


async def _get_user_favorite(db: AsyncSession, user_id: int, recipe_id: int) -> Favorite | None:
    query = select(Favorite).where(
        Favorite.user_id == user_id,
        Favorite.recipe_id == recipe_id,
    )
    return (await db.execute(query)).scalar_one_or_none()


async def add_favorite(db: AsyncSession, user_id: int, recipe_id: int) -> FavoriteOut:
    """
    Mark a recipe as favorite.

    A second identical favorite is a 400; an unknown recipe is a 404.
    """
    if await _get_user_favorite(db, user_id, recipe_id):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, FAIL_ALREADY_FAVORITE)

    await validate_recipe_exists(db, recipe_id)

    favorite = Favorite(user_id=user_id, recipe_id=recipe_id)
    db.add(favorite)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        # a concurrent request stored the same (user, recipe) pair first
        if await _get_user_favorite(db, user_id, recipe_id):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, FAIL_ALREADY_FAVORITE)
        raise

    res = await db.execute(_favorite_query().where(Favorite.id == favorite.id))
    return FavoriteOut.model_validate(res.scalar_one())


async def remove_favorite(db: AsyncSession, favorite_id: int, user: UserFromDB) -> None:
    favorite = await db.get(Favorite, favorite_id)
    if favorite is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, FAIL_VALIDATION_MATCHED_FAVORITE)
    ensure_owner(favorite.user_id, user)

    await db.delete(favorite)
    await db.commit()


async def remove_favorite_by_recipe(db: AsyncSession, user_id: int, recipe_id: int) -> None:
    favorite = await _get_user_favorite(db, user_id, recipe_id)
    if favorite is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, FAIL_VALIDATION_MATCHED_FAVORITE)

    await db.delete(favorite)
    await db.commit()
