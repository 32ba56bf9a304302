from fastapi import HTTPException, status
from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mealflow.core.constant import FAIL_EMAIL_IN_USE, FAIL_VALIDATION_MATCHED_USER_ID
from mealflow.models.favorite import Favorite
from mealflow.models.planner import WeeklyPlan
from mealflow.models.recipe import Recipe
from mealflow.models.user import RoleEnum, User
from mealflow.schemas.user import (
    UserCounts,
    UserFromDB,
    UserInCreate,
    UserInUpdate,
    UserProfile,
)


async def create_user(
    db: AsyncSession,
    user_in: UserInCreate,
    role: RoleEnum = RoleEnum.USER,
) -> UserFromDB:
    """Create a user with the given role."""
    user = User(
        name=user_in.name,
        email=user_in.email,
        role=role,
    )
    user.change_password(user_in.password)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info(f"Registered user id={user.id} role={role.value}")
    return UserFromDB.model_validate(user)


async def get_user_by_id(db: AsyncSession, user_id: int) -> UserFromDB | None:
    user = await db.get(User, user_id)
    if not user:
        return None
    return UserFromDB.model_validate(user)


async def _count(db: AsyncSession, model, user_id: int) -> int:
    return await db.scalar(
        select(func.count()).select_from(model).where(model.user_id == user_id)
    )


async def get_user_profile(db: AsyncSession, user_id: int) -> UserProfile:
    """User with the number of recipes, favorites and weekly plans they own."""
    user = await db.get(User, user_id)
    if user is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, FAIL_VALIDATION_MATCHED_USER_ID)

    counts = UserCounts(
        recipes=await _count(db, Recipe, user_id),
        favorites=await _count(db, Favorite, user_id),
        weekly_plans=await _count(db, WeeklyPlan, user_id),
    )
    return UserProfile(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        created_at=user.created_at,
        updated_at=user.updated_at,
        counts=counts,
    )


async def update_user_service(db: AsyncSession, user_id: int, user_update: UserInUpdate) -> UserFromDB:
    """
    Update name and/or e-mail.

    An e-mail already used by someone else is rejected with 400.
    """
    user = await db.get(User, user_id)
    if user is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, FAIL_VALIDATION_MATCHED_USER_ID)

    data_to_update = user_update.model_dump(exclude_unset=True, exclude_none=True)
    new_email = data_to_update.get("email")
    if new_email:
        stmt = select(User).where(User.email == new_email)
        existing_user = (await db.execute(stmt)).scalar_one_or_none()
        if existing_user and existing_user.id != user_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=FAIL_EMAIL_IN_USE,
            )

    for key, value in data_to_update.items():
        setattr(user, key, value)

    await db.commit()
    await db.refresh(user)
    return UserFromDB.model_validate(user)


async def delete_user_service(db: AsyncSession, user_id: int) -> bool:
    """
    Delete a user by id; recipes, plans and favorites go with it.

    Returns False when there is no such user.
    """
    user = await db.get(User, user_id)
    if user is None:
        return False

    await db.delete(user)
    await db.commit()
    logger.info(f"Deleted user id={user_id}")
    return True


async def change_user_password(
    db: AsyncSession,
    user_id: int,
    current_password: str,
    new_password: str,
) -> bool:
    """
    Change the password when the current one matches.

    :param db: async database session.
    :param user_id: user identifier.
    :param current_password: password the user has now.
    :param new_password: password to set.
    :return: True on success, False when the user is missing or the password is wrong.
    """
    user: User | None = await db.get(User, user_id)
    if not user:
        return False

    if not user.check_password(current_password):
        return False

    user.change_password(new_password)
    await db.commit()
    return True
