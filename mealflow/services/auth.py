from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mealflow.models.user import User
from mealflow.schemas.user import UserFromDB, UserInSignIn


async def _get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Fetch the user row by e-mail."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalars().first()


async def get_user_by_email(db: AsyncSession, email: str) -> UserFromDB | None:
    user = await _get_user_by_email(db, email)
    if user is None:
        return None
    return UserFromDB.model_validate(user)


async def authenticate_user(db: AsyncSession, user_in: UserInSignIn) -> UserFromDB | None:
    """Check e-mail and password; None when either does not match."""
    user = await _get_user_by_email(db, user_in.email)
    if user is None:
        return None

    if user.check_password(user_in.password):
        return UserFromDB.model_validate(user)
    return None
