from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from mealflow.api.dependencies.database import get_session
from mealflow.core import settings, token as t
from mealflow.core.constant import FAIL_AUTH_CHECK, FAIL_INVALID_TOKEN, FAIL_VALIDATION_MATCHED_USER_ID
from mealflow.core.permissions import ensure_admin, ensure_owner
from mealflow.schemas.user import UserFromDB
from mealflow.services.users import get_user_by_id

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.api_v1_prefix}/auth/token", auto_error=False)


async def get_current_user(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    db: AsyncSession = Depends(get_session),
) -> UserFromDB:
    """User behind the bearer token, read from the store; 401 when the account is gone."""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=FAIL_AUTH_CHECK,
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        token_user = t.get_user_from_token(token, settings.secret_key.get_secret_value())
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=FAIL_INVALID_TOKEN + f" ({e})",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await get_user_by_id(db, token_user.id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=FAIL_VALIDATION_MATCHED_USER_ID,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_current_admin(
    current_user: Annotated[UserFromDB, Depends(get_current_user)]
) -> UserFromDB:
    ensure_admin(current_user)
    return current_user


def get_path_user(
    user_id: int,
    current_user: Annotated[UserFromDB, Depends(get_current_user)],
) -> UserFromDB:
    """Current user, when ``user_id`` in the path is theirs; 403 otherwise."""
    ensure_owner(user_id, current_user)
    return current_user
