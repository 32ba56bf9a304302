from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from mealflow.api.dependencies.auth import get_current_user
from mealflow.api.dependencies.database import get_session
from mealflow.core import settings
from mealflow.core.constant import (
    FAIL_AUTH_VALIDATION_CREDENTIAL,
    FAIL_USER_ALREADY_EXISTS,
    SUCCESS_SIGN_IN,
    SUCCESS_SIGN_UP,
)
from mealflow.core.token import create_token_for_user
from mealflow.schemas.user import (
    UserAuthOutData,
    UserFromDB,
    UserInCreate,
    UserInSignIn,
    UserTokenData,
)
from mealflow.services.auth import authenticate_user, get_user_by_email
from mealflow.services.users import create_user

router = APIRouter()


def _issue_token(user: UserFromDB) -> UserTokenData:
    return create_token_for_user(
        user,
        settings.secret_key.get_secret_value(),
        settings.access_token_expire_minutes,
    )


@router.post("/register", response_model=UserAuthOutData, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_in: UserInCreate,
    db: AsyncSession = Depends(get_session),
) -> UserAuthOutData:
    """
    Register a regular (non-admin) account and log it in.

    **Errors**:
        - 400 when the e-mail is already registered
    """
    existing_user = await get_user_by_email(db, user_in.email)
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=FAIL_USER_ALREADY_EXISTS,
        )

    user = await create_user(db, user_in)
    return UserAuthOutData(message=SUCCESS_SIGN_UP, token=_issue_token(user).access_token, user=user)


@router.post("/login", response_model=UserAuthOutData, status_code=status.HTTP_200_OK)
async def login(
    user_in: UserInSignIn,
    db: AsyncSession = Depends(get_session),
) -> UserAuthOutData:
    user = await authenticate_user(db, user_in)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=FAIL_AUTH_VALIDATION_CREDENTIAL,
        )
    return UserAuthOutData(message=SUCCESS_SIGN_IN, token=_issue_token(user).access_token, user=user)


@router.post("/token", response_model=UserTokenData, status_code=status.HTTP_200_OK)
async def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: AsyncSession = Depends(get_session),
) -> UserTokenData:
    """OAuth2 password flow for the interactive docs; ``username`` is the e-mail."""
    user = await authenticate_user(
        db, UserInSignIn.model_construct(email=form_data.username, password=form_data.password)
    )
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=FAIL_AUTH_VALIDATION_CREDENTIAL,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _issue_token(user)


@router.get("/me", response_model=UserFromDB, status_code=status.HTTP_200_OK)
async def get_me(
    current_user: Annotated[UserFromDB, Depends(get_current_user)],
) -> UserFromDB:
    """Account of the token holder as currently stored (401 once it is deleted)."""
    return current_user
