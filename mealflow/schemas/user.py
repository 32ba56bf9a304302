from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from mealflow.core.constant import SUCCESS_DELETE_USER
from mealflow.models.user import RoleEnum
from mealflow.schemas.common import RWSchema

# bcrypt only looks at the first 72 bytes and newer releases refuse more
MAX_PASSWORD_BYTES = 72


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
    return value


class UserBase(RWSchema):
    name: str
    email: str


class UserFromDB(UserBase):
    id: int
    role: RoleEnum = RoleEnum.USER
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == RoleEnum.ADMIN


class UserInSignIn(RWSchema):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserInCreate(RWSchema):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)


class UserInUpdate(RWSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None


class UserPasswordChange(RWSchema):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)

    @field_validator("new_password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)


class UserTokenData(BaseModel):
    access_token: str | None = None
    token_type: str | None = None


class UserAuthOutData(RWSchema):
    message: str
    token: str
    user: UserFromDB


class UserCounts(RWSchema):
    recipes: int = 0
    favorites: int = 0
    weekly_plans: int = 0


class UserProfile(UserFromDB):
    updated_at: Optional[datetime] = None
    counts: UserCounts


class UserProfileResponse(RWSchema):
    user: UserProfile


class UserUpdateResponse(RWSchema):
    message: str
    user: UserFromDB


class UserDeleteResponse(RWSchema):
    message: str = Field(..., examples=[SUCCESS_DELETE_USER])
