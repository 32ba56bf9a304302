from fastapi import HTTPException, status

from mealflow.core.constant import FAIL_ACCESS_DENIED, FAIL_ADMIN_REQUIRED
from mealflow.schemas.user import UserFromDB


def ensure_owner(owner_id: int, user: UserFromDB) -> None:
    """403 unless ``user`` owns the resource."""
    if owner_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=FAIL_ACCESS_DENIED,
        )


def ensure_admin(user: UserFromDB, detail: str = FAIL_ADMIN_REQUIRED) -> None:
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )
