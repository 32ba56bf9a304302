from datetime import datetime
from typing import List

from mealflow.models.user import RoleEnum
from mealflow.schemas.common import RWSchema


class AdminStats(RWSchema):
    users: int
    recipes: int
    ingredients: int


class AdminUserOut(RWSchema):
    id: int
    name: str
    email: str
    role: RoleEnum
    created_at: datetime
    recipes_count: int = 0


class AdminUserList(RWSchema):
    users: List[AdminUserOut]
