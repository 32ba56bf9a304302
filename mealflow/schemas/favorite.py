from datetime import datetime
from typing import List

from mealflow.schemas.common import RWSchema
from mealflow.schemas.recipe import RecipeOut


class FavoriteCreate(RWSchema):
    recipe_id: int


class FavoriteOut(RWSchema):
    id: int
    created_at: datetime
    recipe: RecipeOut


class FavoriteListResponse(RWSchema):
    favorites: List[FavoriteOut]


class FavoriteResponse(RWSchema):
    message: str
    favorite: FavoriteOut
