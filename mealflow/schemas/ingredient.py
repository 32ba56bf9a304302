from typing import List

from mealflow.schemas.common import PaginationInfo, RWSchema


class IngredientOut(RWSchema):
    id: int
    name: str
    category: str
    unit: str


class IngredientListResponse(RWSchema):
    """Ingredient page with pagination metadata."""
    ingredients: List[IngredientOut]
    pagination: PaginationInfo
