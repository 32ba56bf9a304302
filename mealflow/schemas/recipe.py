import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from mealflow.schemas.common import PaginationInfo, RWSchema
from mealflow.schemas.ingredient import IngredientOut


class RecipeSortField(str, Enum):
    CREATED_AT = "createdAt"
    TITLE = "title"
    RATING = "rating"
    PREP_TIME = "prepTime"
    COOK_TIME = "cookTime"
    SERVINGS = "servings"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# ---- Incoming ----

class RecipeIngredientCreate(RWSchema):
    """Ingredient line of a recipe, referenced by name; unknown names are created."""
    name: str = Field(..., min_length=1, max_length=255)
    quantity: float = Field(..., ge=0)
    category: Optional[str] = Field(None, max_length=100)
    unit: Optional[str] = Field(None, max_length=50)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Ingredient name cannot be empty")
        return value


class RecipeCreate(RWSchema):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    instructions: List[str]
    tags: List[str] = []
    rating: Optional[float] = Field(None, ge=0, le=5)
    image_url: Optional[str] = None
    prep_time: Optional[int] = Field(None, ge=0, description="Minutes")
    cook_time: Optional[int] = Field(None, ge=0, description="Minutes")
    servings: Optional[int] = Field(None, ge=1)
    ingredients: List[RecipeIngredientCreate]


class RecipeUpdate(RWSchema):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    instructions: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    image_url: Optional[str] = None
    prep_time: Optional[int] = Field(None, ge=0)
    cook_time: Optional[int] = Field(None, ge=0)
    servings: Optional[int] = Field(None, ge=1)
    ingredients: Optional[List[RecipeIngredientCreate]] = None


# ---- Outgoing ----

class RecipeIngredientOut(RWSchema):
    id: int
    quantity: float
    ingredient: IngredientOut


class RecipeAuthorOut(RWSchema):
    id: int
    name: str


class RecipeBriefOut(RWSchema):
    """Recipe as shown inside a planner slot."""
    id: int
    title: str
    image_url: Optional[str] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    servings: Optional[int] = None
    recipe_ingredients: List[RecipeIngredientOut]


class RecipeOut(RWSchema):
    id: int
    title: str
    description: Optional[str] = None
    instructions: List[str]
    tags: List[str]
    rating: Optional[float] = None
    image_url: Optional[str] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    servings: Optional[int] = None
    user_id: int
    user: RecipeAuthorOut
    created_at: datetime.datetime
    updated_at: datetime.datetime
    recipe_ingredients: List[RecipeIngredientOut]
    favorites_count: Optional[int] = None

    @field_validator("tags", mode="before")
    @classmethod
    def tag_names(cls, value):
        return [tag if isinstance(tag, str) else tag.name for tag in value]


class RecipeResponse(RWSchema):
    recipe: RecipeOut


class RecipeMessageResponse(RWSchema):
    message: str
    recipe: RecipeOut


class RecipeListResponse(RWSchema):
    recipes: List[RecipeOut]
    pagination: PaginationInfo
