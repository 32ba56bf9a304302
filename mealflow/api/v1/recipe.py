from typing import List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.params import Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from mealflow.api.dependencies.auth import get_current_user
from mealflow.api.dependencies.database import get_session
from mealflow.api.dependencies.pagination import PaginationParams, get_pagination_params
from mealflow.core.constant import (
    FAIL_ADMIN_CREATE_RECIPE,
    SUCCESS_CREATE_RECIPE,
    SUCCESS_DELETE_RECIPE,
    SUCCESS_UPDATE_RECIPE,
)
from mealflow.core.permissions import ensure_admin
from mealflow.schemas.common import MessageResponse, PaginationInfo
from mealflow.schemas.recipe import (
    RecipeCreate,
    RecipeListResponse,
    RecipeMessageResponse,
    RecipeResponse,
    RecipeSortField,
    RecipeUpdate,
    SortOrder,
)
from mealflow.schemas.user import UserFromDB
from mealflow.services.recipe import (
    create_recipe_service,
    delete_recipe_service,
    get_recipe_by_id,
    get_recipes_list_service,
    update_recipe_service,
)

router = APIRouter()


def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    if not value:
        return None
    items = [item.strip() for item in value.split(",") if item.strip()]
    return items or None


@router.get(
    "",
    response_model=RecipeListResponse,
    status_code=status.HTTP_200_OK,
    summary="List recipes",
    description="""
Returns recipes with search, filtering, sorting and pagination.

### Filtering:
- `search`: case-insensitive substring of the title or the description.
- `tags`: comma separated; recipes having **any** of the tags.
- `ingredients`: comma separated ingredient names; recipes using **any** of them.

### Sorting:
- `sortBy`: `createdAt` (default), `title`, `rating`, `prepTime`, `cookTime`, `servings`.
- `order`: `asc` or `desc` (default).

### Pagination:
- `page`: page number (starting at 1).
- `limit`: recipes per page (default 20).
""",
)
async def get_recipes_list(
    db: AsyncSession = Depends(get_session),
    current_user: UserFromDB = Depends(get_current_user),
    pagination: PaginationParams = Depends(get_pagination_params),
    search: Optional[str] = Query(None, description="Substring of the title or description"),
    tags: Optional[str] = Query(None, description="Comma separated tag names"),
    ingredients: Optional[str] = Query(None, description="Comma separated ingredient names"),
    sort_by: RecipeSortField = Query(RecipeSortField.CREATED_AT, alias="sortBy"),
    order: SortOrder = Query(SortOrder.DESC),
) -> RecipeListResponse:
    page, limit = pagination.page, pagination.limit

    recipes, total = await get_recipes_list_service(
        db=db,
        page=page,
        limit=limit,
        search=search,
        tags=_split_csv(tags),
        ingredients=_split_csv(ingredients),
        sort_by=sort_by,
        order=order,
    )

    return RecipeListResponse(
        recipes=recipes,
        pagination=PaginationInfo.build(total=total, page=page, limit=limit),
    )


@router.get("/{recipe_id}", response_model=RecipeResponse, status_code=status.HTTP_200_OK)
async def get_recipe(
    recipe_id: int = Path(...),
    db: AsyncSession = Depends(get_session),
    current_user: UserFromDB = Depends(get_current_user),
) -> RecipeResponse:
    return RecipeResponse(recipe=await get_recipe_by_id(db, recipe_id))


@router.post(
    "",
    response_model=RecipeMessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a recipe (admins only)",
)
async def create_recipe(
    recipe_in: RecipeCreate,
    db: AsyncSession = Depends(get_session),
    current_user: UserFromDB = Depends(get_current_user),
) -> RecipeMessageResponse:
    """
    Creates a shared recipe owned by the calling admin.

    Ingredients are referenced by name; unknown names are created with the
    given `category` and `unit` (defaults `Other` / `units`).

    ### Example body:
    ```json
    {
      "title": "Scrambled Eggs",
      "description": "Quick breakfast",
      "instructions": ["Beat the eggs", "Cook on low heat"],
      "tags": ["breakfast", "quick"],
      "prepTime": 5,
      "cookTime": 5,
      "servings": 2,
      "ingredients": [
        {"name": "Eggs", "quantity": 4, "category": "Dairy", "unit": "pieces"},
        {"name": "Salt", "quantity": 0.5}
      ]
    }
    ```

    ### Errors:
    - **400**: missing title, instructions or ingredients.
    - **401**: no or invalid token.
    - **403**: caller is not an admin.
    """
    ensure_admin(current_user, FAIL_ADMIN_CREATE_RECIPE)
    recipe = await create_recipe_service(db=db, recipe_in=recipe_in, user_id=current_user.id)
    return RecipeMessageResponse(message=SUCCESS_CREATE_RECIPE, recipe=recipe)


@router.put("/{recipe_id}", response_model=RecipeMessageResponse, status_code=status.HTTP_200_OK)
async def update_recipe(
    update_in: RecipeUpdate,
    recipe_id: int = Path(..., description="Recipe to update"),
    db: AsyncSession = Depends(get_session),
    current_user: UserFromDB = Depends(get_current_user),
) -> RecipeMessageResponse:
    """
    Partial update by the recipe owner.

    Sending `ingredients` replaces the whole ingredient list.

    ### Errors:
    - **403**: not your recipe.
    - **404**: recipe not found.
    """
    recipe = await update_recipe_service(
        db=db,
        recipe_id=recipe_id,
        user=current_user,
        data=update_in,
    )
    return RecipeMessageResponse(message=SUCCESS_UPDATE_RECIPE, recipe=recipe)


@router.delete("/{recipe_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
async def delete_recipe(
    recipe_id: int = Path(...),
    db: AsyncSession = Depends(get_session),
    current_user: UserFromDB = Depends(get_current_user),
) -> MessageResponse:
    await delete_recipe_service(db, recipe_id, current_user)
    return MessageResponse(message=SUCCESS_DELETE_RECIPE)
