from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from mealflow.api.dependencies.database import get_session
from mealflow.api.dependencies.pagination import PaginationParams, get_pagination_params
from mealflow.core.constant import FAIL_VALIDATION_MATCHED_INGREDIENT
from mealflow.schemas.common import PaginationInfo
from mealflow.schemas.ingredient import IngredientListResponse, IngredientOut
from mealflow.services.ingredient import get_ingredient_by_id, get_ingredients

router = APIRouter()


@router.get(
    "",
    response_model=IngredientListResponse,
    status_code=status.HTTP_200_OK,
    summary="List ingredients",
    description="Ingredient catalogue with optional search by q and pagination.",
)
async def ingredient_list(
    db: AsyncSession = Depends(get_session),
    q: Optional[str] = Query(None, description="Substring of the ingredient name"),
    pagination: PaginationParams = Depends(get_pagination_params),
) -> IngredientListResponse:
    page = pagination.page
    limit = pagination.limit

    ingredients, total = await get_ingredients(db, q, page, limit)

    return IngredientListResponse(
        ingredients=[IngredientOut.model_validate(i) for i in ingredients],
        pagination=PaginationInfo.build(total=total, page=page, limit=limit),
    )


@router.get(
    "/{ingredient_id}",
    response_model=IngredientOut,
    status_code=status.HTTP_200_OK,
    summary="Get an ingredient by id",
)
async def get_ingredient(
    ingredient_id: int = Path(..., description="Ingredient id"),
    db: AsyncSession = Depends(get_session),
) -> IngredientOut:
    ingredient = await get_ingredient_by_id(db, ingredient_id)
    if not ingredient:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=FAIL_VALIDATION_MATCHED_INGREDIENT,
        )
    return IngredientOut.model_validate(ingredient)
