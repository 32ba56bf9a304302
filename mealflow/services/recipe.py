from typing import Any, List, Optional, Tuple

from fastapi import HTTPException, status
from loguru import logger
from sqlalchemy import asc, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from mealflow.core.constant import FAIL_VALIDATION_MATCHED_RECIPE
from mealflow.core.permissions import ensure_owner
from mealflow.models.favorite import Favorite
from mealflow.models.recipe import Ingredient, Recipe, RecipeIngredient, Tag
from mealflow.schemas.recipe import (
    RecipeCreate,
    RecipeIngredientCreate,
    RecipeOut,
    RecipeSortField,
    RecipeUpdate,
    SortOrder,
)
from mealflow.schemas.user import UserFromDB
from mealflow.services.ingredient import get_or_create_ingredient
from mealflow.services.tag import get_or_create_tags

SORT_COLUMNS = {
    RecipeSortField.CREATED_AT: Recipe.created_at,
    RecipeSortField.TITLE: Recipe.title,
    RecipeSortField.RATING: Recipe.rating,
    RecipeSortField.PREP_TIME: Recipe.prep_time,
    RecipeSortField.COOK_TIME: Recipe.cook_time,
    RecipeSortField.SERVINGS: Recipe.servings,
}

SIMPLE_FIELDS = (
    "title",
    "description",
    "instructions",
    "rating",
    "image_url",
    "prep_time",
    "cook_time",
    "servings",
)


# ————————————————————————————————————————————————————————————
# Helpers
# ————————————————————————————————————————————————————————————

def recipe_load_options() -> list:
    """Eager loads needed to serialize a recipe."""
    return [
        selectinload(Recipe.user),
        selectinload(Recipe.tags),
        selectinload(Recipe.recipe_ingredients).selectinload(RecipeIngredient.ingredient),
    ]


def _favorites_count() -> Any:
    return (
        select(func.count(Favorite.id))
        .where(Favorite.recipe_id == Recipe.id)
        .correlate(Recipe)
        .scalar_subquery()
    )


def _base_recipe_query() -> Any:
    return (
        select(Recipe, _favorites_count().label("favorites_count"))
        .options(*recipe_load_options())
        .execution_options(populate_existing=True)
    )


def _to_out(recipe: Recipe, favorites_count: int) -> RecipeOut:
    out = RecipeOut.model_validate(recipe)
    out.favorites_count = favorites_count
    return out


def build_recipe_filters(
    search: Optional[str] = None,
    tags: Optional[List[str]] = None,
    ingredients: Optional[List[str]] = None,
) -> list:
    """
    WHERE clauses for the recipe list.

    - search: case-insensitive substring of title or description
    - tags: recipe has any of the tags
    - ingredients: recipe uses any of the ingredients (names compared case-insensitively)
    """
    filters = []
    if search:
        pattern = f"%{search}%"
        filters.append(or_(Recipe.title.ilike(pattern), Recipe.description.ilike(pattern)))
    if tags:
        filters.append(Recipe.tags.any(Tag.name.in_(tags)))
    if ingredients:
        names = [name.lower() for name in ingredients]
        filters.append(
            Recipe.recipe_ingredients.any(
                RecipeIngredient.ingredient.has(func.lower(Ingredient.name).in_(names))
            )
        )
    return filters


async def _build_recipe_ingredients(
    db: AsyncSession,
    lines: List[RecipeIngredientCreate],
) -> List[RecipeIngredient]:
    rows = []
    for line in lines:
        ingredient, created = await get_or_create_ingredient(db, line)
        if created:
            logger.debug(f"Created ingredient {ingredient.name!r} ({ingredient.category})")
        rows.append(RecipeIngredient(ingredient=ingredient, quantity=line.quantity))
    return rows


async def get_recipe_or_404(db: AsyncSession, recipe_id: int) -> Recipe:
    recipe = await db.get(Recipe, recipe_id)
    if recipe is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=FAIL_VALIDATION_MATCHED_RECIPE,
        )
    return recipe


# ————————————————————————————————————————————————————————————
# Create
# ————————————————————————————————————————————————————————————

async def create_recipe_service(
    db: AsyncSession,
    recipe_in: RecipeCreate,
    user_id: int,
) -> RecipeOut:
    new = Recipe(
        user_id=user_id,
        title=recipe_in.title,
        description=recipe_in.description,
        instructions=list(recipe_in.instructions),
        rating=recipe_in.rating,
        image_url=recipe_in.image_url,
        prep_time=recipe_in.prep_time,
        cook_time=recipe_in.cook_time,
        servings=recipe_in.servings,
    )
    new.tags = await get_or_create_tags(db, recipe_in.tags)
    new.recipe_ingredients = await _build_recipe_ingredients(db, recipe_in.ingredients)
    db.add(new)
    await db.commit()
    logger.info(f"Recipe id={new.id} created by user id={user_id}")

    return await get_recipe_by_id(db, new.id)


# ————————————————————————————————————————————————————————————
# Read / List
# ————————————————————————————————————————————————————————————

async def get_recipe_by_id(db: AsyncSession, id: int) -> RecipeOut:
    stmt = _base_recipe_query().where(Recipe.id == id)
    row = (await db.execute(stmt)).first()

    if not row:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=FAIL_VALIDATION_MATCHED_RECIPE,
        )

    recipe_obj, favorites_count = row
    return _to_out(recipe_obj, favorites_count)


async def get_recipes_list_service(
    db: AsyncSession,
    page: int,
    limit: int,
    search: Optional[str] = None,
    tags: Optional[List[str]] = None,
    ingredients: Optional[List[str]] = None,
    sort_by: RecipeSortField = RecipeSortField.CREATED_AT,
    order: SortOrder = SortOrder.DESC,
) -> Tuple[List[RecipeOut], int]:
    filters = build_recipe_filters(search, tags, ingredients)

    total = await db.scalar(select(func.count(Recipe.id)).where(*filters))

    column = SORT_COLUMNS[sort_by]
    direction = desc if order == SortOrder.DESC else asc
    stmt = (
        _base_recipe_query()
        .where(*filters)
        .order_by(direction(column), direction(Recipe.id))
        .offset((page - 1) * limit)
        .limit(limit)
    )
    rows = (await db.execute(stmt)).all()

    return [_to_out(recipe, count) for recipe, count in rows], total


# ————————————————————————————————————————————————————————————
# Update / Delete
# ————————————————————————————————————————————————————————————

async def update_recipe_service(
    db: AsyncSession,
    recipe_id: int,
    user: UserFromDB,
    data: RecipeUpdate,
) -> RecipeOut:
    # 1) load the recipe with its collections and check ownership
    stmt = select(Recipe).options(*recipe_load_options()).where(Recipe.id == recipe_id)
    recipe = (await db.execute(stmt)).scalar_one_or_none()
    if recipe is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, FAIL_VALIDATION_MATCHED_RECIPE)
    ensure_owner(recipe.user_id, user)

    # 2) plain fields that were sent; title cannot be cleared
    changes = data.model_dump(include=set(SIMPLE_FIELDS), exclude_unset=True)
    for field, value in changes.items():
        if field in ("title", "instructions") and value is None:
            continue
        setattr(recipe, field, value)

    # 3) tags
    if data.tags is not None:
        recipe.tags = await get_or_create_tags(db, data.tags)

    # 4) ingredients are replaced as a whole
    if data.ingredients is not None:
        recipe.recipe_ingredients = await _build_recipe_ingredients(db, data.ingredients)

    await db.commit()
    logger.info(f"Recipe id={recipe_id} updated by user id={user.id}")
    return await get_recipe_by_id(db, recipe_id)


async def delete_recipe_service(
    db: AsyncSession,
    recipe_id: int,
    user: UserFromDB,
) -> None:
    recipe = await get_recipe_or_404(db, recipe_id)
    ensure_owner(recipe.user_id, user)

    await db.delete(recipe)
    await db.commit()
    logger.info(f"Recipe id={recipe_id} deleted by user id={user.id}")
