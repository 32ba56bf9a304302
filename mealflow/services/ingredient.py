from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mealflow.models.recipe import (
    DEFAULT_INGREDIENT_CATEGORY,
    DEFAULT_INGREDIENT_UNIT,
    Ingredient,
)
from mealflow.schemas.recipe import RecipeIngredientCreate


async def get_ingredients(
    db: AsyncSession,
    q: Optional[str],
    page: int,
    limit: int,
) -> Tuple[List[Ingredient], int]:
    """
    Ingredients matching ``q`` (case-insensitive substring) for one page,
    plus the total number of matches.
    """
    query = select(Ingredient)

    if q:
        query = query.where(Ingredient.name.ilike(f"%{q}%"))

    count_query = select(func.count()).select_from(query.subquery())
    total = (await db.execute(count_query)).scalar_one()

    query = query.order_by(Ingredient.name).offset((page - 1) * limit).limit(limit)
    results = await db.execute(query)
    ingredients = list(results.scalars().all())

    return ingredients, total


async def get_ingredient_by_id(
    db: AsyncSession,
    ingredient_id: int,
) -> Optional[Ingredient]:
    result = await db.execute(select(Ingredient).where(Ingredient.id == ingredient_id))
    return result.scalars().first()


async def get_ingredient_by_name(db: AsyncSession, name: str) -> Optional[Ingredient]:
    result = await db.execute(select(Ingredient).where(Ingredient.name == name))
    return result.scalar_one_or_none()


async def get_or_create_ingredient(
    db: AsyncSession,
    line: RecipeIngredientCreate,
) -> Tuple[Ingredient, bool]:
    """
    Ingredient with the line's name; created with the line's category and
    unit (or the defaults) when unseen. Existing ingredients are never changed.
    The second element tells whether a new row was added. The caller commits.
    """
    existing = await get_ingredient_by_name(db, line.name)
    if existing:
        return existing, False

    created = Ingredient(
        name=line.name,
        category=line.category or DEFAULT_INGREDIENT_CATEGORY,
        unit=line.unit or DEFAULT_INGREDIENT_UNIT,
    )
    db.add(created)
    await db.flush()
    return created, True
