from typing import List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mealflow.models.recipe import Ingredient, Recipe
from mealflow.models.user import User
from mealflow.schemas.admin import AdminStats, AdminUserOut


async def get_stats(db: AsyncSession) -> AdminStats:
    """Number of users, recipes and ingredients in the store."""
    users = await db.scalar(select(func.count()).select_from(User))
    recipes = await db.scalar(select(func.count()).select_from(Recipe))
    ingredients = await db.scalar(select(func.count()).select_from(Ingredient))
    return AdminStats(users=users, recipes=recipes, ingredients=ingredients)


async def get_users_with_recipe_counts(db: AsyncSession) -> List[AdminUserOut]:
    """All users, newest first, each with the number of recipes they own."""
    recipes_count = (
        select(func.count(Recipe.id))
        .where(Recipe.user_id == User.id)
        .correlate(User)
        .scalar_subquery()
    )
    stmt = (
        select(User, recipes_count.label("recipes_count"))
        .order_by(User.created_at.desc(), User.id.desc())
    )
    rows = (await db.execute(stmt)).all()

    out: List[AdminUserOut] = []
    for user, count in rows:
        item = AdminUserOut.model_validate(user)
        item.recipes_count = count
        out.append(item)
    return out
