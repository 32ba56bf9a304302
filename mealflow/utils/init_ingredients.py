import logging
from pathlib import Path

import yaml
from fastapi import FastAPI
from sqlalchemy import select

from mealflow.core import settings
from mealflow.models.recipe import DEFAULT_INGREDIENT_CATEGORY, DEFAULT_INGREDIENT_UNIT, Ingredient

logger = logging.getLogger(__name__)


def load_ingredients_config(config_path: Path) -> list[dict] | None:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.error(f"Ingredients config {config_path} not found")
        return None

    if not isinstance(config_data, list):
        logger.error(f"Malformed {config_path}: expected a list of ingredients")
        return None
    return config_data


async def init_ingredients(app: FastAPI, config_path: Path | None = None) -> None:
    """
    Reads the ingredients catalogue and adds or updates every listed
    ingredient (matched by name).

    Ingredients missing from the catalogue are left alone, recipes may
    still reference them.
    """
    config_path = config_path or settings.ingredients_config_path
    config_data = load_ingredients_config(config_path)
    if config_data is None:
        return

    added = updated = 0
    async with app.state.pool() as session:
        for item in config_data:
            name = (item.get("name") or "").strip()
            if not name:
                continue
            category = (item.get("category") or DEFAULT_INGREDIENT_CATEGORY).strip()
            unit = (item.get("unit") or DEFAULT_INGREDIENT_UNIT).strip()

            result = await session.execute(select(Ingredient).filter_by(name=name))
            ingredient_in_db = result.scalars().first()

            if not ingredient_in_db:
                session.add(Ingredient(name=name, category=category, unit=unit))
                added += 1
            elif (ingredient_in_db.category, ingredient_in_db.unit) != (category, unit):
                ingredient_in_db.category = category
                ingredient_in_db.unit = unit
                updated += 1

        await session.commit()

    logger.info(f"Ingredients initialised: {added} added, {updated} updated")
