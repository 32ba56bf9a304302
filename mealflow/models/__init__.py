from mealflow.models.rwmodel import RWModel
from mealflow.models.user import RoleEnum, User
from mealflow.models.recipe import Ingredient, Recipe, RecipeIngredient, Tag, recipe_tags
from mealflow.models.planner import MealTypeEnum, PlannerEntry, WeeklyPlan
from mealflow.models.favorite import Favorite

__all__ = [
    "RWModel",
    "RoleEnum",
    "User",
    "Ingredient",
    "Recipe",
    "RecipeIngredient",
    "Tag",
    "recipe_tags",
    "MealTypeEnum",
    "PlannerEntry",
    "WeeklyPlan",
    "Favorite",
]
