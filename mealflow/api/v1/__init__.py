from fastapi import APIRouter

from mealflow.api.v1 import admin, auth, favorite, grocery, ingredient, planner, recipe, user

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(user.router, prefix="/users", tags=["users"])
api_router.include_router(recipe.router, prefix="/recipes", tags=["recipes"])
api_router.include_router(ingredient.router, prefix="/ingredients", tags=["ingredients"])
api_router.include_router(planner.router, prefix="/planner", tags=["planner"])
api_router.include_router(grocery.router, prefix="/grocery", tags=["grocery"])
api_router.include_router(favorite.router, prefix="/favorites", tags=["favorites"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
