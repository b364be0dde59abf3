"""API routers for the mealbook application."""

from mealbook.routers.meal_plans import router as meal_plans_router
from mealbook.routers.recipes import router as recipes_router

__all__ = [
    "meal_plans_router",
    "recipes_router",
]
