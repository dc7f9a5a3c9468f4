"""API routers for the mealcart application."""

from mealcart.routers.meal_plans import router as meal_plans_router
from mealcart.routers.products import router as products_router
from mealcart.routers.recipes import router as recipes_router

__all__ = [
    "meal_plans_router",
    "products_router",
    "recipes_router",
]
