"""API routers for the mealcart application."""

from mealcart.routers.daily_log import router as daily_log_router
from mealcart.routers.offers import router as offers_router
from mealcart.routers.shopping_list import router as shopping_list_router
from mealcart.routers.staples import router as staples_router

__all__ = [
    "daily_log_router",
    "offers_router",
    "shopping_list_router",
    "staples_router",
]
