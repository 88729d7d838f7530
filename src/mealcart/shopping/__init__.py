"""Shopping list models, aggregation and candidate building."""

from mealcart.shopping.aggregator import (
    add_or_update_items,
    clear,
    mark_completed,
    offer_items,
    remove_item,
    toggle_checked,
    total_savings,
    unpriced_items,
)
from mealcart.shopping.builder import (
    build_items_from_meal_plan,
    build_items_from_staple_offers,
    find_ingredient_offer,
)
from mealcart.shopping.models import CandidateItem, PriceSource, ShoppingList, ShoppingListItem
from mealcart.shopping.pricing import ESTIMATED_PRICES, find_estimated_price

__all__ = [
    "ESTIMATED_PRICES",
    "CandidateItem",
    "PriceSource",
    "ShoppingList",
    "ShoppingListItem",
    "add_or_update_items",
    "build_items_from_meal_plan",
    "build_items_from_staple_offers",
    "clear",
    "find_estimated_price",
    "find_ingredient_offer",
    "mark_completed",
    "offer_items",
    "remove_item",
    "toggle_checked",
    "total_savings",
    "unpriced_items",
]
