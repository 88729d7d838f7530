"""Persistence boundary: whole-record stores for lists and logs."""

from mealcart.storage.base import (
    DailyLogKey,
    DailyMealLogStore,
    RecordStore,
    ShoppingListStore,
)
from mealcart.storage.memory import InMemoryDailyMealLogStore, InMemoryShoppingListStore

__all__ = [
    "DailyLogKey",
    "DailyMealLogStore",
    "InMemoryDailyMealLogStore",
    "InMemoryShoppingListStore",
    "RecordStore",
    "ShoppingListStore",
]
