"""Daily meal consumption tracking."""

from mealcart.tracking.daily_log import (
    DailyMealLog,
    FoodPhoto,
    MealSlot,
    SlotState,
    add_food_photo,
    toggle_completed,
    toggle_skipped,
    update_extra_calories,
)

__all__ = [
    "DailyMealLog",
    "FoodPhoto",
    "MealSlot",
    "SlotState",
    "add_food_photo",
    "toggle_completed",
    "toggle_skipped",
    "update_extra_calories",
]
