"""Daily meal log operations, upserted per (user, date)."""

from collections.abc import Callable
from datetime import date

from mealcart.logging_config import get_logger
from mealcart.schemas import UserContext
from mealcart.storage.base import DailyMealLogStore
from mealcart.tracking.daily_log import (
    DailyMealLog,
    FoodPhoto,
    MealSlot,
    add_food_photo,
    toggle_completed,
    toggle_skipped,
    update_extra_calories,
)

logger = get_logger(__name__)


class DailyMealLogService:
    """Applies slot transitions and extra entries to a user's daily log."""

    def __init__(self, store: DailyMealLogStore):
        self.store = store

    async def get_log(self, ctx: UserContext, day: date) -> DailyMealLog | None:
        """The log for a day, or None if nothing has been recorded yet."""
        return await self.store.get((ctx.user_id, day))

    async def _apply(
        self,
        ctx: UserContext,
        day: date,
        change: Callable[[DailyMealLog], DailyMealLog],
    ) -> DailyMealLog:
        log = await self.store.get((ctx.user_id, day))
        if log is None:
            log = DailyMealLog.empty(ctx.user_id, day)
            logger.debug(f"Creating daily log for user {ctx.user_id} on {day}")
        return await self.store.upsert(change(log))

    async def toggle_meal_completed(
        self, ctx: UserContext, day: date, slot: MealSlot
    ) -> DailyMealLog:
        log = await self._apply(ctx, day, lambda current: toggle_completed(current, slot))
        logger.info(f"{slot.value} on {day} is now {log.slot_state(slot).value}")
        return log

    async def toggle_meal_skipped(self, ctx: UserContext, day: date, slot: MealSlot) -> DailyMealLog:
        log = await self._apply(ctx, day, lambda current: toggle_skipped(current, slot))
        logger.info(f"{slot.value} on {day} is now {log.slot_state(slot).value}")
        return log

    async def add_food_photo(self, ctx: UserContext, day: date, photo: FoodPhoto) -> DailyMealLog:
        return await self._apply(ctx, day, lambda current: add_food_photo(current, photo))

    async def update_extra_calories(
        self,
        ctx: UserContext,
        day: date,
        calories: int,
        description: str | None = None,
    ) -> DailyMealLog:
        return await self._apply(
            ctx, day, lambda current: update_extra_calories(current, calories, description)
        )
