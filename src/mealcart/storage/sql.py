"""SQLAlchemy-backed record stores."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from mealcart.logging_config import get_logger
from mealcart.models import DailyMealLogRecord, ShoppingListRecord
from mealcart.shopping.models import ShoppingList, ShoppingListItem
from mealcart.storage.base import DailyLogKey, DailyMealLogStore, ShoppingListStore
from mealcart.tracking.daily_log import DailyMealLog, FoodPhoto, MealSlot, SlotState

logger = get_logger(__name__)


def shopping_list_from_record(record: ShoppingListRecord) -> ShoppingList:
    return ShoppingList(
        id=record.id,
        household_id=record.user_id,
        items=tuple(ShoppingListItem.from_dict(i) for i in (record.items or [])),
        completed=bool(record.completed),
        meal_plan_id=record.meal_plan_id,
        created_at=record.created_at,
    )


def daily_log_from_record(record: DailyMealLogRecord) -> DailyMealLog:
    states = {
        slot.value: SlotState.from_flags(
            bool(getattr(record, f"{slot.value}_completed")),
            bool(getattr(record, f"{slot.value}_skipped")),
        )
        for slot in MealSlot
    }
    return DailyMealLog(
        user_id=record.user_id,
        day=record.log_date,
        food_photos=tuple(FoodPhoto.from_dict(p) for p in (record.food_photos or [])),
        extra_calories=record.extra_calories or 0,
        extra_description=record.extra_description,
        meal_plan_id=record.meal_plan_id,
        **states,
    )


class SqlShoppingListStore(ShoppingListStore):
    """Shopping lists in the ``shopping_lists`` table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, key: str) -> ShoppingList | None:
        record = await self.session.get(ShoppingListRecord, key)
        return shopping_list_from_record(record) if record else None

    async def upsert(self, record: ShoppingList) -> ShoppingList:
        row = await self.session.get(ShoppingListRecord, record.id)
        if row is None:
            row = ShoppingListRecord(id=record.id, created_at=record.created_at)
            self.session.add(row)

        row.user_id = record.household_id
        row.items = [item.to_dict() for item in record.items]
        row.total_price = record.total_price
        row.completed = record.completed
        row.meal_plan_id = record.meal_plan_id

        await self.session.commit()
        return record

    async def delete(self, key: str) -> None:
        await self.session.execute(delete(ShoppingListRecord).where(ShoppingListRecord.id == key))
        await self.session.commit()

    async def get_active(self, household_id: str) -> ShoppingList | None:
        result = await self.session.execute(
            select(ShoppingListRecord)
            .where(
                ShoppingListRecord.user_id == household_id,
                ShoppingListRecord.completed == False,  # noqa: E712
            )
            .order_by(ShoppingListRecord.created_at.desc())
        )
        rows = result.scalars().all()
        if not rows:
            return None
        if len(rows) > 1:
            logger.warning(
                f"Household {household_id} has {len(rows)} active shopping lists, using newest"
            )
        return shopping_list_from_record(rows[0])


class SqlDailyMealLogStore(DailyMealLogStore):
    """Daily logs in the ``daily_meal_log`` table, unique on (user_id, date)."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _find(self, key: DailyLogKey) -> DailyMealLogRecord | None:
        user_id, day = key
        result = await self.session.execute(
            select(DailyMealLogRecord).where(
                DailyMealLogRecord.user_id == user_id,
                DailyMealLogRecord.log_date == day,
            )
        )
        return result.scalar_one_or_none()

    async def get(self, key: DailyLogKey) -> DailyMealLog | None:
        row = await self._find(key)
        return daily_log_from_record(row) if row else None

    async def upsert(self, record: DailyMealLog) -> DailyMealLog:
        row = await self._find(record.key)
        if row is None:
            row = DailyMealLogRecord(user_id=record.user_id, log_date=record.day)
            self.session.add(row)

        for name, value in record.as_flags().items():
            setattr(row, name, value)
        row.food_photos = [photo.to_dict() for photo in record.food_photos]
        row.extra_calories = record.extra_calories
        row.extra_description = record.extra_description
        row.meal_plan_id = record.meal_plan_id

        await self.session.commit()
        return record

    async def delete(self, key: DailyLogKey) -> None:
        user_id, day = key
        await self.session.execute(
            delete(DailyMealLogRecord).where(
                DailyMealLogRecord.user_id == user_id,
                DailyMealLogRecord.log_date == day,
            )
        )
        await self.session.commit()
