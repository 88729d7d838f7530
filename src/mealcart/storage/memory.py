"""In-memory record stores, used for tests and local development."""

from mealcart.shopping.models import ShoppingList
from mealcart.storage.base import DailyLogKey, DailyMealLogStore, ShoppingListStore
from mealcart.tracking.daily_log import DailyMealLog


class InMemoryShoppingListStore(ShoppingListStore):
    """Shopping lists held in a dict."""

    def __init__(self) -> None:
        self.records: dict[str, ShoppingList] = {}

    async def get(self, key: str) -> ShoppingList | None:
        return self.records.get(key)

    async def upsert(self, record: ShoppingList) -> ShoppingList:
        self.records[record.id] = record
        return record

    async def delete(self, key: str) -> None:
        self.records.pop(key, None)

    async def get_active(self, household_id: str) -> ShoppingList | None:
        active = [
            r for r in self.records.values() if r.household_id == household_id and not r.completed
        ]
        if not active:
            return None
        return max(active, key=lambda r: r.created_at)

    def lists_for(self, household_id: str) -> list[ShoppingList]:
        return [r for r in self.records.values() if r.household_id == household_id]


class InMemoryDailyMealLogStore(DailyMealLogStore):
    """Daily meal logs held in a dict."""

    def __init__(self) -> None:
        self.records: dict[DailyLogKey, DailyMealLog] = {}

    async def get(self, key: DailyLogKey) -> DailyMealLog | None:
        return self.records.get(key)

    async def upsert(self, record: DailyMealLog) -> DailyMealLog:
        self.records[record.key] = record
        return record

    async def delete(self, key: DailyLogKey) -> None:
        self.records.pop(key, None)
