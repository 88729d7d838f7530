"""Record store interfaces.

Stores read and write whole records; callers never issue partial-field
queries. Errors from the backing store propagate unchanged.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Generic, TypeVar

from mealcart.shopping.models import ShoppingList
from mealcart.tracking.daily_log import DailyMealLog

K = TypeVar("K")
R = TypeVar("R")

DailyLogKey = tuple[str, date]


class RecordStore(ABC, Generic[K, R]):
    """Generic keyed store with get / upsert / delete semantics."""

    @abstractmethod
    async def get(self, key: K) -> R | None:
        """Return the record for a key, or None if absent."""
        pass

    @abstractmethod
    async def upsert(self, record: R) -> R:
        """Insert or replace a whole record."""
        pass

    @abstractmethod
    async def delete(self, key: K) -> None:
        """Delete a record. Deleting an absent key is a no-op."""
        pass


class ShoppingListStore(RecordStore[str, ShoppingList]):
    """Shopping lists keyed by list id."""

    @abstractmethod
    async def get_active(self, household_id: str) -> ShoppingList | None:
        """Return the household's newest uncompleted list, if any."""
        pass


class DailyMealLogStore(RecordStore[DailyLogKey, DailyMealLog]):
    """Daily meal logs keyed by (user id, date)."""
