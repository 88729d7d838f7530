"""Daily meal consumption log and its per-slot state machine."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from mealcart.logging_config import get_logger

logger = get_logger(__name__)


class MealSlot(str, Enum):
    """Meal slot within a day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class SlotState(str, Enum):
    """State of one meal slot. Completed and skipped exclude each other."""

    PENDING = "pending"
    COMPLETED = "completed"
    SKIPPED = "skipped"

    @classmethod
    def from_flags(cls, completed: bool, skipped: bool) -> "SlotState":
        """Read the (completed, skipped) pair used by the storage layer."""
        if completed and skipped:
            logger.warning("Meal slot stored as both completed and skipped, using completed")
            return cls.COMPLETED
        if completed:
            return cls.COMPLETED
        if skipped:
            return cls.SKIPPED
        return cls.PENDING



def as_utc(value: datetime) -> datetime:
    """Read a naive datetime as UTC; aware ones pass through unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

@dataclass(frozen=True)
class FoodPhoto:
    """Photo of something eaten, with an optional calorie estimate."""

    url: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    description: str | None = None
    estimated_calories: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"url": self.url, "timestamp": self.timestamp.isoformat()}
        if self.description is not None:
            data["description"] = self.description
        if self.estimated_calories is not None:
            data["estimated_calories"] = self.estimated_calories
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FoodPhoto":
        raw_ts = data.get("timestamp")
        if raw_ts:
            timestamp = as_utc(datetime.fromisoformat(raw_ts.replace("Z", "+00:00")))
        else:
            timestamp = datetime.now(timezone.utc)
        return cls(
            url=data["url"],
            timestamp=timestamp,
            description=data.get("description"),
            estimated_calories=data.get("estimated_calories"),
        )


@dataclass(frozen=True)
class DailyMealLog:
    """One user's meal log for one calendar day."""

    user_id: str
    day: date
    breakfast: SlotState = SlotState.PENDING
    lunch: SlotState = SlotState.PENDING
    dinner: SlotState = SlotState.PENDING
    food_photos: tuple[FoodPhoto, ...] = ()
    extra_calories: int = 0
    extra_description: str | None = None
    meal_plan_id: str | None = None

    @classmethod
    def empty(cls, user_id: str, day: date, meal_plan_id: str | None = None) -> "DailyMealLog":
        """A fresh log: every slot pending, no photos."""
        return cls(user_id=user_id, day=day, meal_plan_id=meal_plan_id)

    @property
    def key(self) -> tuple[str, date]:
        return (self.user_id, self.day)

    def slot_state(self, slot: MealSlot) -> SlotState:
        return getattr(self, slot.value)

    def with_slot(self, slot: MealSlot, state: SlotState) -> "DailyMealLog":
        return replace(self, **{slot.value: state})

    def as_flags(self) -> dict[str, bool]:
        """Flatten slot states into ``<slot>_completed`` / ``<slot>_skipped`` flags."""
        flags: dict[str, bool] = {}
        for slot in MealSlot:
            state = self.slot_state(slot)
            flags[f"{slot.value}_completed"] = state is SlotState.COMPLETED
            flags[f"{slot.value}_skipped"] = state is SlotState.SKIPPED
        return flags

    @property
    def completed_meals_count(self) -> int:
        return sum(1 for slot in MealSlot if self.slot_state(slot) is SlotState.COMPLETED)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "user_id": self.user_id,
            "date": self.day.isoformat(),
            "meal_plan_id": self.meal_plan_id,
            "slots": {slot.value: self.slot_state(slot).value for slot in MealSlot},
            **self.as_flags(),
            "food_photos": [photo.to_dict() for photo in self.food_photos],
            "extra_calories": self.extra_calories,
            "extra_description": self.extra_description,
        }


def toggle_completed(log: DailyMealLog, slot: MealSlot) -> DailyMealLog:
    """Pending or skipped becomes completed; completed goes back to pending."""
    current = log.slot_state(slot)
    new_state = SlotState.PENDING if current is SlotState.COMPLETED else SlotState.COMPLETED
    return log.with_slot(slot, new_state)


def toggle_skipped(log: DailyMealLog, slot: MealSlot) -> DailyMealLog:
    """Pending or completed becomes skipped; skipped goes back to pending."""
    current = log.slot_state(slot)
    new_state = SlotState.PENDING if current is SlotState.SKIPPED else SlotState.SKIPPED
    return log.with_slot(slot, new_state)


def add_food_photo(log: DailyMealLog, photo: FoodPhoto) -> DailyMealLog:
    return replace(log, food_photos=(*log.food_photos, photo))


def update_extra_calories(
    log: DailyMealLog,
    calories: int,
    description: str | None = None,
) -> DailyMealLog:
    """Set supplemental calories; an empty description is stored as None."""
    return replace(log, extra_calories=calories, extra_description=description or None)
