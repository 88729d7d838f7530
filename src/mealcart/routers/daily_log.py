"""API routes for the daily meal log."""

from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from mealcart.dependencies import CurrentUser, get_daily_log_service
from mealcart.errors import NotFound
from mealcart.tracking.daily_log import DailyMealLog, FoodPhoto, MealSlot, as_utc
from mealcart.tracking.service import DailyMealLogService

router = APIRouter(prefix="/api/v1/daily-log", tags=["daily-log"])


class FoodPhotoSchema(BaseModel):
    url: str
    description: str | None = None
    estimated_calories: float | None = None
    timestamp: datetime | None = None


class ExtraCaloriesRequest(BaseModel):
    calories: int = Field(ge=0)
    description: str | None = None


class DailyMealLogResponse(BaseModel):
    """Meal log for one day."""

    user_id: str
    date: str
    meal_plan_id: str | None = None
    slots: dict[str, str]
    breakfast_completed: bool
    lunch_completed: bool
    dinner_completed: bool
    breakfast_skipped: bool
    lunch_skipped: bool
    dinner_skipped: bool
    food_photos: list[FoodPhotoSchema]
    extra_calories: int
    extra_description: str | None = None

    @classmethod
    def from_log(cls, log: DailyMealLog) -> "DailyMealLogResponse":
        return cls.model_validate(log.to_dict())


@router.get("/{day}", response_model=DailyMealLogResponse)
async def get_daily_log(
    day: date,
    user: CurrentUser,
    service: DailyMealLogService = Depends(get_daily_log_service),
) -> DailyMealLogResponse:
    """Get the log for a day."""
    log = await service.get_log(user, day)
    if log is None:
        raise NotFound(f"No meal log for {day}", key=(user.user_id, day))
    return DailyMealLogResponse.from_log(log)


@router.post("/{day}/{slot}/toggle-completed", response_model=DailyMealLogResponse)
async def toggle_completed(
    day: date,
    slot: MealSlot,
    user: CurrentUser,
    service: DailyMealLogService = Depends(get_daily_log_service),
) -> DailyMealLogResponse:
    """Mark a meal as eaten, or undo it."""
    return DailyMealLogResponse.from_log(await service.toggle_meal_completed(user, day, slot))


@router.post("/{day}/{slot}/toggle-skipped", response_model=DailyMealLogResponse)
async def toggle_skipped(
    day: date,
    slot: MealSlot,
    user: CurrentUser,
    service: DailyMealLogService = Depends(get_daily_log_service),
) -> DailyMealLogResponse:
    """Mark a meal as skipped, or undo it."""
    return DailyMealLogResponse.from_log(await service.toggle_meal_skipped(user, day, slot))


@router.post("/{day}/photos", response_model=DailyMealLogResponse)
async def add_photo(
    day: date,
    photo: FoodPhotoSchema,
    user: CurrentUser,
    service: DailyMealLogService = Depends(get_daily_log_service),
) -> DailyMealLogResponse:
    """Attach a food photo to the day."""
    food_photo = FoodPhoto(
        url=photo.url,
        description=photo.description,
        estimated_calories=photo.estimated_calories,
        timestamp=as_utc(photo.timestamp) if photo.timestamp else datetime.now(timezone.utc),
    )
    return DailyMealLogResponse.from_log(await service.add_food_photo(user, day, food_photo))


@router.put("/{day}/extra-calories", response_model=DailyMealLogResponse)
async def set_extra_calories(
    day: date,
    request: ExtraCaloriesRequest,
    user: CurrentUser,
    service: DailyMealLogService = Depends(get_daily_log_service),
) -> DailyMealLogResponse:
    """Record calories eaten outside the plan."""
    log = await service.update_extra_calories(user, day, request.calories, request.description)
    return DailyMealLogResponse.from_log(log)
