"""API routes for the household's active shopping list."""

from datetime import date

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from mealcart.config import get_settings
from mealcart.dependencies import (
    CurrentUser,
    get_inventory_source,
    get_offer_source,
    get_shopping_list_service,
    get_staple_service,
)
from mealcart.errors import NotFound
from mealcart.logging_config import get_logger
from mealcart.offers.sources import InventorySource, OfferSource
from mealcart.offers.staples import PantryStapleService
from mealcart.schemas import InventoryItem, MealPlanResult
from mealcart.shopping.aggregator import total_savings
from mealcart.shopping.models import CandidateItem, ShoppingList
from mealcart.shopping.service import ShoppingListService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/shopping-list", tags=["shopping-list"])


# =============================================================================
# Request/Response Schemas
# =============================================================================


class ShoppingListItemSchema(BaseModel):
    """Single item on a shopping list."""

    id: str
    name: str
    amount: str = "1"
    unit: str = ""
    checked: bool | None = None
    price: float | None = None
    offer_price: float | None = None
    store: str | None = None
    offer_id: str | None = None
    is_estimate: bool = False


class AddItemsRequest(BaseModel):
    """Items to merge into the active list."""

    items: list[ShoppingListItemSchema] = Field(default_factory=list)
    meal_plan_id: str | None = None
    supersede: bool = False


class StapleOffersRequest(BaseModel):
    shopping_date: date | None = None


class FromMealPlanRequest(BaseModel):
    """Generated plan to turn into a new shopping list."""

    plan: MealPlanResult
    meal_plan_id: str | None = None
    shopping_date: date | None = None
    # None loads the user's stored inventory
    inventory: list[InventoryItem] | None = None


class ShoppingListResponse(BaseModel):
    """Shopping list with derived totals."""

    id: str
    items: list[ShoppingListItemSchema]
    total_price: float
    total_savings: float
    currency: str
    completed: bool
    meal_plan_id: str | None = None
    created_at: str

    @classmethod
    def from_list(cls, shopping_list: ShoppingList) -> "ShoppingListResponse":
        data = shopping_list.to_dict()
        return cls(
            id=data["id"],
            items=[ShoppingListItemSchema.model_validate(i) for i in data["items"]],
            total_price=data["total_price"],
            total_savings=total_savings(shopping_list),
            currency=get_settings().currency,
            completed=data["completed"],
            meal_plan_id=data["meal_plan_id"],
            created_at=data["created_at"],
        )


# =============================================================================
# Helper Functions
# =============================================================================


def _require_list(shopping_list: ShoppingList | None) -> ShoppingListResponse:
    if shopping_list is None:
        raise NotFound("No active shopping list")
    return ShoppingListResponse.from_list(shopping_list)


def _to_candidate(item: ShoppingListItemSchema) -> CandidateItem:
    return CandidateItem(**item.model_dump())


# =============================================================================
# Routes
# =============================================================================


@router.get("", response_model=ShoppingListResponse)
async def get_active_list(
    user: CurrentUser,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResponse:
    """Get the household's active shopping list."""
    return _require_list(await service.get_active_list(user))


@router.post("/items", response_model=ShoppingListResponse)
async def add_items(
    request: AddItemsRequest,
    user: CurrentUser,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResponse:
    """Add or update items on the active list, creating it if needed."""
    shopping_list = await service.add_items(
        user,
        [_to_candidate(i) for i in request.items],
        meal_plan_id=request.meal_plan_id,
        supersede=request.supersede,
    )
    return ShoppingListResponse.from_list(shopping_list)


@router.post("/staple-offers", response_model=ShoppingListResponse)
async def add_staple_offers(
    request: StapleOffersRequest,
    user: CurrentUser,
    staples: PantryStapleService = Depends(get_staple_service),
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResponse:
    """Put current offers on pantry staples onto the active list."""
    matches = await staples.find_staple_offers(user, request.shopping_date or date.today())
    return ShoppingListResponse.from_list(await service.add_staple_offers(user, matches))


@router.post("/from-meal-plan", response_model=ShoppingListResponse)
async def create_from_meal_plan(
    request: FromMealPlanRequest,
    user: CurrentUser,
    offers: OfferSource = Depends(get_offer_source),
    inventory_source: InventorySource = Depends(get_inventory_source),
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResponse:
    """Replace the active list with one built from a generated meal plan."""
    eligible = await offers.fetch_offers_for_user(user, request.shopping_date or date.today())
    inventory = request.inventory
    if inventory is None:
        inventory = await inventory_source.fetch_inventory(user.user_id)
    shopping_list = await service.generate_from_meal_plan(
        user,
        request.plan.recipes,
        offers=eligible,
        inventory=inventory,
        meal_plan_id=request.meal_plan_id,
    )
    return ShoppingListResponse.from_list(shopping_list)


@router.post("/items/{item_id}/toggle", response_model=ShoppingListResponse)
async def toggle_item(
    item_id: str,
    user: CurrentUser,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResponse:
    """Check or uncheck an item."""
    return _require_list(await service.toggle_item(user, item_id))


@router.delete("/items/{item_id}", response_model=ShoppingListResponse)
async def remove_item(
    item_id: str,
    user: CurrentUser,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResponse:
    """Remove an item from the active list."""
    return _require_list(await service.remove_item(user, item_id))


@router.post("/complete", response_model=ShoppingListResponse)
async def complete_list(
    user: CurrentUser,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResponse:
    """Check out the active list."""
    return _require_list(await service.mark_completed(user))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_list(
    user: CurrentUser,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> None:
    """Abandon the active list."""
    deleted = await service.clear(user)
    if deleted is None:
        logger.debug(f"No active shopping list to clear for {user.household_key}")
