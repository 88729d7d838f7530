"""FastAPI dependencies wiring sessions to stores and services."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from mealcart.database import get_db
from mealcart.logging_config import user_id_ctx
from mealcart.offers.repository import SqlOfferRepository
from mealcart.offers.sources import InventorySource, OfferSource, StapleSource
from mealcart.offers.staples import PantryStapleService
from mealcart.schemas import UserContext
from mealcart.shopping.service import ShoppingListService
from mealcart.storage.base import DailyMealLogStore, ShoppingListStore
from mealcart.storage.sql import SqlDailyMealLogStore, SqlShoppingListStore
from mealcart.tracking.service import DailyMealLogService


async def get_user_context(
    x_user_id: Annotated[str | None, Header()] = None,
    x_household_id: Annotated[str | None, Header()] = None,
) -> UserContext:
    """Acting user from request headers; authentication happens upstream."""
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    user_id_ctx.set(x_user_id)
    return UserContext(user_id=x_user_id, household_id=x_household_id)


async def get_offer_source(db: AsyncSession = Depends(get_db)) -> OfferSource:
    return SqlOfferRepository(db)


async def get_staple_source(db: AsyncSession = Depends(get_db)) -> StapleSource:
    return SqlOfferRepository(db)


async def get_inventory_source(db: AsyncSession = Depends(get_db)) -> InventorySource:
    return SqlOfferRepository(db)


async def get_shopping_list_store(db: AsyncSession = Depends(get_db)) -> ShoppingListStore:
    return SqlShoppingListStore(db)


async def get_daily_log_store(db: AsyncSession = Depends(get_db)) -> DailyMealLogStore:
    return SqlDailyMealLogStore(db)


async def get_staple_service(
    staple_source: StapleSource = Depends(get_staple_source),
    offer_source: OfferSource = Depends(get_offer_source),
) -> PantryStapleService:
    return PantryStapleService(staple_source, offer_source)


async def get_shopping_list_service(
    store: ShoppingListStore = Depends(get_shopping_list_store),
) -> ShoppingListService:
    return ShoppingListService(store)


async def get_daily_log_service(
    store: DailyMealLogStore = Depends(get_daily_log_store),
) -> DailyMealLogService:
    return DailyMealLogService(store)


CurrentUser = Annotated[UserContext, Depends(get_user_context)]
