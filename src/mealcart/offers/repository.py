"""SQLAlchemy-backed offer, staple and inventory source."""

from collections.abc import Sequence
from datetime import date

from sqlalchemy import nulls_last, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from mealcart.errors import SourceUnavailable
from mealcart.logging_config import get_logger
from mealcart.models import (
    InventoryItemRecord,
    OfferRecord,
    PantryStapleRecord,
    UserPreferredChain,
)
from mealcart.offers.filters import sort_offers
from mealcart.offers.models import UNKNOWN_CHAIN_NAME, Offer, PantryStaple, StapleCategory
from mealcart.offers.sources import InventorySource, OfferSource, StapleSource
from mealcart.schemas import InventoryItem

logger = get_logger(__name__)


def offer_from_record(record: OfferRecord) -> Offer:
    """Convert a database row to an Offer."""
    return Offer(
        id=record.id,
        product_name=record.product_name or "",
        chain_id=record.chain_id,
        chain_name=record.chain.name if record.chain else UNKNOWN_CHAIN_NAME,
        offer_price=record.offer_price_dkk,
        original_price=record.original_price_dkk,
        valid_from=record.valid_from,
        valid_until=record.valid_until,
        is_active=record.is_active,
        offer_text=record.offer_text,
        brand=record.brand,
        category=record.category,
        unit=record.unit,
        quantity=record.quantity,
        image_url=record.image_url,
    )


def staple_from_record(record: PantryStapleRecord) -> PantryStaple:
    """Convert a database row to a PantryStaple."""
    return PantryStaple(
        id=record.id,
        name=record.name,
        category=StapleCategory.parse(record.category),
        icon=record.icon,
    )


def inventory_item_from_record(record: InventoryItemRecord) -> InventoryItem:
    return InventoryItem(
        ingredient_name=record.ingredient_name,
        quantity=record.quantity or 0.0,
        unit=record.unit or "",
        is_depleted=record.is_depleted,
    )


class SqlOfferRepository(OfferSource, StapleSource, InventorySource):
    """Offer source reading the offers tables through an async session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def name(self) -> str:
        return "database"

    async def fetch_offers(self, chain_ids: Sequence[str], as_of: date) -> list[Offer]:
        if not chain_ids:
            return []

        query = (
            select(OfferRecord)
            .options(selectinload(OfferRecord.chain))
            .where(
                OfferRecord.chain_id.in_(list(chain_ids)),
                OfferRecord.is_active == True,  # noqa: E712
                OfferRecord.valid_from <= as_of,
                OfferRecord.valid_until >= as_of,
            )
            .order_by(nulls_last(OfferRecord.offer_price_dkk.asc()), OfferRecord.id.asc())
        )

        try:
            result = await self.session.execute(query)
            records = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Offer query failed: {e}")
            raise SourceUnavailable("Offer database unavailable", source=self.name, cause=e) from e

        # Re-sort locally; database collation must not decide tie order
        offers = sort_offers(offer_from_record(r) for r in records)
        logger.info(f"Fetched {len(offers)} offers for {len(chain_ids)} chains on {as_of}")
        return offers

    async def fetch_preferred_chain_ids(self, user_id: str) -> list[str]:
        query = (
            select(UserPreferredChain.chain_id)
            .where(UserPreferredChain.user_id == user_id)
            .order_by(UserPreferredChain.chain_id)
        )
        try:
            result = await self.session.execute(query)
        except (SQLAlchemyError, OSError) as e:
            raise SourceUnavailable(
                "Chain preferences unavailable", source=self.name, cause=e
            ) from e
        return list(result.scalars().all())

    async def fetch_staples(self) -> list[PantryStaple]:
        query = select(PantryStapleRecord).order_by(
            PantryStapleRecord.category.asc(), PantryStapleRecord.name.asc()
        )
        try:
            result = await self.session.execute(query)
        except (SQLAlchemyError, OSError) as e:
            raise SourceUnavailable("Pantry staples unavailable", source=self.name, cause=e) from e
        return [staple_from_record(r) for r in result.scalars().all()]

    async def fetch_inventory(self, user_id: str) -> list[InventoryItem]:
        query = (
            select(InventoryItemRecord)
            .where(
                InventoryItemRecord.user_id == user_id,
                InventoryItemRecord.is_depleted == False,  # noqa: E712
            )
            .order_by(InventoryItemRecord.id)
        )
        try:
            result = await self.session.execute(query)
        except (SQLAlchemyError, OSError) as e:
            raise SourceUnavailable("Inventory unavailable", source=self.name, cause=e) from e
        return [inventory_item_from_record(r) for r in result.scalars().all()]
