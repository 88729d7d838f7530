"""API routes for store offers."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from mealcart.config import get_settings
from mealcart.dependencies import CurrentUser, get_offer_source
from mealcart.logging_config import get_logger
from mealcart.offers.models import Offer
from mealcart.offers.sources import OfferSource

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/offers", tags=["offers"])


class OfferResponse(BaseModel):
    """Offer information response."""

    id: str
    product_name: str
    chain_id: str | None = None
    chain_name: str
    offer_price: float | None = None
    original_price: float | None = None
    valid_from: date | None = None
    valid_until: date | None = None
    offer_text: str | None = None
    brand: str | None = None
    category: str | None = None
    unit: str | None = None
    quantity: float | None = None
    image_url: str | None = None

    @classmethod
    def from_offer(cls, offer: Offer) -> "OfferResponse":
        return cls.model_validate(offer.to_dict())


class OffersResponse(BaseModel):
    """Offers valid on a date at the user's preferred chains."""

    offers: list[OfferResponse]
    total: int
    as_of: date
    currency: str


@router.get("", response_model=OffersResponse)
async def list_offers(
    user: CurrentUser,
    shopping_date: Annotated[date | None, Query(alias="date")] = None,
    source: OfferSource = Depends(get_offer_source),
) -> OffersResponse:
    """List offers from the user's preferred chains, cheapest first."""
    as_of = shopping_date or date.today()
    offers = await source.fetch_offers_for_user(user, as_of)
    return OffersResponse(
        offers=[OfferResponse.from_offer(o) for o in offers],
        total=len(offers),
        as_of=as_of,
        currency=get_settings().currency,
    )
