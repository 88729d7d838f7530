"""API routes for pantry staples and their current offers."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from mealcart.dependencies import CurrentUser, get_staple_service
from mealcart.offers.models import PantryStaple
from mealcart.offers.staples import (
    CATEGORY_LABELS,
    PantryStapleService,
    group_staples_by_category,
)
from mealcart.routers.offers import OfferResponse

router = APIRouter(prefix="/api/v1/pantry-staples", tags=["pantry-staples"])


class StapleResponse(BaseModel):
    id: str
    name: str
    category: str
    icon: str | None = None

    @classmethod
    def from_staple(cls, staple: PantryStaple) -> "StapleResponse":
        return cls(id=staple.id, name=staple.name, category=staple.category.value, icon=staple.icon)


class StapleGroup(BaseModel):
    category: str
    label: str
    staples: list[StapleResponse]


class StaplesResponse(BaseModel):
    groups: list[StapleGroup]
    total: int


class StapleOfferResponse(BaseModel):
    staple: StapleResponse
    offer: OfferResponse


class StapleOffersResponse(BaseModel):
    matches: list[StapleOfferResponse]
    total: int
    as_of: date


@router.get("", response_model=StaplesResponse)
async def list_staples(
    service: PantryStapleService = Depends(get_staple_service),
) -> StaplesResponse:
    """List pantry staples grouped by category."""
    staples = await service.list_staples()
    groups = [
        StapleGroup(
            category=category.value,
            label=CATEGORY_LABELS[category],
            staples=[StapleResponse.from_staple(s) for s in members],
        )
        for category, members in group_staples_by_category(staples).items()
    ]
    return StaplesResponse(groups=groups, total=len(staples))


@router.get("/offers", response_model=StapleOffersResponse)
async def list_staple_offers(
    user: CurrentUser,
    shopping_date: Annotated[date | None, Query(alias="date")] = None,
    service: PantryStapleService = Depends(get_staple_service),
) -> StapleOffersResponse:
    """Cheapest current offer for each staple at the user's preferred chains."""
    as_of = shopping_date or date.today()
    matches = await service.find_staple_offers(user, as_of)
    return StapleOffersResponse(
        matches=[
            StapleOfferResponse(
                staple=StapleResponse.from_staple(m.staple),
                offer=OfferResponse.from_offer(m.offer),
            )
            for m in matches
        ],
        total=len(matches),
        as_of=as_of,
    )
