"""Store offers: sources, eligibility filtering and staple matching."""

from mealcart.offers.filters import (
    filter_eligible_offers,
    is_offer_eligible,
    offer_sort_key,
    sort_offers,
)
from mealcart.offers.matching import (
    find_offer_for_staple,
    match_staples_to_offers,
    staple_matches_offer,
)
from mealcart.offers.models import Offer, PantryStaple, StapleCategory, StapleOfferMatch
from mealcart.offers.sources import InMemoryOfferSource, OfferSource, StapleSource
from mealcart.offers.staples import (
    CATEGORY_LABELS,
    PantryStapleService,
    group_staples_by_category,
)

__all__ = [
    "CATEGORY_LABELS",
    "InMemoryOfferSource",
    "Offer",
    "OfferSource",
    "PantryStaple",
    "PantryStapleService",
    "StapleCategory",
    "StapleOfferMatch",
    "StapleSource",
    "filter_eligible_offers",
    "find_offer_for_staple",
    "group_staples_by_category",
    "is_offer_eligible",
    "match_staples_to_offers",
    "offer_sort_key",
    "sort_offers",
    "staple_matches_offer",
]
