"""Pantry staple to offer matching."""

from collections.abc import Iterable, Sequence

from mealcart.logging_config import get_logger
from mealcart.offers.models import Offer, PantryStaple, StapleOfferMatch

logger = get_logger(__name__)


def staple_matches_offer(staple_name: str, product_name: str) -> bool:
    """
    Symmetric substring test between a staple and an offer's product name.

    A match is either name contained in the other after case folding, so
    "salt" matches "Fine Salt 500g" and "olivenolie ekstra" matches
    "Olivenolie". Whitespace is significant: " salt" does not match
    "Havsalt". Empty names never match.
    """
    staple = staple_name.casefold()
    product = product_name.casefold()
    if not staple or not product:
        return False
    return staple in product or product in staple


def find_offer_for_staple(staple: PantryStaple, offers: Iterable[Offer]) -> Offer | None:
    """Return the first offer, in the given order, that matches the staple."""
    for offer in offers:
        if staple_matches_offer(staple.name, offer.product_name):
            return offer
    return None


def match_staples_to_offers(
    staples: Sequence[PantryStaple],
    offers: Sequence[Offer],
) -> list[StapleOfferMatch]:
    """
    Pick at most one offer for each staple.

    Offers must already be in price-ascending order (see offer_sort_key): the
    first matching offer wins, so the cheapest eligible offer is chosen. An
    offer may be picked for several staples. Staples without a match are left
    out of the result.

    Args:
        staples: Pantry staples, in display order.
        offers: Eligible offers, price-ascending.

    Returns:
        Matches in staple order.
    """
    matches: list[StapleOfferMatch] = []
    for staple in staples:
        offer = find_offer_for_staple(staple, offers)
        if offer is not None:
            matches.append(StapleOfferMatch(staple=staple, offer=offer))

    logger.debug(f"Matched {len(matches)}/{len(staples)} staples against {len(offers)} offers")
    return matches
