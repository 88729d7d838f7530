"""Offer eligibility filtering and ordering."""

from collections.abc import Collection, Iterable
from datetime import date

from mealcart.offers.models import Offer


def offer_sort_key(offer: Offer) -> tuple[bool, float, str]:
    """
    Sort key for offers: cheapest first, unpriced offers last, ties by id.

    Matching relies on this order being total so that first-match-wins is
    reproducible.
    """
    price = offer.offer_price
    return (price is None, price if price is not None else 0.0, offer.id)


def is_offer_eligible(offer: Offer, chain_ids: Collection[str], as_of: date) -> bool:
    """Check whether an offer is active, from a wanted chain and valid on a date."""
    if not offer.is_active or offer.chain_id not in chain_ids:
        return False
    if offer.valid_from is None or offer.valid_until is None:
        return False
    return offer.valid_from <= as_of <= offer.valid_until


def sort_offers(offers: Iterable[Offer]) -> list[Offer]:
    """Return offers in price-ascending order."""
    return sorted(offers, key=offer_sort_key)


def filter_eligible_offers(
    offers: Iterable[Offer],
    chain_ids: Collection[str],
    as_of: date,
) -> list[Offer]:
    """
    Filter offers to a household's chains and a target date.

    Args:
        offers: Offer snapshot to filter.
        chain_ids: Preferred chain identifiers. Empty means no offers.
        as_of: Date the offers must be valid on (inclusive bounds).

    Returns:
        Eligible offers, price-ascending.
    """
    if not chain_ids:
        return []
    wanted = set(chain_ids)
    return sort_offers(o for o in offers if is_offer_eligible(o, wanted, as_of))
