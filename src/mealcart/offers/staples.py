"""Pantry staple lookup and staple offer discovery."""

from collections.abc import Iterable
from datetime import date

from mealcart.logging_config import get_logger
from mealcart.offers.matching import match_staples_to_offers
from mealcart.offers.models import PantryStaple, StapleCategory, StapleOfferMatch
from mealcart.offers.sources import OfferSource, StapleSource
from mealcart.schemas import UserContext

logger = get_logger(__name__)

CATEGORY_LABELS: dict[StapleCategory, str] = {
    StapleCategory.SPICES: "Spices",
    StapleCategory.OIL_FAT: "Oil & Fat",
    StapleCategory.BAKING: "Baking & Basics",
    StapleCategory.PRESERVES: "Preserves & Sauces",
    StapleCategory.OTHER: "Other",
}


def group_staples_by_category(
    staples: Iterable[PantryStaple],
) -> dict[StapleCategory, list[PantryStaple]]:
    """Group staples by category, keeping their incoming order within a group."""
    grouped: dict[StapleCategory, list[PantryStaple]] = {}
    for staple in staples:
        grouped.setdefault(staple.category, []).append(staple)
    return grouped


class PantryStapleService:
    """Finds current offers on a household's pantry staples."""

    def __init__(self, staple_source: StapleSource, offer_source: OfferSource):
        self.staple_source = staple_source
        self.offer_source = offer_source

    async def list_staples(self) -> list[PantryStaple]:
        """All staples, ordered by category then name."""
        return await self.staple_source.fetch_staples()

    async def find_staple_offers(
        self,
        ctx: UserContext,
        as_of: date,
    ) -> list[StapleOfferMatch]:
        """
        Match staples against the offers valid on a date at the user's chains.

        Args:
            ctx: Acting user.
            as_of: Shopping date.

        Returns:
            At most one match per staple; empty if the user has no chains.

        Raises:
            SourceUnavailable: If staples or offers cannot be fetched.
        """
        staples = await self.staple_source.fetch_staples()
        if not staples:
            return []

        offers = await self.offer_source.fetch_offers_for_user(ctx, as_of)
        matches = match_staples_to_offers(staples, offers)
        logger.info(
            f"Found offers for {len(matches)} of {len(staples)} staples "
            f"(user={ctx.user_id}, date={as_of})"
        )
        return matches
