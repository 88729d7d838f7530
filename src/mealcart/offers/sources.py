"""Offer, staple and inventory source interfaces."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from datetime import date

from mealcart.logging_config import get_logger
from mealcart.offers.filters import filter_eligible_offers
from mealcart.offers.models import Offer, PantryStaple
from mealcart.schemas import InventoryItem, UserContext

logger = get_logger(__name__)


class OfferSource(ABC):
    """Abstract base class for anything that can list active offers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return source name for logging and error reporting."""
        pass

    @abstractmethod
    async def fetch_offers(self, chain_ids: Sequence[str], as_of: date) -> list[Offer]:
        """
        Fetch offers from the given chains that are valid on a date.

        Args:
            chain_ids: Chain identifiers to restrict to. Empty returns [].
            as_of: Target date; offers must satisfy valid_from <= as_of <= valid_until.

        Returns:
            Active offers ordered by offer price ascending, ties by offer id.

        Raises:
            SourceUnavailable: If the backing data source cannot be reached.
        """
        pass

    @abstractmethod
    async def fetch_preferred_chain_ids(self, user_id: str) -> list[str]:
        """Fetch the chains a user prefers to shop at."""
        pass

    async def fetch_offers_for_user(self, ctx: UserContext, as_of: date) -> list[Offer]:
        """Fetch offers for the acting user's preferred chains."""
        chain_ids = await self.fetch_preferred_chain_ids(ctx.user_id)
        if not chain_ids:
            logger.info(f"User {ctx.user_id} has no preferred chains, no offers")
            return []
        return await self.fetch_offers(chain_ids, as_of)


class StapleSource(ABC):
    """Abstract base class for pantry staple reference data."""

    @abstractmethod
    async def fetch_staples(self) -> list[PantryStaple]:
        """Fetch all pantry staples, ordered by category then name."""
        pass


class InventorySource(ABC):
    """Abstract base class for what a user already has at home."""

    @abstractmethod
    async def fetch_inventory(self, user_id: str) -> list[InventoryItem]:
        """
        Fetch the user's inventory items that are not depleted.

        Raises:
            SourceUnavailable: If the backing data source cannot be reached.
        """
        pass


class InMemoryOfferSource(OfferSource, StapleSource, InventorySource):
    """Offer, staple and inventory source over an in-memory snapshot."""

    def __init__(
        self,
        offers: Iterable[Offer] = (),
        staples: Iterable[PantryStaple] = (),
        preferred_chains: dict[str, list[str]] | None = None,
        inventory: dict[str, list[InventoryItem]] | None = None,
    ):
        self.offers = list(offers)
        self.staples = list(staples)
        self.preferred_chains = preferred_chains or {}
        self.inventory = inventory or {}

    @property
    def name(self) -> str:
        return "memory"

    async def fetch_offers(self, chain_ids: Sequence[str], as_of: date) -> list[Offer]:
        return filter_eligible_offers(self.offers, chain_ids, as_of)

    async def fetch_preferred_chain_ids(self, user_id: str) -> list[str]:
        return list(self.preferred_chains.get(user_id, []))

    async def fetch_staples(self) -> list[PantryStaple]:
        return sorted(self.staples, key=lambda s: (s.category.value, s.name))

    async def fetch_inventory(self, user_id: str) -> list[InventoryItem]:
        return [i for i in self.inventory.get(user_id, []) if not i.is_depleted]
