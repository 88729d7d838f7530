"""Persistence-aware shopping list operations for a household."""

from collections.abc import Iterable, Sequence
from dataclasses import replace

from mealcart.logging_config import LoggingContext, get_logger
from mealcart.offers.models import Offer, StapleOfferMatch
from mealcart.schemas import InventoryItem, MealRecipe, UserContext
from mealcart.shopping import aggregator
from mealcart.shopping.builder import build_items_from_meal_plan, build_items_from_staple_offers
from mealcart.shopping.models import CandidateItem, ShoppingList
from mealcart.storage.base import ShoppingListStore

logger = get_logger(__name__)


class ShoppingListService:
    """
    Keeps one active (uncompleted) shopping list per household.

    Each operation is a read-modify-write of the household's active list:
    load it, apply a pure aggregator step, upsert the result. Calls for one
    household must not run concurrently; the store is last-writer-wins.
    """

    def __init__(self, store: ShoppingListStore):
        self.store = store

    async def get_active_list(self, ctx: UserContext) -> ShoppingList | None:
        """The household's active list, or None when there is nothing to show."""
        return await self.store.get_active(ctx.household_key)

    async def _save(self, shopping_list: ShoppingList) -> ShoppingList:
        with LoggingContext(list_id=shopping_list.id):
            saved = await self.store.upsert(shopping_list)
            logger.debug(f"Saved shopping list with {len(saved.items)} items")
        return saved

    async def add_items(
        self,
        ctx: UserContext,
        candidates: Iterable[CandidateItem],
        meal_plan_id: str | None = None,
        supersede: bool = False,
    ) -> ShoppingList:
        """
        Merge items into the active list, creating it if needed.

        Args:
            ctx: Acting user.
            candidates: Items to add or update (keyed by id).
            meal_plan_id: Plan the list originates from, recorded on new lists.
            supersede: Discard the current active list and start a new one.

        Returns:
            The saved active list.
        """
        household = ctx.household_key
        active = await self.store.get_active(household)

        if active is not None and supersede:
            logger.info(f"Superseding shopping list {active.id} for household {household}")
            await self.store.delete(active.id)
            active = None

        if active is None:
            active = ShoppingList(household_id=household, meal_plan_id=meal_plan_id)
            logger.info(f"Created shopping list {active.id} for household {household}")

        updated = aggregator.add_or_update_items(active, candidates)
        saved = await self._save(updated)
        logger.info(
            f"Shopping list {saved.id}: {len(saved.items)} items, "
            f"total {saved.total_price:.2f}"
        )
        return saved

    async def add_staple_offers(
        self,
        ctx: UserContext,
        matches: Iterable[StapleOfferMatch],
    ) -> ShoppingList:
        """Put matched staple offers on the active list without duplicating them."""
        return await self.add_items(ctx, build_items_from_staple_offers(matches))

    async def generate_from_meal_plan(
        self,
        ctx: UserContext,
        recipes: Iterable[MealRecipe],
        offers: Sequence[Offer] = (),
        inventory: Iterable[InventoryItem] = (),
        meal_plan_id: str | None = None,
    ) -> ShoppingList:
        """
        Replace the active list with one built from a meal plan's recipes.

        Regenerating the plan the active list was built from keeps the
        checked marks of items that are still on it.
        """
        candidates = build_items_from_meal_plan(recipes, offers, inventory)
        active = await self.store.get_active(ctx.household_key)
        if active is not None and meal_plan_id is not None and active.meal_plan_id == meal_plan_id:
            candidates = [_carry_checked(c, active) for c in candidates]
        return await self.add_items(
            ctx,
            candidates,
            meal_plan_id=meal_plan_id,
            supersede=True,
        )

    async def toggle_item(self, ctx: UserContext, item_id: str) -> ShoppingList | None:
        active = await self.store.get_active(ctx.household_key)
        if active is None:
            return None
        return await self._save(aggregator.toggle_checked(active, item_id))

    async def remove_item(self, ctx: UserContext, item_id: str) -> ShoppingList | None:
        active = await self.store.get_active(ctx.household_key)
        if active is None:
            return None
        return await self._save(aggregator.remove_item(active, item_id))

    async def mark_completed(self, ctx: UserContext) -> ShoppingList | None:
        """Check out the active list. Afterwards the household has no active list."""
        active = await self.store.get_active(ctx.household_key)
        if active is None:
            return None
        completed = await self._save(aggregator.mark_completed(active))
        logger.info(f"Shopping list {completed.id} completed, total {completed.total_price:.2f}")
        return completed

    async def clear(self, ctx: UserContext) -> ShoppingList | None:
        """Abandon the active list by deleting it. Returns the deleted list."""
        active = await self.store.get_active(ctx.household_key)
        if active is None:
            return None
        await self.store.delete(active.id)
        logger.info(f"Shopping list {active.id} abandoned")
        return active


def _carry_checked(candidate: CandidateItem, previous: ShoppingList) -> CandidateItem:
    existing = previous.get_item(candidate.id)
    if candidate.checked is not None or existing is None:
        return candidate
    return replace(candidate, checked=existing.checked)
