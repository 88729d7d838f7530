"""Build shopping list candidates from meal plans and staple offers."""

import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from mealcart.config import get_settings
from mealcart.logging_config import get_logger
from mealcart.offers.models import Offer, StapleOfferMatch
from mealcart.schemas import InventoryItem, MealRecipe
from mealcart.shopping.models import CandidateItem
from mealcart.shopping.pricing import find_estimated_price

logger = get_logger(__name__)

# Namespace for deterministic item ids; re-running a build yields the same ids
ITEM_ID_NAMESPACE = uuid.UUID("6f1c1f0e-3c2a-4b8e-9a57-2d1d8f0c4a11")


@dataclass
class AggregatedIngredient:
    """An ingredient summed across all recipes of a plan."""

    key: str
    amount: float
    unit: str
    sources: list[str] = field(default_factory=list)


def ingredient_key(name: str) -> str:
    """Normalize an ingredient name for aggregation and matching."""
    return name.casefold().strip()


def parse_amount(value: str | float | None) -> float:
    """
    Parse a recipe amount, defaulting to 1.

    Leading numbers are read as far as they go, so "2.5 dl" gives 2.5 and
    "1,5" gives 1.5.
    """
    if value is None:
        return 1.0
    if isinstance(value, (int, float)):
        return float(value) or 1.0

    text = value.strip().replace(",", ".")
    number = ""
    for char in text:
        if char.isdigit() or (char == "." and "." not in number):
            number += char
        else:
            break
    try:
        parsed = float(number)
    except ValueError:
        return 1.0
    return parsed or 1.0


def format_amount(amount: float) -> str:
    """Format an amount without trailing zeros ("2", "1.5")."""
    return f"{amount:g}"


def item_id_for(prefix: str, key: str) -> str:
    """Stable item id for a given source and key."""
    return str(uuid.uuid5(ITEM_ID_NAMESPACE, f"{prefix}:{key}"))


def display_name(key: str) -> str:
    return key[:1].upper() + key[1:]


def aggregate_recipe_ingredients(
    recipes: Iterable[MealRecipe],
    default_unit: str | None = None,
) -> dict[str, AggregatedIngredient]:
    """
    Sum ingredient amounts across recipes, keyed by normalized name.

    The unit of the first occurrence is kept; amounts are added as-is.
    """
    unit_fallback = default_unit or get_settings().default_unit
    aggregated: dict[str, AggregatedIngredient] = {}

    for recipe in recipes:
        for ingredient in recipe.ingredients:
            key = ingredient_key(ingredient.name)
            if not key:
                continue
            amount = parse_amount(ingredient.amount)
            existing = aggregated.get(key)
            if existing is not None:
                existing.amount += amount
                if recipe.title not in existing.sources:
                    existing.sources.append(recipe.title)
            else:
                aggregated[key] = AggregatedIngredient(
                    key=key,
                    amount=amount,
                    unit=ingredient.unit or unit_fallback,
                    sources=[recipe.title],
                )

    return aggregated


def find_ingredient_offer(key: str, offers: Sequence[Offer]) -> Offer | None:
    """
    Find the first offer for an ingredient.

    An offer matches when its product name or offer text contains the
    ingredient, or when the first word of its product name appears in the
    ingredient ("Kyllingebryst" offer for "kyllingebryst i strimler").
    Offers without an offer price are skipped.
    """
    for offer in offers:
        if offer.offer_price is None:
            continue
        product = (offer.product_name or "").casefold()
        text = (offer.offer_text or "").casefold()
        if key in f"{product} {text}":
            return offer
        words = (product or text).split()
        if words and words[0] in key:
            return offer
    return None


def build_items_from_meal_plan(
    recipes: Iterable[MealRecipe],
    offers: Sequence[Offer] = (),
    inventory: Iterable[InventoryItem] = (),
) -> list[CandidateItem]:
    """
    Turn a meal plan's recipes into priced shopping list candidates.

    Args:
        recipes: Recipes chosen for the plan.
        offers: Eligible offers, price-ascending.
        inventory: Household stock; covered ingredients are skipped and
            partially covered ones reduced.

    Returns:
        One candidate per ingredient still to buy.
    """
    stock: dict[str, float] = {}
    for item in inventory:
        if not item.is_depleted:
            stock[ingredient_key(item.ingredient_name)] = item.quantity

    candidates: list[CandidateItem] = []
    skipped = 0
    for key, ingredient in aggregate_recipe_ingredients(recipes).items():
        needed = ingredient.amount
        on_hand = stock.get(key)
        if on_hand is not None:
            if on_hand >= needed:
                skipped += 1
                continue
            needed -= on_hand

        common = {
            "id": item_id_for("ingredient", key),
            "name": display_name(key),
            "amount": format_amount(needed),
            "unit": ingredient.unit,
        }

        offer = find_ingredient_offer(key, offers)
        if offer is not None:
            candidates.append(
                CandidateItem(
                    **common,
                    offer_price=offer.offer_price,
                    price=offer.original_price,
                    offer_id=offer.id,
                    store=offer.chain_name,
                    is_estimate=False,
                )
            )
            continue

        estimate = find_estimated_price(key)
        candidates.append(
            CandidateItem(
                **common,
                price=estimate,
                is_estimate=estimate is not None,
            )
        )

    logger.info(
        f"Built {len(candidates)} shopping items from meal plan "
        f"({skipped} covered by inventory)"
    )
    return candidates


def build_items_from_staple_offers(
    matches: Iterable[StapleOfferMatch],
) -> list[CandidateItem]:
    """Candidates for matched staple offers, one per staple with a stable id."""
    return [
        CandidateItem(
            id=f"staple-{match.staple.id}",
            name=match.staple.name,
            amount="1",
            unit=match.offer.unit or get_settings().default_unit,
            offer_price=match.offer.offer_price,
            price=match.offer.original_price,
            store=match.offer.chain_name,
            offer_id=match.offer.id,
            is_estimate=False,
        )
        for match in matches
    ]
