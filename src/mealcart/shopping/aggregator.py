"""Shopping list aggregation.

Every operation takes a ShoppingList snapshot and returns a new one; nothing
here touches storage. ``total_price`` is a derived property of the list, so it
always equals the sum of the items' selected prices.
"""

from collections.abc import Iterable
from dataclasses import replace

from mealcart.errors import InvalidState
from mealcart.logging_config import get_logger
from mealcart.shopping.models import CandidateItem, ShoppingList, ShoppingListItem

logger = get_logger(__name__)


def _ensure_open(shopping_list: ShoppingList, operation: str) -> None:
    if shopping_list.completed:
        raise InvalidState(
            f"Cannot {operation}: shopping list {shopping_list.id} is completed",
            record_id=shopping_list.id,
        )


def add_or_update_items(
    shopping_list: ShoppingList,
    candidates: Iterable[CandidateItem],
) -> ShoppingList:
    """
    Merge candidate items into a list.

    Items are keyed by id. A candidate with a known id replaces the existing
    item in place but keeps its ``checked`` flag unless the candidate sets one.
    Unknown ids are appended. Within one batch the last candidate for an id wins.

    Raises:
        InvalidState: If the list is completed.
    """
    _ensure_open(shopping_list, "add items")

    merged: dict[str, ShoppingListItem] = {item.id: item for item in shopping_list.items}
    added = updated = 0
    for candidate in candidates:
        existing = merged.get(candidate.id)
        if existing is None:
            added += 1
        else:
            updated += 1
        # dict keeps first-insertion order, so replaced items stay in place
        merged[candidate.id] = candidate.to_item(existing)

    if not added and not updated:
        return shopping_list

    logger.debug(f"List {shopping_list.id}: {added} items added, {updated} updated")
    return replace(shopping_list, items=tuple(merged.values()))


def toggle_checked(shopping_list: ShoppingList, item_id: str) -> ShoppingList:
    """Flip the checked flag of one item. Unknown ids leave the list unchanged."""
    _ensure_open(shopping_list, "toggle item")

    if shopping_list.get_item(item_id) is None:
        logger.debug(f"Toggle on unknown item {item_id} in list {shopping_list.id}")
        return shopping_list

    items = tuple(
        replace(item, checked=not item.checked) if item.id == item_id else item
        for item in shopping_list.items
    )
    return replace(shopping_list, items=items)


def remove_item(shopping_list: ShoppingList, item_id: str) -> ShoppingList:
    """Drop one item. Unknown ids leave the list unchanged."""
    _ensure_open(shopping_list, "remove item")

    items = tuple(item for item in shopping_list.items if item.id != item_id)
    if len(items) == len(shopping_list.items):
        return shopping_list
    return replace(shopping_list, items=items)


def mark_completed(shopping_list: ShoppingList) -> ShoppingList:
    """Check out the list. There is no way back to an open list."""
    _ensure_open(shopping_list, "complete list")
    return replace(shopping_list, completed=True)


def clear(shopping_list: ShoppingList) -> ShoppingList:
    """Remove every item from the list."""
    _ensure_open(shopping_list, "clear list")
    return replace(shopping_list, items=())


def total_savings(shopping_list: ShoppingList) -> float:
    """Sum of offer savings over items that carry both prices."""
    return sum(item.savings for item in shopping_list.items)


def offer_items(shopping_list: ShoppingList) -> list[ShoppingListItem]:
    """Items priced from a store offer."""
    return [item for item in shopping_list.items if item.offer_price is not None]


def unpriced_items(shopping_list: ShoppingList) -> list[ShoppingListItem]:
    """Items that contribute nothing to the total."""
    return [item for item in shopping_list.items if not item.is_priced]
