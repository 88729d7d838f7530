"""Shopping list data classes."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class PriceSource(str, Enum):
    """Where an item's selected price comes from."""

    OFFER = "offer"
    ESTIMATE = "estimate"
    MANUAL = "manual"
    UNPRICED = "unpriced"


@dataclass(frozen=True)
class ShoppingListItem:
    """A priced, checkable line on a shopping list."""

    id: str
    name: str
    amount: str = "1"
    unit: str = ""
    checked: bool = False
    price: float | None = None
    offer_price: float | None = None
    store: str | None = None
    offer_id: str | None = None
    is_estimate: bool = False

    def __post_init__(self) -> None:
        # An offer price is never an estimate
        if self.offer_price is not None and self.is_estimate:
            object.__setattr__(self, "is_estimate", False)

    @property
    def price_source(self) -> PriceSource:
        """Provenance of the selected price."""
        if self.offer_price is not None:
            return PriceSource.OFFER
        if self.price is not None:
            return PriceSource.ESTIMATE if self.is_estimate else PriceSource.MANUAL
        return PriceSource.UNPRICED

    @property
    def selected_price(self) -> float:
        """Price counted towards the list total: offer, then price, then 0."""
        if self.offer_price is not None:
            return self.offer_price
        if self.price is not None:
            return self.price
        return 0.0

    @property
    def is_priced(self) -> bool:
        """Check if the item contributes a price to the total."""
        return self.price_source is not PriceSource.UNPRICED

    @property
    def savings(self) -> float:
        """Calculate savings from an offer against the regular price."""
        if self.price is not None and self.offer_price is not None:
            return self.price - self.offer_price
        return 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
            "unit": self.unit,
            "checked": self.checked,
            "price": self.price,
            "offer_price": self.offer_price,
            "store": self.store,
            "offer_id": self.offer_id,
            "is_estimate": self.is_estimate,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShoppingListItem":
        """Parse a stored item; camelCase keys from older rows are accepted."""
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            amount=str(data.get("amount", "1")),
            unit=data.get("unit") or "",
            checked=bool(data.get("checked", False)),
            price=data.get("price"),
            offer_price=data.get("offer_price", data.get("offerPrice")),
            store=data.get("store"),
            offer_id=data.get("offer_id", data.get("offerId")),
            is_estimate=bool(data.get("is_estimate", data.get("isEstimate", False))),
        )


@dataclass(frozen=True)
class CandidateItem:
    """
    Incoming item for add_or_update_items.

    Same fields as ShoppingListItem, except that ``checked`` is optional:
    None keeps the checked state of an existing item with the same id.
    """

    id: str
    name: str
    amount: str = "1"
    unit: str = ""
    checked: bool | None = None
    price: float | None = None
    offer_price: float | None = None
    store: str | None = None
    offer_id: str | None = None
    is_estimate: bool = False

    def to_item(self, existing: ShoppingListItem | None = None) -> ShoppingListItem:
        """Build the stored item, inheriting ``checked`` from ``existing`` when unset."""
        if self.checked is not None:
            checked = self.checked
        else:
            checked = existing.checked if existing is not None else False
        return ShoppingListItem(
            id=self.id,
            name=self.name,
            amount=self.amount,
            unit=self.unit,
            checked=checked,
            price=self.price,
            offer_price=self.offer_price,
            store=self.store,
            offer_id=self.offer_id,
            is_estimate=self.is_estimate,
        )


@dataclass(frozen=True)
class ShoppingList:
    """A household's shopping list. ``total_price`` is always derived from items."""

    household_id: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    items: tuple[ShoppingListItem, ...] = ()
    completed: bool = False
    meal_plan_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_price(self) -> float:
        """Sum of the selected price of every item."""
        return sum(item.selected_price for item in self.items)

    @property
    def item_ids(self) -> list[str]:
        return [item.id for item in self.items]

    def get_item(self, item_id: str) -> ShoppingListItem | None:
        """Find an item by id."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "household_id": self.household_id,
            "items": [item.to_dict() for item in self.items],
            "total_price": self.total_price,
            "completed": self.completed,
            "meal_plan_id": self.meal_plan_id,
            "created_at": self.created_at.isoformat(),
        }
