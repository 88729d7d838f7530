"""Offer and pantry staple data classes."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

UNKNOWN_CHAIN_NAME = "Unknown"


class StapleCategory(str, Enum):
    """Display category of a pantry staple."""

    SPICES = "spices"
    OIL_FAT = "oil_fat"
    BAKING = "baking"
    PRESERVES = "preserves"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> "StapleCategory":
        """Map a stored category to the enum, falling back to OTHER."""
        if not value:
            return cls.OTHER
        try:
            return cls(value)
        except ValueError:
            return LEGACY_CATEGORY_NAMES.get(value, cls.OTHER)


# Danish category names found in older rows
LEGACY_CATEGORY_NAMES: dict[str, StapleCategory] = {
    "krydderier": StapleCategory.SPICES,
    "olie_fedt": StapleCategory.OIL_FAT,
    "bagning": StapleCategory.BAKING,
    "konserves": StapleCategory.PRESERVES,
    "andet": StapleCategory.OTHER,
}


@dataclass(frozen=True)
class Offer:
    """A store offer as returned by an offer source."""

    id: str
    product_name: str
    chain_id: str | None
    chain_name: str = UNKNOWN_CHAIN_NAME
    offer_price: float | None = None
    original_price: float | None = None
    valid_from: date | None = None
    valid_until: date | None = None
    is_active: bool = True

    # Descriptive fields, used by ingredient matching and display
    offer_text: str | None = None
    brand: str | None = None
    category: str | None = None
    unit: str | None = None
    quantity: float | None = None
    image_url: str | None = None

    @property
    def savings(self) -> float:
        """Difference between original and offer price, if both are known."""
        if self.original_price is not None and self.offer_price is not None:
            return self.original_price - self.offer_price
        return 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "product_name": self.product_name,
            "chain_id": self.chain_id,
            "chain_name": self.chain_name,
            "offer_price": self.offer_price,
            "original_price": self.original_price,
            "valid_from": self.valid_from.isoformat() if self.valid_from else None,
            "valid_until": self.valid_until.isoformat() if self.valid_until else None,
            "is_active": self.is_active,
            "offer_text": self.offer_text,
            "brand": self.brand,
            "category": self.category,
            "unit": self.unit,
            "quantity": self.quantity,
            "image_url": self.image_url,
        }


@dataclass(frozen=True)
class PantryStaple:
    """Recurring household consumable, independent of any meal plan."""

    id: str
    name: str
    category: StapleCategory = StapleCategory.OTHER
    icon: str | None = None


@dataclass(frozen=True)
class StapleOfferMatch:
    """A pantry staple paired with the offer chosen for it."""

    staple: PantryStaple
    offer: Offer
