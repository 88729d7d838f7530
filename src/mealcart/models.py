"""SQLAlchemy database models."""

from datetime import date, datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mealcart.database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StoreChain(Base):
    """Retail chain offers are published under."""

    __tablename__ = "store_chains"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    offers: Mapped[list["OfferRecord"]] = relationship("OfferRecord", back_populates="chain")


class OfferRecord(Base):
    """Time-bounded discounted product listing."""

    __tablename__ = "offers"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    chain_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("store_chains.id"), nullable=True
    )
    product_name: Mapped[str | None] = mapped_column(String, nullable=True)
    offer_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    brand: Mapped[str | None] = mapped_column(String, nullable=True)
    category: Mapped[str | None] = mapped_column(String, nullable=True)
    unit: Mapped[str | None] = mapped_column(String, nullable=True)
    quantity: Mapped[float | None] = mapped_column(Float, nullable=True)
    offer_price_dkk: Mapped[float | None] = mapped_column(Float, nullable=True)
    original_price_dkk: Mapped[float | None] = mapped_column(Float, nullable=True)
    valid_from: Mapped[date | None] = mapped_column(Date, nullable=True)
    valid_until: Mapped[date | None] = mapped_column(Date, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    chain: Mapped["StoreChain | None"] = relationship("StoreChain", back_populates="offers")

    __table_args__ = (
        Index("idx_offers_chain_id", "chain_id"),
        Index("idx_offers_validity", "valid_from", "valid_until"),
        Index("idx_offers_is_active", "is_active"),
    )


class PantryStapleRecord(Base):
    """Recurring household consumable (salt, oil, flour...)."""

    __tablename__ = "pantry_staples"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False, default="other")
    icon: Mapped[str | None] = mapped_column(String, nullable=True)


class UserPreferredChain(Base):
    """Chain a user wants offers from."""

    __tablename__ = "user_preferred_chains"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False)
    chain_id: Mapped[str] = mapped_column(String, ForeignKey("store_chains.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    __table_args__ = (
        UniqueConstraint("user_id", "chain_id", name="uq_user_preferred_chain"),
        Index("idx_user_preferred_chains_user_id", "user_id"),
    )


class InventoryItemRecord(Base):
    """Ingredient already in the household."""

    __tablename__ = "household_inventory"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False)
    ingredient_name: Mapped[str] = mapped_column(String, nullable=False)
    quantity: Mapped[float | None] = mapped_column(Float, nullable=True)
    unit: Mapped[str | None] = mapped_column(String, nullable=True)
    is_depleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    __table_args__ = (Index("idx_household_inventory_user_id", "user_id"),)


class ShoppingListRecord(Base):
    """Persisted shopping list; items are stored as a JSON array."""

    __tablename__ = "shopping_lists"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False)
    items: Mapped[list] = mapped_column(JSON, default=list)
    total_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    meal_plan_id: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    __table_args__ = (
        Index("idx_shopping_lists_user_id", "user_id"),
        Index("idx_shopping_lists_completed", "completed"),
    )


class DailyMealLogRecord(Base):
    """Per-day meal consumption log for one user."""

    __tablename__ = "daily_meal_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False)
    log_date: Mapped[date] = mapped_column("date", Date, nullable=False)
    meal_plan_id: Mapped[str | None] = mapped_column(String, nullable=True)
    breakfast_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    lunch_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    dinner_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    breakfast_skipped: Mapped[bool] = mapped_column(Boolean, default=False)
    lunch_skipped: Mapped[bool] = mapped_column(Boolean, default=False)
    dinner_skipped: Mapped[bool] = mapped_column(Boolean, default=False)
    food_photos: Mapped[list] = mapped_column(JSON, default=list)
    extra_calories: Mapped[int] = mapped_column(Integer, default=0)
    extra_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_daily_meal_log_user_date"),
        Index("idx_daily_meal_log_user_id", "user_id"),
    )
