"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from mealcart.database import Base
from mealcart.offers.models import Offer, PantryStaple, StapleCategory
from mealcart.offers.sources import InMemoryOfferSource
from mealcart.schemas import UserContext
from mealcart.storage.memory import InMemoryDailyMealLogStore, InMemoryShoppingListStore

SHOPPING_DATE = date(2024, 3, 14)

# =============================================================================
# Offer and Staple Fixtures
# =============================================================================


def build_offer(
    offer_id: str,
    product_name: str,
    offer_price: float | None,
    chain_id: str = "netto",
    **kwargs,
) -> Offer:
    """Build an offer valid for the whole of March 2024 unless overridden."""
    defaults = {
        "chain_name": chain_id.capitalize(),
        "valid_from": date(2024, 3, 1),
        "valid_until": date(2024, 3, 31),
        "is_active": True,
    }
    defaults.update(kwargs)
    return Offer(
        id=offer_id,
        product_name=product_name,
        chain_id=chain_id,
        offer_price=offer_price,
        **defaults,
    )


@pytest.fixture
def make_offer():
    """Factory for offers valid for the whole of March 2024."""
    return build_offer


@pytest.fixture
def shopping_date() -> date:
    return SHOPPING_DATE


@pytest.fixture
def sample_offers() -> list[Offer]:
    """Offers across three chains, in no particular order."""
    return [
        build_offer("o-olive", "Olivenolie Ekstra Jomfru", 39.0, original_price=59.0),
        build_offer("o-salt", "Havsalt 500g", 12.0, chain_id="rema1000", original_price=18.0),
        build_offer("o-mel", "Hvedemel 2 kg", 10.0, chain_id="foetex"),
        build_offer("o-raps", "Rapsolie", 19.0, chain_id="rema1000"),
        build_offer(
            "o-kylling",
            "Kyllingebryst",
            45.0,
            original_price=65.0,
            offer_text="Dansk kylling 800 g",
        ),
        build_offer("o-expired", "Salt flager", 5.0, valid_until=date(2024, 3, 10)),
        build_offer("o-inactive", "Sukker", 8.0, is_active=False),
    ]


@pytest.fixture
def sample_staples() -> list[PantryStaple]:
    return [
        PantryStaple(id="s-salt", name="Salt", category=StapleCategory.SPICES, icon="🧂"),
        PantryStaple(id="s-olie", name="Olie", category=StapleCategory.OIL_FAT),
        PantryStaple(id="s-mel", name="Hvedemel", category=StapleCategory.BAKING),
        PantryStaple(id="s-tomat", name="Hakkede tomater", category=StapleCategory.PRESERVES),
    ]


@pytest.fixture
def user() -> UserContext:
    return UserContext(user_id="user-1")


@pytest.fixture
def offer_source(sample_offers, sample_staples) -> InMemoryOfferSource:
    return InMemoryOfferSource(
        offers=sample_offers,
        staples=sample_staples,
        preferred_chains={"user-1": ["netto", "rema1000"]},
    )


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def list_store() -> InMemoryShoppingListStore:
    return InMemoryShoppingListStore()


@pytest.fixture
def log_store() -> InMemoryDailyMealLogStore:
    return InMemoryDailyMealLogStore()


@pytest_asyncio.fixture
async def sqlite_session():
    """In-memory SQLite session with all tables created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()
