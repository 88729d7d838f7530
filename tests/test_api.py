"""API tests with in-memory sources and stores swapped in for the database."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from mealcart.config import get_settings
from mealcart.dependencies import (
    get_daily_log_store,
    get_inventory_source,
    get_offer_source,
    get_shopping_list_store,
    get_staple_source,
)
from mealcart.errors import SourceUnavailable
from mealcart.main import app
from mealcart.schemas import InventoryItem
from mealcart.shopping.models import ShoppingList

HEADERS = {"X-User-Id": "user-1"}


@pytest.fixture
def client(offer_source, list_store, log_store):
    app.dependency_overrides[get_offer_source] = lambda: offer_source
    app.dependency_overrides[get_staple_source] = lambda: offer_source
    app.dependency_overrides[get_inventory_source] = lambda: offer_source
    app.dependency_overrides[get_shopping_list_store] = lambda: list_store
    app.dependency_overrides[get_daily_log_store] = lambda: log_store
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Offers and Staples
# =============================================================================


class TestOffersApi:
    """Tests for offer and staple endpoints."""

    def test_requires_user_header(self, client):
        response = client.get("/api/v1/offers", params={"date": "2024-03-14"})
        assert response.status_code == 401

    def test_list_offers(self, client):
        response = client.get("/api/v1/offers", params={"date": "2024-03-14"}, headers=HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["as_of"] == "2024-03-14"
        assert data["total"] == 4
        assert data["currency"] == "DKK"
        assert [o["id"] for o in data["offers"]] == ["o-salt", "o-raps", "o-olive", "o-kylling"]

    def test_source_unavailable_is_503(self, client, offer_source):
        offer_source.fetch_offers = AsyncMock(
            side_effect=SourceUnavailable("down", source="memory")
        )

        response = client.get("/api/v1/offers", params={"date": "2024-03-14"}, headers=HEADERS)

        assert response.status_code == 503
        assert response.json()["retryable"] is True

    def test_list_staples_grouped(self, client):
        response = client.get("/api/v1/pantry-staples")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 4
        assert [g["category"] for g in data["groups"]] == [
            "baking",
            "oil_fat",
            "preserves",
            "spices",
        ]
        assert data["groups"][0]["label"] == "Baking & Basics"

    def test_staple_offers(self, client):
        response = client.get(
            "/api/v1/pantry-staples/offers", params={"date": "2024-03-14"}, headers=HEADERS
        )

        assert response.status_code == 200
        matches = {m["staple"]["id"]: m["offer"]["id"] for m in response.json()["matches"]}
        assert matches == {"s-olie": "o-raps", "s-salt": "o-salt"}


# =============================================================================
# Shopping List
# =============================================================================


class TestShoppingListApi:
    """Tests for shopping list endpoints."""

    def test_no_active_list_is_404(self, client):
        response = client.get("/api/v1/shopping-list", headers=HEADERS)
        assert response.status_code == 404

    def test_add_toggle_remove(self, client):
        response = client.post(
            "/api/v1/shopping-list/items",
            json={
                "items": [
                    {"id": "a", "name": "Mælk", "price": 12.0, "is_estimate": True},
                    {"id": "b", "name": "Smør", "price": 25.0, "offer_price": 18.0},
                ]
            },
            headers=HEADERS,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["total_price"] == 30.0
        assert data["total_savings"] == 7.0

        response = client.post("/api/v1/shopping-list/items/a/toggle", headers=HEADERS)
        assert response.json()["items"][0]["checked"] is True

        response = client.delete("/api/v1/shopping-list/items/b", headers=HEADERS)
        assert [i["id"] for i in response.json()["items"]] == ["a"]
        assert response.json()["total_price"] == 12.0

    def test_staple_offers_added_once(self, client):
        for _ in range(2):
            response = client.post(
                "/api/v1/shopping-list/staple-offers",
                json={"shopping_date": "2024-03-14"},
                headers=HEADERS,
            )
            assert response.status_code == 200

        items = response.json()["items"]
        assert [i["id"] for i in items] == ["staple-s-olie", "staple-s-salt"]

    def test_from_meal_plan(self, client, list_store):
        plan = {
            "recipes": [
                {
                    "id": "r1",
                    "title": "Kylling med ris",
                    "meal_type": "dinner",
                    "ingredients": [
                        {"name": "Kyllingebryst", "amount": "400", "unit": "g"},
                        {"name": "Ris", "amount": "250", "unit": "g"},
                    ],
                }
            ],
            "recipes_needed": 1,
        }

        response = client.post(
            "/api/v1/shopping-list/from-meal-plan",
            json={
                "plan": plan,
                "meal_plan_id": "plan-1",
                "shopping_date": "2024-03-14",
                "inventory": [{"ingredient_name": "ris", "quantity": 500, "unit": "g"}],
            },
            headers=HEADERS,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["meal_plan_id"] == "plan-1"
        assert [i["name"] for i in data["items"]] == ["Kyllingebryst"]
        assert data["items"][0]["offer_id"] == "o-kylling"
        assert data["total_price"] == 45.0

    def test_from_meal_plan_uses_stored_inventory(self, client, offer_source):
        offer_source.inventory = {
            "user-1": [
                InventoryItem(ingredient_name="Ris", quantity=1000, unit="g"),
                InventoryItem(ingredient_name="Kyllingebryst", quantity=400, is_depleted=True),
            ]
        }
        plan = {
            "recipes": [
                {
                    "id": "r1",
                    "title": "Kylling med ris",
                    "ingredients": [
                        {"name": "Kyllingebryst", "amount": "400", "unit": "g"},
                        {"name": "Ris", "amount": "250", "unit": "g"},
                    ],
                }
            ]
        }

        response = client.post(
            "/api/v1/shopping-list/from-meal-plan",
            json={"plan": plan, "meal_plan_id": "plan-1", "shopping_date": "2024-03-14"},
            headers=HEADERS,
        )

        assert response.status_code == 200
        assert [i["name"] for i in response.json()["items"]] == ["Kyllingebryst"]

    def test_currency_follows_settings(self, client, monkeypatch):
        monkeypatch.setenv("CURRENCY", "EUR")
        get_settings.cache_clear()
        try:
            response = client.post(
                "/api/v1/shopping-list/items",
                json={"items": [{"id": "a", "name": "Mælk", "price": 12.0}]},
                headers=HEADERS,
            )
        finally:
            get_settings.cache_clear()

        assert response.json()["currency"] == "EUR"

    def test_completed_list_rejects_changes(self, client, list_store):
        client.post(
            "/api/v1/shopping-list/items",
            json={"items": [{"id": "a", "name": "Mælk"}]},
            headers=HEADERS,
        )
        response = client.post("/api/v1/shopping-list/complete", headers=HEADERS)
        assert response.status_code == 200
        assert response.json()["completed"] is True

        # The completed list is no longer active
        assert client.get("/api/v1/shopping-list", headers=HEADERS).status_code == 404

    def test_invalid_state_is_409(self, client, list_store):
        completed = ShoppingList(household_id="user-1", completed=True)
        list_store.get_active = AsyncMock(return_value=completed)

        response = client.post("/api/v1/shopping-list/items/a/toggle", headers=HEADERS)

        assert response.status_code == 409

    def test_clear(self, client):
        client.post(
            "/api/v1/shopping-list/items",
            json={"items": [{"id": "a", "name": "Mælk"}]},
            headers=HEADERS,
        )

        assert client.delete("/api/v1/shopping-list", headers=HEADERS).status_code == 204
        assert client.get("/api/v1/shopping-list", headers=HEADERS).status_code == 404


# =============================================================================
# Daily Meal Log
# =============================================================================


class TestDailyLogApi:
    """Tests for daily meal log endpoints."""

    def test_missing_log_is_404(self, client):
        response = client.get("/api/v1/daily-log/2024-03-14", headers=HEADERS)
        assert response.status_code == 404

    def test_skip_then_complete(self, client):
        client.post("/api/v1/daily-log/2024-03-14/dinner/toggle-skipped", headers=HEADERS)
        response = client.post(
            "/api/v1/daily-log/2024-03-14/dinner/toggle-completed", headers=HEADERS
        )

        assert response.status_code == 200
        data = response.json()
        assert data["slots"]["dinner"] == "completed"
        assert data["dinner_completed"] is True
        assert data["dinner_skipped"] is False

    def test_unknown_slot_rejected(self, client):
        response = client.post(
            "/api/v1/daily-log/2024-03-14/snack/toggle-completed", headers=HEADERS
        )
        assert response.status_code == 422

    def test_photo_and_extra_calories(self, client):
        response = client.post(
            "/api/v1/daily-log/2024-03-14/photos",
            json={"url": "https://img/1.jpg", "estimated_calories": 300},
            headers=HEADERS,
        )
        assert response.status_code == 200
        assert len(response.json()["food_photos"]) == 1

        response = client.put(
            "/api/v1/daily-log/2024-03-14/extra-calories",
            json={"calories": 150, "description": "Kage"},
            headers=HEADERS,
        )
        data = response.json()
        assert data["extra_calories"] == 150
        assert data["extra_description"] == "Kage"
        assert data["slots"] == {"breakfast": "pending", "lunch": "pending", "dinner": "pending"}

    def test_negative_calories_rejected(self, client):
        response = client.put(
            "/api/v1/daily-log/2024-03-14/extra-calories",
            json={"calories": -5},
            headers=HEADERS,
        )
        assert response.status_code == 422
