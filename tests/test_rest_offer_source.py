"""Tests for the REST offer source, using an httpx mock transport."""

import json
from datetime import date

import httpx
import pytest

from mealcart.errors import SourceUnavailable
from mealcart.offers.models import StapleCategory
from mealcart.offers.rest import RestOfferSource, offer_from_row
from mealcart.schemas import UserContext

BASE_URL = "https://backend.test/rest/v1"

OFFER_ROWS = [
    {
        "id": "o2",
        "product_name": "Olivenolie",
        "chain_id": "netto",
        "offer_price_dkk": 39.0,
        "original_price_dkk": 59.0,
        "valid_from": "2024-03-01",
        "valid_until": "2024-03-31T00:00:00",
        "is_active": True,
        "store_chains": {"name": "Netto"},
    },
    {
        "id": "o1",
        "product_name": "Havsalt",
        "chain_id": "rema1000",
        "offer_price_dkk": 12.0,
        "valid_from": "2024-03-01",
        "valid_until": "2024-03-31",
        "is_active": True,
        "store_chains": None,
    },
    {
        # Outside the window; the source filters locally as well
        "id": "o3",
        "product_name": "Sukker",
        "chain_id": "netto",
        "offer_price_dkk": 5.0,
        "valid_from": "2024-02-01",
        "valid_until": "2024-02-28",
        "is_active": True,
    },
]


def make_source(handler) -> RestOfferSource:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RestOfferSource(base_url=BASE_URL, api_key="", timeout=5, client=client)


class TestOfferFromRow:
    """Tests for REST row parsing."""

    def test_parses_chain_name_and_dates(self):
        offer = offer_from_row(OFFER_ROWS[0])

        assert offer.chain_name == "Netto"
        assert offer.valid_until == date(2024, 3, 31)
        assert offer.savings == 20.0

    def test_missing_chain_is_unknown(self):
        assert offer_from_row(OFFER_ROWS[1]).chain_name == "Unknown"


class TestFetchOffers:
    """Tests for offer fetching."""

    @pytest.mark.asyncio
    async def test_query_and_local_ordering(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=OFFER_ROWS)

        source = make_source(handler)
        offers = await source.fetch_offers(["netto", "rema1000"], date(2024, 3, 14))

        assert [o.id for o in offers] == ["o1", "o2"]
        params = seen[0].url.params
        assert seen[0].url.path.endswith("/offers")
        assert params["chain_id"] == "in.(netto,rema1000)"
        assert params["valid_from"] == "lte.2024-03-14"
        assert params["valid_until"] == "gte.2024-03-14"
        assert params["is_active"] == "eq.true"

    @pytest.mark.asyncio
    async def test_empty_chain_list_skips_request(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        source = make_source(handler)
        assert await source.fetch_offers([], date(2024, 3, 14)) == []

    @pytest.mark.asyncio
    async def test_offers_for_user(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/user_preferred_chains"):
                assert request.url.params["user_id"] == "eq.user-1"
                return httpx.Response(200, json=[{"chain_id": "netto"}])
            return httpx.Response(200, json=OFFER_ROWS)

        source = make_source(handler)
        offers = await source.fetch_offers_for_user(UserContext(user_id="user-1"), date(2024, 3, 14))

        assert [o.id for o in offers] == ["o2"]


class TestFailures:
    """Tests for error mapping. Nothing is retried."""

    @pytest.mark.asyncio
    async def test_server_error(self):
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(500, text="boom")

        source = make_source(handler)
        with pytest.raises(SourceUnavailable) as exc_info:
            await source.fetch_offers(["netto"], date(2024, 3, 14))

        assert exc_info.value.source == "rest"
        assert exc_info.value.retryable is True
        assert calls == 1

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        source = make_source(handler)
        with pytest.raises(SourceUnavailable) as exc_info:
            await source.fetch_preferred_chain_ids("user-1")

        assert isinstance(exc_info.value.cause, httpx.ReadTimeout)

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>")

        source = make_source(handler)
        with pytest.raises(SourceUnavailable):
            await source.fetch_staples()

    @pytest.mark.asyncio
    async def test_non_list_payload(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=json.dumps({"message": "nope"}).encode())

        source = make_source(handler)
        with pytest.raises(SourceUnavailable):
            await source.fetch_offers(["netto"], date(2024, 3, 14))

    @pytest.mark.asyncio
    async def test_malformed_offer_row(self):
        rows = [{"product_name": "Salt", "chain_id": "netto", "valid_from": "not-a-date"}]

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=json.dumps(rows).encode())

        source = make_source(handler)
        with pytest.raises(SourceUnavailable) as exc_info:
            await source.fetch_offers(["netto"], date(2024, 3, 14))

        assert exc_info.value.source == "rest"
        assert isinstance(exc_info.value.cause, (KeyError, ValueError))

    @pytest.mark.asyncio
    async def test_bad_date_in_offer_row(self):
        rows = [dict(OFFER_ROWS[0], valid_until="31/03/2024")]

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=json.dumps(rows).encode())

        source = make_source(handler)
        with pytest.raises(SourceUnavailable) as exc_info:
            await source.fetch_offers(["netto"], date(2024, 3, 14))

        assert isinstance(exc_info.value.cause, ValueError)

    @pytest.mark.asyncio
    async def test_malformed_staple_and_chain_rows(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/pantry_staples"):
                return httpx.Response(200, content=json.dumps([{"name": "Salt"}]).encode())
            return httpx.Response(200, content=json.dumps(["netto"]).encode())

        source = make_source(handler)
        with pytest.raises(SourceUnavailable) as exc_info:
            await source.fetch_staples()
        assert isinstance(exc_info.value.cause, KeyError)

        with pytest.raises(SourceUnavailable):
            await source.fetch_preferred_chain_ids("user-1")


class TestFetchStaples:
    """Tests for staple reference data."""

    @pytest.mark.asyncio
    async def test_parses_categories(self):
        rows = [
            {"id": 1, "name": "Salt", "category": "krydderier", "icon": "🧂"},
            {"id": 2, "name": "Olie", "category": "oil_fat"},
            {"id": 3, "name": "Gær", "category": None},
        ]

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["order"] == "category.asc,name.asc"
            return httpx.Response(200, json=rows)

        source = make_source(handler)
        staples = await source.fetch_staples()

        assert [s.id for s in staples] == ["1", "2", "3"]
        assert [s.category for s in staples] == [
            StapleCategory.SPICES,
            StapleCategory.OIL_FAT,
            StapleCategory.OTHER,
        ]

    @pytest.mark.asyncio
    async def test_close(self):
        source = make_source(lambda request: httpx.Response(200, json=[]))
        await source.fetch_staples()
        await source.close()
        assert source._client is None
