"""Tests for offer eligibility filtering and ordering."""

from datetime import date

import pytest

from mealcart.offers.filters import (
    filter_eligible_offers,
    is_offer_eligible,
    offer_sort_key,
    sort_offers,
)
from mealcart.offers.sources import InMemoryOfferSource
from mealcart.schemas import UserContext


class TestIsOfferEligible:
    """Tests for the single-offer eligibility predicate."""

    def test_active_offer_in_window(self, make_offer):
        offer = make_offer("o1", "Smør", 20.0)
        assert is_offer_eligible(offer, {"netto"}, date(2024, 3, 14))

    def test_window_bounds_are_inclusive(self, make_offer):
        offer = make_offer("o1", "Smør", 20.0)
        assert is_offer_eligible(offer, {"netto"}, date(2024, 3, 1))
        assert is_offer_eligible(offer, {"netto"}, date(2024, 3, 31))
        assert not is_offer_eligible(offer, {"netto"}, date(2024, 2, 29))
        assert not is_offer_eligible(offer, {"netto"}, date(2024, 4, 1))

    def test_other_chain_excluded(self, make_offer):
        offer = make_offer("o1", "Smør", 20.0, chain_id="lidl")
        assert not is_offer_eligible(offer, {"netto"}, date(2024, 3, 14))

    def test_inactive_excluded(self, make_offer):
        offer = make_offer("o1", "Smør", 20.0, is_active=False)
        assert not is_offer_eligible(offer, {"netto"}, date(2024, 3, 14))

    def test_missing_validity_excluded(self, make_offer):
        offer = make_offer("o1", "Smør", 20.0, valid_from=None)
        assert not is_offer_eligible(offer, {"netto"}, date(2024, 3, 14))


class TestFilterEligibleOffers:
    """Tests for filtering an offer snapshot."""

    def test_empty_chain_set_returns_empty(self, sample_offers, shopping_date):
        assert filter_eligible_offers(sample_offers, [], shopping_date) == []

    def test_filters_and_sorts_by_price(self, sample_offers, shopping_date):
        result = filter_eligible_offers(sample_offers, ["netto", "rema1000"], shopping_date)

        assert [o.id for o in result] == ["o-salt", "o-raps", "o-olive", "o-kylling"]
        prices = [o.offer_price for o in result]
        assert prices == sorted(prices)

    def test_expired_and_inactive_dropped(self, sample_offers, shopping_date):
        result = filter_eligible_offers(sample_offers, ["netto"], shopping_date)
        ids = {o.id for o in result}
        assert "o-expired" not in ids
        assert "o-inactive" not in ids

    def test_repeated_calls_are_identical(self, sample_offers, shopping_date):
        first = filter_eligible_offers(sample_offers, ["netto", "rema1000"], shopping_date)
        second = filter_eligible_offers(
            list(reversed(sample_offers)), ["rema1000", "netto"], shopping_date
        )
        assert first == second


class TestOfferOrdering:
    """Tests for the price-ascending sort key."""

    def test_ties_broken_by_id(self, make_offer):
        offers = [make_offer("b", "Salt", 10.0), make_offer("a", "Salt", 10.0)]
        assert [o.id for o in sort_offers(offers)] == ["a", "b"]

    def test_unpriced_offers_last(self, make_offer):
        offers = [make_offer("x", "Peber", None), make_offer("y", "Peber", 30.0)]
        assert [o.id for o in sort_offers(offers)] == ["y", "x"]
        assert offer_sort_key(offers[0])[0] is True


class TestInMemoryOfferSource:
    """Tests for the in-memory offer source."""

    @pytest.mark.asyncio
    async def test_fetch_offers_for_user(self, offer_source, user, shopping_date):
        offers = await offer_source.fetch_offers_for_user(user, shopping_date)
        assert {o.chain_id for o in offers} == {"netto", "rema1000"}

    @pytest.mark.asyncio
    async def test_user_without_chains_gets_nothing(self, offer_source, shopping_date):
        offers = await offer_source.fetch_offers_for_user(
            UserContext(user_id="nobody"), shopping_date
        )
        assert offers == []

    @pytest.mark.asyncio
    async def test_staples_ordered_by_category_then_name(self, sample_staples):
        source = InMemoryOfferSource(staples=list(reversed(sample_staples)))
        staples = await source.fetch_staples()
        keys = [(s.category.value, s.name) for s in staples]
        assert keys == sorted(keys)
