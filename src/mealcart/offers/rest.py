"""Offer source backed by a PostgREST-compatible managed backend."""

from collections.abc import Callable, Sequence
from datetime import date
from typing import Any, TypeVar

import httpx

from mealcart.config import get_settings
from mealcart.errors import SourceUnavailable
from mealcart.logging_config import get_logger
from mealcart.offers.filters import filter_eligible_offers
from mealcart.offers.models import UNKNOWN_CHAIN_NAME, Offer, PantryStaple, StapleCategory
from mealcart.offers.sources import OfferSource, StapleSource

logger = get_logger(__name__)

T = TypeVar("T")

OFFER_COLUMNS = (
    "id,product_name,offer_text,brand,category,unit,quantity,"
    "offer_price_dkk,original_price_dkk,valid_from,valid_until,image_url,"
    "chain_id,is_active,store_chains(name)"
)


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    return date.fromisoformat(value[:10])


def offer_from_row(row: dict[str, Any]) -> Offer:
    """Parse one offer row as returned by the REST API."""
    chain = row.get("store_chains") or {}
    return Offer(
        id=str(row["id"]),
        product_name=row.get("product_name") or "",
        chain_id=row.get("chain_id"),
        chain_name=chain.get("name") or UNKNOWN_CHAIN_NAME,
        offer_price=row.get("offer_price_dkk"),
        original_price=row.get("original_price_dkk"),
        valid_from=_parse_date(row.get("valid_from")),
        valid_until=_parse_date(row.get("valid_until")),
        is_active=bool(row.get("is_active", True)),
        offer_text=row.get("offer_text"),
        brand=row.get("brand"),
        category=row.get("category"),
        unit=row.get("unit"),
        quantity=row.get("quantity"),
        image_url=row.get("image_url"),
    )


def staple_from_row(row: dict[str, Any]) -> PantryStaple:
    return PantryStaple(
        id=str(row["id"]),
        name=row.get("name") or "",
        category=StapleCategory.parse(row.get("category")),
        icon=row.get("icon"),
    )


class RestOfferSource(OfferSource, StapleSource):
    """Reads offers, chain preferences and staples over HTTP.

    One request per call, no retries. Transport failures, timeouts and error
    statuses surface as SourceUnavailable.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.offers_api_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.offers_api_key
        self.timeout = timeout or settings.offers_api_timeout
        self._client = client

    @property
    def name(self) -> str:
        return "rest"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json", "User-Agent": "Mealcart/1.0"}
            if self.api_key:
                headers["apikey"] = self.api_key
                headers["Authorization"] = f"Bearer {self.api_key}"
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout), headers=headers)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _get(self, table: str, params: dict[str, str]) -> list[dict[str, Any]]:
        url = f"{self.base_url}/{table}"
        client = await self._get_client()

        try:
            response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise SourceUnavailable(f"Request to {table} failed", source=self.name, cause=e) from e

        if response.status_code >= 400:
            detail = response.text[:500] if response.text else "No details"
            logger.error(f"API error {response.status_code} for {url}: {detail}")
            raise SourceUnavailable(
                f"{table} request failed with status {response.status_code}",
                source=self.name,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SourceUnavailable(
                f"Invalid JSON from {table}", source=self.name, cause=e
            ) from e

        if not isinstance(data, list):
            raise SourceUnavailable(f"Unexpected payload from {table}", source=self.name)
        return data

    def _parse_rows(
        self, table: str, rows: list[dict[str, Any]], parse: Callable[[dict[str, Any]], T]
    ) -> list[T]:
        """Parse every row, treating a malformed one like an unreachable source."""
        try:
            return [parse(row) for row in rows]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Malformed row from {table}: {e!r}")
            raise SourceUnavailable(
                f"Malformed row from {table}", source=self.name, cause=e
            ) from e

    async def fetch_offers(self, chain_ids: Sequence[str], as_of: date) -> list[Offer]:
        if not chain_ids:
            return []

        day = as_of.isoformat()
        rows = await self._get(
            "offers",
            {
                "select": OFFER_COLUMNS,
                "chain_id": f"in.({','.join(chain_ids)})",
                "is_active": "eq.true",
                "valid_from": f"lte.{day}",
                "valid_until": f"gte.{day}",
                "order": "offer_price_dkk.asc.nullslast,id.asc",
            },
        )

        # Server ordering and filtering are not trusted for determinism
        offers = filter_eligible_offers(
            self._parse_rows("offers", rows, offer_from_row), chain_ids, as_of
        )
        logger.info(f"Fetched {len(offers)} offers for {len(chain_ids)} chains on {as_of}")
        return offers

    async def fetch_preferred_chain_ids(self, user_id: str) -> list[str]:
        rows = await self._get(
            "user_preferred_chains",
            {"select": "chain_id", "user_id": f"eq.{user_id}"},
        )
        chain_ids = self._parse_rows("user_preferred_chains", rows, lambda r: r.get("chain_id"))
        return [chain_id for chain_id in chain_ids if chain_id]

    async def fetch_staples(self) -> list[PantryStaple]:
        rows = await self._get(
            "pantry_staples",
            {"select": "*", "order": "category.asc,name.asc"},
        )
        return self._parse_rows("pantry_staples", rows, staple_from_row)
