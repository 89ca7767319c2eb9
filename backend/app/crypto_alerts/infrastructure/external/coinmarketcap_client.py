"""CoinMarketCap REST API client implementing the QuoteSource interface.

CoinMarketCap API documentation: https://coinmarketcap.com/api/documentation/v1/
The free plan allows 10 000 calls per month (https://coinmarketcap.com/api/pricing/):
one catalog call per day and one quote call every 5 minutes stay within budget.
"""

import logging
from collections.abc import Iterable
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import httpx

from app.crypto_alerts.application.exceptions import SourceUnavailableError
from app.crypto_alerts.application.interfaces.quote_source import EntryListing, QuoteSource

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://pro-api.coinmarketcap.com"

# Default timeout for HTTP requests
DEFAULT_TIMEOUT_SECONDS = 10.0

# ~31 catalog calls and ~8928 quote calls per month
DEFAULT_LIST_INTERVAL = timedelta(days=1)
DEFAULT_QUOTE_INTERVAL = timedelta(minutes=5)

ASSET_URL_TEMPLATE = "https://coinmarketcap.com/currencies/{slug}/"
LOGO_URL_TEMPLATE = "https://s2.coinmarketcap.com/static/img/coins/64x64/{id}.png"


class CoinMarketCapClient(QuoteSource):
    """CoinMarketCap client providing the asset catalog and latest quotes.

    Prices are converted into the quotation symbol (e.g., USDT), which is
    therefore excluded from the catalog.

    Attributes:
        _client: httpx AsyncClient for making HTTP requests.
        _quotation_symbol: Currency every quote is expressed in.
    """

    def __init__(
        self,
        api_key: str,
        quotation_symbol: str = "USDT",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        list_interval: timedelta = DEFAULT_LIST_INTERVAL,
        quote_interval: timedelta = DEFAULT_QUOTE_INTERVAL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the CoinMarketCap client.

        Args:
            api_key: CoinMarketCap Pro API key.
            quotation_symbol: Currency prices are converted into.
            base_url: CoinMarketCap API base URL.
            timeout: HTTP request timeout in seconds.
            list_interval: Catalog cache lifetime.
            quote_interval: Delay between evaluation cycles.
            transport: Optional httpx transport (used by tests).
        """
        self._quotation_symbol = quotation_symbol
        self._list_interval = list_interval
        self._quote_interval = quote_interval
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={
                "X-CMC_PRO_API_KEY": api_key,
                "Accept": "application/json",
            },
            transport=transport,
        )

    @property
    def name(self) -> str:
        return "cmc"

    @property
    def title(self) -> str:
        return "CoinMarketCap"

    @property
    def list_interval(self) -> timedelta:
        return self._list_interval

    @property
    def quote_interval(self) -> timedelta:
        return self._quote_interval

    async def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        """GET a CoinMarketCap endpoint and return its ``data`` member.

        Raises:
            SourceUnavailableError: On timeout, HTTP error or unreadable body.
        """
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
            return response.json()["data"]
        except httpx.TimeoutException as e:
            logger.error(f"Timeout calling CoinMarketCap {path}")
            raise SourceUnavailableError(self.name, "timeout") from e
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error calling CoinMarketCap {path}: {e.response.status_code}")
            raise SourceUnavailableError(self.name, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Transport error calling CoinMarketCap {path}: {e}")
            raise SourceUnavailableError(self.name, str(e)) from e
        except (KeyError, ValueError) as e:
            logger.error(f"Error parsing CoinMarketCap response for {path}: {e}")
            raise SourceUnavailableError(self.name, "malformed response") from e

    async def list_entries(self) -> list[EntryListing]:
        """Fetch active cryptocurrencies for the alert symbol selection.

        Uses the /v1/cryptocurrency/map endpoint.
        """
        data = await self._get_json(
            "/v1/cryptocurrency/map",
            {"listing_status": "active", "start": 1, "limit": 5000, "aux": ""},
        )

        try:
            return [
                EntryListing(
                    symbol=cc["symbol"],
                    name=cc["name"],
                    url=ASSET_URL_TEMPLATE.format(slug=cc["slug"]),
                    logo=LOGO_URL_TEMPLATE.format(id=cc["id"]),
                )
                for cc in data
                if cc["symbol"] != self._quotation_symbol
            ]
        except (KeyError, TypeError) as e:
            logger.error(f"Unexpected CoinMarketCap map payload: {e}")
            raise SourceUnavailableError(self.name, "malformed catalog") from e

    async def fetch_quotes(self, symbols: Iterable[str]) -> dict[str, Decimal]:
        """Fetch latest quotes for the given symbols.

        Uses the /v2/cryptocurrency/quotes/latest endpoint. When several assets
        share a symbol, the first (highest ranked) one is used.
        """
        wanted = sorted(set(symbols))
        if not wanted:
            return {}

        data = await self._get_json(
            "/v2/cryptocurrency/quotes/latest",
            {"symbol": ",".join(wanted), "convert": self._quotation_symbol, "aux": ""},
        )

        quotes: dict[str, Decimal] = {}
        try:
            for listings in data.values():
                if not listings:
                    continue
                cc = listings[0]
                price = cc["quote"][self._quotation_symbol]["price"]
                if price is None:
                    logger.debug(f"No CoinMarketCap price for {cc['symbol']}")
                    continue
                quotes[cc["symbol"]] = Decimal(str(price))
        except (KeyError, TypeError, AttributeError, InvalidOperation) as e:
            logger.error(f"Unexpected CoinMarketCap quotes payload: {e}")
            raise SourceUnavailableError(self.name, "malformed quotes") from e

        logger.info(f"Fetched {len(quotes)}/{len(wanted)} quotes from CoinMarketCap")
        return quotes

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "CoinMarketCapClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
