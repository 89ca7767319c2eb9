"""Synthetic quote source generating random prices.

Used during development to avoid spending CoinMarketCap API calls.
"""

import random
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Optional

from app.crypto_alerts.application.interfaces.quote_source import EntryListing, QuoteSource
from app.crypto_alerts.infrastructure.external.coinmarketcap_client import (
    ASSET_URL_TEMPLATE,
    LOGO_URL_TEMPLATE,
)


@dataclass(frozen=True)
class SyntheticAsset:
    """Static description of a generated asset.

    Prices are drawn uniformly in [min_quote, min_quote + variable_quote).
    """

    id: int
    name: str
    symbol: str
    slug: str
    min_quote: float
    variable_quote: float


DEFAULT_ASSETS: tuple[SyntheticAsset, ...] = (
    SyntheticAsset(1, "Bitcoin", "BTC", "bitcoin", 40000, 5000),
    SyntheticAsset(1027, "Ethereum", "ETH", "ethereum", 3000, 200),
    SyntheticAsset(825, "Tether", "USDT", "tether", 0.8, 0.2),
    SyntheticAsset(1839, "Binance Coin", "BNB", "binance-coin", 350, 50),
)


class SyntheticQuoteSource(QuoteSource):
    """Quote source serving a fixed catalog and random prices."""

    def __init__(
        self,
        quotation_symbol: str = "USDT",
        assets: Iterable[SyntheticAsset] = DEFAULT_ASSETS,
        list_interval: timedelta = timedelta(seconds=1),
        quote_interval: timedelta = timedelta(seconds=1),
        rng: Optional[random.Random] = None,
    ) -> None:
        self._quotation_symbol = quotation_symbol
        self._assets = [a for a in assets if a.symbol != quotation_symbol]
        self._list_interval = list_interval
        self._quote_interval = quote_interval
        self._rng = rng or random.Random()

    @property
    def name(self) -> str:
        return "test"

    @property
    def title(self) -> str:
        return "Test data"

    @property
    def list_interval(self) -> timedelta:
        return self._list_interval

    @property
    def quote_interval(self) -> timedelta:
        return self._quote_interval

    async def list_entries(self) -> list[EntryListing]:
        return [
            EntryListing(
                symbol=asset.symbol,
                name=asset.name,
                url=ASSET_URL_TEMPLATE.format(slug=asset.slug),
                logo=LOGO_URL_TEMPLATE.format(id=asset.id),
            )
            for asset in self._assets
        ]

    async def fetch_quotes(self, symbols: Iterable[str]) -> dict[str, Decimal]:
        wanted = set(symbols)
        quotes: dict[str, Decimal] = {}
        for asset in self._assets:
            if asset.symbol not in wanted:
                continue
            price = asset.min_quote + self._rng.random() * asset.variable_quote
            quotes[asset.symbol] = Decimal(str(round(price, 8)))
        return quotes

    async def close(self) -> None:
        return None
