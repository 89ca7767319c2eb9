"""Quote source interface for the asset catalog and current prices."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal


@dataclass(frozen=True)
class EntryListing:
    """One watchable asset as described by a quote source.

    Attributes:
        symbol: Ticker symbol (e.g., "BTC").
        name: Human-readable name (e.g., "Bitcoin").
        url: Reference page for the asset.
        logo: Logo image URL.
    """

    symbol: str
    name: str
    url: str
    logo: str


class QuoteSource(ABC):
    """Abstract base class for quote source implementations.

    Each provider (CoinMarketCap, the synthetic generator, ...) must implement
    this interface so the catalog and the evaluation loop can use any of them.
    Both fetch methods raise SourceUnavailableError on transport or parse
    failures instead of returning partial data.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the short identifier of this source."""
        ...

    @property
    @abstractmethod
    def title(self) -> str:
        """Return the display name of this source."""
        ...

    @property
    @abstractmethod
    def list_interval(self) -> timedelta:
        """How long a fetched catalog stays fresh."""
        ...

    @property
    @abstractmethod
    def quote_interval(self) -> timedelta:
        """Delay between two evaluation cycles."""
        ...

    @abstractmethod
    async def list_entries(self) -> list[EntryListing]:
        """Fetch the full catalog of watchable assets.

        Returns:
            Every asset the source can quote.

        Raises:
            SourceUnavailableError: If the catalog could not be fetched or parsed.
        """
        ...

    @abstractmethod
    async def fetch_quotes(self, symbols: Iterable[str]) -> dict[str, Decimal]:
        """Fetch current prices for the given symbols.

        Args:
            symbols: Symbols to price.

        Returns:
            Mapping of symbol to price. Symbols the source cannot price are omitted.

        Raises:
            SourceUnavailableError: If the request failed as a whole.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        ...
