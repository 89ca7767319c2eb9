"""Entry entity representing one watchable asset in the catalog."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class Entry:
    """Domain entity for a catalog asset and its two latest price observations.

    Attributes:
        symbol: Ticker symbol, unique within the catalog (e.g., BTC).
        name: Human-readable asset name (e.g., Bitcoin).
        url: Reference page for the asset.
        logo: Logo image URL.
        previous_quote: Price observed on the refresh before the latest one.
        current_quote: Price observed on the latest refresh.
    """

    symbol: str
    name: str
    url: str
    logo: str
    previous_quote: Optional[Decimal] = None
    current_quote: Optional[Decimal] = None

    def record_quote(self, price: Decimal) -> None:
        """Shift the current quote into previous and store the new price."""
        self.previous_quote = self.current_quote
        self.current_quote = price

    def inherit_quotes(self, other: "Entry") -> None:
        """Carry over the quote pair of an entry with the same symbol."""
        self.previous_quote = other.previous_quote
        self.current_quote = other.current_quote

    @property
    def is_quoted(self) -> bool:
        return self.current_quote is not None
