"""In-memory catalog of watchable entries backed by a quote source.

The catalog is refreshed from the source at most once per ``list_interval``.
Concurrent callers that find the cache stale share a single source fetch, and a
failed fetch leaves the previous catalog in place.
"""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, List, Optional

from app.crypto_alerts.application.interfaces.quote_source import QuoteSource
from app.crypto_alerts.domain.entities.entry import Entry

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EntryCatalog:
    """Cache of catalog entries and their latest quote pairs.

    Attributes:
        _source: Provider of the catalog.
        _entries: Entries keyed by symbol, in source order.
        _next_refresh_at: Moment the cache goes stale (None until first fetch).
    """

    def __init__(
        self,
        source: QuoteSource,
        list_interval: Optional[timedelta] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize an empty catalog.

        Args:
            source: Quote source providing the catalog.
            list_interval: Cache lifetime, defaults to the source's list interval.
            clock: Returns the current time (injectable for tests).
        """
        self._source = source
        self._list_interval = list_interval or source.list_interval
        self._clock = clock
        self._entries: dict[str, Entry] = {}
        self._next_refresh_at: Optional[datetime] = None
        # Guards _entries for read-modify-write sequences
        self._lock = asyncio.Lock()
        self._in_flight: Optional[asyncio.Future[list[Entry]]] = None

    @property
    def next_refresh_at(self) -> Optional[datetime]:
        return self._next_refresh_at

    def is_fresh(self) -> bool:
        return self._next_refresh_at is not None and self._clock() < self._next_refresh_at

    async def list(self) -> list[Entry]:
        """Return the catalog, refreshing it from the source when stale.

        Returns:
            Copies of the cached entries.

        Raises:
            SourceUnavailableError: If a refresh was needed and the source failed.
        """
        if self.is_fresh():
            return await self.snapshot()

        if self._in_flight is None:
            self._in_flight = asyncio.ensure_future(self._refresh())
            self._in_flight.add_done_callback(self._clear_in_flight)
        else:
            logger.debug("Joining in-flight catalog refresh")

        return await asyncio.shield(self._in_flight)

    def _clear_in_flight(self, future: "asyncio.Future[list[Entry]]") -> None:
        if self._in_flight is future:
            self._in_flight = None

    async def _refresh(self) -> List[Entry]:
        listings = await self._source.list_entries()

        async with self._lock:
            previous = self._entries
            refreshed: dict[str, Entry] = {}
            for listing in listings:
                entry = Entry(
                    symbol=listing.symbol,
                    name=listing.name,
                    url=listing.url,
                    logo=listing.logo,
                )
                # Quote history survives for symbols kept across the refresh
                kept = previous.get(listing.symbol)
                if kept is not None:
                    entry.inherit_quotes(kept)
                refreshed[entry.symbol] = entry

            self._entries = refreshed
            self._next_refresh_at = self._clock() + self._list_interval
            logger.info(
                f"Catalog refreshed from {self._source.title}: {len(refreshed)} entries "
                f"(next refresh at {self._next_refresh_at.isoformat()})"
            )
            return [replace(entry) for entry in refreshed.values()]

    async def snapshot(self) -> List[Entry]:
        """Return the last good catalog without contacting the source."""
        async with self._lock:
            return [replace(entry) for entry in self._entries.values()]

    async def get(self, symbol: str) -> Optional[Entry]:
        async with self._lock:
            entry = self._entries.get(symbol)
            return replace(entry) if entry is not None else None

    async def apply_quotes(self, quotes: Mapping[str, Decimal]) -> dict[str, Entry]:
        """Record a quote batch on the entries it prices.

        Entries missing from the batch are left untouched.

        Args:
            quotes: Mapping of symbol to latest price.

        Returns:
            Copies of the updated entries, keyed by symbol.
        """
        updated: dict[str, Entry] = {}
        async with self._lock:
            for symbol, entry in self._entries.items():
                price = quotes.get(symbol)
                if price is None:
                    continue
                entry.record_quote(price)
                updated[symbol] = replace(entry)

        if len(updated) < len(quotes):
            logger.debug(
                f"{len(quotes) - len(updated)} quoted symbol(s) are not in the catalog"
            )
        return updated

    def __len__(self) -> int:
        return len(self._entries)
