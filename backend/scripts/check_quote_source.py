#!/usr/bin/env python
"""Script to verify the configured quote source.

Run from the backend directory:
    python -m scripts.check_quote_source

Or against CoinMarketCap with specific symbols:
    python -m scripts.check_quote_source --source coinmarketcap --api-key KEY BTC ETH
"""

import argparse
import asyncio
import logging
import os
import sys

# Add parent to path for imports
sys.path.insert(0, ".")

from app.core.config import Settings
from app.crypto_alerts.application.exceptions import SourceUnavailableError
from app.crypto_alerts.infrastructure.external import create_quote_source

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def check_source(settings: Settings, symbols: list[str]) -> bool:
    """Fetch the catalog and a quote batch, printing what comes back."""
    source = create_quote_source(settings)
    print("\n" + "=" * 50)
    print(f"Testing {source.title}")
    print("=" * 50)

    try:
        entries = await source.list_entries()
        print(f"\n  ✓ Catalog: {len(entries)} entries")
        for entry in entries[:5]:
            print(f"    {entry.symbol:<8} {entry.name}")

        wanted = symbols or [entry.symbol for entry in entries[:3]]
        quotes = await source.fetch_quotes(wanted)
        print(f"\n  ✓ Quotes in {settings.quotation_symbol}:")
        for symbol in wanted:
            price = quotes.get(symbol)
            if price is None:
                print(f"    ✗ {symbol} - No price returned")
            else:
                print(f"    {symbol:<8} {price:,.4f}")
    except SourceUnavailableError as e:
        print(f"\n  ✗ {e.message}")
        return False
    finally:
        await source.close()

    print(f"\n✓ {source.title} test completed")
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Check quote source connectivity")
    parser.add_argument("symbols", nargs="*", help="Symbols to quote (default: first catalog entries)")
    parser.add_argument("--source", choices=["synthetic", "coinmarketcap"], default=None)
    parser.add_argument("--api-key", default=os.getenv("CMC_API_KEY", ""), help="CoinMarketCap API key")
    args = parser.parse_args()

    overrides = {"cmc_api_key": args.api_key}
    if args.source:
        overrides["quote_source"] = args.source

    ok = asyncio.run(check_source(Settings(**overrides), [s.upper() for s in args.symbols]))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
