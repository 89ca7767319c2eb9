# External clients - CoinMarketCap, synthetic test data

from datetime import timedelta

from app.core.config import Settings

from .coinmarketcap_client import CoinMarketCapClient
from .synthetic_source import SyntheticQuoteSource


def create_quote_source(settings: Settings) -> CoinMarketCapClient | SyntheticQuoteSource:
    """Create the quote source selected by configuration.

    Interval overrides from settings replace the source defaults.

    Args:
        settings: Application settings.

    Returns:
        Configured QuoteSource instance.

    Raises:
        RuntimeError: If the live source is selected without an API key.
    """
    intervals: dict[str, timedelta] = {}
    if settings.list_interval_seconds is not None:
        intervals["list_interval"] = timedelta(seconds=settings.list_interval_seconds)
    if settings.quote_interval_seconds is not None:
        intervals["quote_interval"] = timedelta(seconds=settings.quote_interval_seconds)

    if settings.quote_source == "coinmarketcap":
        if not settings.cmc_api_key:
            raise RuntimeError(
                "Missing CMC_API_KEY environment variable. "
                "Go to https://coinmarketcap.com/api/features to get one."
            )
        return CoinMarketCapClient(
            api_key=settings.cmc_api_key,
            quotation_symbol=settings.quotation_symbol,
            timeout=settings.http_timeout_seconds,
            **intervals,
        )

    return SyntheticQuoteSource(quotation_symbol=settings.quotation_symbol, **intervals)


__all__ = [
    "CoinMarketCapClient",
    "SyntheticQuoteSource",
    "create_quote_source",
]
