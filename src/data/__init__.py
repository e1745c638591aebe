"""
Price data: fetch the latest price for the traded symbol.

Depends on grid_core.errors only; no dependency from grid_core back to data.
"""

from data.fetcher import FetchError, PriceFeed, StaticPriceFeed

__all__ = [
    "FetchError",
    "PriceFeed",
    "StaticPriceFeed",
]


def get_binance_feed(base_url: str, timeout: float = 10.0):
    """Lazy import so requests is only needed when the live feed is used."""
    from data.binance_fetcher import BinancePriceFeed

    return BinancePriceFeed(base_url, timeout=timeout)
