"""
Fetch the latest price for a symbol. Configurable adapter; sync, blocking.
"""

from __future__ import annotations

from typing import Iterable, Protocol

from grid_core.errors import GridError


class FetchError(GridError):
    """Network failure, non-2xx response or unparsable payload. Recoverable."""


class PriceFeed(Protocol):
    """Protocol for price feeds. Implement per provider (Binance, ...)."""

    def fetch_price(self, symbol: str) -> float:
        """Latest price for *symbol*; always positive. Raises FetchError."""
        ...


class StaticPriceFeed:
    """Replays a fixed sequence of prices; for tests and offline replay."""

    def __init__(self, prices: Iterable[float]) -> None:
        self._prices = iter(prices)

    def fetch_price(self, symbol: str) -> float:
        try:
            return float(next(self._prices))
        except StopIteration:
            raise FetchError(f"No more prices for {symbol}") from None
