"""
Binance price feed: implements PriceFeed over the public ticker endpoint.

GET {base_url}?symbol=ETHUSDT -> {"symbol": "ETHUSDT", "price": "3000.12000000"}
No API key needed. Timeouts belong here, not in the engine.
"""

from __future__ import annotations

import logging
import math

import requests

from data.fetcher import FetchError

logger = logging.getLogger("grid.data")

BINANCE_TICKER_URL = "https://api.binance.com/api/v3/ticker/price"


class BinancePriceFeed:
    """Fetch the last traded price from Binance.

    A ``requests.Session`` is reused across calls; pass one in to share
    connection pools or to substitute a fake in tests.
    """

    def __init__(
        self,
        base_url: str = BINANCE_TICKER_URL,
        *,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._session = session or requests.Session()

    def fetch_price(self, symbol: str) -> float:
        try:
            response = self._session.get(self._base_url, params={"symbol": symbol}, timeout=self._timeout)
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "?"
            raise FetchError(f"Price request for {symbol} failed: HTTP {status}") from exc
        except requests.RequestException as exc:
            raise FetchError(f"Price request for {symbol} failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchError(f"Price response for {symbol} is not valid JSON: {exc}") from exc

        if not isinstance(payload, dict) or "price" not in payload:
            raise FetchError(f"Price response for {symbol} has no 'price' field")
        try:
            price = float(payload["price"])
        except (TypeError, ValueError) as exc:
            raise FetchError(f"Invalid price in response for {symbol}: {payload['price']!r}") from exc
        if not math.isfinite(price) or price <= 0:
            raise FetchError(f"Non-positive price in response for {symbol}: {price}")

        logger.debug("Current price fetched for %s: %s", symbol, price)
        return price
