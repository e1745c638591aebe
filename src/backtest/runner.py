"""
Replay: feed a recorded price series through a grid engine, in order.

No sleeping, no network. Each price is one full engine cycle, exactly as
the live loop would run it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Iterable

from grid_core.contracts import CycleResult, Order, RiskRejection, Side, TradingStats
from grid_core.engine import GridEngine


@dataclass
class ReplayResult:
    symbol: str
    cycles: int = 0
    placed: list[Order] = field(default_factory=list)
    rejections: list[RiskRejection] = field(default_factory=list)
    closed: list[Order] = field(default_factory=list)
    final_stats: TradingStats | None = None

    @property
    def buy_count(self) -> int:
        return sum(1 for o in self.placed if o.side is Side.BUY)

    @property
    def sell_count(self) -> int:
        return sum(1 for o in self.placed if o.side is Side.SELL)


def run_replay(
    prices: Iterable[float],
    engine: GridEngine,
    symbol: str = "",
    on_cycle: Callable[[CycleResult], None] | None = None,
) -> ReplayResult:
    result = ReplayResult(symbol=symbol)
    last_price: float | None = None
    for price in prices:
        cycle = engine.run_cycle(price)
        result.cycles += 1
        result.closed.extend(cycle.closed_orders)
        if cycle.placed:
            result.placed.append(cycle.placed)
        if cycle.rejection:
            result.rejections.append(cycle.rejection)
        if on_cycle:
            on_cycle(cycle)
        last_price = price
    if last_price is not None:
        result.final_stats = engine.stats(last_price)
    return result


def read_prices(lines: Iterable[str]) -> list[float]:
    """Parse one price per line; blank lines and ``#`` comments are skipped.

    A CSV line keeps its last field, so ``timestamp,price`` works too.
    """
    prices: list[float] = []
    for lineno, raw in enumerate(lines, 1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        value = line.split(",")[-1].strip()
        try:
            price = float(value)
        except ValueError as exc:
            raise ValueError(f"line {lineno}: not a price: {value!r}") from exc
        if not math.isfinite(price):
            raise ValueError(f"line {lineno}: not a finite price: {value!r}")
        if price <= 0:
            raise ValueError(f"line {lineno}: price must be positive, got {price}")
        prices.append(price)
    return prices
