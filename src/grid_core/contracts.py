"""
Data contracts for grid-core: levels, orders, position, risk limits, fills.

grid-core consumes prices and produces orders and fills. No I/O;
these are plain dataclasses.
"""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol


class Side(str, Enum):
    BUY = "buy"
    SELL = "sell"


class OrderStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


def level_index(price: float, spacing: float) -> int:
    """Nearest multiple of *spacing* to *price*, as an integer index.

    Halves round away from zero, matching the usual "standard rounding"
    rather than Python's round-half-to-even.
    """
    ratio = price / spacing
    return int(math.copysign(math.floor(abs(ratio) + 0.5), ratio))


@dataclass(frozen=True, order=True)
class GridLevel:
    """One rung of the ladder. Identity is the integer index, never the float price."""

    index: int
    spacing: float

    @classmethod
    def from_price(cls, price: float, spacing: float) -> GridLevel:
        return cls(index=level_index(price, spacing), spacing=spacing)

    @property
    def price(self) -> float:
        return self.index * self.spacing

    def __str__(self) -> str:
        return f"{self.price:g}"


@dataclass
class Order:
    id: str
    side: Side
    price: float
    quantity: float
    level: GridLevel
    status: OrderStatus = OrderStatus.OPEN

    @property
    def is_open(self) -> bool:
        return self.status is OrderStatus.OPEN

    def close(self) -> None:
        if not self.is_open:
            raise ValueError(f"Order {self.id} is already closed")
        self.status = OrderStatus.CLOSED


@dataclass
class Position:
    quantity: float = 0.0
    avg_price: float = 0.0
    total_cost: float = 0.0


@dataclass(frozen=True)
class RiskLimits:
    max_position_size: float
    max_drawdown: float  # absolute, in quote currency
    max_loss_per_trade: float = 0.0  # absolute; carried but not enforced


@dataclass(frozen=True)
class FillResult:
    order_id: str
    side: Side
    quantity: float
    price: float
    realized_pnl: float | None = None


@dataclass(frozen=True)
class RiskRejection:
    """A declined admission. Not an error: the cycle carries on."""

    reason: str
    quantity: float
    price: float


@dataclass(frozen=True)
class OrderSnapshot:
    """Read-only view of an open order, for reporting and charting."""

    level_price: float
    price: float
    quantity: float
    side: Side
    order_id: str


@dataclass(frozen=True)
class TradingStats:
    quantity: float
    avg_price: float
    unrealized_pnl: float
    realized_pnl: float
    equity: float
    drawdown: float
    open_orders: int


@dataclass
class CycleResult:
    """Everything one engine cycle did, in the order it happened."""

    price: float
    base_level: GridLevel
    levels: list[GridLevel]
    closed_orders: list[Order] = field(default_factory=list)
    placed: Order | None = None
    rejection: RiskRejection | None = None
    fill: FillResult | None = None


class ExecutionVenue(Protocol):
    """Where admitted orders go to be filled (paper or, eventually, an exchange)."""

    def submit(self, order: Order) -> FillResult:
        ...


class IdSequence:
    """Single incrementing counter shared by order ids and PnL record ids.

    Not thread-safe; the engine has exactly one mutator.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)

    def next(self, prefix: str = "ORDER") -> str:
        return f"{prefix}_{next(self._counter)}"
