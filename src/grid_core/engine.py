"""
Grid engine: one explicitly owned object that runs a full cycle per price.

Cycle (strictly sequential):
    compute_grid -> OrderBook.reconcile -> OrderBook.evaluate_crossing

The orchestrator constructs the engine once at startup and passes each
fetched price to run_cycle. No global or lazily-initialised state.
"""

from __future__ import annotations

import logging

from grid_core.contracts import (
    CycleResult,
    ExecutionVenue,
    GridLevel,
    IdSequence,
    Order,
    RiskRejection,
    TradingStats,
)
from grid_core.errors import InvalidParameter
from grid_core.grid_planner import compute_grid, validate_params
from grid_core.order_book import EventListener, OrderBook
from grid_core.position_ledger import PositionLedger
from grid_core.risk_gate import RiskGate

logger = logging.getLogger("grid.engine")


class GridEngine:
    def __init__(
        self,
        spacing: float,
        count: int,
        quantity: float,
        risk_gate: RiskGate,
        venue: ExecutionVenue,
        *,
        tolerance_fraction: float = 0.1,
        on_event: EventListener | None = None,
    ) -> None:
        validate_params(spacing, count)
        if tolerance_fraction <= 0:
            raise InvalidParameter(f"tolerance fraction must be positive, got {tolerance_fraction!r}")
        self._spacing = spacing
        self._count = count
        self._tolerance = tolerance_fraction
        self._risk_gate = risk_gate
        ids = IdSequence()
        self._ledger = PositionLedger(risk_gate, ids)
        self._book = OrderBook(quantity, risk_gate, self._ledger, venue, ids=ids, on_event=on_event)
        self._cycles = 0

    @property
    def spacing(self) -> float:
        return self._spacing

    @property
    def count(self) -> int:
        return self._count

    @property
    def tolerance_fraction(self) -> float:
        return self._tolerance

    @property
    def order_book(self) -> OrderBook:
        return self._book

    @property
    def ledger(self) -> PositionLedger:
        return self._ledger

    @property
    def risk_gate(self) -> RiskGate:
        return self._risk_gate

    @property
    def cycles(self) -> int:
        return self._cycles

    def run_cycle(self, current_price: float) -> CycleResult:
        levels = compute_grid(current_price, self._spacing, self._count)
        base = GridLevel.from_price(current_price, self._spacing)
        result = CycleResult(price=current_price, base_level=base, levels=levels)

        result.closed_orders = self._book.reconcile(levels)

        outcome = self._book.evaluate_crossing(current_price, levels, self._tolerance)
        if isinstance(outcome, Order):
            result.placed = outcome
            result.fill = self._book.last_fill
        elif isinstance(outcome, RiskRejection):
            result.rejection = outcome

        self._cycles += 1
        logger.debug(
            "Cycle %d: price=%s base=%s closed=%d placed=%s",
            self._cycles, current_price, base, len(result.closed_orders),
            result.placed.id if result.placed else None,
        )
        return result

    def stats(self, current_price: float) -> TradingStats:
        position = self._ledger.position
        return TradingStats(
            quantity=position.quantity,
            avg_price=position.avg_price,
            unrealized_pnl=self._ledger.unrealized_pnl(current_price),
            realized_pnl=self._ledger.total_realized_pnl(),
            equity=self._risk_gate.current_equity,
            drawdown=self._risk_gate.drawdown,
            open_orders=len(self._book.open_orders()),
        )
