"""
Position ledger: running quantity, average cost, realized PnL.

Buys move the average cost (fill-size-weighted mean) and total cost.
Sells realize ``(price - avg_price) * quantity`` and reduce quantity only;
average cost and total cost stay where they were. Nothing stops a sell
from taking quantity below zero.
"""

from __future__ import annotations

import logging

from grid_core.contracts import IdSequence, Position, Side
from grid_core.risk_gate import RiskGate

logger = logging.getLogger("grid.ledger")


class PositionLedger:
    def __init__(self, risk_gate: RiskGate, ids: IdSequence | None = None) -> None:
        self._position = Position()
        self._risk_gate = risk_gate
        self._ids = ids or IdSequence()
        self._realized: dict[str, float] = {}

    @property
    def position(self) -> Position:
        p = self._position
        return Position(quantity=p.quantity, avg_price=p.avg_price, total_cost=p.total_cost)

    @property
    def realized_pnl(self) -> dict[str, float]:
        return dict(self._realized)

    def apply_fill(self, side: Side, quantity: float, price: float) -> float:
        """Apply one fill; returns the realized PnL it produced (0.0 for buys)."""
        p = self._position
        if side is Side.BUY:
            new_qty = p.quantity + quantity
            if new_qty != 0:
                p.avg_price = (p.quantity * p.avg_price + quantity * price) / new_qty
            p.total_cost += quantity * price
            p.quantity = new_qty
            pnl = 0.0
        else:
            pnl = (price - p.avg_price) * quantity
            p.quantity -= quantity
            self._realized[self._ids.next("PNL")] = pnl
            self._risk_gate.update_equity(pnl)

        logger.debug(
            "%s executed: price=%s qty=%s pnl=%.4f position=%s",
            side.value, price, quantity, pnl, p.quantity,
        )
        return pnl

    def unrealized_pnl(self, current_price: float) -> float:
        p = self._position
        return p.quantity * (current_price - p.avg_price)

    def total_realized_pnl(self) -> float:
        return sum(self._realized.values())
