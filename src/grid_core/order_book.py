"""
Order book: grid level -> orders, placement and retirement decisions.

Single writer. Per cycle the engine calls, in this order:
    1. reconcile(levels)        retire orders at levels that left the ladder
    2. evaluate_crossing(...)   at most one placement near the current price

Invariants:
    - at most one open order per (level, side)
    - after reconcile, every indexed level is in the latest ladder
    - orders go open -> closed once, only when their level is pruned;
      closed orders stay in the audit trail with their original level
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Callable, Iterable

from grid_core.contracts import (
    ExecutionVenue,
    FillResult,
    GridLevel,
    IdSequence,
    Order,
    OrderSnapshot,
    RiskRejection,
    Side,
)
from grid_core.position_ledger import PositionLedger
from grid_core.risk_gate import RiskGate

logger = logging.getLogger("grid.orders")

EventListener = Callable[[str, dict[str, Any]], None]


class OrderBook:
    """Owns the level index and routes admitted orders through risk, venue and ledger.

    Parameters
    ----------
    quantity:
        Fixed size of every order.
    risk_gate:
        Asked before every placement.
    ledger:
        Receives the fill of every admitted order.
    venue:
        Fills admitted orders (see ``execution.PaperExecutor``).
    on_event:
        Optional ``(event_type, payload)`` callback for reporting. Events:
        ``order_placed``, ``fill``, ``order_rejected``, ``order_closed``.
    """

    def __init__(
        self,
        quantity: float,
        risk_gate: RiskGate,
        ledger: PositionLedger,
        venue: ExecutionVenue,
        *,
        ids: IdSequence | None = None,
        on_event: EventListener | None = None,
    ) -> None:
        self._quantity = quantity
        self._risk_gate = risk_gate
        self._ledger = ledger
        self._venue = venue
        self._ids = ids or IdSequence()
        self._on_event = on_event
        self._levels: dict[GridLevel, list[Order]] = {}
        self._audit: list[Order] = []
        self._last_fill: FillResult | None = None

    @property
    def quantity(self) -> float:
        return self._quantity

    @property
    def last_fill(self) -> FillResult | None:
        """Fill of the most recently admitted order."""
        return self._last_fill

    def _emit(self, event_type: str, **payload: Any) -> None:
        if self._on_event is not None:
            self._on_event(event_type, payload)

    # ---------- reconciliation ----------

    def reconcile(self, new_levels: Iterable[GridLevel]) -> list[Order]:
        """Close open orders at levels outside *new_levels* and drop those levels.

        Bookkeeping only: no offsetting trade, the position is left as is.
        Returns the orders that were closed.
        """
        keep = set(new_levels)
        closed: list[Order] = []
        for level in [lvl for lvl in self._levels if lvl not in keep]:
            for order in self._levels[level]:
                if order.is_open:
                    order.close()
                    closed.append(order)
                    logger.info("Closing order %s at grid level %s", order.id, level)
                    self._emit("order_closed", order_id=order.id, side=order.side.value, level=level.price)
            del self._levels[level]
        return closed

    # ---------- placement ----------

    def should_place(self, level: GridLevel, side: Side) -> bool:
        return not any(o.is_open and o.side is side for o in self._levels.get(level, ()))

    def place(self, side: Side, price: float, level: GridLevel) -> Order | RiskRejection:
        """Admit, record and fill one order at *level*, or return the rejection."""
        rejection = self._risk_gate.check(self._quantity, price)
        if rejection is not None:
            logger.info("Order rejected: %s (%s %s @ %s)", rejection.reason, side.value, self._quantity, price)
            self._emit(
                "order_rejected",
                side=side.value, level=level.price, price=price,
                quantity=self._quantity, reason=rejection.reason,
            )
            return rejection

        order = Order(id=self._ids.next("ORDER"), side=side, price=price, quantity=self._quantity, level=level)
        # a venue error leaves nothing indexed
        fill = self._venue.submit(order)
        self._levels.setdefault(level, []).append(order)
        self._audit.append(order)

        pnl = self._ledger.apply_fill(side, fill.quantity, fill.price)
        if side is Side.SELL:
            fill = dataclasses.replace(fill, realized_pnl=pnl)
        self._last_fill = fill

        logger.info("New %s order placed at grid level %s (Price: %s)", side.value, level, price)
        self._emit(
            "order_placed",
            order_id=order.id, side=side.value, level=level.price,
            price=price, quantity=self._quantity,
        )
        self._emit(
            "fill",
            order_id=order.id, side=side.value, price=fill.price,
            quantity=fill.quantity, realized_pnl=fill.realized_pnl,
        )
        return order

    def evaluate_crossing(
        self,
        current_price: float,
        levels: list[GridLevel],
        tolerance_fraction: float,
    ) -> Order | RiskRejection | None:
        """Trigger at most one order from the bracket holding *current_price*.

        With ``lower < current_price <= upper``: within the tolerance band of
        ``lower`` -> buy at lower; otherwise within the band of ``upper`` ->
        sell at upper. The band is ``tolerance_fraction * spacing`` and its
        edge counts as inside. Levels skipped between polls are not backfilled.
        """
        for lower, upper in zip(levels, levels[1:]):
            if not (lower.price < current_price <= upper.price):
                continue
            band = tolerance_fraction * lower.spacing
            if abs(current_price - lower.price) <= band:
                if self.should_place(lower, Side.BUY):
                    return self.place(Side.BUY, current_price, lower)
            elif abs(current_price - upper.price) <= band:
                if self.should_place(upper, Side.SELL):
                    return self.place(Side.SELL, current_price, upper)
            return None
        return None

    # ---------- read-only views ----------

    def levels(self) -> list[GridLevel]:
        return sorted(self._levels)

    def orders_at(self, level: GridLevel) -> list[Order]:
        return list(self._levels.get(level, ()))

    def open_orders(self) -> list[Order]:
        return [o for lvl in sorted(self._levels) for o in self._levels[lvl] if o.is_open]

    def snapshot(self) -> list[OrderSnapshot]:
        return [
            OrderSnapshot(level_price=o.level.price, price=o.price, quantity=o.quantity, side=o.side, order_id=o.id)
            for o in self.open_orders()
        ]

    def audit_trail(self) -> list[Order]:
        return list(self._audit)
