"""
Risk gate: pre-trade admission control and equity tracking.

Admission rules, checked in order:
    - quantity above max_position_size -> reject
    - notional (quantity * price) above current equity -> reject

The size limit applies per order, not to the accumulated position.
Drawdown beyond max_drawdown is observed and logged; it does not block
new orders. max_loss_per_trade is carried in RiskLimits but not enforced.
"""

from __future__ import annotations

import logging

from grid_core.contracts import RiskLimits, RiskRejection

logger = logging.getLogger("grid.risk")

REASON_POSITION_SIZE = "exceeds maximum position size"
REASON_INSUFFICIENT_FUNDS = "insufficient funds"


def admission_reason(
    quantity: float,
    price: float,
    current_equity: float,
    limits: RiskLimits,
) -> str | None:
    """Return why an order would be rejected, or None if it is admissible."""
    if quantity > limits.max_position_size:
        return REASON_POSITION_SIZE
    if quantity * price > current_equity:
        return REASON_INSUFFICIENT_FUNDS
    return None


def can_admit(
    quantity: float,
    price: float,
    current_equity: float,
    limits: RiskLimits,
) -> bool:
    """Pure admission decision. Logging is the caller's job."""
    return admission_reason(quantity, price, current_equity, limits) is None


class RiskGate:
    """Holds risk state (initial/current equity, limits) around the pure checks.

    Parameters
    ----------
    initial_equity:
        Starting capital. Drawdown is measured against it.
    limits:
        Absolute limits. Use :meth:`from_fractions` to derive them from
        configured fractions of initial equity.
    """

    def __init__(self, initial_equity: float, limits: RiskLimits) -> None:
        self._initial_equity = initial_equity
        self._current_equity = initial_equity
        self._limits = limits
        self._drawdown_breached = False

    @classmethod
    def from_fractions(
        cls,
        initial_equity: float,
        max_position_size: float,
        max_drawdown_percent: float,
        max_loss_per_trade_percent: float = 0.0,
    ) -> RiskGate:
        limits = RiskLimits(
            max_position_size=max_position_size,
            max_drawdown=initial_equity * max_drawdown_percent,
            max_loss_per_trade=initial_equity * max_loss_per_trade_percent,
        )
        return cls(initial_equity, limits)

    @property
    def initial_equity(self) -> float:
        return self._initial_equity

    @property
    def current_equity(self) -> float:
        return self._current_equity

    @property
    def limits(self) -> RiskLimits:
        return self._limits

    @property
    def drawdown(self) -> float:
        return self._initial_equity - self._current_equity

    @property
    def drawdown_breached(self) -> bool:
        return self._drawdown_breached

    def check(self, quantity: float, price: float) -> RiskRejection | None:
        reason = admission_reason(quantity, price, self._current_equity, self._limits)
        if reason is None:
            return None
        return RiskRejection(reason=reason, quantity=quantity, price=price)

    def update_equity(self, pnl: float) -> None:
        """Apply realized PnL. Warns on drawdown breach; never blocks."""
        self._current_equity += pnl
        if self.drawdown > self._limits.max_drawdown:
            self._drawdown_breached = True
            logger.warning(
                "Maximum drawdown exceeded: %.2f (limit %.2f, equity %.2f)",
                self.drawdown, self._limits.max_drawdown, self._current_equity,
            )
