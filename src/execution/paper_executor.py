"""
Paper executor: the execution venue used by the grid engine.

Every submitted order fills immediately, fully, at its requested price.
No exchange is contacted. State lives in memory for the life of the process.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from grid_core.contracts import FillResult, Order

from execution.models import PaperFill

logger = logging.getLogger("grid.execution")


class PaperExecutor:
    """Implements ``ExecutionVenue``. Single writer (one engine)."""

    def __init__(self, symbol: str = "") -> None:
        self._symbol = symbol
        self._fills: list[PaperFill] = []

    @property
    def symbol(self) -> str:
        return self._symbol

    def submit(self, order: Order) -> FillResult:
        """Fill *order* at its requested price. Returns the FillResult."""
        self._fills.append(
            PaperFill(
                order_id=order.id,
                side=order.side.value,
                qty=order.quantity,
                price=order.price,
                level=order.level.price,
                timestamp=datetime.now(timezone.utc),
            )
        )
        logger.debug("Paper fill %s: %s %s %s @ %s", order.id, order.side.value, order.quantity, self._symbol, order.price)
        return FillResult(order_id=order.id, side=order.side, quantity=order.quantity, price=order.price)

    def list_fills(self, limit: int | None = None) -> list[PaperFill]:
        """Fills newest first."""
        fills = list(reversed(self._fills))
        return fills[:limit] if limit is not None else fills
