"""
grid-core: grid trading engine.

No network, no files. Consumes prices, produces a level ladder,
orders, fills and PnL. Deterministic and unit-testable.
"""

from grid_core.contracts import (
    CycleResult,
    ExecutionVenue,
    FillResult,
    GridLevel,
    Order,
    OrderSnapshot,
    OrderStatus,
    Position,
    RiskLimits,
    RiskRejection,
    Side,
    TradingStats,
)
from grid_core.engine import GridEngine
from grid_core.errors import GridError, InvalidParameter
from grid_core.grid_planner import compute_grid, compute_levels
from grid_core.order_book import OrderBook
from grid_core.position_ledger import PositionLedger
from grid_core.risk_gate import RiskGate, can_admit

__all__ = [
    "can_admit",
    "compute_grid",
    "compute_levels",
    "CycleResult",
    "ExecutionVenue",
    "FillResult",
    "GridEngine",
    "GridError",
    "GridLevel",
    "InvalidParameter",
    "Order",
    "OrderBook",
    "OrderSnapshot",
    "OrderStatus",
    "Position",
    "PositionLedger",
    "RiskGate",
    "RiskLimits",
    "RiskRejection",
    "Side",
    "TradingStats",
]
