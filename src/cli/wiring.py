"""
Build the engine and its collaborators from config, once, at startup.

The engine reports through a single ``(event_type, payload)`` callback.
ReportListener fans those events out to the journal and the structured
event log; a failing sink is logged and never reaches the engine.
"""

from __future__ import annotations

import logging
from typing import Any

from config.loader import GridConfig
from execution import PaperExecutor
from grid_core.contracts import ExecutionVenue
from grid_core.engine import GridEngine
from grid_core.order_book import EventListener
from grid_core.risk_gate import RiskGate

from cli.structured_log import StructuredEventLogger

logger = logging.getLogger("grid.cli")


class ReportListener:
    """Forward engine events to the journal and the structured event log."""

    def __init__(self, journal: Any = None, events: StructuredEventLogger | None = None) -> None:
        self._journal = journal
        self._events = events

    def __call__(self, event_type: str, payload: dict[str, Any]) -> None:
        if self._journal is not None:
            try:
                self._write_journal(event_type, payload)
            except (OSError, TypeError, ValueError) as exc:
                logger.warning("Journal write failed (%s): %s", event_type, exc)
        if self._events is not None:
            try:
                self._write_events(event_type, payload)
            except (OSError, TypeError, ValueError) as exc:
                logger.warning("Event log write failed (%s): %s", event_type, exc)

    def _write_journal(self, event_type: str, p: dict[str, Any]) -> None:
        if event_type == "order_placed":
            self._journal.order_placed(p["order_id"], p["side"], p["level"], p["price"], p["quantity"])
        elif event_type == "fill":
            self._journal.fill(p["order_id"], p["side"], p["price"], p["quantity"], p.get("realized_pnl"))
        elif event_type == "order_closed":
            self._journal.order_closed(p["order_id"], p["side"], p["level"])
        elif event_type == "order_rejected":
            self._journal.order_rejected(p["side"], p["level"], p["price"], p["quantity"], p["reason"])

    def _write_events(self, event_type: str, p: dict[str, Any]) -> None:
        if event_type == "order_placed":
            self._events.order_placed(p["order_id"], p["side"], p["level"], p["price"], p["quantity"])
        elif event_type == "order_closed":
            self._events.order_closed(p["order_id"], p["level"])
        elif event_type == "order_rejected":
            self._events.order_rejected(p["side"], p["level"], p["reason"])


def build_engine(
    cfg: GridConfig,
    *,
    venue: ExecutionVenue | None = None,
    on_event: EventListener | None = None,
) -> GridEngine:
    """One engine per process, owned by the caller."""
    risk_gate = RiskGate.from_fractions(
        cfg.initial_investment,
        cfg.max_position_size,
        cfg.max_drawdown_percent,
        cfg.max_loss_per_trade_percent,
    )
    return GridEngine(
        cfg.grid_spacing,
        cfg.grid_count,
        cfg.min_order_quantity,
        risk_gate,
        venue or PaperExecutor(cfg.trading_pair),
        tolerance_fraction=cfg.tolerance_fraction,
        on_event=on_event,
    )
