"""
Structured JSON event logger.

Emits one JSON object per line to stderr, for log aggregators.

Optional webhook: when configured, alert events (order_placed,
order_rejected, drawdown_warning, error) are POSTed to the URL.
"""

from __future__ import annotations

import json
import logging
import sys
import urllib.request
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger("grid.events")


class StructuredEventLogger:
    """Emit structured JSON events to stderr and optional webhook."""

    def __init__(
        self,
        symbol: str,
        *,
        enabled: bool = True,
        webhook_url: str = "",
        stream: Any = None,
    ) -> None:
        self._symbol = symbol
        self._enabled = enabled
        self._webhook_url = webhook_url.strip()
        self._stream = stream or sys.stderr
        self._ALERT_EVENTS = {
            "order_placed",
            "order_rejected",
            "drawdown_warning",
            "error",
        }

    def _emit(self, event_type: str, **fields: Any) -> dict:
        record = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "event": event_type,
            "symbol": self._symbol,
            **fields,
        }
        if self._enabled:
            self._stream.write(json.dumps(record) + "\n")
            self._stream.flush()

        if self._webhook_url and event_type in self._ALERT_EVENTS:
            self._post_webhook(record)

        return record

    def _post_webhook(self, record: dict) -> None:
        try:
            data = json.dumps(record).encode("utf-8")
            req = urllib.request.Request(
                self._webhook_url,
                data=data,
                headers={"Content-Type": "application/json"},
                method="POST",
            )
            urllib.request.urlopen(req, timeout=5)
        except Exception as exc:
            logger.warning("Webhook POST failed: %s", exc)

    def cycle_start(self, cycle: int) -> dict:
        return self._emit("cycle_start", cycle=cycle)

    def order_placed(self, order_id: str, side: str, level: float, price: float, quantity: float) -> dict:
        return self._emit(
            "order_placed",
            order_id=order_id,
            side=side,
            level=level,
            price=price,
            quantity=quantity,
        )

    def order_rejected(self, side: str, level: float, reason: str) -> dict:
        return self._emit("order_rejected", side=side, level=level, reason=reason)

    def order_closed(self, order_id: str, level: float) -> dict:
        return self._emit("order_closed", order_id=order_id, level=level)

    def drawdown_warning(self, drawdown: float, limit: float, equity: float) -> dict:
        return self._emit(
            "drawdown_warning",
            drawdown=round(drawdown, 2),
            limit=round(limit, 2),
            equity=round(equity, 2),
        )

    def cycle_complete(self, cycle: int, price: float, open_orders: int, equity: float) -> dict:
        return self._emit(
            "cycle_complete",
            cycle=cycle,
            price=price,
            open_orders=open_orders,
            equity=round(equity, 2),
        )

    def backoff(self, failures: int, delay: float) -> dict:
        return self._emit("backoff", failures=failures, delay=round(delay, 2))

    def error(self, message: str, detail: str = "") -> dict:
        return self._emit("error", message=message, detail=detail)

    def shutdown(self, cycles: int) -> dict:
        return self._emit("shutdown", cycles=cycles)
