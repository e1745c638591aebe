"""
Trade journal: append-only JSON lines, one record per order placement,
fill or order retirement.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any


def _serialize(obj: Any) -> Any:
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {k: _serialize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_serialize(x) for x in obj]
    return obj


class JournalWriter:
    """Append-only journal. Each line is a JSON object with event type and payload."""

    def __init__(self, path: str | Path, *, echo_stdout: bool = False) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._echo = echo_stdout

    @property
    def path(self) -> Path:
        return self._path

    def _write(self, event_type: str, payload: dict) -> None:
        record = {"ts_utc": datetime.now(timezone.utc).isoformat(), "event": event_type, **payload}
        line = json.dumps(_serialize(record)) + "\n"
        with open(self._path, "a") as f:
            f.write(line)
        if self._echo:
            print(line.rstrip())

    def order_placed(self, order_id: str, side: str, level: float, price: float, quantity: float, **extra: Any) -> None:
        self._write(
            "order_placed",
            {"order_id": order_id, "side": side, "level": level, "price": price, "quantity": quantity, **extra},
        )

    def fill(self, order_id: str, side: str, price: float, quantity: float, realized_pnl: float | None = None, **extra: Any) -> None:
        self._write(
            "fill",
            {"order_id": order_id, "side": side, "price": price, "quantity": quantity, "realized_pnl": realized_pnl, **extra},
        )

    def order_closed(self, order_id: str, side: str, level: float, **extra: Any) -> None:
        self._write("order_closed", {"order_id": order_id, "side": side, "level": level, **extra})

    def order_rejected(self, side: str, level: float, price: float, quantity: float, reason: str, **extra: Any) -> None:
        self._write(
            "order_rejected",
            {"side": side, "level": level, "price": price, "quantity": quantity, "reason": reason, **extra},
        )
