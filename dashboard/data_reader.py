"""
Read-only data access for the grid dashboard.
Reads the journal (JSON lines) and the chart data file written by `grid run --chart`.
"""

import json
import os
from pathlib import Path
from typing import Any


def _data_dir() -> Path:
    """Base data dir: repo root / data, or GRID_DASHBOARD_DATA_DIR if set."""
    if env := os.environ.get("GRID_DASHBOARD_DATA_DIR"):
        return Path(env)
    return Path(__file__).resolve().parent.parent / "data"


def journal_path(data_dir: Path | None = None) -> Path:
    return (data_dir or _data_dir()) / "grid_trading.log.jsonl"


def chart_data_path(data_dir: Path | None = None) -> Path:
    return (data_dir or _data_dir()) / "grid_data.dat"


def get_open_orders(data_dir: Path | None = None) -> list[dict[str, float]]:
    """Rows of the chart data file: {level, price, quantity}. Malformed lines are skipped."""
    path = chart_data_path(data_dir)
    if not path.exists():
        return []
    rows = []
    try:
        with open(path) as f:
            for line in f:
                parts = line.split()
                if len(parts) != 3:
                    continue
                try:
                    level, price, qty = (float(p) for p in parts)
                except ValueError:
                    continue
                rows.append({"level": level, "price": price, "quantity": qty})
    except OSError:
        return []
    return rows


def get_recent_journal_events(
    event_type: str | None = None,
    limit: int = 50,
    data_dir: Path | None = None,
) -> list[dict[str, Any]]:
    """
    Read the last `limit` journal events (newest first).
    If event_type is set, filter to that event (order_placed, fill, order_closed, order_rejected).
    """
    path = journal_path(data_dir)
    if not path.exists():
        return []
    lines: list[str] = []
    try:
        with open(path) as f:
            for line in f:
                line = line.strip()
                if line:
                    lines.append(line)
    except OSError:
        return []
    out = []
    for line in reversed(lines):
        try:
            obj = json.loads(line)
        except json.JSONDecodeError:
            continue
        if event_type is None or obj.get("event") == event_type:
            out.append(obj)
        if limit and len(out) >= limit:
            break
    return out


def total_realized_pnl(data_dir: Path | None = None) -> float:
    fills = get_recent_journal_events(event_type="fill", limit=0, data_dir=data_dir)
    return sum(f.get("realized_pnl") or 0.0 for f in fills)
