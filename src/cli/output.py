"""
Human-readable grid output for the terminal.

Every CLI command uses these formatters. The journal receives the same data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from grid_core.contracts import CycleResult, GridLevel, OrderSnapshot, TradingStats

if TYPE_CHECKING:
    from backtest.runner import ReplayResult


def format_cycle(result: CycleResult) -> str:
    """Price, base level and whatever this cycle changed."""
    lines = [
        "",
        f"Current price: {result.price:g}",
        f"Base grid: {result.base_level}",
    ]
    for order in result.closed_orders:
        lines.append(f"  Closed   : {order.id} {order.side.value} at grid level {order.level}")
    if result.placed:
        o = result.placed
        lines.append(f"  Placed   : {o.id} {o.side.value} at grid level {o.level} (Price: {o.price:g}, Quantity: {o.quantity:g})")
        if result.fill and result.fill.realized_pnl is not None:
            lines.append(f"  Realized : {result.fill.realized_pnl:+.4f}")
    if result.rejection:
        r = result.rejection
        lines.append(f"  Rejected : {r.reason} ({r.quantity:g} @ {r.price:g})")
    return "\n".join(lines)


def format_active_orders(snapshots: Sequence[OrderSnapshot]) -> str:
    lines = ["", "Active Orders:"]
    if not snapshots:
        lines.append("  (none)")
    for s in snapshots:
        lines.append(f"Grid {s.level_price:g}: {s.side.value} order at {s.price:g} (Quantity: {s.quantity:g})")
    return "\n".join(lines)


def format_trading_stats(stats: TradingStats) -> str:
    lines = [
        "",
        "=== Trading Statistics ===",
        "Current Position:",
        f"Quantity: {stats.quantity:g}",
        f"Average Price: {stats.avg_price:.2f}",
        f"Unrealized P&L: {stats.unrealized_pnl:+.4f}",
        f"Total Realized P&L: {stats.realized_pnl:+.4f}",
        f"Current Equity: {stats.equity:,.2f}",
        f"Drawdown: {stats.drawdown:,.2f}",
        f"Open orders: {stats.open_orders}",
    ]
    return "\n".join(lines)


def format_levels(levels: Sequence[GridLevel], base: GridLevel) -> str:
    lines = [f"=== Grid: {len(levels)} levels, spacing {base.spacing:g} ==="]
    for level in reversed(levels):
        marker = "  <- base" if level == base else ""
        lines.append(f"  {level.price:>14.4f}{marker}")
    lines.append("===")
    return "\n".join(lines)


def format_replay_summary(result: ReplayResult) -> str:
    s = result.final_stats
    lines = [
        f"=== Replay: {result.symbol} ===",
        f"Prices       : {result.cycles}",
        f"Orders placed: {len(result.placed)} (buy {result.buy_count} / sell {result.sell_count})",
        f"Rejections   : {len(result.rejections)}",
        f"Orders closed: {len(result.closed)}",
    ]
    if s is not None:
        lines += [
            f"Position     : {s.quantity:g} @ avg {s.avg_price:.2f}",
            f"Realized P&L : {s.realized_pnl:+.4f}",
            f"Unrealized   : {s.unrealized_pnl:+.4f}",
            f"Equity       : {s.equity:,.2f}",
        ]
    lines.append("===")
    return "\n".join(lines)
