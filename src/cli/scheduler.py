"""
Live loop: fetch price, run one engine cycle, report, sleep, repeat.

One engine, one thread. A FetchError aborts only the current attempt;
tenacity retries it after the BackoffPolicy wait instead of immediately.
Any other GridError propagates and stops the loop.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

import click
from tenacity import RetryCallState, Retrying, retry_if_exception_type

from charts import render_chart, write_chart_data
from config.loader import GridConfig
from data.fetcher import FetchError, PriceFeed
from grid_core.contracts import CycleResult
from grid_core.engine import GridEngine

from cli.backoff import BackoffPolicy
from cli.output import format_active_orders, format_cycle, format_trading_stats
from cli.structured_log import StructuredEventLogger

logger = logging.getLogger("grid.scheduler")


def run_one_cycle(engine: GridEngine, feed: PriceFeed, symbol: str) -> CycleResult:
    """Fetch the latest price and run one cycle. FetchError propagates."""
    price = feed.fetch_price(symbol)
    return engine.run_cycle(price)


def report_cycle(
    cfg: GridConfig,
    engine: GridEngine,
    result: CycleResult,
    *,
    events: StructuredEventLogger | None = None,
    chart: bool = False,
) -> None:
    """Print the cycle, active orders and statistics; optionally refresh the chart."""
    click.echo(format_cycle(result))
    click.echo(format_active_orders(engine.order_book.snapshot()))
    stats = engine.stats(result.price)
    click.echo(format_trading_stats(stats))

    gate = engine.risk_gate
    if events is not None:
        if result.fill is not None and gate.drawdown > gate.limits.max_drawdown:
            events.drawdown_warning(gate.drawdown, gate.limits.max_drawdown, gate.current_equity)
        events.cycle_complete(engine.cycles, result.price, stats.open_orders, stats.equity)

    if chart:
        try:
            write_chart_data(engine.order_book.snapshot(), cfg.data_file_path)
        except OSError as exc:
            logger.warning("Could not write chart data: %s", exc)
            return
        render_chart(cfg.data_file_path, cfg.chart_output_path)


def run_live_loop(
    cfg: GridConfig,
    engine: GridEngine,
    feed: PriceFeed,
    *,
    events: StructuredEventLogger | None = None,
    backoff: BackoffPolicy | None = None,
    max_cycles: int | None = None,
    chart: bool = False,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Run cycles until *max_cycles* attempts (successful or not) or Ctrl+C.
    Returns the number of successful cycles.

    Each cycle is one tenacity retry run: FetchError is retried with the
    backoff wait, anything else propagates.
    """
    backoff = backoff or BackoffPolicy(cfg.backoff_base_seconds, cfg.backoff_max_seconds)
    attempts = 0
    completed = 0

    def attempts_spent(retry_state: RetryCallState) -> bool:
        return max_cycles is not None and attempts >= max_cycles

    def log_failure(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception()
        logger.error("Cycle %d aborted: %s", attempts, exc)
        if events is not None:
            events.error("price fetch failed", str(exc))

    def log_backoff(retry_state: RetryCallState) -> None:
        delay = retry_state.next_action.sleep
        logger.warning("Retrying in %.2fs after %d consecutive failure(s)", delay, retry_state.attempt_number)
        if events is not None:
            events.backoff(retry_state.attempt_number, delay)

    click.echo(f"Configuration loaded. Starting trading for {cfg.trading_pair}...")
    click.echo(f"Grid mode: {'Infinite' if cfg.infinite_grid else 'Limited'}")

    try:
        while max_cycles is None or attempts < max_cycles:
            retrying = Retrying(
                retry=retry_if_exception_type(FetchError),
                stop=attempts_spent,
                wait=backoff.wait,
                sleep=sleep,
                after=log_failure,
                before_sleep=log_backoff,
                reraise=True,
            )
            try:
                for attempt in retrying:
                    with attempt:
                        attempts += 1
                        if events is not None:
                            events.cycle_start(attempts)
                        result = run_one_cycle(engine, feed, cfg.trading_pair)
            except FetchError:
                # out of attempts
                break

            completed += 1
            report_cycle(cfg, engine, result, events=events, chart=chart)
            if (max_cycles is None or attempts < max_cycles) and cfg.update_interval_seconds > 0:
                sleep(cfg.update_interval_seconds)
    except KeyboardInterrupt:
        click.echo(f"\n\nShutting down after {completed} cycle(s). Goodbye.")

    if events is not None:
        events.shutdown(completed)
    return completed
