"""
CLI entry point: grid run | levels | replay | health.

Every command loads config from --config (default config.yaml). The
engine is built once per command and handed to the loop explicitly.
"""

import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from config import ConfigError, GridConfig, load_config

load_dotenv()

logger = logging.getLogger("grid")


def _setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s  %(message)s",
        stream=sys.stderr,
    )


def _load(ctx: click.Context) -> GridConfig:
    try:
        return load_config(ctx.obj["config_path"])
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.option("--config", "config_path", default="config.yaml", help="Path to config file (YAML or JSON).")
@click.pass_context
def cli(ctx: click.Context, config_path: str) -> None:
    """grid-engine: grid trading on a single symbol, paper fills only."""
    _setup_logging()
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


# ---------- grid run ----------


@cli.command()
@click.option("--cycles", default=None, type=int, help="Stop after N cycles (default: run until Ctrl+C).")
@click.option("--chart", is_flag=True, default=False, help="Write the open-order data file and render it with gnuplot each cycle.")
@click.pass_context
def run(ctx: click.Context, cycles: int | None, chart: bool) -> None:
    """Poll the price feed and run one grid cycle per interval."""
    cfg = _load(ctx)
    from cli.scheduler import run_live_loop
    from cli.structured_log import StructuredEventLogger
    from cli.wiring import ReportListener, build_engine
    from data import get_binance_feed
    from journal import JournalWriter

    events = StructuredEventLogger(cfg.trading_pair, enabled=cfg.structured_logs, webhook_url=cfg.webhook_url)
    try:
        journal = JournalWriter(cfg.log_file_path)
    except OSError as exc:
        logger.warning("Journal disabled, cannot open %s: %s", cfg.log_file_path, exc)
        journal = None

    engine = build_engine(cfg, on_event=ReportListener(journal, events))
    feed = get_binance_feed(cfg.price_feed_url, timeout=cfg.request_timeout_seconds)
    run_live_loop(cfg, engine, feed, events=events, max_cycles=cycles, chart=chart)


# ---------- grid levels ----------


@cli.command()
@click.argument("price", type=float)
@click.pass_context
def levels(ctx: click.Context, price: float) -> None:
    """Show the grid ladder the engine would use at PRICE."""
    cfg = _load(ctx)
    from cli.output import format_levels
    from grid_core.contracts import GridLevel
    from grid_core.grid_planner import compute_grid

    if price <= 0:
        raise click.BadParameter("price must be positive", param_hint="PRICE")
    ladder = compute_grid(price, cfg.grid_spacing, cfg.grid_count)
    click.echo(format_levels(ladder, GridLevel.from_price(price, cfg.grid_spacing)))


# ---------- grid replay ----------


@cli.command()
@click.argument("prices_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--verbose", is_flag=True, default=False, help="Print every cycle, not just the summary.")
@click.option("--journal/--no-journal", "use_journal", default=False, help="Append replay events to the configured journal.")
@click.pass_context
def replay(ctx: click.Context, prices_file: Path, verbose: bool, use_journal: bool) -> None:
    """Run a file of prices (one per line) through a fresh engine, no sleeping."""
    cfg = _load(ctx)
    from backtest import read_prices, run_replay
    from cli.output import format_cycle, format_replay_summary
    from cli.wiring import ReportListener, build_engine
    from journal import JournalWriter

    try:
        prices = read_prices(prices_file.read_text().splitlines())
    except ValueError as exc:
        raise click.ClickException(f"{prices_file}: {exc}") from exc
    if not prices:
        click.echo("No prices in file.")
        return

    listener = ReportListener(JournalWriter(cfg.log_file_path)) if use_journal else None
    engine = build_engine(cfg, on_event=listener)

    def on_cycle(result) -> None:
        if verbose:
            click.echo(format_cycle(result))

    result = run_replay(prices, engine, cfg.trading_pair, on_cycle=on_cycle)
    click.echo(format_replay_summary(result))


# ---------- grid health ----------


@cli.command()
@click.option("--skip-feed", is_flag=True, default=False, help="Do not contact the price feed.")
@click.pass_context
def health(ctx: click.Context, skip_feed: bool) -> None:
    """Check config and price feed. Exit code 0 = healthy, 1 = unhealthy."""
    checks: list[tuple[str, bool, str]] = []

    try:
        cfg = load_config(ctx.obj["config_path"])
        checks.append(("config", True, f"loaded ({cfg.trading_pair}, {2 * cfg.grid_count + 1} levels @ {cfg.grid_spacing:g})"))
    except ConfigError as e:
        checks.append(("config", False, str(e)))
        _print_health(checks)
        raise SystemExit(1)

    if not skip_feed:
        from data import FetchError, get_binance_feed

        try:
            feed = get_binance_feed(cfg.price_feed_url, timeout=cfg.request_timeout_seconds)
            price = feed.fetch_price(cfg.trading_pair)
            checks.append(("price_feed", True, f"{cfg.trading_pair} = {price:g}"))
        except FetchError as e:
            checks.append(("price_feed", False, str(e)))

    _print_health(checks)
    healthy = all(ok for _, ok, _ in checks)
    raise SystemExit(0 if healthy else 1)


def _print_health(checks: list[tuple[str, bool, str]]) -> None:
    for name, ok, detail in checks:
        status = "OK" if ok else "FAIL"
        click.echo(f"  [{status}] {name}: {detail}")
    healthy = all(ok for _, ok, _ in checks)
    click.echo(f"\nHealth: {'HEALTHY' if healthy else 'UNHEALTHY'}")


if __name__ == "__main__":
    cli()
