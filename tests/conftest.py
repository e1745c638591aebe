"""Pytest fixtures: risk limits, engines and configs for deterministic grid tests."""

from pathlib import Path

import pytest

from config.loader import GridConfig
from execution import PaperExecutor
from grid_core.contracts import IdSequence
from grid_core.engine import GridEngine
from grid_core.order_book import OrderBook
from grid_core.position_ledger import PositionLedger
from grid_core.risk_gate import RiskGate


@pytest.fixture
def risk_gate() -> RiskGate:
    """Equity 1000, max order size 0.5, max drawdown 20% (200)."""
    return RiskGate.from_fractions(1000.0, 0.5, 0.2, 0.05)


@pytest.fixture
def ledger(risk_gate: RiskGate) -> PositionLedger:
    return PositionLedger(risk_gate)


@pytest.fixture
def events() -> list[tuple[str, dict]]:
    return []


@pytest.fixture
def book(risk_gate: RiskGate, events: list) -> OrderBook:
    ids = IdSequence()
    return OrderBook(
        0.1,
        risk_gate,
        PositionLedger(risk_gate, ids),
        PaperExecutor("ETHUSDT"),
        ids=ids,
        on_event=lambda kind, payload: events.append((kind, payload)),
    )


@pytest.fixture
def engine(risk_gate: RiskGate) -> GridEngine:
    """Spacing 10, two levels each side of base, 0.1 per order."""
    return GridEngine(10.0, 2, 0.1, risk_gate, PaperExecutor("ETHUSDT"), tolerance_fraction=0.1)


@pytest.fixture
def grid_config(tmp_path: Path) -> GridConfig:
    return GridConfig(
        trading_pair="ETHUSDT",
        grid_count=2,
        grid_spacing=10.0,
        min_order_quantity=0.1,
        initial_investment=1000.0,
        max_position_size=0.5,
        max_drawdown_percent=0.2,
        max_loss_per_trade_percent=0.05,
        update_interval_seconds=5,
        infinite_grid=False,
        log_file_path=str(tmp_path / "journal.jsonl"),
        data_file_path=str(tmp_path / "grid_data.dat"),
        chart_output_path=str(tmp_path / "grid_chart.png"),
        structured_logs=False,
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A complete YAML config writing everything under tmp_path."""
    path = tmp_path / "config.yaml"
    path.write_text(
        f"""
trading_pair: ETHUSDT
grid_count: 2
grid_spacing: 10.0
min_order_quantity: 0.1
initial_investment: 1000.0
max_position_size: 0.5
max_drawdown_percent: 0.2
max_loss_per_trade_percent: 0.05
update_interval_seconds: 0
infinite_grid: true
log_file_path: "{tmp_path / 'journal.jsonl'}"
data_file_path: "{tmp_path / 'grid_data.dat'}"
chart_output_path: "{tmp_path / 'grid_chart.png'}"
structured_logs: false
"""
    )
    return path
