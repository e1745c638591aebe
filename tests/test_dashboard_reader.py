"""Tests for the dashboard's read-only data access."""

from pathlib import Path

from data_reader import get_open_orders, get_recent_journal_events, total_realized_pnl
from journal import JournalWriter


def test_reads_journal_newest_first(tmp_path: Path) -> None:
    j = JournalWriter(tmp_path / "grid_trading.log.jsonl")
    j.fill("ORDER_1", "buy", 2990.5, 0.1)
    j.fill("ORDER_2", "sell", 3009.5, 0.1, realized_pnl=1.9)
    j.order_closed("ORDER_1", "buy", 2990.0)

    fills = get_recent_journal_events("fill", data_dir=tmp_path)
    assert [f["order_id"] for f in fills] == ["ORDER_2", "ORDER_1"]
    assert len(get_recent_journal_events(limit=1, data_dir=tmp_path)) == 1
    assert total_realized_pnl(tmp_path) == 1.9


def test_open_orders_skip_malformed_rows(tmp_path: Path) -> None:
    (tmp_path / "grid_data.dat").write_text("2990 2990.5 0.1\nbroken\n3010 x 0.1\n")
    assert get_open_orders(tmp_path) == [{"level": 2990.0, "price": 2990.5, "quantity": 0.1}]


def test_missing_files(tmp_path: Path) -> None:
    assert get_open_orders(tmp_path) == []
    assert get_recent_journal_events(data_dir=tmp_path) == []
