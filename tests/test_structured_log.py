"""Tests for the structured JSON event logger."""

import io
import json

from cli.structured_log import StructuredEventLogger


def _lines(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_events_are_json_lines() -> None:
    stream = io.StringIO()
    log = StructuredEventLogger("ETHUSDT", stream=stream)
    log.cycle_start(1)
    log.order_placed("ORDER_1", "buy", 2990.0, 2990.5, 0.1)
    log.cycle_complete(1, 2990.5, 1, 1000.0)

    records = _lines(stream)
    assert [r["event"] for r in records] == ["cycle_start", "order_placed", "cycle_complete"]
    assert all(r["symbol"] == "ETHUSDT" for r in records)
    assert records[1]["order_id"] == "ORDER_1"
    assert records[2]["open_orders"] == 1
    assert "ts" in records[0]


def test_disabled_writes_nothing_but_returns_record() -> None:
    stream = io.StringIO()
    log = StructuredEventLogger("ETHUSDT", enabled=False, stream=stream)
    record = log.drawdown_warning(250.123, 200.0, 749.877)
    assert stream.getvalue() == ""
    assert record["event"] == "drawdown_warning"
    assert record["drawdown"] == 250.12


def test_webhook_only_for_alert_events(monkeypatch) -> None:
    posted: list[dict] = []
    log = StructuredEventLogger("ETHUSDT", webhook_url="http://hooks.test/x", stream=io.StringIO())
    monkeypatch.setattr(log, "_post_webhook", lambda record: posted.append(record))

    log.cycle_start(1)
    log.order_rejected("buy", 2990.0, "insufficient funds")
    log.backoff(2, 2.0)
    log.error("price fetch failed", "timeout")

    assert [r["event"] for r in posted] == ["order_rejected", "error"]


def test_webhook_failure_is_logged(caplog) -> None:
    log = StructuredEventLogger("ETHUSDT", webhook_url="http://127.0.0.1:9/unreachable", stream=io.StringIO())
    log.error("boom")
    assert any("Webhook POST failed" in r.message for r in caplog.records)
