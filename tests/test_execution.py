"""Tests for paper execution: immediate full fills at the requested price."""

from execution.paper_executor import PaperExecutor
from grid_core.contracts import GridLevel, Order, Side


def _order(order_id: str, side: Side, price: float) -> Order:
    return Order(id=order_id, side=side, price=price, quantity=0.1, level=GridLevel.from_price(price, 10.0))


def test_submit_fills_at_requested_price() -> None:
    ex = PaperExecutor("ETHUSDT")
    fill = ex.submit(_order("ORDER_1", Side.BUY, 2990.5))
    assert fill.order_id == "ORDER_1"
    assert fill.side is Side.BUY
    assert fill.price == 2990.5
    assert fill.quantity == 0.1
    assert fill.realized_pnl is None


def test_list_fills_newest_first() -> None:
    ex = PaperExecutor("ETHUSDT")
    ex.submit(_order("ORDER_1", Side.BUY, 2990.5))
    ex.submit(_order("ORDER_2", Side.SELL, 3009.5))
    fills = ex.list_fills()
    assert [f.order_id for f in fills] == ["ORDER_2", "ORDER_1"]
    assert fills[0].side == "sell"
    assert fills[0].level == 3010.0
    assert len(ex.list_fills(limit=1)) == 1
