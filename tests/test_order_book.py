"""Tests for the order book: placement, duplicate guard, crossing bands, reconciliation."""

import pytest

from grid_core.contracts import GridLevel, Order, OrderStatus, RiskRejection, Side
from grid_core.grid_planner import compute_grid
from grid_core.order_book import OrderBook
from grid_core.risk_gate import REASON_POSITION_SIZE


def _level(price: float) -> GridLevel:
    return GridLevel.from_price(price, 10.0)


class TestPlace:
    def test_place_records_open_order_and_fills(self, book: OrderBook, events: list) -> None:
        order = book.place(Side.BUY, 2990.5, _level(2990.0))
        assert isinstance(order, Order)
        assert order.id == "ORDER_1"
        assert order.status is OrderStatus.OPEN
        assert order.quantity == 0.1
        assert book.orders_at(_level(2990.0)) == [order]
        assert book.last_fill is not None
        assert book.last_fill.price == 2990.5
        assert [kind for kind, _ in events] == ["order_placed", "fill"]
        assert events[0][1]["level"] == 2990.0

    def test_order_ids_increase(self, book: OrderBook) -> None:
        first = book.place(Side.BUY, 2990.5, _level(2990.0))
        second = book.place(Side.SELL, 3009.5, _level(3010.0))
        assert (first.id, second.id) == ("ORDER_1", "ORDER_2")

    def test_sell_fill_carries_realized_pnl(self, book: OrderBook, events: list) -> None:
        book.place(Side.BUY, 2990.0, _level(2990.0))
        book.place(Side.SELL, 3000.0, _level(3000.0))
        fill = events[-1][1]
        assert events[-1][0] == "fill"
        assert fill["realized_pnl"] == pytest.approx(1.0)

    def test_rejection_changes_nothing(self, risk_gate, events: list) -> None:
        from execution import PaperExecutor
        from grid_core.position_ledger import PositionLedger

        ledger = PositionLedger(risk_gate)
        big = OrderBook(0.6, risk_gate, ledger, PaperExecutor(), on_event=lambda k, p: events.append((k, p)))
        outcome = big.place(Side.BUY, 3000.0, _level(3000.0))
        assert isinstance(outcome, RiskRejection)
        assert outcome.reason == REASON_POSITION_SIZE
        assert big.levels() == []
        assert big.audit_trail() == []
        assert ledger.position.quantity == 0.0
        assert [kind for kind, _ in events] == ["order_rejected"]

    def test_venue_failure_leaves_book_untouched(self, risk_gate, events: list) -> None:
        from grid_core.position_ledger import PositionLedger

        class BrokenVenue:
            def submit(self, order):
                raise RuntimeError("venue down")

        ledger = PositionLedger(risk_gate)
        broken = OrderBook(0.1, risk_gate, ledger, BrokenVenue(), on_event=lambda k, p: events.append((k, p)))
        with pytest.raises(RuntimeError, match="venue down"):
            broken.place(Side.BUY, 2990.5, _level(2990.0))
        assert broken.open_orders() == []
        assert broken.audit_trail() == []
        assert broken.should_place(_level(2990.0), Side.BUY) is True
        assert ledger.position.quantity == 0.0
        assert events == []


class TestShouldPlace:
    def test_empty_level(self, book: OrderBook) -> None:
        assert book.should_place(_level(2990.0), Side.BUY) is True

    def test_open_same_side_blocks(self, book: OrderBook) -> None:
        book.place(Side.BUY, 2990.5, _level(2990.0))
        assert book.should_place(_level(2990.0), Side.BUY) is False

    def test_other_side_allowed(self, book: OrderBook) -> None:
        book.place(Side.BUY, 2990.5, _level(2990.0))
        assert book.should_place(_level(2990.0), Side.SELL) is True


class TestEvaluateCrossing:
    def test_scenario_buy_at_lower_then_no_duplicate(self, book: OrderBook) -> None:
        levels = compute_grid(3000.0, 10.0, 2)
        assert [lvl.price for lvl in levels] == [2980.0, 2990.0, 3000.0, 3010.0, 3020.0]

        placed = book.evaluate_crossing(2991.0, levels, 0.1)
        assert isinstance(placed, Order)
        assert placed.side is Side.BUY
        assert placed.level == _level(2990.0)
        assert placed.price == 2991.0

        assert book.should_place(_level(2990.0), Side.BUY) is False
        assert book.evaluate_crossing(2991.0, levels, 0.1) is None
        assert len(book.open_orders()) == 1

    def test_sell_near_upper(self, book: OrderBook) -> None:
        levels = compute_grid(3000.0, 10.0, 2)
        placed = book.evaluate_crossing(2999.5, levels, 0.1)
        assert isinstance(placed, Order)
        assert placed.side is Side.SELL
        assert placed.level == _level(3000.0)

    def test_upper_band_edge_is_inclusive(self, book: OrderBook) -> None:
        levels = compute_grid(3000.0, 10.0, 2)
        placed = book.evaluate_crossing(2999.0, levels, 0.1)
        assert isinstance(placed, Order)
        assert placed.side is Side.SELL
        assert placed.level == _level(3000.0)

    def test_price_on_level_is_upper_of_its_bracket(self, book: OrderBook) -> None:
        levels = compute_grid(3000.0, 10.0, 2)
        placed = book.evaluate_crossing(3000.0, levels, 0.1)
        assert placed.side is Side.SELL
        assert placed.level == _level(3000.0)

    def test_middle_of_bracket_does_nothing(self, book: OrderBook) -> None:
        levels = compute_grid(3000.0, 10.0, 2)
        assert book.evaluate_crossing(2995.0, levels, 0.1) is None
        assert book.open_orders() == []

    def test_just_outside_band_does_nothing(self, book: OrderBook) -> None:
        levels = compute_grid(3000.0, 10.0, 2)
        assert book.evaluate_crossing(2991.5, levels, 0.1) is None

    def test_outside_ladder_does_nothing(self, book: OrderBook) -> None:
        levels = compute_grid(3000.0, 10.0, 2)
        assert book.evaluate_crossing(2980.0, levels, 0.1) is None
        assert book.evaluate_crossing(3050.0, levels, 0.1) is None

    def test_rejection_is_returned(self, risk_gate, book: OrderBook) -> None:
        risk_gate.update_equity(-900.0)
        levels = compute_grid(3000.0, 10.0, 2)
        outcome = book.evaluate_crossing(2990.5, levels, 0.1)
        assert isinstance(outcome, RiskRejection)
        assert book.open_orders() == []


class TestReconcile:
    def test_prunes_levels_and_closes_orders(self, book: OrderBook, events: list) -> None:
        low = book.place(Side.BUY, 2990.5, _level(2990.0))
        high = book.place(Side.SELL, 3009.5, _level(3010.0))
        new_levels = compute_grid(3030.0, 10.0, 2)

        closed = book.reconcile(new_levels)

        assert closed == [low]
        assert low.status is OrderStatus.CLOSED
        assert high.status is OrderStatus.OPEN
        assert set(book.levels()) <= set(new_levels)
        assert events[-1][0] == "order_closed"
        assert events[-1][1]["order_id"] == low.id

    def test_position_untouched(self, book: OrderBook, risk_gate) -> None:
        book.place(Side.BUY, 2990.5, _level(2990.0))
        equity = risk_gate.current_equity
        book.reconcile(compute_grid(5000.0, 10.0, 2))
        assert book.open_orders() == []
        assert risk_gate.current_equity == equity

    def test_closed_orders_stay_in_audit_trail(self, book: OrderBook) -> None:
        order = book.place(Side.BUY, 2990.5, _level(2990.0))
        book.reconcile(compute_grid(5000.0, 10.0, 2))
        trail = book.audit_trail()
        assert trail == [order]
        assert trail[0].level == _level(2990.0)
        assert trail[0].status is OrderStatus.CLOSED

    def test_level_can_be_reused_after_pruning(self, book: OrderBook) -> None:
        book.place(Side.BUY, 2990.5, _level(2990.0))
        book.reconcile(compute_grid(5000.0, 10.0, 2))
        assert book.should_place(_level(2990.0), Side.BUY) is True

    def test_no_duplicate_open_orders_across_cycles(self, book: OrderBook) -> None:
        prices = [2990.5, 2990.5, 2999.5, 3100.0, 2990.5, 2990.5, 2999.5, 2990.5]
        for price in prices:
            levels = compute_grid(price, 10.0, 2)
            book.reconcile(levels)
            book.evaluate_crossing(price, levels, 0.1)
            seen = set()
            for order in book.open_orders():
                key = (order.level, order.side)
                assert key not in seen
                seen.add(key)
            assert set(book.levels()) <= set(levels)


def test_order_cannot_close_twice() -> None:
    order = Order(id="ORDER_1", side=Side.BUY, price=1.0, quantity=1.0, level=GridLevel(0, 1.0))
    order.close()
    with pytest.raises(ValueError, match="already closed"):
        order.close()


def test_snapshot_lists_open_orders(book: OrderBook) -> None:
    book.place(Side.SELL, 3009.5, _level(3010.0))
    book.place(Side.BUY, 2990.5, _level(2990.0))
    snap = book.snapshot()
    assert [(s.level_price, s.price, s.quantity) for s in snap] == [(2990.0, 2990.5, 0.1), (3010.0, 3009.5, 0.1)]
