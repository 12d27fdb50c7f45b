"""Tests for the trade ledger.

Tests cover:
1. Buys: new positions, weighted-average cost, exact-balance purchases
2. Sells: partial sells, closing a position, average cost untouched
3. Rejections: check order, error kinds, state left untouched
4. Round trips and purity
5. New states never share mappings with the input state
"""

from __future__ import annotations

from typing import Any

import pytest

from models.instrument import Instrument
from models.portfolio import PortfolioPosition
from models.state import SimulationState
from models.trade import TradeError, TradeOrder
from simulation.ledger import execute_trade


# ---------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------

def _state(
    balance: float = 10_000.0,
    price: float = 100.0,
    portfolio: dict[str, PortfolioPosition] | None = None,
) -> SimulationState:
    instruments = {
        "TECH": Instrument(
            symbol="TECH", name="TechNova Solutions", sector="Technology",
            price=price, history=(price,),
        ),
        "ENER": Instrument(
            symbol="ENER", name="Global Energy Corp", sector="Energy",
            price=85.5, history=(85.5,),
        ),
    }
    return SimulationState(balance=balance, instruments=instruments, portfolio=portfolio or {})


def _reprice(state: SimulationState, symbol: str, price: float) -> SimulationState:
    instrument = state.instruments[symbol].model_copy(update={"price": price})
    return state.model_copy(update={"instruments": {**state.instruments, symbol: instrument}})


def _buy(symbol: str, quantity: Any) -> TradeOrder:
    return TradeOrder(symbol=symbol, side="buy", quantity=quantity)


def _sell(symbol: str, quantity: Any) -> TradeOrder:
    return TradeOrder(symbol=symbol, side="sell", quantity=quantity)


# ---------------------------------------------------------------
# Buys
# ---------------------------------------------------------------

class TestBuy:
    def test_opens_position_at_current_price(self):
        result = execute_trade(_state(), _buy("TECH", 10))

        assert result.accepted
        assert result.error is None
        position = result.state.portfolio["TECH"]
        assert position.shares == 10
        assert position.average_price == 100.0
        assert result.state.balance == 9_000.0

    def test_records_executed_trade(self):
        state = _state()
        result = execute_trade(state, _buy("TECH", 3))

        trade = result.trade
        assert trade is not None
        assert trade.symbol == "TECH"
        assert trade.side == "buy"
        assert trade.quantity == 3
        assert trade.price == 100.0
        assert trade.value == 300.0
        assert trade.day == state.day
        assert trade.trade_id

    def test_weighted_average_cost(self):
        first = execute_trade(_state(), _buy("TECH", 10))
        moved = _reprice(first.state, "TECH", 150.0)

        second = execute_trade(moved, _buy("TECH", 10))

        position = second.state.portfolio["TECH"]
        assert position.shares == 20
        assert position.average_price == 125.0
        assert second.state.balance == 7_500.0

    def test_uneven_weighted_average(self):
        first = execute_trade(_state(), _buy("TECH", 3))
        second = execute_trade(_reprice(first.state, "TECH", 110.0), _buy("TECH", 1))

        assert second.state.portfolio["TECH"].average_price == pytest.approx(102.5)

    def test_can_spend_entire_balance(self):
        result = execute_trade(_state(balance=1_000.0), _buy("TECH", 10))

        assert result.accepted
        assert result.state.balance == 0.0

    def test_other_positions_untouched(self):
        held = PortfolioPosition(symbol="ENER", shares=4, average_price=80.0)
        result = execute_trade(_state(portfolio={"ENER": held}), _buy("TECH", 1))

        assert result.state.portfolio["ENER"] == held


# ---------------------------------------------------------------
# Sells
# ---------------------------------------------------------------

class TestSell:
    def test_partial_sell_keeps_average_cost(self):
        held = PortfolioPosition(symbol="TECH", shares=10, average_price=80.0)
        result = execute_trade(_state(balance=0.0, portfolio={"TECH": held}), _sell("TECH", 4))

        assert result.accepted
        position = result.state.portfolio["TECH"]
        assert position.shares == 6
        assert position.average_price == 80.0
        assert result.state.balance == 400.0

    def test_selling_all_shares_removes_position(self):
        held = PortfolioPosition(symbol="TECH", shares=5, average_price=90.0)
        result = execute_trade(_state(balance=0.0, portfolio={"TECH": held}), _sell("TECH", 5))

        assert "TECH" not in result.state.portfolio
        assert result.state.balance == 500.0
        assert result.trade.value == 500.0


# ---------------------------------------------------------------
# Rejections
# ---------------------------------------------------------------

class TestRejections:
    def test_insufficient_funds(self):
        state = _state(balance=50.0, price=100.0)
        result = execute_trade(state, _buy("TECH", 1))

        assert result.status == "rejected"
        assert result.error is TradeError.INSUFFICIENT_FUNDS
        assert "Insufficient cash" in result.message
        assert result.state is state
        assert result.trade is None

    def test_unknown_instrument(self):
        result = execute_trade(_state(), _buy("NOPE", 1))

        assert result.error is TradeError.UNKNOWN_INSTRUMENT
        assert "NOPE" in result.message

    @pytest.mark.parametrize("quantity", [0, -1, -25])
    def test_invalid_quantity(self, quantity):
        result = execute_trade(_state(), _buy("TECH", quantity))

        assert result.error is TradeError.INVALID_QUANTITY

    @pytest.mark.parametrize("quantity", [2.5, 1.0, True, False, "3", None])
    def test_non_integer_quantity(self, quantity):
        state = _state()
        result = execute_trade(state, _buy("TECH", quantity))

        assert result.status == "rejected"
        assert result.error is TradeError.INVALID_QUANTITY
        assert result.state is state

    def test_boolean_sell_quantity(self):
        held = PortfolioPosition(symbol="TECH", shares=2, average_price=100.0)
        state = _state(portfolio={"TECH": held})

        result = execute_trade(state, _sell("TECH", True))

        assert result.error is TradeError.INVALID_QUANTITY
        assert state.portfolio["TECH"].shares == 2

    def test_order_keeps_quantity_uncoerced(self):
        assert _buy("TECH", 2.5).quantity == 2.5
        assert _buy("TECH", True).quantity is True

    def test_sell_without_position(self):
        result = execute_trade(_state(), _sell("TECH", 1))

        assert result.error is TradeError.INSUFFICIENT_SHARES
        assert "only 0 held" in result.message

    def test_sell_more_than_held(self):
        held = PortfolioPosition(symbol="TECH", shares=2, average_price=100.0)
        result = execute_trade(_state(portfolio={"TECH": held}), _sell("TECH", 3))

        assert result.error is TradeError.INSUFFICIENT_SHARES

    def test_unknown_instrument_checked_before_quantity(self):
        result = execute_trade(_state(), _buy("NOPE", 0))

        assert result.error is TradeError.UNKNOWN_INSTRUMENT

    def test_unknown_instrument_checked_before_fractional_quantity(self):
        result = execute_trade(_state(), _buy("NOPE", 1.5))

        assert result.error is TradeError.UNKNOWN_INSTRUMENT

    def test_quantity_checked_before_funds(self):
        result = execute_trade(_state(balance=0.0), _buy("TECH", -1))

        assert result.error is TradeError.INVALID_QUANTITY

    def test_rejection_leaves_state_unchanged(self):
        held = PortfolioPosition(symbol="TECH", shares=1, average_price=100.0)
        state = _state(balance=10.0, portfolio={"TECH": held})
        snapshot = state.model_copy(deep=True)

        for order in (_buy("TECH", 1), _sell("TECH", 2), _buy("XYZ", 1), _sell("TECH", 0)):
            result = execute_trade(state, order)
            assert result.state is state
            assert state == snapshot


# ---------------------------------------------------------------
# Round trips and purity
# ---------------------------------------------------------------

class TestRoundTrip:
    @pytest.mark.parametrize("price,quantity", [(100.0, 10), (42.1, 3), (33.33, 7), (210.75, 13)])
    def test_buy_then_sell_restores_balance(self, price, quantity):
        state = _state(balance=10_000.0, price=price)

        bought = execute_trade(state, _buy("TECH", quantity))
        sold = execute_trade(bought.state, _sell("TECH", quantity))

        assert sold.state.balance == 10_000.0
        assert sold.state.portfolio == {}

    def test_same_order_same_outcome(self):
        state = _state()

        first = execute_trade(state, _buy("TECH", 7))
        second = execute_trade(state, _buy("TECH", 7))

        assert first.state.balance == second.state.balance
        assert first.state.portfolio == second.state.portfolio

    def test_accepted_trade_does_not_mutate_input(self):
        state = _state()
        snapshot = state.model_copy(deep=True)

        execute_trade(state, _buy("TECH", 5))

        assert state == snapshot
        assert state.portfolio == {}

    def test_balance_never_negative_over_many_trades(self):
        state = _state(balance=1_000.0, price=33.33)
        for quantity in (10, 20, 5, 1, 30):
            state = execute_trade(state, _buy("TECH", quantity)).state
            assert state.balance >= 0
        for quantity in (15, 100, 1):
            state = execute_trade(state, _sell("TECH", quantity)).state
            assert state.balance >= 0
            assert all(p.shares > 0 for p in state.portfolio.values())


# ---------------------------------------------------------------
# State isolation
# ---------------------------------------------------------------

class TestStateIsolation:
    def test_new_state_owns_its_mappings(self):
        state = _state()

        result = execute_trade(state, _buy("TECH", 1))

        assert result.state.instruments is not state.instruments
        assert result.state.portfolio is not state.portfolio

    def test_editing_new_state_leaves_input_alone(self):
        held = PortfolioPosition(symbol="ENER", shares=4, average_price=80.0)
        state = _state(portfolio={"ENER": held})

        after = execute_trade(state, _sell("ENER", 1)).state
        after.instruments.pop("TECH")
        after.portfolio.clear()

        assert "TECH" in state.instruments
        assert state.portfolio["ENER"].shares == 4
