"""Trade ledger: validates and applies market orders against a state.

Execution is all-or-nothing. A rejected order returns the caller's state
object untouched with a ``TradeError`` and a message. An accepted order
returns a new state plus the ``ExecutedTrade`` record.

Cash arithmetic runs in ``Decimal`` on the decimal text of each float and
is quantized to cents, so a buy followed by a sell of the same shares at
the same price restores the balance exactly.
"""

from __future__ import annotations

import uuid
from decimal import ROUND_HALF_UP, Decimal

from models.portfolio import PortfolioPosition
from models.state import SimulationState
from models.trade import ExecutedTrade, TradeError, TradeOrder, TradeResult

_CENT = Decimal("0.01")


def execute_trade(state: SimulationState, order: TradeOrder) -> TradeResult:
    """Validate *order* against *state* and apply it at the current price.

    Checks run in order and the first failure wins: unknown symbol,
    non-positive quantity, insufficient cash (buy), insufficient shares
    (sell).
    """
    instrument = state.instruments.get(order.symbol)
    if instrument is None:
        return _reject(
            state,
            TradeError.UNKNOWN_INSTRUMENT,
            f"Unknown instrument '{order.symbol}'. "
            f"Available: {', '.join(sorted(state.instruments))}.",
        )

    quantity = order.quantity
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        return _reject(
            state,
            TradeError.INVALID_QUANTITY,
            f"Order quantity must be a positive integer, got {quantity!r}.",
        )

    price = _dec(instrument.price)
    value = _cents(price * quantity)
    balance = _dec(state.balance)
    position = state.portfolio.get(order.symbol)

    if order.side == "buy":
        if value > balance:
            return _reject(
                state,
                TradeError.INSUFFICIENT_FUNDS,
                f"Insufficient cash to buy {quantity} shares of {order.symbol} "
                f"at ${price:.2f} (cost ${value:.2f}, available ${balance:.2f}).",
            )
        if position is None:
            updated = PortfolioPosition(
                symbol=order.symbol,
                shares=quantity,
                average_price=float(price),
            )
        else:
            total_shares = position.shares + quantity
            average = (_dec(position.average_price) * position.shares + value) / total_shares
            updated = position.model_copy(
                update={"shares": total_shares, "average_price": float(average)}
            )
        portfolio = {**state.portfolio, order.symbol: updated}
        new_balance = _cents(balance - value)
    else:
        held = position.shares if position is not None else 0
        if quantity > held:
            return _reject(
                state,
                TradeError.INSUFFICIENT_SHARES,
                f"Cannot sell {quantity} shares of {order.symbol}: only {held} held.",
            )
        portfolio = dict(state.portfolio)
        remaining = held - quantity
        if remaining == 0:
            del portfolio[order.symbol]
        else:
            portfolio[order.symbol] = position.model_copy(update={"shares": remaining})
        new_balance = _cents(balance + value)

    trade = ExecutedTrade(
        trade_id=uuid.uuid4().hex[:12],
        day=state.day,
        symbol=order.symbol,
        side=order.side,
        quantity=quantity,
        price=float(price),
        value=float(value),
    )
    new_state = state.model_copy(
        update={
            "balance": float(new_balance),
            "portfolio": portfolio,
            "instruments": dict(state.instruments),
        }
    )
    return TradeResult(
        status="accepted",
        state=new_state,
        trade=trade,
        message=f"{'Bought' if order.side == 'buy' else 'Sold'} {quantity} "
        f"{order.symbol} at ${price:.2f} (${value:.2f}).",
    )


# ------------------------------------------------------------------
# Internal helpers
# ------------------------------------------------------------------

def _reject(state: SimulationState, error: TradeError, message: str) -> TradeResult:
    return TradeResult(status="rejected", state=state, error=error, message=message)


def _dec(value: float) -> Decimal:
    return Decimal(str(value))


def _cents(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)
