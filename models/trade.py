"""Trade order and execution models: TradeOrder, ExecutedTrade, TradeResult."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from models.state import SimulationState


class TradeError(str, Enum):
    """Reasons the ledger rejects an order. All are recoverable."""

    UNKNOWN_INSTRUMENT = "unknown_instrument"
    INVALID_QUANTITY = "invalid_quantity"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_SHARES = "insufficient_shares"


class TradeOrder(BaseModel):
    """Immediate market order: symbol, side, quantity.

    ``quantity`` is stored exactly as given, without coercion. The ledger
    rejects anything that is not a positive ``int`` (fractions, booleans,
    numeric strings) as ``INVALID_QUANTITY``.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    side: Literal["buy", "sell"]
    quantity: Any


class ExecutedTrade(BaseModel):
    """Single fill produced by the ledger from one accepted order."""

    model_config = ConfigDict(frozen=True)

    trade_id: str
    day: int
    symbol: str
    side: Literal["buy", "sell"]
    quantity: int
    price: float
    value: float  # Cash moved: cost for buys, proceeds for sells


class TradeResult(BaseModel):
    """Ledger response to an order.

    When ``status`` is "accepted", ``state`` is the post-trade state and
    ``trade`` the fill. When "rejected", ``state`` is the caller's input
    state, untouched, and ``error``/``message`` say why.
    """

    model_config = ConfigDict(frozen=True)

    status: Literal["accepted", "rejected"]
    state: SimulationState
    trade: ExecutedTrade | None = None
    error: TradeError | None = None
    message: str = ""

    @property
    def accepted(self) -> bool:
        return self.status == "accepted"
