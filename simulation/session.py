"""Market session: the single writer that owns the authoritative game state.

A session applies one command at a time. ``advance_day`` is the only
command that suspends (on the news provider call); while it is pending,
every other command is refused with ``CommandInProgressError``. If the
pending advance is cancelled its result is discarded and the state stays
as it was.
"""

from __future__ import annotations

import logging
import random
from typing import Literal

from models.config import GameConfig
from models.state import SimulationState
from models.trade import ExecutedTrade, TradeOrder, TradeResult
from news.base import NewsGenerator
from news.registry import create_news_generator
from simulation.ledger import execute_trade
from simulation.market import advance_day

logger = logging.getLogger(__name__)


class CommandInProgressError(RuntimeError):
    """Raised when a command is issued while a day advance is still pending."""


class MarketSession:
    """Holds the current ``SimulationState`` and serializes commands on it.

    Instantiate one session per game. The session owns the state, the news
    generator, the price random source and an in-memory trade history.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        news_generator: NewsGenerator | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config or GameConfig()
        self._news = news_generator or create_news_generator(self._config.news)
        self._rng = rng or random.Random(self._config.seed)
        self._state = self._config.initial_state()
        self._trade_history: list[ExecutedTrade] = []
        self._pending: str | None = None

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    @property
    def state(self) -> SimulationState:
        """Current state. Immutable; safe to hand to a renderer."""
        return self._state

    @property
    def busy(self) -> bool:
        """True while a day advance is awaiting the news provider."""
        return self._pending is not None

    def get_trade_history(self) -> list[ExecutedTrade]:
        """Return the trades executed so far in this session."""
        return list(self._trade_history)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def advance_day(self) -> SimulationState:
        """Advance one day and return the new state."""
        self._acquire("advance_day")
        try:
            next_state = await advance_day(
                self._state,
                self._news,
                rng=self._rng,
                timeout=self._config.news.request_timeout,
            )
        finally:
            self._pending = None
        self._state = next_state
        return next_state

    def trade(self, order: TradeOrder) -> TradeResult:
        """Apply *order* at current prices. Rejections leave the state as is."""
        self._acquire("trade")
        try:
            result = execute_trade(self._state, order)
        finally:
            self._pending = None

        if result.accepted:
            self._state = result.state
            self._trade_history.append(result.trade)
            logger.info("Day %d: %s", self._state.day, result.message)
        else:
            logger.info(
                "Day %d: rejected %s %s x%s (%s): %s",
                self._state.day,
                order.side,
                order.symbol,
                order.quantity,
                result.error.value,
                result.message,
            )
        return result

    def buy(self, symbol: str, quantity: int) -> TradeResult:
        return self._order(symbol, "buy", quantity)

    def sell(self, symbol: str, quantity: int) -> TradeResult:
        return self._order(symbol, "sell", quantity)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _order(self, symbol: str, side: Literal["buy", "sell"], quantity: int) -> TradeResult:
        return self.trade(TradeOrder(symbol=symbol, side=side, quantity=quantity))

    def _acquire(self, command: str) -> None:
        if self._pending is not None:
            raise CommandInProgressError(
                f"Cannot run '{command}' while '{self._pending}' is pending."
            )
        self._pending = command
