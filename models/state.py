"""Simulation state: the single root aggregate owned by the caller."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from models.instrument import Instrument
from models.news import NewsEvent
from models.portfolio import PortfolioPosition

# Most recent news events kept on the state.
NEWS_LOG_LIMIT = 10


class SimulationState(BaseModel):
    """Cash, holdings, instruments, recent news and the day counter.

    Treated as an immutable value: ``advance_day`` and ``execute_trade``
    each return a new state built with ``model_copy`` and never touch the
    one they were given. ``news_log`` is most recent first.
    """

    model_config = ConfigDict(frozen=True)

    balance: float = Field(ge=0.0)
    portfolio: dict[str, PortfolioPosition] = {}
    instruments: dict[str, Instrument]
    news_log: tuple[NewsEvent, ...] = Field(default=(), max_length=NEWS_LOG_LIMIT)
    day: int = Field(default=1, ge=1)

    @property
    def sectors(self) -> list[str]:
        """Distinct sectors, in instrument order."""
        return list(dict.fromkeys(i.sector for i in self.instruments.values()))

    @property
    def portfolio_value(self) -> float:
        """Market value of all positions at current prices."""
        total = 0.0
        for symbol in self.portfolio:
            total += self.position_value(symbol) or 0.0
        return round(total, 2)

    @property
    def total_assets(self) -> float:
        return round(self.balance + self.portfolio_value, 2)

    def position_value(self, symbol: str) -> float | None:
        """Market value of the position in *symbol*, or ``None`` if not held."""
        position = self.portfolio.get(symbol)
        instrument = self.instruments.get(symbol)
        if position is None or instrument is None:
            return None
        return round(position.shares * instrument.price, 2)

    def unrealized_pnl(self, symbol: str) -> float | None:
        """Paper gain or loss on the position in *symbol* versus its cost basis."""
        position = self.portfolio.get(symbol)
        instrument = self.instruments.get(symbol)
        if position is None or instrument is None:
            return None
        return round(position.shares * (instrument.price - position.average_price), 2)
