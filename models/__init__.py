"""Data models for the market game.

The news generators, the simulation core and the terminal driver all import
from models.
"""

from models.config import DEFAULT_INSTRUMENTS, GameConfig, InstrumentConfig, NewsConfig
from models.instrument import HISTORY_LIMIT, PRICE_FLOOR, Instrument
from models.news import NewsEvent
from models.portfolio import PortfolioPosition
from models.state import NEWS_LOG_LIMIT, SimulationState
from models.trade import ExecutedTrade, TradeError, TradeOrder, TradeResult

__all__ = [
    # config
    "DEFAULT_INSTRUMENTS",
    "GameConfig",
    "InstrumentConfig",
    "NewsConfig",
    # instrument
    "HISTORY_LIMIT",
    "PRICE_FLOOR",
    "Instrument",
    # news
    "NewsEvent",
    # portfolio
    "PortfolioPosition",
    # state
    "NEWS_LOG_LIMIT",
    "SimulationState",
    # trade
    "ExecutedTrade",
    "TradeError",
    "TradeOrder",
    "TradeResult",
]
