"""Market simulation core: instrument registry, day advance, trade ledger, session."""

from simulation.ledger import execute_trade
from simulation.market import advance_day, apply_news
from simulation.registry import InstrumentRegistry, seed_registry
from simulation.session import CommandInProgressError, MarketSession

__all__ = [
    "CommandInProgressError",
    "InstrumentRegistry",
    "MarketSession",
    "advance_day",
    "apply_news",
    "execute_trade",
    "seed_registry",
]
