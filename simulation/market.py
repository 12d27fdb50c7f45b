"""Day-advance simulator: one trading day of price movement and news.

Each instrument moves by a uniform random base volatility of up to
``BASE_VOLATILITY`` either way. Instruments whose sector the day's news
affects get an extra ``impact * NEWS_SENSITIVITY`` on top. Prices are
floored at ``PRICE_FLOOR`` and rounded to cents.
"""

from __future__ import annotations

import logging
import random

from models.instrument import HISTORY_LIMIT, PRICE_FLOOR, Instrument
from models.news import NewsEvent
from models.state import NEWS_LOG_LIMIT, SimulationState
from news.base import NewsGenerator
from simulation.registry import InstrumentRegistry

logger = logging.getLogger(__name__)

BASE_VOLATILITY = 0.025  # +/- 2.5% per day
NEWS_SENSITIVITY = 0.08  # up to +/- 8% extra for affected sectors


def apply_news(instrument: Instrument, news: NewsEvent, rng: random.Random) -> Instrument:
    """Return *instrument* after one day's move under *news*."""
    volatility = rng.uniform(-BASE_VOLATILITY, BASE_VOLATILITY)
    if instrument.sector in news.affected_sectors:
        volatility += news.impact * NEWS_SENSITIVITY

    old_price = instrument.price
    new_price = round(max(PRICE_FLOOR, old_price * (1 + volatility)), 2)
    history = instrument.history
    if not history or history[-1] != old_price:
        history = (*history, old_price)
    # change is derived from the last two entries: old_price then new_price.
    history = (*history, new_price)[-HISTORY_LIMIT:]

    return instrument.model_copy(update={"price": new_price, "history": history})


async def advance_day(
    state: SimulationState,
    news_generator: NewsGenerator,
    rng: random.Random | None = None,
    timeout: float | None = None,
) -> SimulationState:
    """Simulate one day and return the next state.

    Balance and portfolio carry over unchanged. The news generator
    guarantees a valid event, so this never fails as a whole. *rng* makes
    price moves reproducible; *timeout* bounds the news provider call.
    """
    rng = rng or random.Random()
    registry = InstrumentRegistry(state.instruments)
    next_day = state.day + 1

    news = await news_generator.generate(next_day, registry.sectors(), timeout=timeout)

    updated = registry.replace_all(
        apply_news(instrument, news, rng) for instrument in registry.values()
    )
    news_log = (news, *state.news_log)[:NEWS_LOG_LIMIT]

    logger.info(
        "Day %d: '%s' (impact %+.2f, sectors: %s)",
        next_day,
        news.title,
        news.impact,
        ", ".join(sorted(news.affected_sectors)) or "none",
    )

    return state.model_copy(
        update={
            "day": next_day,
            "instruments": dict(updated),
            "portfolio": dict(state.portfolio),
            "news_log": news_log,
        }
    )
