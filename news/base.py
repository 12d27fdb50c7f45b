"""Abstract base class for news generators.

Every generator (LLM-backed, mock, test stubs) implements one hook,
``_fetch``, which returns the raw structured payload for a day. The public
``generate`` wraps it with the contract the day-advance step relies on: it
always resolves to a valid ``NewsEvent``.
"""

from __future__ import annotations

import asyncio
import logging
import math
import uuid
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from models.config import NewsConfig
from models.news import NewsEvent

logger = logging.getLogger(__name__)

# Field defaults for a payload that arrived but is incomplete or malformed.
DEFAULT_TITLE = "Market Opens Quietly"
DEFAULT_CONTENT = "Investors are waiting for more data before making significant moves."

# Copy for the neutral event used when the provider call fails outright.
FALLBACK_TITLE = "Market Stability Continues"
FALLBACK_CONTENT = "No major news reported today. Markets remain steady."


class NewsGenerator(ABC):
    """Common interface for pluggable news sources.

    Lifecycle:
        1. ``__init__``: receive news config.
        2. ``generate``: called once per day advance with the next day
           number and the sectors present in the market.
    """

    def __init__(self, config: NewsConfig | None = None) -> None:
        self.config = config or NewsConfig()

    @abstractmethod
    async def _fetch(self, day: int, sectors: list[str]) -> Any:
        """Ask the provider for one news item and return its raw payload.

        The payload should be a mapping with ``title``, ``content``,
        ``impact`` and ``affectedSectors``. Anything else is tolerated by
        ``generate``. Implementations may raise on transport errors.
        """

    async def generate(
        self,
        day: int,
        sectors: Iterable[str],
        timeout: float | None = None,
    ) -> NewsEvent:
        """Produce the news event for *day*. Never raises to the caller.

        Provider failures, including *timeout* expiry, yield ``fallback``.
        Cancellation is not absorbed.
        """
        offered = list(dict.fromkeys(sectors))
        try:
            payload = await asyncio.wait_for(self._fetch(day, offered), timeout)
        except Exception as exc:
            logger.warning(
                "News provider failed for day %d (%s: %s); using fallback news.",
                day,
                type(exc).__name__,
                exc,
            )
            return self.fallback(day)
        return self._build_event(day, offered, payload)

    def fallback(self, day: int) -> NewsEvent:
        """Neutral event: no impact, no affected sectors."""
        return NewsEvent(
            id=new_event_id(),
            title=FALLBACK_TITLE,
            content=FALLBACK_CONTENT,
            impact=0.0,
            affected_sectors=frozenset(),
            day=day,
            timestamp=datetime.now(timezone.utc),
        )

    @staticmethod
    def _build_event(day: int, sectors: list[str], payload: Any) -> NewsEvent:
        """Turn a provider payload into a ``NewsEvent``, defaulting bad fields."""
        if not isinstance(payload, Mapping):
            logger.warning(
                "Malformed news payload for day %d (%s); using field defaults.",
                day,
                type(payload).__name__,
            )
            payload = {}

        return NewsEvent(
            id=new_event_id(),
            title=_as_text(payload.get("title")) or DEFAULT_TITLE,
            content=_as_text(payload.get("content")) or DEFAULT_CONTENT,
            impact=_as_impact(payload.get("impact")),
            affected_sectors=_as_sectors(payload.get("affectedSectors"), sectors),
            day=day,
            timestamp=datetime.now(timezone.utc),
        )


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def new_event_id() -> str:
    """Short opaque id for a news event."""
    return uuid.uuid4().hex[:12]


def _as_text(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def _as_impact(value: Any) -> float:
    """Coerce a sentiment score to a float clamped into [-1, 1].

    Non-numeric values (None, booleans, junk strings, NaN) become 0.0.
    """
    if isinstance(value, bool):
        return 0.0
    try:
        v = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(v):
        return 0.0
    return max(-1.0, min(1.0, v))


def _as_sectors(value: Any, offered: list[str]) -> frozenset[str]:
    """Keep only the named sectors that were offered to the provider."""
    if not isinstance(value, (list, tuple, set, frozenset)):
        return frozenset()
    allowed = set(offered)
    return frozenset(s for s in value if isinstance(s, str) and s in allowed)
