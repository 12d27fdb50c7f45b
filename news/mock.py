"""Deterministic offline news generator (no API calls).

Picks a canned headline and a target sector from its own seeded random
source, so a session can be played or tested without an API key.
"""

from __future__ import annotations

import random
from typing import Any

from models.config import NewsConfig
from news.base import NewsGenerator
from news.registry import register

# (title, content, impact); "{sector}" is filled with the chosen sector.
_TEMPLATES: list[tuple[str, str, float]] = [
    (
        "{sector} Rallies on Strong Quarterly Guidance",
        "Several {sector} firms raised full-year forecasts, lifting sentiment across the group.",
        0.6,
    ),
    (
        "Regulators Open Inquiry Into {sector} Pricing",
        "A new regulatory probe has investors trimming exposure to {sector} names.",
        -0.5,
    ),
    (
        "Supply Chain Relief Boosts {sector}",
        "Easing input costs are expected to widen margins for {sector} companies.",
        0.35,
    ),
    (
        "{sector} Slides as Demand Outlook Dims",
        "Analysts cut demand estimates for {sector}, citing softer consumer spending.",
        -0.4,
    ),
    (
        "Mixed Signals for {sector} After Data Release",
        "Fresh figures offered little direction for {sector}; traders stayed cautious.",
        0.05,
    ),
]


@register("mock")
class MockNewsGenerator(NewsGenerator):
    """Canned news driven by a seeded ``random.Random``."""

    def __init__(self, config: NewsConfig | None = None, seed: int | None = 0) -> None:
        super().__init__(config)
        self._rng = random.Random(seed)

    async def _fetch(self, day: int, sectors: list[str]) -> Any:
        if not sectors:
            return {}
        title, content, impact = self._rng.choice(_TEMPLATES)
        sector = self._rng.choice(sectors)
        return {
            "title": title.format(sector=sector),
            "content": content.format(sector=sector),
            "impact": impact,
            "affectedSectors": [sector],
        }
