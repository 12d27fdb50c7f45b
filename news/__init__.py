"""News generation for the market game.

``NewsGenerator.generate`` is the single boundary to the outside world and
always resolves to a valid ``NewsEvent``.
"""

from news.base import NewsGenerator
from news.registry import available_generators, create_news_generator, register

__all__ = [
    "NewsGenerator",
    "available_generators",
    "create_news_generator",
    "register",
]
