"""News generator registry: maps config strings to NewsGenerator subclasses.

Usage::

    from news.registry import create_news_generator

    generator = create_news_generator(news_config)
"""

from __future__ import annotations

from typing import Type

from models.config import NewsConfig
from news.base import NewsGenerator

_REGISTRY: dict[str, Type[NewsGenerator]] = {}


def register(name: str):
    """Decorator to register a ``NewsGenerator`` subclass under *name*."""

    def _decorator(cls: Type[NewsGenerator]) -> Type[NewsGenerator]:
        if name in _REGISTRY:
            raise ValueError(f"News generator '{name}' is already registered.")
        _REGISTRY[name] = cls
        return cls

    return _decorator


def available_generators() -> list[str]:
    _ensure_builtins_loaded()
    return sorted(_REGISTRY)


def create_news_generator(config: NewsConfig) -> NewsGenerator:
    """Instantiate the news generator specified in *config*.

    Raises ``KeyError`` if ``config.generator`` is not registered.
    """
    _ensure_builtins_loaded()

    key = config.generator
    if key not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY)) or "(none)"
        raise KeyError(
            f"Unknown news generator '{key}'. Available: {available}."
        )
    return _REGISTRY[key](config)


def _ensure_builtins_loaded() -> None:
    """Import built-in generator modules so their ``@register`` calls execute."""
    import news.llm  # noqa: F401
    import news.mock  # noqa: F401
