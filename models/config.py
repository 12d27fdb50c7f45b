"""Game configuration models, loaded from YAML.

These live in ``models/`` because they are shared data contracts used by the
session, the news generators and the terminal driver.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from models.state import SimulationState


class InstrumentConfig(BaseModel):
    """Static seed data for one instrument."""

    symbol: str
    name: str
    sector: str
    price: float = Field(ge=1.0, description="Starting price.")
    history: list[float] = Field(
        default_factory=list,
        description="Short seed history, oldest first. The starting price is "
        "appended if it is not already the last entry.",
    )


DEFAULT_INSTRUMENTS: list[InstrumentConfig] = [
    InstrumentConfig(
        symbol="TECH",
        name="TechNova Solutions",
        sector="Technology",
        price=150.25,
        history=[145, 148, 150.25],
    ),
    InstrumentConfig(
        symbol="ENER",
        name="Global Energy Corp",
        sector="Energy",
        price=85.50,
        history=[88, 86, 85.50],
    ),
    InstrumentConfig(
        symbol="BIO",
        name="BioGenix Labs",
        sector="Healthcare",
        price=42.10,
        history=[40, 41.5, 42.10],
    ),
    InstrumentConfig(
        symbol="FIN",
        name="Apex Financial Group",
        sector="Finance",
        price=210.75,
        history=[215, 212, 210.75],
    ),
    InstrumentConfig(
        symbol="AUTO",
        name="Volt Motors",
        sector="Consumer Goods",
        price=65.30,
        history=[60, 62, 65.30],
    ),
    InstrumentConfig(
        symbol="FOOD",
        name="Organic Harvest",
        sector="Consumer Goods",
        price=25.40,
        history=[24.5, 25, 25.40],
    ),
]


class NewsConfig(BaseModel):
    """Configuration for the news generator."""

    generator: str = Field(
        default="llm",
        description="Registered news generator name, e.g. 'llm', 'mock'.",
    )
    llm_provider: str = Field(
        default="openai",
        description="LLM provider identifier, e.g. 'openai', 'anthropic'.",
    )
    llm_model: str = Field(
        default="gpt-4o-mini",
        description="Model name, e.g. 'gpt-4o-mini', 'claude-sonnet-4-20250514'.",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for the LLM.",
    )
    request_timeout: float | None = Field(
        default=30.0,
        gt=0,
        description="Seconds to wait for the provider before using fallback news. "
        "None waits indefinitely.",
    )


class GameConfig(BaseModel):
    """Top-level configuration for a game session, loaded from YAML."""

    starting_balance: float = Field(
        default=10_000.0,
        gt=0,
        description="Starting cash balance.",
    )
    instruments: list[InstrumentConfig] = Field(
        default_factory=lambda: [i.model_copy() for i in DEFAULT_INSTRUMENTS],
        min_length=1,
        description="Fixed instrument universe for the session.",
    )
    news: NewsConfig = Field(
        default_factory=NewsConfig,
        description="News generator configuration.",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the price random source. Unset means unseeded.",
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> GameConfig:
        """Load and validate a ``GameConfig`` from a YAML file.

        Raises ``FileNotFoundError`` if the file does not exist and
        ``ValueError`` if the content is not a valid YAML mapping.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open(encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)

        if not isinstance(raw, dict):
            raise ValueError(
                f"Expected a YAML mapping in {path}, got {type(raw).__name__}."
            )

        return cls(**raw)

    def initial_state(self) -> SimulationState:
        """Build the day-1 state: starting cash, seeded instruments, no holdings."""
        from models.state import SimulationState
        from simulation.registry import seed_registry

        registry = seed_registry(self.instruments)
        return SimulationState(
            balance=self.starting_balance,
            instruments=dict(registry),
        )
