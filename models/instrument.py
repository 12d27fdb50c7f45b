"""Tradable instrument model."""

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

# Sliding window length for per-instrument price history.
HISTORY_LIMIT = 20

# Prices never fall below this floor.
PRICE_FLOOR = 1.0


class Instrument(BaseModel):
    """A synthetic stock: identity, sector, current price and recent history.

    Instances are never mutated in place; the day-advance step replaces
    them via ``model_copy``. ``history`` is oldest first, holds at most
    ``HISTORY_LIMIT`` prices and, when non-empty, ends with ``price``.
    ``change`` is derived from the last two history entries and cannot be
    set.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    name: str
    sector: str
    price: float = Field(ge=PRICE_FLOOR)
    history: tuple[float, ...] = Field(default=(), max_length=HISTORY_LIMIT)

    @model_validator(mode="after")
    def _history_ends_with_price(self) -> "Instrument":
        if self.history and self.history[-1] != self.price:
            raise ValueError(
                f"history for {self.symbol} must end with the current price "
                f"{self.price}, got {self.history[-1]}."
            )
        return self

    @computed_field
    @property
    def change(self) -> float:
        """Percent move from the previous price to ``price``, 2 decimals."""
        if len(self.history) < 2 or self.history[-2] <= 0:
            return 0.0
        previous, current = self.history[-2], self.history[-1]
        return round((current - previous) / previous * 100, 2)
