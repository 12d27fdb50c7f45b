"""Portfolio position model."""

from pydantic import BaseModel, ConfigDict, Field


class PortfolioPosition(BaseModel):
    """Shares held in one instrument and their volume-weighted average cost.

    A position only exists while ``shares > 0``; the ledger drops it when a
    sell brings the count to zero. ``average_price`` is recomputed on buys
    and left as-is on sells.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    shares: int = Field(gt=0)
    average_price: float = Field(ge=0.0)
