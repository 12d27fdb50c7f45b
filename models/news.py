"""News event model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NewsEvent(BaseModel):
    """A generated market headline and the sentiment it applies to sectors.

    ``impact`` is a signed score in [-1, 1]; positive news lifts the
    ``affected_sectors``, negative news drags them down.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    content: str
    impact: float = Field(default=0.0, ge=-1.0, le=1.0)
    affected_sectors: frozenset[str] = frozenset()
    day: int
    timestamp: datetime
