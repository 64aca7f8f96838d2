from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Chart:
    """A published chart (approach, departure, aerodrome diagram...) for one airport."""

    title: str
    url: str


@dataclass(frozen=True)
class Airport:
    """
    Airport information.

    Sources first list airports as summaries carrying only the ICAO code;
    the orchestrator then replaces each summary with the detail record.
    """

    icao: str
    name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    elevation: Optional[int] = None  # feet
    charts: List[Chart] = field(default_factory=list)

    @classmethod
    def summary(cls, icao: str) -> 'Airport':
        """Create a summary record carrying only the ICAO code."""
        return cls(icao=icao)

    @property
    def is_summary(self) -> bool:
        """Check if this record is still a summary (no detail fetched yet)."""
        return self.name is None and self.latitude is None and not self.charts
