"""
Normalized records, one class per persisted table.

These are the shapes the storage backends write. They are produced by
the normalizer from the raw models published by sources.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .intersection import Intersection


@dataclass(frozen=True)
class NavAidRecord:
    """Row of the ``navaid`` table."""

    id: str
    name: str
    frequency: float  # kHz for NDB, MHz otherwise
    latitude: float
    longitude: float
    elevation: Optional[int]
    type: str  # "VOR", "DME", "NDB" or "VOR,DME"


@dataclass(frozen=True)
class AirwayWaypointRecord:
    """Row of the ``airway_waypoint`` table. Exactly one of navaid_id / intersection_designator is set."""

    airway_designator: str
    waypoint_id: int  # 1-based position along the airway
    upper_limit: Optional[str]
    lower_limit: Optional[str]
    navaid_id: Optional[str] = None
    intersection_designator: Optional[str] = None

    @property
    def designator(self) -> str:
        return self.navaid_id if self.navaid_id is not None else self.intersection_designator


@dataclass(frozen=True)
class AirportRecord:
    """Row of the ``airport`` table."""

    icao: str
    name: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]
    elevation: Optional[int]


@dataclass(frozen=True)
class ChartRecord:
    """Row of the ``chart`` table."""

    airport_icao: str
    chart_id: int  # 1-based, in published order
    title: str
    url: str


@dataclass
class NormalizedData:
    """Complete normalized entity set for one source, in persistence order."""

    source: str
    navaids: List[NavAidRecord] = field(default_factory=list)
    intersections: List[Intersection] = field(default_factory=list)
    airway_waypoints: List[AirwayWaypointRecord] = field(default_factory=list)
    airports: List[AirportRecord] = field(default_factory=list)
    charts: List[ChartRecord] = field(default_factory=list)

    def counts(self) -> dict:
        """Number of records per table."""
        return {
            'navaid': len(self.navaids),
            'intersection': len(self.intersections),
            'airway_waypoint': len(self.airway_waypoints),
            'airport': len(self.airports),
            'chart': len(self.charts),
        }
