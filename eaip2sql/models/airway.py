from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class WaypointKind(Enum):
    """What a waypoint of an airway refers to."""
    NAVAID = "navaid"
    INTERSECTION = "intersection"


@dataclass(frozen=True)
class Waypoint:
    """
    A point along an airway, as published by a source.

    A source flags each waypoint as referring to either a navaid or an
    intersection; exactly one of ``is_navaid`` / ``is_intersection`` is
    expected to be set. The flags are kept as published so that the
    normalizer can reject inconsistent records.
    """

    designator: str
    is_navaid: bool = False
    is_intersection: bool = False
    upper_limit: Optional[str] = None  # e.g. "FL245", "UNL"
    lower_limit: Optional[str] = None  # e.g. "FL75"

    @property
    def kind(self) -> Optional[WaypointKind]:
        """The waypoint kind, or None when the flags are ambiguous or missing."""
        if self.is_navaid == self.is_intersection:
            return None
        return WaypointKind.NAVAID if self.is_navaid else WaypointKind.INTERSECTION

    @classmethod
    def navaid(cls, designator: str, upper_limit: Optional[str] = None,
               lower_limit: Optional[str] = None) -> 'Waypoint':
        return cls(designator, is_navaid=True, upper_limit=upper_limit, lower_limit=lower_limit)

    @classmethod
    def intersection(cls, designator: str, upper_limit: Optional[str] = None,
                     lower_limit: Optional[str] = None) -> 'Waypoint':
        return cls(designator, is_intersection=True, upper_limit=upper_limit, lower_limit=lower_limit)


@dataclass(frozen=True)
class Airway:
    """A named route, as an ordered sequence of waypoints."""

    designator: str  # e.g. "L9", "UN864"
    waypoints: List[Waypoint] = field(default_factory=list)
