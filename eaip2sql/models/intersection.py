from dataclasses import dataclass


@dataclass(frozen=True)
class Intersection:
    """A named waypoint defined by coordinates only."""

    designator: str  # up to 5 chars, e.g. "ABBOT"
    latitude: float
    longitude: float
