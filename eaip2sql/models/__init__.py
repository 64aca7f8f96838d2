"""
Data models for the eaip2sql package.

Raw models (NavAid, Intersection, Airway, Airport...) are what sources
publish for one AIRAC cycle; records are the normalized rows written by
the storage backends.
"""

from .navaid import NavAid, NavAidKind
from .intersection import Intersection
from .airway import Airway, Waypoint, WaypointKind
from .airport import Airport, Chart
from .run_metadata import RunMetadata, GENERATOR_NAME
from .records import (
    NavAidRecord, AirwayWaypointRecord, AirportRecord, ChartRecord, NormalizedData
)

__all__ = [
    # Raw models
    'NavAid',
    'NavAidKind',
    'Intersection',
    'Airway',
    'Waypoint',
    'WaypointKind',
    'Airport',
    'Chart',
    'RunMetadata',
    'GENERATOR_NAME',
    # Normalized records
    'NavAidRecord',
    'AirwayWaypointRecord',
    'AirportRecord',
    'ChartRecord',
    'NormalizedData',
]
