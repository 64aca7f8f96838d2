"""
Normalization of raw source records into the persisted shape.

This module is pure data transformation: it deduplicates navaids and
intersections, links airway waypoints to exactly one navaid or
intersection, and numbers waypoints and charts in published order.
"""

import logging
from typing import Iterable, List, Optional, Set

from ..errors import WaypointIntegrityError
from ..models import (
    NavAid, Intersection, Airway, Airport, WaypointKind,
    NavAidRecord, AirwayWaypointRecord, AirportRecord, ChartRecord, NormalizedData
)

logger = logging.getLogger(__name__)


class EntityNormalizer:
    """
    Turns the record families of one source into normalized records.

    Deduplication is scoped to one source: the same navaid published by two
    countries is kept once per source.

    Args:
        strict_references: If True, a waypoint whose designator is not among
            the source's navaids (or intersections) raises WaypointIntegrityError.
            If False, it is logged and kept.
    """

    def __init__(self, strict_references: bool = False):
        self.strict_references = strict_references

    def normalize_navaids(self, navaids: Iterable[NavAid]) -> List[NavAidRecord]:
        """Keep the first navaid seen for each id, reporting NDB frequencies in kHz."""
        seen: Set[str] = set()
        rv = []
        for navaid in navaids:
            if navaid.id in seen:
                logger.warning(f"Dropping duplicate navaid {navaid.id} ({navaid.name})")
                continue
            seen.add(navaid.id)
            rv.append(NavAidRecord(
                id=navaid.id,
                name=navaid.name,
                frequency=navaid.frequency,
                latitude=navaid.latitude,
                longitude=navaid.longitude,
                elevation=navaid.elevation,
                type=navaid.kind.value,
            ))
        return rv

    def normalize_intersections(self, intersections: Iterable[Intersection]) -> List[Intersection]:
        """Keep the first intersection seen for each designator."""
        seen: Set[str] = set()
        rv = []
        for intersection in intersections:
            if intersection.designator in seen:
                logger.warning(f"Dropping duplicate intersection {intersection.designator}")
                continue
            seen.add(intersection.designator)
            rv.append(intersection)
        return rv

    def normalize_airway(self, airway: Airway,
                         navaid_ids: Optional[Set[str]] = None,
                         intersection_designators: Optional[Set[str]] = None) -> List[AirwayWaypointRecord]:
        """
        Number the waypoints of an airway 1..N and link each to a navaid or an intersection.

        Args:
            airway: Airway as published
            navaid_ids: Known navaid ids, to check references against
            intersection_designators: Known intersection designators, to check references against

        Raises:
            WaypointIntegrityError: If a waypoint is flagged as both or neither kind,
                or (in strict mode) references an unknown designator
        """
        rv = []
        for position, waypoint in enumerate(airway.waypoints, start=1):
            kind = waypoint.kind
            if kind is None:
                reason = ("flagged as both navaid and intersection" if waypoint.is_navaid
                          else "flagged as neither navaid nor intersection")
                raise WaypointIntegrityError(airway.designator, position, waypoint.designator, reason)

            known = navaid_ids if kind is WaypointKind.NAVAID else intersection_designators
            if known is not None and waypoint.designator not in known:
                if self.strict_references:
                    raise WaypointIntegrityError(
                        airway.designator, position, waypoint.designator,
                        f"unknown {kind.value}"
                    )
                logger.warning(f"Airway {airway.designator} waypoint {position} references "
                               f"unknown {kind.value} {waypoint.designator}")

            rv.append(AirwayWaypointRecord(
                airway_designator=airway.designator,
                waypoint_id=position,
                upper_limit=waypoint.upper_limit,
                lower_limit=waypoint.lower_limit,
                navaid_id=waypoint.designator if kind is WaypointKind.NAVAID else None,
                intersection_designator=waypoint.designator if kind is WaypointKind.INTERSECTION else None,
            ))
        return rv

    def normalize_airport(self, airport: Airport):
        """Split an airport into its row and its charts numbered 1..N in published order."""
        record = AirportRecord(
            icao=airport.icao,
            name=airport.name,
            latitude=airport.latitude,
            longitude=airport.longitude,
            elevation=airport.elevation,
        )
        charts = [
            ChartRecord(airport_icao=airport.icao, chart_id=index, title=chart.title, url=chart.url)
            for index, chart in enumerate(airport.charts, start=1)
        ]
        return record, charts

    def normalize(self, source: str, navaids: Iterable[NavAid], intersections: Iterable[Intersection],
                  airways: Iterable[Airway], airports: Iterable[Airport]) -> NormalizedData:
        """
        Normalize the complete record families of one source.

        Args:
            source: Country code of the source, for logging and error context

        Returns:
            NormalizedData holding one list per table
        """
        data = NormalizedData(source=source)
        data.navaids = self.normalize_navaids(navaids)
        data.intersections = self.normalize_intersections(intersections)

        navaid_ids = {n.id for n in data.navaids}
        intersection_designators = {i.designator for i in data.intersections}
        seen_airways: Set[str] = set()
        for airway in airways:
            if airway.designator in seen_airways:
                logger.warning(f"Dropping duplicate airway {airway.designator} from {source}")
                continue
            seen_airways.add(airway.designator)
            data.airway_waypoints.extend(
                self.normalize_airway(airway, navaid_ids, intersection_designators)
            )

        for airport in airports:
            if airport.is_summary:
                logger.warning(f"Airport {airport.icao} from {source} has no detail")
            record, charts = self.normalize_airport(airport)
            data.airports.append(record)
            data.charts.extend(charts)

        logger.info(f"Normalized {source}: {data.counts()}")
        return data
