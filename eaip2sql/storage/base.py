from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, Tuple

from sqlalchemy import Table

from ..models import NormalizedData, RunMetadata
from .schema import (
    navaid_table, intersection_table, airway_waypoint_table, airport_table, chart_table,
    record_values
)

# (table, column values, operation, identifier)
Row = Tuple[Table, Dict[str, Any], str, str]


class StorageInterface(ABC):
    """
    Base interface for storage backends (sinks).

    A run calls, in order: prepare(), save_metadata() once, save_source()
    once per source, then close(). Every backend receives the same rows
    in the same dependency order.
    """

    @abstractmethod
    def prepare(self) -> None:
        """Create the schema if it does not exist yet."""
        pass

    @abstractmethod
    def save_metadata(self, metadata: RunMetadata) -> None:
        """
        Write the run metadata to the properties table.

        Raises:
            AlreadyPopulatedError: If the target already holds a generated data set
        """
        pass

    @abstractmethod
    def save_source(self, data: NormalizedData) -> None:
        """
        Write the normalized entities of one source.

        Raises:
            PersistenceError: Naming the entity that failed
        """
        pass

    def close(self) -> None:
        """Release the underlying connection pool or file handle."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    @staticmethod
    def iter_rows(data: NormalizedData) -> Iterator[Row]:
        """Rows of one source, in dependency order."""
        for navaid in data.navaids:
            yield navaid_table, record_values(navaid), 'navaid', navaid.id
        for intersection in data.intersections:
            yield intersection_table, record_values(intersection), 'intersection', intersection.designator
        for waypoint in data.airway_waypoints:
            yield (airway_waypoint_table, record_values(waypoint),
                   f"airway {waypoint.airway_designator} waypoint",
                   f"{waypoint.waypoint_id} ({waypoint.designator})")
        for airport in data.airports:
            yield airport_table, record_values(airport), 'airport', airport.icao
        for chart in data.charts:
            yield chart_table, record_values(chart), f"airport {chart.airport_icao} chart", chart.title
