from abc import ABC, abstractmethod
from typing import List

from ..models import NavAid, Intersection, Airway, Airport


class DataProviderInterface(ABC):
    """
    Base interface for all per-country data providers.

    A provider is bound to one AIRAC cycle and yields the raw record
    families for that cycle. Any failure is raised to the caller; the
    orchestrator treats it as fatal for the source.
    """

    @abstractmethod
    def fetch_navaids(self) -> List[NavAid]:
        """Fetch the radio navigation aids (ENR 4.1)."""
        pass

    @abstractmethod
    def fetch_intersections(self) -> List[Intersection]:
        """Fetch the named significant points (ENR 4.4)."""
        pass

    @abstractmethod
    def fetch_airways(self) -> List[Airway]:
        """
        Fetch the airways (ENR 3).

        Waypoints reference navaids and intersections by designator and
        carry a navaid/intersection flag each.
        """
        pass

    @abstractmethod
    def fetch_airport_summaries(self) -> List[Airport]:
        """Fetch the list of airports, as summaries carrying only the ICAO code."""
        pass

    @abstractmethod
    def fetch_airport_detail(self, icao: str) -> Airport:
        """
        Fetch the full record for one airport, charts included.

        Args:
            icao: ICAO code of an airport listed by fetch_airport_summaries
        """
        pass
