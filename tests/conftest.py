import pytest
from datetime import date
from typing import Dict, List, Optional

from eaip2sql.models import (
    NavAid, NavAidKind, Intersection, Airway, Waypoint, Airport, Chart
)
from eaip2sql.sources.base import DataProviderInterface
from eaip2sql.sources.registry import Source, SourceRegistry
from eaip2sql.utils.airac_date_calculator import AiracCycle


class FakeProvider(DataProviderInterface):
    """In-memory provider returning fixed record families, recording the calls made."""

    def __init__(self, navaids=None, intersections=None, airways=None, airports=None,
                 fail_on: Optional[str] = None):
        self.navaids = navaids or []
        self.intersections = intersections or []
        self.airways = airways or []
        self.airports: Dict[str, Airport] = {a.icao: a for a in (airports or [])}
        self.fail_on = fail_on
        self.calls: List[str] = []

    def _call(self, name: str):
        self.calls.append(name)
        if self.fail_on == name:
            raise ConnectionError(f"{name} unavailable")

    def fetch_navaids(self):
        self._call('navaids')
        return list(self.navaids)

    def fetch_intersections(self):
        self._call('intersections')
        return list(self.intersections)

    def fetch_airways(self):
        self._call('airways')
        return list(self.airways)

    def fetch_airport_summaries(self):
        self._call('airport_summaries')
        return [Airport.summary(icao) for icao in self.airports]

    def fetch_airport_detail(self, icao: str):
        self._call(f"airport_{icao}")
        return self.airports[icao]


def make_navaids() -> List[NavAid]:
    return [
        NavAid('BIG', 'BIGGIN', 115.1, 51.330989, 0.03475, NavAidKind.VORDME, 600),
        NavAid('LYX', 'LYDD', 0.397, 50.974236, 0.922803, NavAidKind.NDB, None),
        NavAid('DET', 'DETLING', 117.3, 51.304053, 0.597294, NavAidKind.DME, 650),
    ]


def make_intersections() -> List[Intersection]:
    return [
        Intersection('ABBOT', 52.013333, 0.430278),
        Intersection('ADMIS', 49.360556, -1.229722),
    ]


def make_airways() -> List[Airway]:
    return [
        Airway('L9', [
            Waypoint.navaid('BIG', 'FL245', 'FL75'),
            Waypoint.intersection('ABBOT', 'FL195', 'FL85'),
            Waypoint.navaid('DET'),
        ]),
    ]


def make_airports() -> List[Airport]:
    return [
        Airport('EGKB', "LONDON BIGGIN HILL", 51.330278, 0.032778, 600, [
            Chart('Aerodrome Chart - ICAO', 'https://example.org/EGKB_2-1.pdf'),
            Chart("Instrument Approach Chart - ILS RWY 21 'CAT I'", 'https://example.org/EGKB_8-1.pdf'),
        ]),
        Airport('EGMC', "SOUTHEND", 51.571389, 0.695556, 49, []),
    ]


@pytest.fixture
def cycle() -> AiracCycle:
    return AiracCycle(date(2026, 10, 1), date(2026, 10, 29))


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider(make_navaids(), make_intersections(), make_airways(), make_airports())


@pytest.fixture
def registry(provider) -> SourceRegistry:
    """Registry of two sources: GB backed by the sample data, FR by another provider."""
    fr_provider = FakeProvider(
        [NavAid('AMB', 'AMBOISE', 113.7, 47.428611, 1.064167, NavAidKind.VORDME, 364)],
        [Intersection('ADEKA', 48.5, 1.5)],
        [Airway('A6', [Waypoint.navaid('AMB'), Waypoint.intersection('ADEKA')])],
        [Airport('LFOK', 'CHALONS VATRY', 48.776111, 4.206111, 587, [])],
    )
    return SourceRegistry([
        Source('GB', 'United Kingdom', lambda cycle, cache_dir: provider),
        Source('FR', 'France', lambda cycle, cache_dir: fr_provider),
    ])


@pytest.fixture
def database_uri(tmp_path) -> str:
    """URI of a fresh SQLite database file."""
    return f"sqlite:///{tmp_path / 'navdata.db'}"
