"""
Catalog of the country data providers available to a run.

The catalog is static metadata: listing it never touches the network.
"""

import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, Iterable, List, Optional, Tuple

from .base import DataProviderInterface
from .makeaip_web import MakeAIPWebSource
from ..utils.airac_date_calculator import AiracCycle

logger = logging.getLogger(__name__)

# Builds the provider of one source for a cycle: (cycle, cache_dir) -> provider
ProviderFactory = Callable[[AiracCycle, Optional[str]], DataProviderInterface]


@dataclass(frozen=True)
class Source:
    """A country publishing an eAIP, and how to obtain its provider."""

    country: str  # two letter country code, e.g. "GB"
    name: str
    provider: ProviderFactory

    def create_provider(self, cycle: AiracCycle, cache_dir: Optional[str] = None) -> DataProviderInterface:
        """Instantiate the data provider of this source for ``cycle``."""
        return self.provider(cycle, cache_dir)


class SourceRegistry:
    """Immutable, ordered collection of sources."""

    def __init__(self, sources: Iterable[Source]):
        self._sources: Tuple[Source, ...] = tuple(sources)
        countries = [s.country for s in self._sources]
        if len(set(countries)) != len(countries):
            raise ValueError(f"Duplicate country codes in source registry: {countries}")

    def list(self) -> List[Source]:
        """All sources, in registry order."""
        return list(self._sources)

    def filter(self, excluded: Iterable[str] = ()) -> List[Source]:
        """
        Sources whose country code is not excluded, in registry order.

        Args:
            excluded: Country codes to leave out (case insensitive)
        """
        excluded = {code.upper() for code in excluded}
        unknown = excluded - {s.country for s in self._sources}
        if unknown:
            logger.warning(f"Excluded sources not in registry: {sorted(unknown)}")
        return [s for s in self._sources if s.country not in excluded]

    def get(self, country: str) -> Source:
        """Get a source by country code."""
        for source in self._sources:
            if source.country == country.upper():
                return source
        raise KeyError(country)

    def __len__(self) -> int:
        return len(self._sources)

    def __iter__(self):
        return iter(self._sources)


def _makeaip(base_url: str, country_prefix: str) -> ProviderFactory:
    return partial(_create_makeaip_source, base_url, country_prefix)


def _create_makeaip_source(base_url: str, country_prefix: str, cycle: AiracCycle,
                           cache_dir: Optional[str] = None) -> MakeAIPWebSource:
    return MakeAIPWebSource(base_url, country_prefix, cycle, cache_dir=cache_dir)


DEFAULT_REGISTRY = SourceRegistry([
    Source('GB', 'United Kingdom (NATS)',
           _makeaip("https://www.aurora.nats.co.uk/htmlAIP/Publications", 'EG')),
    Source('NO', 'Norway (Avinor)',
           _makeaip("https://aim-prod.avinor.no/no/AIP/View/Index/147", 'EN')),
])
