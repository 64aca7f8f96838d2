#!/usr/bin/env python3

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TypeVar

from ..errors import ProviderFetchError
from ..models import NavAid, Intersection, Airway, Airport, RunMetadata, NormalizedData
from ..sources.base import DataProviderInterface
from ..sources.registry import Source
from ..storage.base import StorageInterface
from ..utils.airac_date_calculator import AiracCycle
from .normalizer import EntityNormalizer

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class SourceData:
    """Raw record families fetched from one source."""

    source: str
    navaids: List[NavAid] = field(default_factory=list)
    intersections: List[Intersection] = field(default_factory=list)
    airways: List[Airway] = field(default_factory=list)
    airports: List[Airport] = field(default_factory=list)


class Orchestrator:
    """
    Drives one generation run.

    For every included source, in registry order, the five record families
    are fetched in a fixed order (navaids, intersections, airways, airport
    summaries, airport details), normalized, and handed to the storage.
    Any error aborts the whole run.
    """

    def __init__(self, sources: List[Source], cycle: AiracCycle, storage: StorageInterface,
                 normalizer: Optional[EntityNormalizer] = None, cache_dir: Optional[str] = None,
                 configure_provider: Optional[Callable[[DataProviderInterface], None]] = None):
        """
        Initialize the orchestrator.

        Args:
            sources: Sources to process, in order
            cycle: AIRAC cycle all sources are fetched for
            storage: Backend receiving the normalized data
            normalizer: Normalizer to use (defaults to a non-strict EntityNormalizer)
            cache_dir: Cache directory handed to the providers
            configure_provider: Called on each provider after creation (refresh settings...)
        """
        self.sources = sources
        self.cycle = cycle
        self.storage = storage
        self.normalizer = normalizer or EntityNormalizer()
        self.cache_dir = cache_dir
        self.configure_provider = configure_provider

    def run(self) -> RunMetadata:
        """
        Generate the data set for the cycle.

        Returns:
            The metadata written for this run

        Raises:
            AlreadyPopulatedError: If the storage already holds a generated data set
            ProviderFetchError: If a source fails to deliver a record family
            PersistenceError: If an entity cannot be written
            WaypointIntegrityError: If an airway waypoint cannot be linked
        """
        logger.info(f"Generating {self.cycle} from {len(self.sources)} sources: "
                    f"{[s.country for s in self.sources]}")
        self.storage.prepare()

        metadata = RunMetadata.for_cycle(self.cycle)
        self.storage.save_metadata(metadata)

        for index, source in enumerate(self.sources, start=1):
            logger.info(f"[{index}/{len(self.sources)}] {source.name} ({source.country})")
            provider = self._fetch(source.country, 'provider', lambda: self.create_provider(source))
            raw = self.fetch_source(source.country, provider)
            data = self.normalize(raw)
            self.storage.save_source(data)

        logger.info(f"Generation of {self.cycle} completed")
        return metadata

    def create_provider(self, source: Source) -> DataProviderInterface:
        """Build the provider of a source for the run's cycle and apply the provider settings."""
        provider = source.create_provider(self.cycle, self.cache_dir)
        if self.configure_provider is not None:
            self.configure_provider(provider)
        return provider

    def fetch_source(self, country: str, provider: DataProviderInterface) -> SourceData:
        """Fetch the five record families of one source, in dependency order."""
        raw = SourceData(source=country)
        raw.navaids = self._fetch(country, 'navaids', provider.fetch_navaids)
        raw.intersections = self._fetch(country, 'intersections', provider.fetch_intersections)
        raw.airways = self._fetch(country, 'airways', provider.fetch_airways)
        summaries = self._fetch(country, 'airport list', provider.fetch_airport_summaries)

        logger.info(f"Fetching {len(summaries)} airport details from {country}")
        raw.airports = list(summaries)
        for i, summary in enumerate(raw.airports):
            icao = summary.icao
            raw.airports[i] = self._fetch(country, f"airport {icao}",
                                          lambda: provider.fetch_airport_detail(icao))
        return raw

    def normalize(self, raw: SourceData) -> NormalizedData:
        return self.normalizer.normalize(
            raw.source, raw.navaids, raw.intersections, raw.airways, raw.airports
        )

    def _fetch(self, country: str, step: str, fetch: Callable[[], T]) -> T:
        logger.info(f"Fetching {step} from {country}")
        try:
            result = fetch()
        except Exception as e:
            raise ProviderFetchError(country, step, e) from e
        if isinstance(result, list):
            logger.debug(f"Fetched {len(result)} {step} from {country}")
        return result
