#!/usr/bin/env python3

import logging
from typing import List, Optional

import requests

from .cached import CachedSource
from .base import DataProviderInterface
from ..models import NavAid, Intersection, Airway, Airport
from ..parsers import ENRParser, ADParser
from ..utils.airac_date_calculator import AiracCycle

logger = logging.getLogger(__name__)


class MakeAIPWebSource(CachedSource, DataProviderInterface):
    """
    Online source for eAIPs published in the Eurocontrol (MakeAIP) HTML format.

    This source fetches data from a country's public eAIP web interface.
    It constructs URLs dynamically based on the AIRAC cycle and caches content
    with human-readable cache keys.

    Args:
        base_url: Publication root, the AIRAC folder is appended to it
        country_prefix: Two letter ICAO prefix used in page names (e.g. 'EG')
        cycle: AIRAC cycle to fetch
        cache_dir: Directory for caching files, or None to always download
    """

    ROUTE_SECTIONS = ('3.1', '3.2', '3.3')
    TIMEOUT = 30

    def __init__(self, base_url: str, country_prefix: str, cycle: AiracCycle,
                 cache_dir: Optional[str] = None, session: Optional[requests.Session] = None):
        super().__init__(cache_dir, f"{country_prefix.lower()}_eaip_web")
        self.base_url = base_url.rstrip('/')
        self.country_prefix = country_prefix
        self.cycle = cycle
        self.airac_date = cycle.starts.isoformat()
        self.session = session or requests.Session()
        self.enr_parser = ENRParser()
        self.ad_parser = ADParser(country_prefix)

    def _build_url(self, path: str) -> str:
        """
        Build URL for any path within the eAIP structure.

        Args:
            path: Relative path from the AIRAC root (e.g., 'html/eAIP/EG-menu-en-GB.html')

        Returns:
            Complete URL
        """
        airac_root = f"{self.airac_date}-AIRAC"
        return f"{self.base_url}/{airac_root}/{path}"

    def _page_url(self, page: str) -> str:
        return self._build_url(f"html/eAIP/{self.country_prefix}-{page}-en-GB.html")

    def _get_airport_url(self, icao: str) -> str:
        """Get URL for a specific airport page."""
        return self._page_url(f"AD-2.{icao}")

    def _download(self, url: str) -> bytes:
        """Download content from URL."""
        logger.info(f"Downloading {url}")
        resp = self.session.get(url, timeout=self.TIMEOUT)
        resp.raise_for_status()
        return resp.content

    # Download methods used by CachedSource.get_data

    def download_menu(self) -> bytes:
        return self._download(self._page_url("menu"))

    def download_navaids(self) -> bytes:
        return self._download(self._page_url("ENR-4.1"))

    def download_intersections(self) -> bytes:
        return self._download(self._page_url("ENR-4.4"))

    def download_routes(self, section: str) -> bytes:
        return self._download(self._page_url(f"ENR-{section}"))

    def download_airport(self, icao: str) -> bytes:
        return self._download(self._get_airport_url(icao))

    # DataProviderInterface

    def fetch_navaids(self) -> List[NavAid]:
        return self.enr_parser.parse_navaids(self.get_data(self.airac_date, 'navaids'))

    def fetch_intersections(self) -> List[Intersection]:
        return self.enr_parser.parse_intersections(self.get_data(self.airac_date, 'intersections'))

    def fetch_airways(self) -> List[Airway]:
        airways = []
        for section in self.ROUTE_SECTIONS:
            airways.extend(self.enr_parser.parse_airways(self.get_data(self.airac_date, 'routes', section)))
        return airways

    def fetch_airport_summaries(self) -> List[Airport]:
        icaos = self.ad_parser.parse_airport_index(self.get_data(self.airac_date, 'menu'))
        return [Airport.summary(icao) for icao in icaos]

    def fetch_airport_detail(self, icao: str) -> Airport:
        html_bytes = self.get_data(self.airac_date, 'airport', icao)
        return self.ad_parser.parse_airport(html_bytes, icao, page_url=self._get_airport_url(icao))
