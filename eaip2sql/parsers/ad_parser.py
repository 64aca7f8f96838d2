import re
import logging
from typing import List
from urllib.parse import urljoin

from .base import EAIPHtmlParser
from ..models import Airport, Chart
from ..utils.coordinates import parse_coordinates, parse_elevation

logger = logging.getLogger(__name__)


class ADParser(EAIPHtmlParser):
    """
    Parser for the aerodromes (AD 2) part of a Eurocontrol-format eAIP.

    Args:
        country_prefix: Two letter ICAO location indicator prefix of the country (e.g. 'EG')
    """

    def __init__(self, country_prefix: str):
        self.country_prefix = country_prefix
        self.airport_link_pattern = re.compile(
            rf"{country_prefix}-AD-2\.({country_prefix}[A-Z]{{2}})-en-GB\.html"
        )

    def parse_airport_index(self, html_data: bytes) -> List[str]:
        """Return the ICAO codes linked from the menu page, in published order."""
        soup = self._soup(html_data)
        seen = set()
        rv = []
        for a in soup.find_all('a'):
            href = a.get('href')
            if not href:
                continue
            m = self.airport_link_pattern.search(href)
            if not m or m.group(1) in seen:
                continue
            seen.add(m.group(1))
            rv.append(m.group(1))
        logger.info(f"Discovered {len(rv)} {self.country_prefix} airports from index")
        return rv

    def parse_airport(self, html_data: bytes, icao: str, page_url: str = '') -> Airport:
        """
        Parse an AD 2 airport page.

        Args:
            html_data: Raw HTML data
            icao: ICAO airport code
            page_url: URL the page was fetched from, to resolve relative chart links

        Returns:
            The detailed Airport, charts in published order
        """
        soup = self._soup(html_data)

        name = None
        section = soup.find('div', id=re.compile(rf"{icao}-AD-2\.1$"))
        heading = section.find(['h1', 'h2', 'h3', 'h4', 'p']) if section else None
        if heading is not None:
            text = self._extract_text(heading)
            # 'EGLL - LONDON HEATHROW'
            name = re.sub(rf"^.*?{icao}\s*[-–—]\s*", "", text).strip() or None

        latitude = longitude = elevation = None
        section = soup.find('div', id=re.compile(rf"{icao}-AD-2\.2$"))
        if section is not None:
            for row in section.find_all('tr'):
                cells = self._row_cells(row)
                label = ' '.join(cells[:2]).lower()
                value = ' '.join(cells[2:]) if len(cells) > 2 else ' '.join(cells[1:])
                if 'arp coordinates' in label and latitude is None:
                    coordinates = parse_coordinates(value)
                    if coordinates is not None:
                        latitude, longitude = coordinates
                elif 'elevation' in label and elevation is None:
                    elevation = parse_elevation(value)

        charts = []
        section = soup.find('div', id=re.compile(rf"{icao}-AD-2\.24$"))
        if section is not None:
            for row in section.find_all('tr'):
                link = row.find('a', href=True)
                if link is None:
                    continue
                cells = self._row_cells(row)
                title = cells[0] if cells and cells[0] else self._extract_text(link)
                if not title:
                    continue
                charts.append(Chart(title=title, url=urljoin(page_url, link['href'])))

        if name is None:
            logger.warning(f"No name found for {icao}")
        logger.debug(f"Parsed {icao}: {len(charts)} charts")
        return Airport(
            icao=icao,
            name=name,
            latitude=latitude,
            longitude=longitude,
            elevation=elevation,
            charts=charts,
        )
