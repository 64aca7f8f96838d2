import re
import logging
from typing import List, Optional

from .base import EAIPHtmlParser
from ..models import NavAid, NavAidKind, Intersection, Airway, Waypoint
from ..utils.coordinates import (
    parse_coordinates, parse_elevation, parse_frequency_mhz, parse_levels
)

logger = logging.getLogger(__name__)


class ENRParser(EAIPHtmlParser):
    """
    Parser for the en-route (ENR) part of a Eurocontrol-format eAIP.

    Handles ENR 4.1 (radio navigation aids), ENR 4.4 (name-code designators
    for significant points) and ENR 3.x (ATS routes).
    """

    NAVAID_ID_PATTERN = re.compile(r"^[A-Z]{2,3}$")
    INTERSECTION_PATTERN = re.compile(r"^[A-Z]{5}$")
    AIRWAY_PATTERN = re.compile(r"^(?:U|K|S)?[A-Z]\d{1,4}[A-Z]?$")
    # 'BIGGIN VOR/DME (BIG)' -> BIG
    NAVAID_POINT_PATTERN = re.compile(r"\b(?:VOR|DME|NDB|TACAN|VORTAC)\b.*\(([A-Z]{2,3})\)")
    INTERSECTION_POINT_PATTERN = re.compile(r"\b([A-Z]{5})\b")

    def parse_navaids(self, html_data: bytes) -> List[NavAid]:
        """
        Parse an ENR 4.1 page.

        Each navaid row holds, in order: name and kind ('BIGGIN VOR/DME'),
        identifier, frequency, hours, coordinates, and elevation.
        """
        soup = self._soup(html_data)
        rv = []
        for row in soup.find_all('tr'):
            cells = self._row_cells(row)
            navaid = self._parse_navaid_row(cells)
            if navaid is not None:
                rv.append(navaid)
        logger.debug(f"Parsed {len(rv)} navaids")
        return rv

    def _parse_navaid_row(self, cells: List[str]) -> Optional[NavAid]:
        if len(cells) < 4:
            return None
        name_cell, ident = cells[0], cells[1]
        if not self.NAVAID_ID_PATTERN.match(ident):
            return None
        kind = NavAidKind.from_text(name_cell)
        frequency = parse_frequency_mhz(cells[2])
        if kind is None or frequency is None:
            logger.debug(f"Skipping navaid row {cells[:3]}")
            return None

        coordinates = None
        elevation = None
        for i, cell in enumerate(cells[3:], start=3):
            coordinates = parse_coordinates(cell)
            if coordinates is not None:
                elevation = next(
                    (e for e in (parse_elevation(c) for c in cells[i + 1:]) if e is not None),
                    None
                )
                break
        if coordinates is None:
            logger.debug(f"Skipping navaid {ident}: no coordinates")
            return None

        name = re.sub(r"\s*\b(VOR/DME|VORTAC|VOR|DME|TACAN|NDB)\b.*$", "", name_cell).strip() or name_cell
        return NavAid(
            id=ident,
            name=name,
            frequency_mhz=frequency,
            latitude=coordinates[0],
            longitude=coordinates[1],
            kind=kind,
            elevation=elevation,
        )

    def parse_intersections(self, html_data: bytes) -> List[Intersection]:
        """Parse an ENR 4.4 page: rows of five-letter name-code and coordinates."""
        soup = self._soup(html_data)
        rv = []
        for row in soup.find_all('tr'):
            cells = self._row_cells(row)
            if len(cells) < 2 or not self.INTERSECTION_PATTERN.match(cells[0]):
                continue
            coordinates = parse_coordinates(cells[1])
            if coordinates is None:
                logger.debug(f"Skipping intersection {cells[0]}: no coordinates")
                continue
            rv.append(Intersection(cells[0], coordinates[0], coordinates[1]))
        logger.debug(f"Parsed {len(rv)} intersections")
        return rv

    def parse_airways(self, html_data: bytes) -> List[Airway]:
        """
        Parse an ENR 3.x page.

        Each route is published as a table (or table body) whose first row
        holds the route designator. It is followed by alternating point rows,
        which carry the point name and its coordinates, and segment rows,
        which carry the vertical limits of the segment to the next point.
        A waypoint takes the limits of the segment that follows it.
        """
        soup = self._soup(html_data)
        rv = []
        for block in soup.find_all(['tbody', 'table']):
            # Nested table/tbody pairs would otherwise be read twice
            if block.name == 'table' and block.find('tbody') is not None:
                continue
            airway = self._parse_airway_block(block)
            if airway is not None:
                rv.append(airway)
        logger.debug(f"Parsed {len(rv)} airways")
        return rv

    def _parse_airway_block(self, block) -> Optional[Airway]:
        rows = block.find_all('tr')
        if not rows:
            return None
        header = self._row_cells(rows[0])
        if not header or not self.AIRWAY_PATTERN.match(header[0].split(' ')[0]):
            return None
        designator = header[0].split(' ')[0]

        points = []  # [designator, is_navaid, upper, lower]
        for row in rows[1:]:
            cells = self._row_cells(row)
            text = ' '.join(cells)
            if parse_coordinates(text) is not None:
                point = self._parse_point(text)
                if point is None:
                    logger.debug(f"Skipping unrecognised point '{text}' on {designator}")
                    continue
                points.append([point[0], point[1], None, None])
            elif points:
                upper, lower = parse_levels(text)
                if upper is not None and points[-1][2] is None:
                    points[-1][2], points[-1][3] = upper, lower

        if not points:
            return None
        waypoints = [
            Waypoint(name, is_navaid=is_navaid, is_intersection=not is_navaid,
                     upper_limit=upper, lower_limit=lower)
            for name, is_navaid, upper, lower in points
        ]
        return Airway(designator, waypoints)

    def _parse_point(self, text: str):
        """Return (designator, is_navaid) for a significant point cell."""
        m = self.NAVAID_POINT_PATTERN.search(text)
        if m:
            return m.group(1), True
        m = self.INTERSECTION_POINT_PATTERN.search(text)
        if m:
            return m.group(1), False
        return None
