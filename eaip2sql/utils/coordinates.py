#!/usr/bin/env python3

import re
from typing import Optional, Tuple

# 511951.56N 0000205.10E, 5119N 00002E, ...
COORDINATE_PATTERN = re.compile(
    r"(\d{2})(\d{2})(\d{2}(?:\.\d+)?)?\s*([NS])\W*"
    r"(\d{3})(\d{2})(\d{2}(?:\.\d+)?)?\s*([EW])"
)
ELEVATION_PATTERN = re.compile(r"(-?\d+(?:\.\d+)?)\s*(?:FT|ft)")
FREQUENCY_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(MHz|KHz|kHz|MHZ|KHZ)")
LEVEL_PATTERN = re.compile(r"\b(FL\s*\d{2,3}|UNL|GND|SFC|\d+\s*FT\s*(?:ALT|AMSL|AGL)?)\b", re.IGNORECASE)


def _dms_to_decimal(degrees: str, minutes: str, seconds: Optional[str], hemisphere: str) -> float:
    value = int(degrees) + int(minutes) / 60 + (float(seconds) if seconds else 0.0) / 3600
    return -value if hemisphere in ('S', 'W') else value


def parse_coordinates(text: str) -> Optional[Tuple[float, float]]:
    """
    Decode the first DMS latitude/longitude pair found in a text.

    Returns:
        (latitude, longitude) in decimal degrees, or None if no pair is found
    """
    if not text:
        return None
    m = COORDINATE_PATTERN.search(text)
    if not m:
        return None
    latitude = _dms_to_decimal(m.group(1), m.group(2), m.group(3), m.group(4))
    longitude = _dms_to_decimal(m.group(5), m.group(6), m.group(7), m.group(8))
    return round(latitude, 6), round(longitude, 6)


def parse_elevation(text: str) -> Optional[int]:
    """Decode an elevation such as '600 FT' to whole feet."""
    if not text:
        return None
    m = ELEVATION_PATTERN.search(text)
    if not m:
        return None
    return int(round(float(m.group(1))))


def parse_frequency_mhz(text: str) -> Optional[float]:
    """Decode a frequency such as '115.100 MHz' or '338 kHz', always returned in MHz."""
    if not text:
        return None
    m = FREQUENCY_PATTERN.search(text)
    if not m:
        return None
    value = float(m.group(1))
    if m.group(2).lower() == 'khz':
        return round(value / 1000, 6)
    return value


def _normalize_level(level: str) -> str:
    level = level.upper()
    if level.startswith('FL'):
        return re.sub(r"\s+", "", level)
    return re.sub(r"\s+", " ", level).strip()


def parse_levels(text: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Extract the upper and lower vertical limits from an airway segment cell.

    Limits are published top first ('FL 245 / FL 75'); values are returned
    with inner whitespace removed, e.g. ('FL245', 'FL75').
    """
    if not text:
        return None, None
    levels = [_normalize_level(m.group(1)) for m in LEVEL_PATTERN.finditer(text)]
    if not levels:
        return None, None
    if len(levels) == 1:
        return levels[0], None
    return levels[0], levels[1]
