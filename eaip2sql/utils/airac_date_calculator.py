"""
AIRAC cycle calculation utilities.

This module provides functionality to compute AIRAC (Aeronautical Information Regulation and Control)
cycles, which follow a fixed 28-day period and always start on a Thursday at 0000 UTC.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union

from dateutil import tz

logger = logging.getLogger(__name__)

# AIRAC cycle length in days
AIRAC_CYCLE_DAYS = 28

# Thursday weekday number (Monday=0, Tuesday=1, ..., Thursday=3)
THURSDAY_WEEKDAY = 3

# Effective date of AIRAC 2001
REFERENCE_AIRAC_DATE = '2020-01-02'


def _parse_date(date_str: str) -> date:
    """Parse a date string in YYYY-MM-DD format."""
    try:
        return datetime.strptime(date_str, '%Y-%m-%d').date()
    except ValueError:
        raise ValueError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")


def _utc_date(instant: Union[datetime, date]) -> date:
    """Return the UTC calendar date of an instant. Naive datetimes are taken as UTC."""
    if isinstance(instant, datetime):
        if instant.tzinfo is not None:
            instant = instant.astimezone(tz.UTC)
        return instant.date()
    return instant


@dataclass(frozen=True)
class AiracCycle:
    """
    A single AIRAC cycle, valid over the half-open interval [starts, ends).

    Cycles tile time: the ``ends`` of one cycle is the ``starts`` of the next.
    """

    starts: date
    ends: date

    def __post_init__(self):
        if not self.starts < self.ends:
            raise ValueError(f"AIRAC cycle must start before it ends, got {self.starts} -> {self.ends}")

    @property
    def ident(self) -> str:
        """Four digit YYNN designation, e.g. '2611' for the 11th cycle starting in 2026."""
        ordinal = (self.starts.timetuple().tm_yday - 1) // AIRAC_CYCLE_DAYS + 1
        return f"{self.starts.year % 100:02d}{ordinal:02d}"

    def contains(self, instant: Union[datetime, date]) -> bool:
        """Check whether an instant falls within this cycle."""
        return self.starts <= _utc_date(instant) < self.ends

    def next(self) -> 'AiracCycle':
        """Get the immediately following cycle."""
        return AiracCycle(self.ends, self.ends + timedelta(days=AIRAC_CYCLE_DAYS))

    def previous(self) -> 'AiracCycle':
        """Get the immediately preceding cycle."""
        return AiracCycle(self.starts - timedelta(days=AIRAC_CYCLE_DAYS), self.starts)

    @classmethod
    def from_date(cls, instant: Union[str, datetime, date],
                  reference_date: str = REFERENCE_AIRAC_DATE) -> 'AiracCycle':
        """
        Get the cycle containing a given date or instant.

        Args:
            instant: Date to look up. Can be string (YYYY-MM-DD), date or datetime
            reference_date: Known AIRAC effective date in YYYY-MM-DD format

        Returns:
            The AiracCycle whose [starts, ends) contains the instant
        """
        return AIRACDateCalculator(reference_date).cycle_for(instant)

    @classmethod
    def current(cls, now: Optional[datetime] = None) -> 'AiracCycle':
        """Get the cycle in effect now (or at ``now`` if given)."""
        if now is None:
            now = datetime.now(tz.UTC)
        return cls.from_date(now)

    def __str__(self) -> str:
        return f"AIRAC {self.ident} ({self.starts.isoformat()} - {self.ends.isoformat()})"


class AIRACDateCalculator:
    """
    Utility for calculating AIRAC cycles based on the 28-day period.

    A cycle for any instant is found by counting whole 28-day steps
    from a known AIRAC effective date.
    """

    def __init__(self, reference_airac_date: str = REFERENCE_AIRAC_DATE):
        """
        Initialize the AIRAC calculator with a reference date.

        Args:
            reference_airac_date: Known AIRAC date in YYYY-MM-DD format (defaults to 2020-01-02)

        Raises:
            ValueError: If the reference date is invalid or not a Thursday
        """
        self.reference_date = _parse_date(reference_airac_date)
        if self.reference_date.weekday() != THURSDAY_WEEKDAY:
            raise ValueError(
                f"Reference AIRAC date must be a Thursday, but {self.reference_date.isoformat()} "
                f"is a {self.reference_date.strftime('%A')}"
            )

    def cycle_for(self, instant: Union[str, datetime, date]) -> AiracCycle:
        """Get the cycle containing ``instant``."""
        if isinstance(instant, str):
            instant = _parse_date(instant)
        days_diff = (_utc_date(instant) - self.reference_date).days
        # Floor division keeps dates before the reference in the right cycle
        cycles_since_ref = days_diff // AIRAC_CYCLE_DAYS
        starts = self.reference_date + timedelta(days=cycles_since_ref * AIRAC_CYCLE_DAYS)
        return AiracCycle(starts, starts + timedelta(days=AIRAC_CYCLE_DAYS))
