import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

TACAN_PATTERN = re.compile(r"\b(?:TACAN|VORTAC)\b")


class NavAidKind(Enum):
    """Kind of radio navigation aid, valued by the label stored in the database."""
    VOR = "VOR"
    DME = "DME"
    NDB = "NDB"
    VORDME = "VOR,DME"

    @classmethod
    def from_text(cls, text: str) -> Optional['NavAidKind']:
        """
        Classify a station from its published label, e.g. 'BIGGIN VOR/DME'.

        A TACAN provides DME ranging to civil users, so 'TACAN' counts as DME
        and 'VORTAC' as VOR,DME.
        """
        upper = text.upper()
        has_vor = 'VOR' in upper
        has_dme = 'DME' in upper or TACAN_PATTERN.search(upper) is not None
        if has_vor and has_dme:
            return cls.VORDME
        if has_vor:
            return cls.VOR
        if has_dme:
            return cls.DME
        if 'NDB' in upper:
            return cls.NDB
        return None


@dataclass(frozen=True)
class NavAid:
    """A ground radio navigation aid as published by a source."""

    id: str  # 3-char designator, e.g. "BIG"
    name: str
    frequency_mhz: float  # always MHz on the raw record, NDBs included
    latitude: float
    longitude: float
    kind: NavAidKind
    elevation: Optional[int] = None  # feet

    @property
    def frequency_khz(self) -> float:
        """Frequency in kHz."""
        return round(self.frequency_mhz * 1000, 3)

    @property
    def frequency(self) -> float:
        """Frequency in the unit it is reported in: kHz for NDBs, MHz otherwise."""
        if self.kind is NavAidKind.NDB:
            return self.frequency_khz
        return self.frequency_mhz
