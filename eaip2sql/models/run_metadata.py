from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Tuple

from dateutil import tz

from ..utils.airac_date_calculator import AiracCycle

GENERATOR_NAME = "eaip2sql"


@dataclass(frozen=True)
class RunMetadata:
    """Identity of one generation run, written once before any entity data."""

    valid_from: str
    valid_until: str
    generated_at: str = field(default_factory=lambda: datetime.now(tz.UTC).isoformat())
    generator: str = GENERATOR_NAME

    @classmethod
    def for_cycle(cls, cycle: AiracCycle, generated_at: datetime = None) -> 'RunMetadata':
        """Build the metadata for a run producing data valid over ``cycle``."""
        if generated_at is None:
            generated_at = datetime.now(tz.UTC)
        return cls(
            valid_from=cycle.starts.isoformat(),
            valid_until=cycle.ends.isoformat(),
            generated_at=generated_at.isoformat(),
        )

    def to_properties(self) -> List[Tuple[str, str]]:
        """Key/value rows for the properties table, in insertion order."""
        return [
            ('generator', self.generator),
            ('valid_from', self.valid_from),
            ('valid_until', self.valid_until),
            ('generated_at', self.generated_at),
        ]
