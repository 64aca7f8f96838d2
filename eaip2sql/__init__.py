"""
AIRAC navigation data generator.

This package fetches aeronautical information (navaids, intersections,
airways, airports and charts) from per-country eAIP publications for one
AIRAC cycle, normalizes it, and writes it to a database or a SQL script.

The main public API includes:
- AiracCycle: AIRAC cycle computation
- DEFAULT_REGISTRY: Catalog of the available country sources
- Orchestrator: Drives a generation run
- DatabaseStorage / ScriptStorage: Output backends
"""

from .utils.airac_date_calculator import AiracCycle
from .sources.registry import Source, SourceRegistry, DEFAULT_REGISTRY
from .pipeline import EntityNormalizer, Orchestrator
from .storage import DatabaseStorage, ScriptStorage

__version__ = '0.1.0'
__all__ = [
    'AiracCycle',
    'Source',
    'SourceRegistry',
    'DEFAULT_REGISTRY',
    'EntityNormalizer',
    'Orchestrator',
    'DatabaseStorage',
    'ScriptStorage',
]
