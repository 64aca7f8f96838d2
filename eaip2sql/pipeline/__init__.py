"""
The ingestion pipeline: fetch, normalize, store.
"""

from .normalizer import EntityNormalizer
from .orchestrator import Orchestrator, SourceData

__all__ = ['EntityNormalizer', 'Orchestrator', 'SourceData']
