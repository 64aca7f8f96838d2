"""
Data sources for the eaip2sql package.

This package contains the per-country data providers and the registry
listing them.
"""

from .base import DataProviderInterface
from .cached import CachedSource
from .makeaip_web import MakeAIPWebSource
from .registry import Source, SourceRegistry, DEFAULT_REGISTRY

__all__ = [
    'DataProviderInterface',
    'CachedSource',
    'MakeAIPWebSource',
    'Source',
    'SourceRegistry',
    'DEFAULT_REGISTRY',
]
