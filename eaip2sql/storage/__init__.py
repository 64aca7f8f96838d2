"""
Storage backends for generated data sets.
"""

from .base import StorageInterface
from .database_storage import DatabaseStorage
from .script_storage import ScriptStorage, parse_script

__all__ = ['StorageInterface', 'DatabaseStorage', 'ScriptStorage', 'parse_script']
