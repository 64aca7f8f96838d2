"""
Parsers for Eurocontrol-format (MakeAIP) eAIP HTML pages.
"""

from .enr_parser import ENRParser
from .ad_parser import ADParser

__all__ = ['ENRParser', 'ADParser']
