"""
Utility helpers for the eaip2sql package.
"""

from .airac_date_calculator import AiracCycle, AIRACDateCalculator

__all__ = ['AiracCycle', 'AIRACDateCalculator']
