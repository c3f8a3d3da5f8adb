"""
Core enumerations package for the Food Log detection service.
"""

from .status_types import ResponseStatus, ResolutionStatus
from .food_types import FoodUnit

__all__ = [
    # Status types
    'ResponseStatus',
    'ResolutionStatus',

    # Food types
    'FoodUnit'
]
