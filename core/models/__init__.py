# Core Models Package
"""
Core data models for the Food Log detection service.
Contains detection models, food/nutrition models and outcomes.
"""

from .detection_models import (
    ModelEndpoint,
    RawPrediction,
    ModelResponse,
    AggregateVote,
    Resolution
)
from .food_models import (
    FoodInfo,
    NutritionValues,
    FoodEntry,
    DailySummary
)
from .result_models import DetectionOutcome

__all__ = [
    'ModelEndpoint',
    'RawPrediction',
    'ModelResponse',
    'AggregateVote',
    'Resolution',
    'FoodInfo',
    'NutritionValues',
    'FoodEntry',
    'DailySummary',
    'DetectionOutcome'
]
