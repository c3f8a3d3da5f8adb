# core/models/result_models.py

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from datetime import datetime, timezone

from .detection_models import Resolution
from .food_models import FoodInfo


@dataclass
class DetectionOutcome:
    """What a photo detection hands over to the caller for confirmation"""
    resolution: Resolution
    food: Optional[FoodInfo] = None
    suggested_quantity: Optional[float] = None
    suggested_grams: Optional[float] = None
    responses_ok: int = 0
    responses_failed: int = 0
    processing_time_ms: Optional[float] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def detected(self) -> bool:
        return self.resolution.detected

    @property
    def known_food(self) -> bool:
        """Label resolved and present in the catalog"""
        return self.detected and self.food is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'resolution': self.resolution.to_dict(),
            'food': self.food.to_dict() if self.food else None,
            'suggested_quantity': self.suggested_quantity,
            'suggested_grams': self.suggested_grams,
            'responses_ok': self.responses_ok,
            'responses_failed': self.responses_failed,
            'processing_time_ms': self.processing_time_ms,
            'created_at': self.created_at.isoformat()
        }
