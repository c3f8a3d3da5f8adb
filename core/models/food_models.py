# core/models/food_models.py
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional
from datetime import date

from core.enums import FoodUnit


def _as_float(value: Any, default: float) -> float:
    if value is None:
        return default
    return float(value)


@dataclass(frozen=True)
class FoodInfo:
    """Nutrition facts of one catalog food, given for default_weight_g"""
    name: str
    unit: FoodUnit
    default_weight_g: float
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float

    @property
    def is_piece(self) -> bool:
        return self.unit == FoodUnit.PIECE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FoodInfo':
        """Create FoodInfo from a catalog record"""
        return cls(
            name=str(data.get('name') or '').lower(),
            unit=FoodUnit.parse(data.get('unit')),
            default_weight_g=_as_float(data.get('default_weight_g'), 100.0),
            calories=_as_float(data.get('calories'), 0.0),
            protein_g=_as_float(data.get('protein_g'), 0.0),
            carbs_g=_as_float(data.get('carbs_g'), 0.0),
            fat_g=_as_float(data.get('fat_g'), 0.0)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'unit': self.unit.value,
            'default_weight_g': self.default_weight_g,
            'calories': self.calories,
            'protein_g': self.protein_g,
            'carbs_g': self.carbs_g,
            'fat_g': self.fat_g
        }


@dataclass(frozen=True)
class NutritionValues:
    """Nutrition for a concrete amount of food"""
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class FoodEntry:
    """One logged meal item"""
    name: str
    grams: float
    calories: float
    protein: float
    carbs: float
    fats: float
    entry_date: date
    image_path: str = ""
    id: Optional[int] = None

    @property
    def date_key(self) -> str:
        """Date in YYYY-MM-DD form, used for grouping"""
        return self.entry_date.isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'grams': self.grams,
            'calories': self.calories,
            'protein': self.protein,
            'carbs': self.carbs,
            'fats': self.fats,
            'date': self.date_key,
            'imagePath': self.image_path
        }


@dataclass
class DailySummary:
    """Totals for one day of entries"""
    day: date
    entry_count: int = 0
    grams: float = 0.0
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0

    @property
    def macro_total(self) -> float:
        return self.protein + self.carbs + self.fats

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.day.isoformat(),
            'entry_count': self.entry_count,
            'grams': self.grams,
            'calories': self.calories,
            'protein': self.protein,
            'carbs': self.carbs,
            'fats': self.fats
        }
