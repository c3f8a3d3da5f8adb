"""
Nutrition scaling and quantity conversion
"""

from datetime import date
from typing import Optional

from core.exceptions import InvalidQuantityError
from core.models import FoodInfo, NutritionValues, FoodEntry


def scale_from_default(info: FoodInfo, grams: float) -> NutritionValues:
    """Scale nutrition facts from the food's default weight to any amount of grams"""
    if info.default_weight_g <= 0:
        raise InvalidQuantityError(f"{info.name} has no usable default weight")
    factor = grams / info.default_weight_g
    return NutritionValues(
        calories=info.calories * factor,
        protein=info.protein_g * factor,
        carbs=info.carbs_g * factor,
        fat=info.fat_g * factor
    )


def default_quantity(info: FoodInfo, quantity_hint: Optional[int] = None) -> float:
    """
    Pre-filled quantity for the confirmation step.

    Piece foods use the detection quantity hint, gram foods their default weight.
    """
    if info.is_piece:
        return float(quantity_hint or 1)
    return info.default_weight_g


def quantity_to_grams(info: FoodInfo, quantity: float) -> float:
    """Convert a user-entered quantity (pieces or grams) to grams"""
    if quantity is None or quantity <= 0:
        raise InvalidQuantityError(f"Quantity must be positive, got {quantity!r}")
    if info.is_piece:
        return quantity * info.default_weight_g
    return float(quantity)


def build_entry(info: FoodInfo, grams: float, entry_date: date, image_path: str = "") -> FoodEntry:
    """Food entry with nutrition computed for the given grams"""
    if grams <= 0:
        raise InvalidQuantityError(f"Grams must be positive, got {grams!r}")
    scaled = scale_from_default(info, grams)
    return FoodEntry(
        name=info.name,
        grams=grams,
        calories=scaled.calories,
        protein=scaled.protein,
        carbs=scaled.carbs,
        fats=scaled.fat,
        entry_date=entry_date,
        image_path=image_path
    )
