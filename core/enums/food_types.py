"""
Food unit enumeration for the Food Log detection service.
"""

from enum import Enum


class FoodUnit(str, Enum):
    """How a food's quantity is entered by the user"""
    GRAM = "g"
    PIECE = "piece"

    @classmethod
    def parse(cls, value) -> "FoodUnit":
        """Unknown or missing units fall back to grams"""
        try:
            return cls(str(value or "g").strip().lower())
        except ValueError:
            return cls.GRAM
