from .catalog import FoodCatalog, load_food_catalog
from .calculator import scale_from_default, default_quantity, quantity_to_grams, build_entry

__all__ = [
    'FoodCatalog',
    'load_food_catalog',
    'scale_from_default',
    'default_quantity',
    'quantity_to_grams',
    'build_entry'
]
