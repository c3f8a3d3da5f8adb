import pytest

from core.models import FoodInfo
from services.nutrition import FoodCatalog


@pytest.fixture
def catalog() -> FoodCatalog:
    return FoodCatalog.from_records([
        {"name": "Idli", "unit": "piece", "default_weight_g": 40, "calories": 58,
         "protein_g": 2, "carbs_g": 12, "fat_g": 0.4},
        {"name": "dosa", "unit": "piece", "default_weight_g": 80, "calories": 168,
         "protein_g": 3.9, "carbs_g": 29, "fat_g": 3.7},
        {"name": "sambar", "unit": "g", "default_weight_g": 150, "calories": 90,
         "protein_g": 4.5, "carbs_g": 13.5, "fat_g": 2.1},
    ])


@pytest.fixture
def idli() -> FoodInfo:
    return FoodInfo.from_dict({"name": "idli", "unit": "piece", "default_weight_g": 40,
                               "calories": 58, "protein_g": 2, "carbs_g": 12, "fat_g": 0.4})
