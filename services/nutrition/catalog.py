"""
Local food catalog: nutrition facts per default quantity, keyed by food name
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from core.exceptions import FoodCatalogError
from core.models import FoodInfo
from shared.decorators.error_handling import handle_errors

logger = logging.getLogger(__name__)


class FoodCatalog:
    """Case-insensitive lookup of FoodInfo by name"""

    def __init__(self, foods: Optional[Dict[str, FoodInfo]] = None):
        self.foods: Dict[str, FoodInfo] = foods or {}

    def __len__(self) -> int:
        return len(self.foods)

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    @property
    def loaded(self) -> bool:
        return bool(self.foods)

    def lookup(self, label: Optional[str]) -> Optional[FoodInfo]:
        """FoodInfo for a resolved label, or None when the food is unknown"""
        if not label:
            return None
        return self.foods.get(label.lower())

    def search(self, query: str = "") -> List[FoodInfo]:
        """Foods whose name contains the query, sorted by name"""
        query = query.strip().lower()
        return [
            self.foods[name] for name in sorted(self.foods)
            if query in name
        ]

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "FoodCatalog":
        foods: Dict[str, FoodInfo] = {}
        for record in records:
            if not isinstance(record, dict):
                raise FoodCatalogError(f"Catalog record is not an object: {record!r}")
            info = FoodInfo.from_dict(record)
            # Later duplicates override earlier ones
            foods[info.name] = info
        return cls(foods)

    @classmethod
    def from_file(cls, path: Path) -> "FoodCatalog":
        """Load a JSON array of food records; raises on unreadable or invalid files"""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise FoodCatalogError(f"Catalog {path} is not a JSON array")
        catalog = cls.from_records(data)
        logger.info(f"🍽️ Loaded {len(catalog)} foods from {path}")
        return catalog


@handle_errors(default_return=FoodCatalog)
def load_food_catalog(path: Path) -> FoodCatalog:
    """Load the catalog, falling back to an empty one if the file is unusable"""
    return FoodCatalog.from_file(Path(path))
