# core/exceptions.py
from typing import Optional

class FoodLogException(Exception):
    """Base exception for the Food Log detection service"""
    pass

class DetectionAPIError(FoodLogException):
    """Remote classifier answered with a non-success status"""
    def __init__(self, message: str, status_code: Optional[int] = None, response_text: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text

class MalformedResponseError(DetectionAPIError):
    """Remote classifier body does not have the expected structure"""
    pass

class FoodCatalogError(FoodLogException):
    """Food catalog could not be loaded"""
    pass

class InvalidQuantityError(FoodLogException):
    """Quantity entered for a food entry is not usable"""
    pass
