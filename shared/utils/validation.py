# shared/utils/validation.py

from typing import Any, Dict, List

class ValidationError(Exception):
    """Custom exception for validation errors."""
    pass

def validate_response(response: Any) -> bool:
    """
    Validate a decoded JSON body from a remote classifier.

    Args:
        response (Any): Decoded response data.

    Returns:
        bool: True if valid, raises ValidationError if invalid.
    """
    if not isinstance(response, dict):
        raise ValidationError(f"Response is not a dict: {type(response).__name__}")

    return True

def validate_list_field(response: Dict[str, Any], key: str) -> List[Any]:
    """Return response[key] as a list; a missing or null key is an empty list"""
    value = response.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"Field '{key}' is not a list: {type(value).__name__}")
    return value
