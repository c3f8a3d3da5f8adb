"""
Status types enumeration for the Food Log detection service.
"""

from enum import Enum


class ResponseStatus(str, Enum):
    """Outcome of querying one remote classifier"""
    SUCCESS = "success"
    FAILED = "failed"


class ResolutionStatus(str, Enum):
    """Outcome of reconciling all model responses for one image"""
    DETECTED = "detected"
    NOTHING_DETECTED = "nothing_detected"
