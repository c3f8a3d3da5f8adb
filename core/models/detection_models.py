# core/models/detection_models.py
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional
import math
import time

from core.enums import ResponseStatus, ResolutionStatus


@dataclass(frozen=True)
class ModelEndpoint:
    """One remote classifier, identified by its model id (e.g. 'food-4oq56/1')"""
    model_id: str
    base_url: str = "https://detect.roboflow.com"
    api_key: str = ""

    @property
    def url(self) -> str:
        """Request target for this model"""
        return f"{self.base_url}/{self.model_id}"

    @property
    def params(self) -> Dict[str, str]:
        return {'api_key': self.api_key}

    @property
    def is_well_formed(self) -> bool:
        """Cheap sanity check: 'project/version' with a non-empty project"""
        project, _, version = self.model_id.partition('/')
        return bool(project) and not project.startswith('-') and version.isdigit()

    @classmethod
    def from_ids(cls, model_ids: List[str], base_url: str, api_key: str) -> List['ModelEndpoint']:
        return [cls(model_id=m, base_url=base_url, api_key=api_key) for m in model_ids]


@dataclass(frozen=True)
class RawPrediction:
    """One detection returned by one model"""
    class_name: str
    confidence: float

    @property
    def label(self) -> str:
        """Normalized label used for voting"""
        return self.class_name.lower()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RawPrediction':
        """Build from a raw prediction object; raises TypeError/ValueError on bad types"""
        raw_class = data.get('class')
        raw_conf = data.get('confidence')
        if raw_conf is None:
            raw_conf = 0
        if isinstance(raw_conf, bool) or not isinstance(raw_conf, (int, float)):
            raise TypeError(f"confidence is not numeric: {raw_conf!r}")
        confidence = float(raw_conf)
        if not math.isfinite(confidence) or not 0.0 <= confidence <= 1.0:
            raise ValueError(f"confidence outside [0, 1]: {raw_conf!r}")
        return cls(
            class_name='' if raw_class is None else str(raw_class),
            confidence=confidence
        )


@dataclass
class ModelResponse:
    """Outcome of querying one endpoint"""
    endpoint: ModelEndpoint
    status: ResponseStatus
    predictions: List[RawPrediction] = field(default_factory=list)
    latency_ms: Optional[float] = None
    error_message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == ResponseStatus.SUCCESS

    @property
    def prediction_count(self) -> int:
        return len(self.predictions)

    @classmethod
    def success(cls, endpoint: ModelEndpoint, predictions: List[RawPrediction],
                latency_ms: Optional[float] = None) -> 'ModelResponse':
        return cls(endpoint=endpoint, status=ResponseStatus.SUCCESS,
                   predictions=list(predictions), latency_ms=latency_ms)

    @classmethod
    def failure(cls, endpoint: ModelEndpoint, error_message: Optional[str] = None,
                latency_ms: Optional[float] = None) -> 'ModelResponse':
        # A failure never carries predictions
        return cls(endpoint=endpoint, status=ResponseStatus.FAILED,
                   latency_ms=latency_ms, error_message=error_message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'model_id': self.endpoint.model_id,
            'status': self.status.value,
            'prediction_count': self.prediction_count,
            'latency_ms': self.latency_ms,
            'error_message': self.error_message
        }


@dataclass
class AggregateVote:
    """Votes accumulated for one label across all successful responses"""
    label: str
    total_count: int = 0
    max_confidence: float = 0.0
    max_model_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Resolution:
    """Winning label plus quantity hint, or nothing detected"""
    status: ResolutionStatus
    label: Optional[str] = None
    quantity_hint: int = 1
    total_count: int = 0
    max_confidence: float = 0.0
    votes: List[AggregateVote] = field(default_factory=list)
    resolved_at: Optional[float] = None

    def __post_init__(self):
        if self.resolved_at is None:
            self.resolved_at = time.time()

    @property
    def detected(self) -> bool:
        return self.status == ResolutionStatus.DETECTED

    @classmethod
    def nothing_detected(cls) -> 'Resolution':
        return cls(status=ResolutionStatus.NOTHING_DETECTED, quantity_hint=0)

    @classmethod
    def from_vote(cls, vote: AggregateVote, votes: List[AggregateVote]) -> 'Resolution':
        return cls(
            status=ResolutionStatus.DETECTED,
            label=vote.label,
            quantity_hint=vote.max_model_count or 1,
            total_count=vote.total_count,
            max_confidence=vote.max_confidence,
            votes=list(votes)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'status': self.status.value,
            'label': self.label,
            'quantity_hint': self.quantity_hint,
            'total_count': self.total_count,
            'max_confidence': self.max_confidence,
            'votes': [v.to_dict() for v in self.votes],
            'resolved_at': self.resolved_at
        }
