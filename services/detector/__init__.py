from .aggregator import VoteAggregator, resolve_votes
from .dispatcher import FanOutDispatcher
from .service import DetectionService

__all__ = [
    'VoteAggregator',
    'resolve_votes',
    'FanOutDispatcher',
    'DetectionService'
]
