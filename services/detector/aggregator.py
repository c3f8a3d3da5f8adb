"""
Vote aggregation over model responses and winner selection
"""

import logging
from typing import Dict, Iterable, List, Optional

from core.models import AggregateVote, ModelResponse, Resolution
from shared.decorators.timing import time_execution

logger = logging.getLogger(__name__)


class VoteAggregator:
    """
    Accumulates label votes from successful model responses.

    Labels are compared case-insensitively and kept in order of first
    occurrence. Per label it tracks the total number of predictions, the
    highest confidence seen, and the largest count any single model reported.
    """

    def __init__(self):
        # dict keeps insertion order, which decides ties
        self.votes: Dict[str, AggregateVote] = {}
        self.responses_seen = 0
        self.responses_skipped = 0

    def add_response(self, response: ModelResponse):
        """Fold one response into the vote table; failed responses count for nothing"""
        if not response.is_success:
            self.responses_skipped += 1
            return

        self.responses_seen += 1
        per_model_count: Dict[str, int] = {}

        for prediction in response.predictions:
            label = prediction.label
            if not label:
                continue

            vote = self.votes.get(label)
            if vote is None:
                vote = self.votes[label] = AggregateVote(label=label, max_confidence=prediction.confidence)

            vote.total_count += 1
            if prediction.confidence > vote.max_confidence:
                vote.max_confidence = prediction.confidence
            per_model_count[label] = per_model_count.get(label, 0) + 1

        for label, count in per_model_count.items():
            vote = self.votes[label]
            if count > vote.max_model_count:
                vote.max_model_count = count

    def add_responses(self, responses: Iterable[ModelResponse]):
        for response in responses:
            self.add_response(response)

    def select_winner(self) -> Optional[AggregateVote]:
        """
        Highest total count wins; on equal counts the higher max confidence wins.

        On equal count and equal confidence the earlier label keeps the lead.
        """
        leader: Optional[AggregateVote] = None
        for candidate in self.votes.values():
            if leader is None:
                leader = candidate
            elif candidate.total_count != leader.total_count:
                if candidate.total_count > leader.total_count:
                    leader = candidate
            elif leader.max_confidence < candidate.max_confidence:
                leader = candidate
        return leader

    @time_execution
    def resolve(self) -> Resolution:
        """Reduce the vote table to one Resolution"""
        winner = self.select_winner()
        if winner is None:
            logger.info(
                f"🔍 Nothing detected ({self.responses_seen} responses, "
                f"{self.responses_skipped} failed)"
            )
            return Resolution.nothing_detected()

        resolution = Resolution.from_vote(winner, self.ordered_votes())
        logger.info(
            f"🏆 Resolved '{resolution.label}' - votes={resolution.total_count}, "
            f"max_conf={resolution.max_confidence:.3f}, quantity_hint={resolution.quantity_hint}"
        )
        return resolution

    def ordered_votes(self) -> List[AggregateVote]:
        """Votes in first-occurrence order"""
        return list(self.votes.values())


def resolve_votes(responses: Iterable[ModelResponse]) -> Resolution:
    """Aggregate a settled batch of responses and pick the winning label"""
    aggregator = VoteAggregator()
    aggregator.add_responses(responses)
    return aggregator.resolve()
