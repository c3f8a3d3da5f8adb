import math

import pytest

from core.models import ModelEndpoint, Resolution, AggregateVote, RawPrediction, DetectionOutcome


def test_endpoint_url_and_params():
    ep = ModelEndpoint(model_id="food-4oq56/1", base_url="https://detect.roboflow.com", api_key="key")
    assert ep.url == "https://detect.roboflow.com/food-4oq56/1"
    assert ep.params == {"api_key": "key"}


def test_endpoint_well_formed():
    assert ModelEndpoint("indian-food-vitsx/3").is_well_formed
    assert not ModelEndpoint("-food-detection/1").is_well_formed
    assert not ModelEndpoint("").is_well_formed
    assert not ModelEndpoint("food").is_well_formed


def test_resolution_quantity_hint_floor():
    vote = AggregateVote(label="idli", total_count=1, max_confidence=0.5, max_model_count=0)
    assert Resolution.from_vote(vote, [vote]).quantity_hint == 1


def test_nothing_detected_is_distinct():
    resolution = Resolution.nothing_detected()
    assert not resolution.detected
    assert resolution.to_dict()["label"] is None


@pytest.mark.parametrize("confidence", [math.nan, math.inf, -math.inf, 1.01, -0.5])
def test_raw_prediction_rejects_unusable_confidence(confidence):
    with pytest.raises(ValueError):
        RawPrediction.from_dict({"class": "idli", "confidence": confidence})


def test_raw_prediction_rejects_boolean_confidence():
    with pytest.raises(TypeError):
        RawPrediction.from_dict({"class": "idli", "confidence": True})


def test_outcome_timestamp_is_timezone_aware():
    outcome = DetectionOutcome(resolution=Resolution.nothing_detected())
    assert outcome.created_at.tzinfo is not None
    assert outcome.to_dict()["created_at"].endswith("+00:00")
