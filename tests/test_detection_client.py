import json

import httpx
import pytest

from core.exceptions import DetectionAPIError, MalformedResponseError
from infrastructure.external.detection_client import DetectionApiClient, parse_predictions
from tests.helpers import endpoint, predictions_body


class TestParsePredictions:
    def test_parses_class_and_confidence(self):
        preds = parse_predictions(json.dumps(predictions_body(("Idli", 0.91), ("dosa", 1))))
        assert [(p.class_name, p.confidence) for p in preds] == [("Idli", 0.91), ("dosa", 1.0)]
        assert preds[0].label == "idli"

    def test_missing_predictions_is_empty_success(self):
        assert parse_predictions(json.dumps({"time": 0.1})) == []

    def test_confidence_bounds_are_inclusive(self):
        preds = parse_predictions(json.dumps(predictions_body(("idli", 0), ("dosa", 1.0))))
        assert [p.confidence for p in preds] == [0.0, 1.0]

    def test_missing_fields_default(self):
        preds = parse_predictions(json.dumps({"predictions": [{}]}))
        assert preds[0].class_name == ""
        assert preds[0].confidence == 0.0

    @pytest.mark.parametrize("body", [
        "not json",
        "[]",
        json.dumps({"predictions": "idli"}),
        json.dumps({"predictions": ["idli"]}),
        json.dumps({"predictions": [{"class": "idli", "confidence": 0.9},
                                    {"class": "dosa", "confidence": "high"}]}),
        '{"predictions": [{"class": "idli", "confidence": NaN}]}',
        '{"predictions": [{"class": "idli", "confidence": Infinity}]}',
        '{"predictions": [{"class": "idli", "confidence": -Infinity}]}',
        '{"predictions": [{"class": "idli", "confidence": 0.9}], "time": NaN}',
        json.dumps({"predictions": [{"class": "idli", "confidence": 1.5}]}),
        json.dumps({"predictions": [{"class": "idli", "confidence": -0.1}]}),
        '{"predictions": [{"class": "idli", "confidence": 1e400}]}',
    ])
    def test_malformed_bodies_raise(self, body):
        with pytest.raises(MalformedResponseError):
            parse_predictions(body)


class TestDetectionApiClient:
    @pytest.mark.asyncio
    async def test_posts_multipart_image_with_api_key(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["api_key"] = request.url.params.get("api_key")
            seen["body"] = request.content
            return httpx.Response(200, json=predictions_body(("idli", 0.8)))

        async with DetectionApiClient(timeout=5, transport=httpx.MockTransport(handler)) as client:
            preds = await client.classify(endpoint("food-4oq56/1"), b"JPEGDATA", "meal.jpg")

        assert [p.label for p in preds] == ["idli"]
        assert seen["method"] == "POST"
        assert seen["path"] == "/food-4oq56/1"
        assert seen["api_key"] == "k"
        assert b'name="file"' in seen["body"]
        assert b'filename="meal.jpg"' in seen["body"]
        assert b"JPEGDATA" in seen["body"]
        assert client.get_stats()["successful_requests"] == 1

    @pytest.mark.asyncio
    async def test_non_success_status_raises(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(403, text="forbidden"))
        async with DetectionApiClient(timeout=5, transport=transport) as client:
            with pytest.raises(DetectionAPIError) as exc_info:
                await client.classify(endpoint("a/1"), b"x")

        assert exc_info.value.status_code == 403
        assert client.error_count == 1
        assert client.get_stats()["last_request_time"].endswith("+00:00")

    @pytest.mark.asyncio
    async def test_classify_requires_start(self):
        client = DetectionApiClient(timeout=5)
        assert not client.is_started
        with pytest.raises(RuntimeError):
            await client.classify(endpoint("a/1"), b"x")
