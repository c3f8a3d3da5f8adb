# infrastructure/external/detection_client.py

import json
import httpx
import logging
from typing import Dict, List, Any, Optional
from datetime import datetime, timezone

from core.exceptions import DetectionAPIError, MalformedResponseError
from core.models import ModelEndpoint, RawPrediction
from shared.utils.validation import ValidationError, validate_response, validate_list_field
from app.settings import settings

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant {name}")


def parse_predictions(body: str) -> List[RawPrediction]:
    """
    Parse a classifier JSON body into predictions.

    The whole body is rejected if any part of it is malformed, so a bad
    prediction never leaves the earlier ones behind.
    """
    try:
        decoded = json.loads(body, parse_constant=_reject_constant)
        validate_response(decoded)
        raw_predictions = validate_list_field(decoded, 'predictions')
        predictions = []
        for raw in raw_predictions:
            if not isinstance(raw, dict):
                raise ValidationError(f"Prediction is not an object: {type(raw).__name__}")
            predictions.append(RawPrediction.from_dict(raw))
        return predictions
    except (ValueError, TypeError, ValidationError) as e:
        raise MalformedResponseError(f"Malformed classifier response: {e}", response_text=body[:200]) from e


class DetectionApiClient:
    """Async HTTP client for the hosted object-detection models"""

    def __init__(
        self,
        timeout: Optional[float] = None,
        upload_field: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.timeout = timeout or settings.detection.request_timeout
        self.upload_field = upload_field or settings.detection.upload_field

        # HTTP client config
        self.client_config: Dict[str, Any] = {
            "timeout": httpx.Timeout(self.timeout),
            "headers": {
                "User-Agent": f"{settings.app_name}/{settings.app_version}",
            },
        }
        if transport is not None:
            self.client_config["transport"] = transport

        self._client: Optional[httpx.AsyncClient] = None

        # Stats
        self.request_count = 0
        self.success_count = 0
        self.error_count = 0
        self.last_request_time: Optional[datetime] = None

    @property
    def is_started(self) -> bool:
        return self._client is not None

    async def start(self):
        if self._client is None:
            self._client = httpx.AsyncClient(**self.client_config)
            logger.debug("🔌 Detection API client opened")

    async def close(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("🔌 Detection API client closed")

    async def __aenter__(self) -> "DetectionApiClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # -----------------------------
    # Classification
    # -----------------------------
    async def classify(
        self,
        endpoint: ModelEndpoint,
        image: bytes,
        filename: str = "image.jpg"
    ) -> List[RawPrediction]:
        """
        POST the image to one model and return its predictions.

        Raises DetectionAPIError on a non-2xx status, MalformedResponseError on
        a body that does not parse, and lets httpx transport errors propagate.
        """
        if self._client is None:
            raise RuntimeError("DetectionApiClient not started")

        self.request_count += 1
        self.last_request_time = datetime.now(timezone.utc)

        try:
            response = await self._client.post(
                endpoint.url,
                params=endpoint.params,
                files={self.upload_field: (filename, image, "application/octet-stream")},
            )

            if not response.is_success:
                raise DetectionAPIError(
                    f"{endpoint.model_id} returned {response.status_code}",
                    status_code=response.status_code,
                    response_text=response.text[:200],
                )

            predictions = parse_predictions(response.text)

        except Exception:
            self.error_count += 1
            raise

        self.success_count += 1
        logger.debug(f"✅ {endpoint.model_id} returned {len(predictions)} predictions")
        return predictions

    # -----------------------------
    # Stats
    # -----------------------------
    def get_stats(self) -> Dict[str, Any]:
        """Client counters"""
        success_rate = (
            (self.success_count / self.request_count * 100)
            if self.request_count > 0
            else 0
        )

        return {
            "total_requests": self.request_count,
            "successful_requests": self.success_count,
            "failed_requests": self.error_count,
            "success_rate_percent": round(success_rate, 2),
            "last_request_time": self.last_request_time.isoformat()
            if self.last_request_time
            else None,
        }
