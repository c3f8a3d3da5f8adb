"""
Fan-out dispatch of one image to every configured remote model
"""

import asyncio
import logging
import time
from typing import List, Optional

import structlog

from core.models import ModelEndpoint, ModelResponse
from infrastructure.external.detection_client import DetectionApiClient
from infrastructure.monitoring.metrics import DetectionMetrics
from shared.decorators.timing import time_execution


class FanOutDispatcher:
    """
    Sends one classification request per endpoint, all at once.

    Every request runs under its own deadline. Whatever goes wrong with one
    endpoint (bad id, connection error, timeout, error status, bad body) is
    folded into a failed ModelResponse for that endpoint only. A client that
    was never started is a caller error and is raised before any request.
    """

    def __init__(
        self,
        client: DetectionApiClient,
        request_timeout: float,
        metrics: Optional[DetectionMetrics] = None
    ):
        self.client = client
        self.request_timeout = request_timeout
        self.metrics = metrics or DetectionMetrics()
        self.logger = logging.getLogger(__name__)
        self.events = structlog.get_logger(__name__)

    @time_execution
    async def dispatch(
        self,
        image: bytes,
        endpoints: List[ModelEndpoint],
        filename: str = "image.jpg"
    ) -> List[ModelResponse]:
        """
        Query all endpoints concurrently and wait for every one of them to settle.

        Returns one ModelResponse per endpoint, in endpoint order.
        """
        if not self.client.is_started:
            raise RuntimeError("DetectionApiClient not started")

        if not endpoints:
            self.logger.warning("⚠️ No model endpoints configured")
            return []

        self.logger.info(f"🚀 Dispatching image ({len(image)} bytes) to {len(endpoints)} models")

        responses = await asyncio.gather(
            *(self._query(endpoint, image, filename) for endpoint in endpoints)
        )

        ok = sum(1 for r in responses if r.is_success)
        self.logger.info(f"📊 Dispatch settled - {ok}/{len(responses)} models answered")
        return list(responses)

    async def _query(self, endpoint: ModelEndpoint, image: bytes, filename: str) -> ModelResponse:
        """Query one endpoint; never raises for per-endpoint problems"""
        start_time = time.perf_counter()
        try:
            predictions = await asyncio.wait_for(
                self.client.classify(endpoint, image, filename),
                timeout=self.request_timeout
            )
        except asyncio.TimeoutError:
            return self._failed(endpoint, start_time, f"timeout after {self.request_timeout}s")
        except Exception as e:
            return self._failed(endpoint, start_time, f"{type(e).__name__}: {e}")

        latency_ms = (time.perf_counter() - start_time) * 1000
        self.events.bind(model_id=endpoint.model_id).debug(
            "model_answered", predictions=len(predictions), latency_ms=round(latency_ms, 1)
        )
        self.metrics.record_call(endpoint.model_id, True, latency_ms)
        return ModelResponse.success(endpoint, predictions, latency_ms=latency_ms)

    def _failed(self, endpoint: ModelEndpoint, start_time: float, reason: str) -> ModelResponse:
        latency_ms = (time.perf_counter() - start_time) * 1000
        self.events.bind(model_id=endpoint.model_id).warning(
            "model_failed", reason=reason, latency_ms=round(latency_ms, 1)
        )
        self.metrics.record_call(endpoint.model_id, False, latency_ms)
        return ModelResponse.failure(endpoint, error_message=reason, latency_ms=latency_ms)
