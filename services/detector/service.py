"""
Photo detection pipeline: fan-out, vote, catalog lookup, quantity suggestion
"""

import logging
import time
from pathlib import Path
from typing import List, Optional

from app.settings import settings, DetectionConfig
from core.models import DetectionOutcome, ModelEndpoint
from infrastructure.external.detection_client import DetectionApiClient
from infrastructure.monitoring.metrics import DetectionMetrics
from services.nutrition import FoodCatalog, default_quantity, quantity_to_grams
from .aggregator import resolve_votes
from .dispatcher import FanOutDispatcher


class DetectionService:
    """Resolves one food label (and a default quantity) from a photo"""

    def __init__(
        self,
        catalog: FoodCatalog,
        client: Optional[DetectionApiClient] = None,
        config: Optional[DetectionConfig] = None,
        endpoints: Optional[List[ModelEndpoint]] = None,
        metrics: Optional[DetectionMetrics] = None
    ):
        self.config = config or settings.detection
        self.catalog = catalog
        self.client = client or DetectionApiClient(timeout=self.config.request_timeout)
        self.metrics = metrics or DetectionMetrics()
        self.endpoints = endpoints if endpoints is not None else ModelEndpoint.from_ids(
            self.config.model_ids_list,
            base_url=self.config.api_base_url,
            api_key=self.config.api_key
        )
        self.dispatcher = FanOutDispatcher(self.client, self.config.request_timeout, self.metrics)
        self.logger = logging.getLogger(__name__)

        suspicious = [e.model_id for e in self.endpoints if not e.is_well_formed]
        if suspicious:
            self.logger.warning(f"⚠️ Model ids that will likely fail: {suspicious}")

    async def start(self):
        await self.client.start()

    async def close(self):
        await self.client.close()

    async def __aenter__(self) -> "DetectionService":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def detect(self, image: bytes, filename: str = "image.jpg") -> DetectionOutcome:
        start_time = time.perf_counter()

        responses = await self.dispatcher.dispatch(image, self.endpoints, filename)
        resolution = resolve_votes(responses)
        self.metrics.record_resolution(resolution.detected)

        outcome = DetectionOutcome(
            resolution=resolution,
            responses_ok=sum(1 for r in responses if r.is_success),
            responses_failed=sum(1 for r in responses if not r.is_success),
        )

        if resolution.detected:
            food = self.catalog.lookup(resolution.label)
            if food is None:
                self.logger.warning(f"❓ '{resolution.label}' is not in the food catalog")
            else:
                outcome.food = food
                outcome.suggested_quantity = default_quantity(food, resolution.quantity_hint)
                outcome.suggested_grams = quantity_to_grams(food, outcome.suggested_quantity)

        outcome.processing_time_ms = (time.perf_counter() - start_time) * 1000
        return outcome

    async def detect_file(self, path: Path) -> DetectionOutcome:
        path = Path(path)
        return await self.detect(path.read_bytes(), filename=path.name)
