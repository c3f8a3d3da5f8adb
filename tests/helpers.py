import json
from typing import Callable, Dict, Tuple

import httpx

from core.models import ModelEndpoint, ModelResponse, RawPrediction

BASE_URL = "https://detect.test"


def endpoint(model_id: str) -> ModelEndpoint:
    return ModelEndpoint(model_id=model_id, base_url=BASE_URL, api_key="k")


def ok(model_id: str, *predictions: Tuple[str, float]) -> ModelResponse:
    return ModelResponse.success(
        endpoint(model_id),
        [RawPrediction(class_name=c, confidence=conf) for c, conf in predictions]
    )


def failed(model_id: str) -> ModelResponse:
    return ModelResponse.failure(endpoint(model_id), error_message="boom")


def predictions_body(*predictions: Tuple[str, float]) -> Dict:
    return {"predictions": [{"class": c, "confidence": conf} for c, conf in predictions]}


def routing_transport(routes: Dict[str, Callable[[httpx.Request], httpx.Response]]) -> httpx.MockTransport:
    """MockTransport dispatching on the model id in the request path"""

    async def handler(request: httpx.Request) -> httpx.Response:
        model_id = request.url.path.lstrip("/")
        route = routes.get(model_id)
        if route is None:
            return httpx.Response(404, text="model not found")
        response = route(request)
        if not isinstance(response, httpx.Response):
            response = await response
        return response

    return httpx.MockTransport(handler)


def json_route(body) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(200, text=json.dumps(body))
