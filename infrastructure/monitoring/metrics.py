# /infrastructure/monitoring/metrics.py
import time
import logging
from typing import List, Dict, Any, Optional
from dataclasses import dataclass
import threading

# Prometheus
from prometheus_client import start_http_server, Gauge


@dataclass
class ModelUsageMetric:
    """Aggregated usage of one remote model"""
    model_id: str
    call_count: int = 0
    success_count: int = 0
    failure_count: int = 0
    total_latency_ms: float = 0.0
    avg_latency_ms: float = 0.0


class DetectionMetrics:
    """Per-model dispatch metrics"""

    def __init__(self):
        self.lock = threading.Lock()

        self.usage_metrics: Dict[str, ModelUsageMetric] = {}

        # Performance counters
        self.total_calls = 0
        self.successful_calls = 0
        self.failed_calls = 0
        self.total_runs = 0
        self.detected_runs = 0
        self.start_time = time.time()

    def record_call(self, model_id: str, success: bool, latency_ms: Optional[float] = None):
        """Record the outcome of one model request"""
        with self.lock:
            self.total_calls += 1
            if success:
                self.successful_calls += 1
            else:
                self.failed_calls += 1

            usage = self.usage_metrics.get(model_id)
            if usage is None:
                usage = self.usage_metrics[model_id] = ModelUsageMetric(model_id=model_id)
            usage.call_count += 1
            if success:
                usage.success_count += 1
            else:
                usage.failure_count += 1
            if latency_ms is not None:
                usage.total_latency_ms += latency_ms
                usage.avg_latency_ms = usage.total_latency_ms / usage.call_count

    def record_resolution(self, detected: bool):
        """Record the outcome of one full detection run"""
        with self.lock:
            self.total_runs += 1
            if detected:
                self.detected_runs += 1

    def get_overall_stats(self) -> Dict[str, Any]:
        """Overall statistics"""
        with self.lock:
            return {
                'uptime_seconds': time.time() - self.start_time,
                'total_calls': self.total_calls,
                'successful_calls': self.successful_calls,
                'failed_calls': self.failed_calls,
                'success_rate': self.successful_calls / max(self.total_calls, 1),
                'total_runs': self.total_runs,
                'detected_runs': self.detected_runs,
                'models': list(self.usage_metrics.keys())
            }

    def get_failing_models(self) -> List[str]:
        """Models that never answered successfully"""
        with self.lock:
            return [
                model_id for model_id, usage in self.usage_metrics.items()
                if usage.call_count > 0 and usage.success_count == 0
            ]


# ================= Prometheus Exporter ================= #

_prometheus_initialized = False
GAUGE_MODEL_SUCCESSES = None
GAUGE_MODEL_FAILURES = None
GAUGE_MODEL_LATENCY = None
GAUGE_DETECTED_RUNS = None

def setup_prometheus_metrics(service_name: str, port: int = 9090):
    """
    Start the Prometheus exporter.
    Scrape at http://localhost:<port>/metrics.
    """
    global _prometheus_initialized
    global GAUGE_MODEL_SUCCESSES, GAUGE_MODEL_FAILURES, GAUGE_MODEL_LATENCY, GAUGE_DETECTED_RUNS

    if _prometheus_initialized:
        return

    start_http_server(port)
    logging.getLogger(__name__).info(
        f"📊 Prometheus metrics server started for {service_name} on port {port}"
    )
    _prometheus_initialized = True

    GAUGE_MODEL_SUCCESSES = Gauge(
        "foodlog_model_successful_calls",
        "Successful requests per remote model",
        ["service", "model"]
    )
    GAUGE_MODEL_FAILURES = Gauge(
        "foodlog_model_failed_calls",
        "Failed requests per remote model",
        ["service", "model"]
    )
    GAUGE_MODEL_LATENCY = Gauge(
        "foodlog_model_avg_latency_ms",
        "Average request latency per remote model",
        ["service", "model"]
    )
    GAUGE_DETECTED_RUNS = Gauge(
        "foodlog_detected_runs",
        "Detection runs that resolved a label",
        ["service"]
    )
    GAUGE_DETECTED_RUNS.labels(service=service_name).set(0)


def update_prometheus_metrics(service_name: str, metrics: DetectionMetrics):
    """
    Push DetectionMetrics counters into the Prometheus gauges
    """
    if not _prometheus_initialized:
        return

    with metrics.lock:
        for model_id, usage in metrics.usage_metrics.items():
            GAUGE_MODEL_SUCCESSES.labels(service=service_name, model=model_id).set(usage.success_count)
            GAUGE_MODEL_FAILURES.labels(service=service_name, model=model_id).set(usage.failure_count)
            GAUGE_MODEL_LATENCY.labels(service=service_name, model=model_id).set(usage.avg_latency_ms)
        GAUGE_DETECTED_RUNS.labels(service=service_name).set(metrics.detected_runs)
