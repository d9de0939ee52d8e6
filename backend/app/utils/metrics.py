"""Prometheus metrics for itinerary generation."""

from prometheus_client import Counter, Histogram

itinerary_requests_total = Counter(
    "itinerary_requests_total",
    "Itinerary pipeline runs by request mode and outcome",
    ["mode", "outcome"],
)

model_latency_ms = Histogram(
    "model_latency_ms",
    "Model client call latency in milliseconds",
    ["mode"],
    buckets=[250, 500, 1000, 2000, 4000, 8000, 16000, 32000, 64000],
)


class PrometheusPipelineMetrics:
    """Prometheus-based pipeline metrics implementation."""

    def record_outcome(self, mode: str, outcome: str) -> None:
        """Count a finished run. outcome is one of structured, fallback, error."""
        itinerary_requests_total.labels(mode=mode, outcome=outcome).inc()

    def record_latency(self, mode: str, latency_ms: float) -> None:
        """Record model call latency."""
        model_latency_ms.labels(mode=mode).observe(latency_ms)
