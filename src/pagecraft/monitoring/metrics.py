"""
Prometheus metrics for the builder service.

One collector per process, exported at ``/metrics``. Each collector owns its
registry, so a second instance (tests) does not clash with the global one.
"""

import time

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest

# Generative calls are slow; buckets stretch to two minutes
AI_BUCKETS = (0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0, 60.0, 120.0)


class MetricsCollector:
    """Counters and histograms for AI translations and the model endpoint."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.started_at = time.time()

        self.ai_requests = Counter(
            "pagecraft_ai_requests",
            "AI translation requests by operation and outcome",
            ["operation", "status"],
            registry=self.registry,
        )
        self.ai_seconds = Histogram(
            "pagecraft_ai_duration_seconds",
            "End-to-end AI translation latency",
            ["operation"],
            buckets=AI_BUCKETS,
            registry=self.registry,
        )
        self.model_calls = Counter(
            "pagecraft_model_calls",
            "Chat-completion calls by model and outcome",
            ["model", "status"],
            registry=self.registry,
        )
        self.model_seconds = Histogram(
            "pagecraft_model_duration_seconds",
            "Chat-completion round-trip latency",
            ["model"],
            buckets=AI_BUCKETS,
            registry=self.registry,
        )
        self.errors = Counter(
            "pagecraft_errors",
            "Errors by type and the component that raised them",
            ["error_type", "component"],
            registry=self.registry,
        )
        self.uptime = Gauge(
            "pagecraft_uptime_seconds",
            "Seconds since the collector was created",
            registry=self.registry,
        )

    def record_ai_request(self, operation: str, status: str, duration: float) -> None:
        """One generate / optimize-layout / optimize-code request."""
        self.ai_requests.labels(operation=operation, status=status).inc()
        self.ai_seconds.labels(operation=operation).observe(duration)

    def record_llm_call(self, model: str, status: str, duration: float) -> None:
        """One POST to the chat-completion endpoint."""
        self.model_calls.labels(model=model, status=status).inc()
        self.model_seconds.labels(model=model).observe(duration)

    def record_error(self, error_type: str, component: str) -> None:
        self.errors.labels(error_type=error_type, component=component).inc()

    def get_metrics(self) -> bytes:
        """Prometheus text exposition of this collector's registry."""
        self.uptime.set(time.time() - self.started_at)
        return generate_latest(self.registry)


metrics_collector = MetricsCollector()
