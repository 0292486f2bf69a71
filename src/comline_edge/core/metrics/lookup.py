from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram

RESULT_SUCCESS = "success"
RESULT_FAILURE = "failure"


class LookupMetrics:
    """Счётчик исходов и таймер обращений к ComLine, регистрируются сразу в конструкторе."""

    def __init__(self, registry: CollectorRegistry):
        self.registry = registry
        self.calls = Counter(
            "comline_api_calls",
            "Number of ComLine API calls by outcome",
            labelnames=("result", "reason"),
            registry=registry,
        )
        self.duration = Histogram(
            "comline_api_get_product_seconds",
            "Time taken to fetch a product by CTO number from the ComLine API",
            registry=registry,
        )

    def record_success(self) -> None:
        self.calls.labels(result=RESULT_SUCCESS, reason="none").inc()

    def record_failure(self, reason: str) -> None:
        self.calls.labels(result=RESULT_FAILURE, reason=reason).inc()

    def observe_duration(self, seconds: float) -> None:
        self.duration.observe(seconds)
