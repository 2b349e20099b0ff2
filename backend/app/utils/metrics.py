"""Prometheus metrics for provider calls and plan generation."""

from prometheus_client import Counter, Histogram

# Provider call metrics
provider_latency_ms = Histogram(
    "provider_latency_ms",
    "External provider call latency in milliseconds",
    ["provider", "outcome"],
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 4000, 8000],
)

provider_errors_total = Counter(
    "provider_errors_total",
    "Total external provider call errors",
    ["provider", "reason"],
)

# Planning metrics
plans_created_total = Counter(
    "plans_created_total",
    "Total travel plans persisted",
    ["route_type"],
)


class PrometheusProviderMetrics:
    """Prometheus-based provider metrics implementation."""

    def record_latency(self, provider: str, outcome: str, latency_ms: float) -> None:
        """Record provider call latency."""
        provider_latency_ms.labels(provider=provider, outcome=outcome).observe(latency_ms)

    def inc_error(self, provider: str, reason: str) -> None:
        """Increment error counter."""
        provider_errors_total.labels(provider=provider, reason=reason).inc()


def record_plan_created(route_type: str) -> None:
    """Count a persisted plan."""
    plans_created_total.labels(route_type=route_type).inc()
