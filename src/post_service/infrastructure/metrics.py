"""Prometheus metrics for the post service."""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    Info,
    start_http_server,
)


class MetricsRegistry:
    """Registry of all post service metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # RPC metrics
        self.rpc_requests_total = Counter(
            "post_rpc_requests_total",
            "Total number of RPCs handled",
            ["method", "code"],  # code: OK, INVALID_ARGUMENT, NOT_FOUND, INTERNAL
            registry=self._registry,
        )

        self.rpc_latency_seconds = Histogram(
            "post_rpc_latency_seconds",
            "RPC handling latency in seconds",
            ["method"],
            buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
            registry=self._registry,
        )

        # Service info
        self.info = Info(
            "post_service",
            "Post service information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def observe_rpc(self, method: str, code: str, duration_seconds: float) -> None:
        """Record one handled RPC."""
        self.rpc_requests_total.labels(method=method, code=code).inc()
        self.rpc_latency_seconds.labels(method=method).observe(duration_seconds)


def setup_metrics(port: int | None = None, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up the metrics registry and, if a port is given, its HTTP endpoint.

    Args:
        port: Port for the metrics HTTP server, or None to skip it
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    metrics = MetricsRegistry(registry)

    from post_service import __version__
    metrics.info.info({
        "version": __version__,
    })

    if port is not None:
        start_http_server(port, registry=registry or REGISTRY)

    return metrics
