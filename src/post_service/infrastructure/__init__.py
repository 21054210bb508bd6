"""Infrastructure layer - cross-cutting concerns."""

from post_service.infrastructure.config import Config, get_config
from post_service.infrastructure.logging import setup_logging, get_logger
from post_service.infrastructure.metrics import setup_metrics, MetricsRegistry
from post_service.infrastructure.tracing import setup_tracing, tracing_interceptor

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "get_logger",
    "setup_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "tracing_interceptor",
]
