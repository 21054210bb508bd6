"""OpenTelemetry tracing configuration."""

from __future__ import annotations

import grpc
from opentelemetry.instrumentation.grpc import server_interceptor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanProcessor,
)

from post_service import __version__


def setup_tracing(
    service_name: str = "post",
    otlp_endpoint: str | None = None,
    console_export: bool = False,
    span_processor: SpanProcessor | None = None,
) -> TracerProvider:
    """
    Set up an OpenTelemetry tracer provider.

    The provider is returned rather than installed globally; callers hand it
    to the gRPC server interceptor explicitly.

    Args:
        service_name: Name of the service for tracing
        otlp_endpoint: OTLP collector endpoint (e.g., "http://localhost:4317")
        console_export: Whether to also export to console (for debugging)
        span_processor: Extra processor, e.g. an in-memory exporter in tests

    Returns:
        Configured tracer provider
    """
    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": __version__,
        }
    )

    provider = TracerProvider(resource=resource)

    if otlp_endpoint:
        # Imported lazily: the exporter pulls in its own gRPC channel stack.
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        otlp_exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    if span_processor is not None:
        provider.add_span_processor(span_processor)

    return provider


def tracing_interceptor(provider: TracerProvider) -> grpc.ServerInterceptor:
    """Per-call tracing interceptor for a gRPC server."""
    return server_interceptor(tracer_provider=provider)
