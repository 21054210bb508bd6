"""Dependency injection container for the post service."""

from __future__ import annotations

from dataclasses import dataclass

from opentelemetry.sdk.trace import TracerProvider

from post_service.adapters.inbound.grpc_server import PostGrpcServer, PostServicer
from post_service.adapters.outbound.sql_repository import (
    SQLPostRepository,
    create_engine_from_url,
)
from post_service.application.post_service import PostService
from post_service.infrastructure.config import Config
from post_service.infrastructure.logging import get_logger
from post_service.infrastructure.metrics import MetricsRegistry, setup_metrics
from post_service.infrastructure.tracing import setup_tracing, tracing_interceptor
from post_service.ports.outbound import PostRepositoryPort

logger = get_logger(__name__)


@dataclass
class Container:
    """Components of one running post service, wired explicitly at startup."""

    config: Config
    repository: PostRepositoryPort
    service: PostService
    metrics: MetricsRegistry | None = None
    tracer_provider: TracerProvider | None = None

    @classmethod
    def create(
        cls,
        config: Config,
        repository: PostRepositoryPort | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> Container:
        """Build the container from configuration.

        Args:
            config: Service configuration
            repository: Storage to use instead of the configured database
            metrics: Metrics registry to use instead of a fresh one

        Raises:
            RepositoryError: If the schema cannot be created
            sqlalchemy.exc.ArgumentError: If the database URL is invalid
        """
        if repository is None:
            engine = create_engine_from_url(
                config.database.url,
                pool_size=config.database.pool_size,
                echo=config.database.echo,
            )
            sql_repository = SQLPostRepository(engine)
            if config.database.create_schema:
                sql_repository.create_schema()
            repository = sql_repository

        if metrics is None:
            metrics = setup_metrics(config.observability.metrics_port)

        tracer_provider = None
        if config.observability.otel_endpoint:
            tracer_provider = setup_tracing(
                service_name=config.observability.otel_service_name,
                otlp_endpoint=config.observability.otel_endpoint,
            )

        service = PostService(repository, default_page_size=config.server.default_page_size)

        logger.info(
            "post_service_container_initialized",
            repository=type(repository).__name__,
            tracing=tracer_provider is not None,
        )

        return cls(
            config=config,
            repository=repository,
            service=service,
            metrics=metrics,
            tracer_provider=tracer_provider,
        )

    def build_grpc_server(self) -> PostGrpcServer:
        """Create the gRPC server for this container's service.

        Raises:
            TransportStartupError: If credentials cannot be loaded or the port
                cannot be bound
        """
        interceptors = []
        if self.tracer_provider is not None:
            interceptors.append(tracing_interceptor(self.tracer_provider))

        return PostGrpcServer(
            PostServicer(self.service, metrics=self.metrics),
            host=self.config.server.host,
            port=self.config.server.port,
            max_workers=self.config.server.max_workers,
            tls=self.config.tls,
            interceptors=interceptors,
        )

    def close(self) -> None:
        """Release pooled connections and flush pending spans."""
        if isinstance(self.repository, SQLPostRepository):
            self.repository.dispose()
        if self.tracer_provider is not None:
            self.tracer_provider.shutdown()
