"""Pytest configuration and fixtures for post_service tests."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Generator

import grpc
import pytest
from prometheus_client import CollectorRegistry

from post_service.adapters.inbound.grpc_server import SERVICE_NAME, PostGrpcServer, PostServicer
from post_service.adapters.outbound.memory_repository import InMemoryPostRepository
from post_service.adapters.outbound.sql_repository import SQLPostRepository, create_engine_from_url
from post_service.application.post_service import PostService
from post_service.infrastructure.metrics import MetricsRegistry


class FakeClock:
    """Deterministic clock advancing one second per reading."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + self.step
        return current


@pytest.fixture
def clock() -> FakeClock:
    """Provide a deterministic clock."""
    return FakeClock()


@pytest.fixture
def memory_repository(clock: FakeClock) -> InMemoryPostRepository:
    """Provide an empty in-memory repository."""
    return InMemoryPostRepository(clock=clock)


@pytest.fixture
def sql_repository(clock: FakeClock) -> Generator[SQLPostRepository, None, None]:
    """Provide a SQL repository over a fresh in-memory SQLite database."""
    repo = SQLPostRepository(create_engine_from_url("sqlite://"), clock=clock)
    repo.create_schema()
    yield repo
    repo.dispose()


@pytest.fixture(params=["memory", "sql"])
def repository(request: pytest.FixtureRequest, clock: FakeClock):
    """Provide each repository implementation in turn."""
    if request.param == "memory":
        yield InMemoryPostRepository(clock=clock)
    else:
        repo = SQLPostRepository(create_engine_from_url("sqlite://"), clock=clock)
        repo.create_schema()
        yield repo
        repo.dispose()


@pytest.fixture
def service(memory_repository: InMemoryPostRepository) -> PostService:
    """Provide a service over the in-memory repository."""
    return PostService(memory_repository)


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def grpc_server(
    service: PostService, metrics_registry: MetricsRegistry
) -> Generator[PostGrpcServer, None, None]:
    """Run an insecure gRPC server on an ephemeral local port."""
    server = PostGrpcServer(
        PostServicer(service, metrics=metrics_registry),
        host="127.0.0.1",
        port=0,
        max_workers=4,
    )
    server.start()
    yield server
    server.stop(0)


@pytest.fixture
def channel(grpc_server: PostGrpcServer) -> Generator[grpc.Channel, None, None]:
    """Provide a client channel connected to the test server."""
    with grpc.insecure_channel(f"127.0.0.1:{grpc_server.port}") as ch:
        yield ch


def rpc(channel: grpc.Channel, method: str, payload: dict[str, Any] | bytes | None = None) -> dict[str, Any]:
    """Invoke a post.Post method with a JSON payload and decode the reply."""
    call = channel.unary_unary(f"/{SERVICE_NAME}/{method}")
    if isinstance(payload, bytes):
        body = payload
    else:
        body = json.dumps(payload or {}).encode("utf-8")
    return json.loads(call(body, timeout=5))


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
