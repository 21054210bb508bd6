"""Integration tests for the full post lifecycle on the SQL repository."""

from __future__ import annotations

import uuid

import pytest

from post_service.adapters.outbound.sql_repository import SQLPostRepository
from post_service.application.post_service import PostService
from post_service.domain.value_objects import ErrorKind
from post_service.infrastructure.config import Config, DatabaseConfig
from post_service.infrastructure.container import Container
from post_service.infrastructure.metrics import MetricsRegistry


@pytest.mark.integration
class TestPostLifecycle:
    """Create, read, update, delete through the service layer."""

    def test_create_get_delete(self, sql_repository: SQLPostRepository) -> None:
        service = PostService(sql_repository)
        owner = str(uuid.uuid4())

        post = service.create_post("First post", "google.com", owner).unwrap()

        fetched = service.get_post(str(post.uid)).unwrap()
        assert fetched.title == "First post"
        assert fetched.url == "google.com"
        assert str(fetched.user_uid) == owner

        assert service.delete_post(str(post.uid)).ok
        assert service.check_post_exists(str(post.uid)).unwrap() is False

        second = service.delete_post(str(post.uid))
        assert second.error.kind is ErrorKind.NOT_FOUND

    def test_update_cycle(self, sql_repository: SQLPostRepository) -> None:
        service = PostService(sql_repository)
        post = service.create_post("First post", "google.com", str(uuid.uuid4())).unwrap()

        assert service.update_post(str(post.uid)).ok
        untouched = service.get_post(str(post.uid)).unwrap()
        assert (untouched.title, untouched.url) == ("First post", "google.com")
        assert untouched.modified_at > post.modified_at

        assert service.update_post(str(post.uid), title="Second title").ok
        renamed = service.get_post(str(post.uid)).unwrap()
        assert renamed.title == "Second title"
        assert renamed.modified_at > untouched.modified_at
        assert renamed.created_at == post.created_at

    def test_ownership_is_stable(self, sql_repository: SQLPostRepository) -> None:
        service = PostService(sql_repository)
        owner = str(uuid.uuid4())
        post = service.create_post("First post", "", owner).unwrap()

        service.update_post(str(post.uid), "Another title", "example.org")

        assert service.get_post_owner(str(post.uid)).unwrap() == owner


@pytest.mark.integration
class TestContainer:
    """Wiring from configuration."""

    def test_container_from_config(self, metrics_registry: MetricsRegistry) -> None:
        config = Config(database=DatabaseConfig(url="sqlite://", create_schema=True))
        container = Container.create(config, metrics=metrics_registry)
        try:
            assert isinstance(container.repository, SQLPostRepository)
            assert container.tracer_provider is None

            post = container.service.create_post("First post", "", str(uuid.uuid4())).unwrap()
            assert container.service.check_post_exists(str(post.uid)).unwrap()
        finally:
            container.close()

    def test_grpc_server_from_container(self, metrics_registry: MetricsRegistry) -> None:
        config = Config(database=DatabaseConfig(url="sqlite://", create_schema=True))
        config.server.host = "127.0.0.1"
        config.server.port = 0
        container = Container.create(config, metrics=metrics_registry)
        server = container.build_grpc_server()
        try:
            assert server.port > 0
            assert not server.secure
        finally:
            server.stop(0)
            container.close()
