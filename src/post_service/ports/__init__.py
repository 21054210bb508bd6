"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: the API the post service offers to transports (gRPC, REST)
- Outbound ports: the storage the post service depends on

Adapters implement these ports with concrete functionality.
"""

from post_service.ports.inbound import Page, PostServiceAPI
from post_service.ports.outbound import (
    CategoryNotCreatedError,
    PostNotCreatedError,
    PostNotFoundError,
    PostRepositoryPort,
    RepositoryError,
)

__all__ = [
    # Inbound ports
    "Page",
    "PostServiceAPI",
    # Outbound ports
    "PostRepositoryPort",
    "RepositoryError",
    "PostNotFoundError",
    "PostNotCreatedError",
    "CategoryNotCreatedError",
]
