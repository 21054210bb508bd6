"""Outbound ports - interfaces for external dependencies.

Outbound ports define contracts for external systems that the post service
depends on, namely the store holding posts and categories.
"""

from post_service.ports.outbound.post_repository import (
    CategoryNotCreatedError,
    PostNotCreatedError,
    PostNotFoundError,
    PostRepositoryPort,
    RepositoryError,
)

__all__ = [
    "PostRepositoryPort",
    "RepositoryError",
    "PostNotFoundError",
    "PostNotCreatedError",
    "CategoryNotCreatedError",
]
