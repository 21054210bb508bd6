"""Outbound adapters - implementations of the repository port.

- InMemoryPostRepository: dictionaries behind a lock, for tests and development
- SQLPostRepository: SQLAlchemy Core over PostgreSQL (or SQLite)
"""

from post_service.adapters.outbound.memory_repository import InMemoryPostRepository
from post_service.adapters.outbound.sql_repository import SQLPostRepository, create_engine_from_url

__all__ = [
    "InMemoryPostRepository",
    "SQLPostRepository",
    "create_engine_from_url",
]
