"""Inbound port for the post service.

Transport adapters (gRPC, REST) call these operations with the raw values
received from clients: identifiers are still strings and page parameters are
still unresolved. Every operation returns a :class:`Result`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar

from post_service.domain.entities import Category, Post
from post_service.domain.value_objects import Result

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a listing together with the resolved paging parameters."""

    items: list[T] = field(default_factory=list)
    page_size: int = 0
    page_number: int = 0


class PostServiceAPI(Protocol):
    """Main API offered by the post service."""

    def list_posts(
        self, category_id: str = "", page_size: int = 0, page_number: int = 0
    ) -> Result[Page[Post]]:
        """List posts newest first, optionally within one category.

        Args:
            category_id: Category UID, or empty for all posts.
            page_size: Page size; 0 selects the default.
            page_number: Zero-based page index.
        """
        ...

    def get_post(self, post_id: str) -> Result[Post]:
        ...

    def create_post(
        self, title: str, url: str, owner_id: str, category_id: str = ""
    ) -> Result[Post]:
        ...

    def update_post(self, post_id: str, title: str = "", url: str = "") -> Result[None]:
        """Update title and/or URL; empty values are left unchanged."""
        ...

    def delete_post(self, post_id: str) -> Result[None]:
        ...

    def check_post_exists(self, post_id: str) -> Result[bool]:
        ...

    def get_post_owner(self, post_id: str) -> Result[str]:
        ...

    def list_categories(self, page_size: int = 0, page_number: int = 0) -> Result[Page[Category]]:
        ...

    def create_category(self, name: str, owner_id: str) -> Result[Category]:
        ...
