"""Outbound port for post and category storage.

This protocol defines the interface the service layer uses to persist posts
and categories. Implementations own identifier and timestamp assignment and
must make every operation atomic with respect to the row it touches.

Pagination:
    Listing operations skip ``page_number * page_size`` rows and return at
    most ``page_size`` rows, so page numbers are zero-based.

Errors:
    - PostNotFoundError: the referenced post does not exist
    - PostNotCreatedError / CategoryNotCreatedError: the insert affected no rows
    - RepositoryError: any other storage failure (base of the above)
"""

from __future__ import annotations

import uuid
from abc import abstractmethod
from typing import Protocol, runtime_checkable

from post_service.domain.entities import Category, Post


class RepositoryError(Exception):
    """Base class for storage failures."""


class PostNotFoundError(RepositoryError):
    """Raised when no post matches the given UID."""

    def __init__(self, uid: uuid.UUID | None = None) -> None:
        super().__init__("post not found")
        self.uid = uid


class PostNotCreatedError(RepositoryError):
    """Raised when an insert into the posts store affected no rows."""

    def __init__(self) -> None:
        super().__init__("post not created")


class CategoryNotCreatedError(RepositoryError):
    """Raised when an insert into the categories store affected no rows."""

    def __init__(self) -> None:
        super().__init__("category not created")


@runtime_checkable
class PostRepositoryPort(Protocol):
    """Protocol for post and category storage.

    Thread Safety:
        All methods may be called concurrently from transport worker threads.
    """

    @abstractmethod
    def list_posts(
        self,
        category_uid: uuid.UUID | None,
        page_size: int,
        page_number: int,
    ) -> list[Post]:
        """List posts, newest first.

        Args:
            category_uid: Restrict to this category, or None for all posts
            page_size: Maximum number of posts to return
            page_number: Zero-based page index

        Returns:
            Posts ordered by created_at descending
        """
        ...

    @abstractmethod
    def get_post(self, uid: uuid.UUID) -> Post:
        """Fetch one post.

        Raises:
            PostNotFoundError: If no post has this UID
        """
        ...

    @abstractmethod
    def create_post(
        self,
        title: str,
        url: str,
        user_uid: uuid.UUID,
        category_uid: uuid.UUID | None = None,
    ) -> Post:
        """Insert a new post.

        The repository assigns the UID and sets created_at and modified_at to
        the same instant.

        Raises:
            PostNotCreatedError: If the insert affected no rows
        """
        ...

    @abstractmethod
    def update_post(self, uid: uuid.UUID, title: str, url: str) -> None:
        """Partially update a post.

        Empty ``title`` or ``url`` leave the stored value unchanged.
        modified_at is refreshed regardless.

        Raises:
            PostNotFoundError: If no post has this UID
        """
        ...

    @abstractmethod
    def delete_post(self, uid: uuid.UUID) -> None:
        """Delete a post.

        Raises:
            PostNotFoundError: If no post has this UID
        """
        ...

    @abstractmethod
    def check_post_exists(self, uid: uuid.UUID) -> bool:
        """Return True if a post with this UID exists."""
        ...

    @abstractmethod
    def get_post_owner(self, uid: uuid.UUID) -> str:
        """Return the canonical owner UID of a post.

        Raises:
            PostNotFoundError: If no post has this UID
        """
        ...

    @abstractmethod
    def list_categories(self, page_size: int, page_number: int) -> list[Category]:
        """List categories ordered by name, then UID."""
        ...

    @abstractmethod
    def create_category(self, name: str, user_uid: uuid.UUID) -> Category:
        """Insert a new category.

        Raises:
            CategoryNotCreatedError: If the insert affected no rows
        """
        ...
