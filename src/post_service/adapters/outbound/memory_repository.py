"""In-memory post repository adapter.

A simple in-memory implementation of PostRepositoryPort for testing and
development purposes. Data is not persisted across restarts.

Usage:
    repo = InMemoryPostRepository()
    post = repo.create_post("First post", "google.com", user_uid)
    assert repo.check_post_exists(post.uid)
"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from typing import Callable

from post_service.domain.entities import Category, Post
from post_service.domain.value_objects import CategoryId, PostId, UserId
from post_service.ports.outbound import PostNotFoundError


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class InMemoryPostRepository:
    """In-memory implementation of PostRepositoryPort.

    Stores posts and categories in dictionaries keyed by UID. A single lock
    makes every operation atomic. Not suitable for production use.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utcnow,
        uid_factory: Callable[[], uuid.UUID] = uuid.uuid4,
    ) -> None:
        """Initialize empty storage.

        Args:
            clock: Source of creation and modification times
            uid_factory: Source of new UIDs
        """
        self._clock = clock
        self._uid_factory = uid_factory
        self._lock = threading.Lock()
        self._posts: dict[uuid.UUID, Post] = {}
        self._categories: dict[uuid.UUID, Category] = {}

    def list_posts(
        self,
        category_uid: uuid.UUID | None,
        page_size: int,
        page_number: int,
    ) -> list[Post]:
        with self._lock:
            posts = [
                p for p in self._posts.values()
                if category_uid is None or p.category_uid == category_uid
            ]
        posts.sort(key=lambda p: (p.created_at, str(p.uid)), reverse=True)
        offset = page_number * page_size
        return posts[offset:offset + page_size]

    def get_post(self, uid: uuid.UUID) -> Post:
        with self._lock:
            post = self._posts.get(uid)
        if post is None:
            raise PostNotFoundError(uid)
        return post

    def create_post(
        self,
        title: str,
        url: str,
        user_uid: uuid.UUID,
        category_uid: uuid.UUID | None = None,
    ) -> Post:
        now = self._clock()
        post = Post(
            uid=PostId(self._uid_factory()),
            user_uid=UserId(user_uid),
            category_uid=CategoryId(category_uid) if category_uid is not None else None,
            title=title,
            url=url,
            created_at=now,
            modified_at=now,
        )
        with self._lock:
            self._posts[post.uid] = post
        return post

    def update_post(self, uid: uuid.UUID, title: str, url: str) -> None:
        with self._lock:
            post = self._posts.get(uid)
            if post is None:
                raise PostNotFoundError(uid)
            # A clock reading behind created_at is clamped to it
            modified_at = max(self._clock(), post.created_at)
            self._posts[uid] = post.with_changes(title, url, modified_at)

    def delete_post(self, uid: uuid.UUID) -> None:
        with self._lock:
            if self._posts.pop(uid, None) is None:
                raise PostNotFoundError(uid)

    def check_post_exists(self, uid: uuid.UUID) -> bool:
        with self._lock:
            return uid in self._posts

    def get_post_owner(self, uid: uuid.UUID) -> str:
        return str(self.get_post(uid).user_uid)

    def list_categories(self, page_size: int, page_number: int) -> list[Category]:
        with self._lock:
            categories = sorted(self._categories.values(), key=lambda c: (c.name, str(c.uid)))
        offset = page_number * page_size
        return categories[offset:offset + page_size]

    def create_category(self, name: str, user_uid: uuid.UUID) -> Category:
        category = Category(
            uid=CategoryId(self._uid_factory()),
            user_uid=UserId(user_uid),
            name=name,
        )
        with self._lock:
            self._categories[category.uid] = category
        return category

    def clear(self) -> None:
        """Clear all stored data."""
        with self._lock:
            self._posts.clear()
            self._categories.clear()

    def __len__(self) -> int:
        """Number of stored posts."""
        with self._lock:
            return len(self._posts)
