"""Post entity.

A post is a titled link created by a user. Its identity, owner, category and
creation time are fixed at creation; only the title and URL change afterwards,
and every change refreshes the modification time.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from post_service.domain.value_objects import CategoryId, PostId, UserId


@dataclass(frozen=True, slots=True)
class Post:
    """A single post.

    Attributes:
        uid: Server-assigned identifier
        user_uid: Owner of the post
        category_uid: Category the post is filed under, if any
        title: Post title, never empty
        url: Linked URL, may be empty
        created_at: Creation time (UTC)
        modified_at: Last modification time (UTC), never before created_at
    """

    uid: PostId
    user_uid: UserId
    category_uid: CategoryId | None
    title: str
    url: str
    created_at: datetime
    modified_at: datetime

    def __post_init__(self) -> None:
        """Validate entity invariants."""
        if not self.title:
            raise ValueError("post title must not be empty")
        if self.modified_at < self.created_at:
            raise ValueError(
                f"modified_at {self.modified_at} precedes created_at {self.created_at}"
            )

    def with_changes(self, title: str, url: str, modified_at: datetime) -> Post:
        """Return a copy with a partial update applied.

        Empty ``title`` or ``url`` leave the current value in place.
        """
        return replace(
            self,
            title=title or self.title,
            url=url or self.url,
            modified_at=modified_at,
        )
