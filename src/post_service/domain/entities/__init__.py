"""Domain entities for the post service.

Entities are objects with identity that have a lifecycle. Two posts with the
same title are still different posts if their UIDs differ.

Exports:
    Post: A titled link owned by a user, optionally filed under a category
    Category: A named grouping of posts owned by a user
"""

from post_service.domain.entities.category import Category
from post_service.domain.entities.post import Post

__all__ = [
    "Post",
    "Category",
]
