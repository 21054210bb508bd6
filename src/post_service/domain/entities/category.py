"""Category entity."""

from __future__ import annotations

from dataclasses import dataclass

from post_service.domain.value_objects import CategoryId, UserId


@dataclass(frozen=True, slots=True)
class Category:
    """A named grouping of posts owned by a user."""

    uid: CategoryId
    user_uid: UserId
    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("category name must not be empty")
