"""Wire messages for the post service.

Messages follow the proto3 JSON mapping: camelCase field names, identifiers
as canonical UUID strings, timestamps as RFC 3339 UTC strings (the JSON form
of ``google.protobuf.Timestamp``). Missing request fields take their proto3
defaults (empty string, zero). Unknown fields are ignored.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from post_service.domain.entities import Category, Post


class Message(BaseModel):
    """Base for all wire messages."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_bytes(self) -> bytes:
        return self.model_dump_json(by_alias=True).encode("utf-8")


# =============================================================================
# Entities
# =============================================================================


class SinglePost(Message):
    uid: str
    user_uid: str
    category_uid: str = ""
    title: str
    url: str = ""
    created_at: datetime
    modified_at: datetime

    @classmethod
    def from_entity(cls, post: Post) -> SinglePost:
        return cls(
            uid=str(post.uid),
            user_uid=str(post.user_uid),
            category_uid=str(post.category_uid) if post.category_uid is not None else "",
            title=post.title,
            url=post.url,
            created_at=post.created_at,
            modified_at=post.modified_at,
        )


class SingleCategory(Message):
    uid: str
    user_uid: str
    name: str

    @classmethod
    def from_entity(cls, category: Category) -> SingleCategory:
        return cls(
            uid=str(category.uid),
            user_uid=str(category.user_uid),
            name=category.name,
        )


# =============================================================================
# Requests
# =============================================================================


class ListPostsRequest(Message):
    category_uid: str = ""
    page_size: int = 0
    page_number: int = 0


class GetPostRequest(Message):
    uid: str = ""


class CreatePostRequest(Message):
    title: str = ""
    url: str = ""
    user_uid: str = ""
    category_uid: str = ""


class UpdatePostRequest(Message):
    uid: str = ""
    title: str = ""
    url: str = ""


class DeletePostRequest(Message):
    uid: str = ""


class CheckExistsRequest(Message):
    uid: str = ""


class GetOwnerRequest(Message):
    uid: str = ""


class ListCategoriesRequest(Message):
    page_size: int = 0
    page_number: int = 0


class CreateCategoryRequest(Message):
    name: str = ""
    user_uid: str = ""


# =============================================================================
# Responses
# =============================================================================


class ListPostsResponse(Message):
    posts: list[SinglePost] = Field(default_factory=list)
    page_size: int = 0
    page_number: int = 0


class ListCategoriesResponse(Message):
    categories: list[SingleCategory] = Field(default_factory=list)
    page_size: int = 0
    page_number: int = 0


class UpdatePostResponse(Message):
    pass


class DeletePostResponse(Message):
    pass


class CheckExistsResponse(Message):
    exists: bool = False


class GetOwnerResponse(Message):
    owner_uid: str = ""
