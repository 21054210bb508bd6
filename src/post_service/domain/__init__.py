"""Domain layer - entities, identifiers and outcome types for the post service."""

from post_service.domain.entities import Category, Post
from post_service.domain.value_objects import (
    CategoryId,
    ErrorKind,
    InvalidIdentifierError,
    PostId,
    Result,
    ServiceError,
    ServiceFailure,
    UserId,
    parse_uid,
)

__all__ = [
    "Category",
    "Post",
    "CategoryId",
    "PostId",
    "UserId",
    "InvalidIdentifierError",
    "parse_uid",
    "ErrorKind",
    "Result",
    "ServiceError",
    "ServiceFailure",
]
