"""Value objects for the post service domain."""

from post_service.domain.value_objects.identifiers import (
    CategoryId,
    InvalidIdentifierError,
    PostId,
    UserId,
    parse_uid,
)
from post_service.domain.value_objects.outcome import (
    ErrorKind,
    Result,
    ServiceError,
    ServiceFailure,
)

__all__ = [
    # Identifiers
    "PostId",
    "CategoryId",
    "UserId",
    "InvalidIdentifierError",
    "parse_uid",
    # Outcomes
    "ErrorKind",
    "Result",
    "ServiceError",
    "ServiceFailure",
]
