"""Type-safe identifiers for posts, categories and users.

All identifiers are UUIDs. They travel over the wire in their canonical
textual form and are parsed once, at the edge of the service layer, so that
nothing past that point ever sees a malformed identifier.
"""

from __future__ import annotations

import uuid
from typing import NewType


PostId = NewType("PostId", uuid.UUID)
"""Unique identifier of a post. Assigned by the repository at creation."""

CategoryId = NewType("CategoryId", uuid.UUID)
"""Unique identifier of a category. Assigned by the repository at creation."""

UserId = NewType("UserId", uuid.UUID)
"""Identifier of the user owning a post or category. Issued elsewhere."""


class InvalidIdentifierError(ValueError):
    """Raised when a string is not a valid UUID."""

    def __init__(self, value: str) -> None:
        super().__init__(f"invalid UUID: {value!r}")
        self.value = value


def parse_uid(value: str) -> uuid.UUID:
    """Parse a textual UUID.

    Accepts every form ``uuid.UUID`` accepts (hyphenated, braced, URN,
    upper case). The empty string is never valid.

    Args:
        value: Textual identifier received from a client

    Returns:
        The parsed UUID

    Raises:
        InvalidIdentifierError: If ``value`` is not a UUID

    Example:
        >>> parse_uid("00000000-0000-0000-0000-000000000000")
        UUID('00000000-0000-0000-0000-000000000000')
    """
    if not isinstance(value, str) or not value:
        raise InvalidIdentifierError(str(value))
    try:
        return uuid.UUID(value)
    except ValueError as e:
        raise InvalidIdentifierError(value) from e
